from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from models.class_section import grade_of
from models.staff import StaffMember
from models.subject import Subject, SubjectCategory
from models.teacher_assignment import TeacherAssignment
from models.timetable_entry import TimetableEntry


logger = logging.getLogger(__name__)


@dataclass
class PoolLoad:
    subject: str
    category: SubjectCategory
    remaining: int


@dataclass
class PoolEntry:
    """Remaining-period ledger of one teacher for one grade, for a single pass."""

    teacher_id: str
    teacher_name: str
    grade: str
    loads: list[PoolLoad] = field(default_factory=list)
    target_sections: tuple[str, ...] = ()

    def applies_to(self, class_name: str) -> bool:
        return not self.target_sections or class_name in self.target_sections

    @property
    def total_remaining(self) -> int:
        return sum(l.remaining for l in self.loads)

    def has_remaining(self, category: SubjectCategory | None = None) -> bool:
        return any(l.remaining > 0 and (category is None or l.category is category) for l in self.loads)

    def remaining_in(self, category: SubjectCategory) -> int:
        return sum(l.remaining for l in self.loads if l.category is category)

    def first_open_load(self, category: SubjectCategory) -> PoolLoad | None:
        for l in self.loads:
            if l.category is category and l.remaining > 0:
                return l
        return None

    def largest_open_load(self) -> PoolLoad | None:
        # Stable on ties: earlier loads win.
        best: PoolLoad | None = None
        for l in self.loads:
            if l.remaining > 0 and (best is None or l.remaining > best.remaining):
                best = l
        return best


class LoadPool:
    def __init__(self, entries: list[PoolEntry]) -> None:
        self.entries = entries

    def __iter__(self) -> Iterator[PoolEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, teacher_id: str, grade: str) -> PoolEntry | None:
        for p in self.entries:
            if p.teacher_id == teacher_id and p.grade == grade:
                return p
        return None

    def for_section(self, grade: str, class_name: str) -> list[PoolEntry]:
        return [p for p in self.entries if p.grade == grade and p.applies_to(class_name)]

    def total_remaining(self) -> int:
        return sum(p.total_remaining for p in self.entries)


def count_manual_periods(entries: Iterable[TimetableEntry]) -> Counter:
    """MANUAL entries per (teacher_id, grade, subject)."""
    counts: Counter = Counter()
    for e in entries:
        if e.is_manual:
            counts[(e.teacher_id, grade_of(e.class_name), e.subject)] += 1
    return counts


def build_load_pool(
    *,
    assignments: Iterable[TeacherAssignment],
    manual_entries: Iterable[TimetableEntry],
    subjects: Iterable[Subject],
    staff: Iterable[StaffMember],
) -> LoadPool:
    """Derive remaining periods per teacher/grade/subject.

    ``remaining = max(0, periods - manual periods already pinned)``. Assignments
    for staff missing from the roster and loads for subjects missing from the
    catalog are skipped.
    """

    category_by_subject = {s.name: s.category for s in subjects}
    name_by_teacher = {m.id: m.name for m in staff}
    consumed = count_manual_periods(manual_entries)

    entries: list[PoolEntry] = []
    for a in assignments:
        teacher_name = name_by_teacher.get(a.teacher_id)
        if teacher_name is None:
            logger.debug("Skipping assignment for unknown teacher %s (grade %s)", a.teacher_id, a.grade)
            continue

        loads: list[PoolLoad] = []
        for load in a.loads:
            category = category_by_subject.get(load.subject)
            if category is None:
                logger.debug("Skipping load %r for teacher %s: subject not in catalog", load.subject, a.teacher_id)
                continue
            used = consumed[(a.teacher_id, a.grade, load.subject)]
            loads.append(PoolLoad(subject=load.subject, category=category, remaining=max(0, load.periods - used)))

        entries.append(
            PoolEntry(
                teacher_id=a.teacher_id,
                teacher_name=teacher_name,
                grade=a.grade,
                loads=loads,
                target_sections=tuple(a.target_sections),
            )
        )

    return LoadPool(entries)
