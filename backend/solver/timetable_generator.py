from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from core.config import make_rng
from models.class_section import ClassSection, sections_by_grade
from models.staff import StaffMember
from models.subject import SYNC_CATEGORIES, Subject, SubjectCategory
from models.teacher_assignment import TeacherAssignment
from models.time_slot import MAX_SLOT, teaching_slot_count
from models.timetable_entry import EntryOrigin, TimetableEntry
from solver.availability import AvailabilityIndex
from solver.load_pool import LoadPool, PoolEntry, PoolLoad, build_load_pool


logger = logging.getLogger(__name__)

# Homeroom period is always the first teaching slot, whatever the wing.
CLASS_TEACHER_SLOT = 1
FIRST_SYNC_SLOT = 2

# Sections whose name starts with this letter are cut off after slot 8 in
# synchronized blocks. The general fill uses the wing's slot table instead.
_SHORT_DAY_NAME_PREFIX = "P"
_SHORT_DAY_LAST_SLOT = 8


@dataclass
class GenerationResult:
    entries: list[TimetableEntry]
    placed: dict[str, int] = field(default_factory=dict)
    unplaced_periods: int = 0

    @property
    def generated(self) -> list[TimetableEntry]:
        return [e for e in self.entries if not e.is_manual]


def generate_timetable(
    *,
    classes: Sequence[ClassSection],
    staff: Sequence[StaffMember],
    subjects: Iterable[Subject],
    assignments: Iterable[TeacherAssignment],
    existing_entries: Iterable[TimetableEntry],
    days: Sequence[str],
    rng: random.Random | None = None,
) -> GenerationResult:
    """Rebuild the weekly grid around the pinned MANUAL entries.

    Every non-manual entry in ``existing_entries`` is discarded and recomputed.
    Cells that cannot be filled are left empty.
    """
    manual = [e for e in existing_entries if e.is_manual]
    pool = build_load_pool(assignments=assignments, manual_entries=manual, subjects=subjects, staff=staff)
    planning = _PlanningPass(
        classes=classes,
        staff=staff,
        days=days,
        pool=pool,
        manual=manual,
        rng=rng or make_rng(),
    )
    return planning.run()


class _PlanningPass:
    """State of one generation run. Discarded after ``run()``."""

    def __init__(
        self,
        *,
        classes: Sequence[ClassSection],
        staff: Sequence[StaffMember],
        days: Sequence[str],
        pool: LoadPool,
        manual: list[TimetableEntry],
        rng: random.Random,
    ) -> None:
        self.classes = list(classes)
        self.class_by_name = {c.name: c for c in self.classes}
        self.staff = list(staff)
        self.days = list(days)
        self.pool = pool
        self.rng = rng
        self.index = AvailabilityIndex.from_entries(manual)
        self.entries: list[TimetableEntry] = list(manual)
        self.placed: dict[str, int] = {o.value: 0 for o in EntryOrigin if o is not EntryOrigin.MANUAL}

    def run(self) -> GenerationResult:
        self.place_class_teacher_periods()
        self.place_synchronized_blocks()
        self.fill_remaining_cells()

        unplaced = self.pool.total_remaining()
        logger.info(
            "Timetable generated: manual=%d class_teacher=%d synchronized=%d general=%d unplaced_periods=%d",
            len(self.entries) - sum(self.placed.values()),
            self.placed[EntryOrigin.CLASS_TEACHER_AUTO.value],
            self.placed[EntryOrigin.SYNCHRONIZED_BLOCK.value],
            self.placed[EntryOrigin.GENERAL_FILL.value],
            unplaced,
        )
        return GenerationResult(entries=self.entries, placed=dict(self.placed), unplaced_periods=unplaced)

    def _commit(
        self,
        *,
        cls: ClassSection,
        day: str,
        slot_id: int,
        teacher: PoolEntry,
        load: PoolLoad,
        origin: EntryOrigin,
    ) -> None:
        self.entries.append(
            TimetableEntry(
                class_name=cls.name,
                day=day,
                slot_id=slot_id,
                subject=load.subject,
                subject_category=load.category,
                teacher_id=teacher.teacher_id,
                teacher_name=teacher.teacher_name,
                wing=cls.wing,
                origin=origin,
            )
        )
        self.index.occupy(teacher_id=teacher.teacher_id, class_name=cls.name, day=day, slot_id=slot_id)
        load.remaining -= 1
        self.placed[origin.value] += 1

    # Phase A
    def place_class_teacher_periods(self) -> None:
        class_teacher_by_class: dict[str, StaffMember] = {}
        for member in self.staff:
            if member.class_teacher_of and member.class_teacher_of not in class_teacher_by_class:
                class_teacher_by_class[member.class_teacher_of] = member

        for cls in self.classes:
            teacher = class_teacher_by_class.get(cls.name)
            if teacher is None:
                continue
            pool_entry = self.pool.find(teacher.id, cls.grade)
            if pool_entry is None:
                continue

            for day in self.days:
                if not self.index.is_free(teacher_id=teacher.id, class_name=cls.name, day=day, slot_id=CLASS_TEACHER_SLOT):
                    continue
                load = _homeroom_load(pool_entry)
                if load is None:
                    break
                self._commit(
                    cls=cls,
                    day=day,
                    slot_id=CLASS_TEACHER_SLOT,
                    teacher=pool_entry,
                    load=load,
                    origin=EntryOrigin.CLASS_TEACHER_AUTO,
                )

    # Phase B
    def place_synchronized_blocks(self) -> None:
        for grade, sections in sections_by_grade(self.classes).items():
            for category in SYNC_CATEGORIES:
                needed = self._periods_needed(grade, sections, category)
                if needed <= 0:
                    continue
                scheduled = self._schedule_blocks(grade, sections, category, needed)
                if scheduled < needed:
                    logger.debug(
                        "Grade %s %s: %d of %d synchronized periods placed",
                        grade,
                        category.value,
                        scheduled,
                        needed,
                    )

    def _periods_needed(self, grade: str, sections: list[str], category: SubjectCategory) -> int:
        return max(
            (sum(p.remaining_in(category) for p in self.pool.for_section(grade, s)) for s in sections),
            default=0,
        )

    def _schedule_blocks(self, grade: str, sections: list[str], category: SubjectCategory, needed: int) -> int:
        scheduled = 0
        for slot_id in range(FIRST_SYNC_SLOT, MAX_SLOT + 1):
            if scheduled >= needed:
                break
            for day in self.days:
                if scheduled >= needed:
                    break
                block = self._find_block(grade, sections, category, day, slot_id)
                if block is None:
                    continue
                for section, pool_entry in block:
                    load = pool_entry.first_open_load(category)
                    if load is None:
                        continue
                    self._commit(
                        cls=self.class_by_name[section],
                        day=day,
                        slot_id=slot_id,
                        teacher=pool_entry,
                        load=load,
                        origin=EntryOrigin.SYNCHRONIZED_BLOCK,
                    )
                scheduled += 1
        return scheduled

    def _find_block(
        self,
        grade: str,
        sections: list[str],
        category: SubjectCategory,
        day: str,
        slot_id: int,
    ) -> list[tuple[str, PoolEntry]] | None:
        """One distinct free teacher per sibling section, or None if any section fails."""
        chosen: list[tuple[str, PoolEntry]] = []
        used_teachers: set[str] = set()
        for section in sections:
            if self.index.class_busy(section, day, slot_id):
                return None
            # Keys off the class name, not the wing tag (awaiting confirmation).
            if section.startswith(_SHORT_DAY_NAME_PREFIX) and slot_id > _SHORT_DAY_LAST_SLOT:
                return None

            pick = next(
                (
                    p
                    for p in self.pool.for_section(grade, section)
                    if p.teacher_id not in used_teachers
                    and p.has_remaining(category)
                    and not self.index.teacher_busy(p.teacher_id, day, slot_id)
                ),
                None,
            )
            if pick is None:
                return None
            chosen.append((section, pick))
            used_teachers.add(pick.teacher_id)
        return chosen

    # Phase C
    def fill_remaining_cells(self) -> None:
        for slot_id in range(1, MAX_SLOT + 1):
            for day in self.days:
                for cls in self.classes:
                    if self.index.class_busy(cls.name, day, slot_id):
                        continue
                    if slot_id > teaching_slot_count(cls.wing):
                        continue

                    candidates = [
                        p
                        for p in self.pool.for_section(cls.grade, cls.name)
                        if p.has_remaining() and not self.index.teacher_busy(p.teacher_id, day, slot_id)
                    ]
                    if not candidates:
                        continue

                    ranked = sorted(candidates, key=lambda p: (-p.total_remaining, self.rng.random()))
                    top = ranked[0]
                    load = top.largest_open_load()
                    if load is None:
                        continue
                    self._commit(
                        cls=cls,
                        day=day,
                        slot_id=slot_id,
                        teacher=top,
                        load=load,
                        origin=EntryOrigin.GENERAL_FILL,
                    )


def _homeroom_load(pool_entry: PoolEntry) -> PoolLoad | None:
    """CORE loads first, then the one with the most periods left."""
    best: PoolLoad | None = None
    for l in pool_entry.loads:
        if l.remaining <= 0:
            continue
        if best is None:
            best = l
            continue
        l_core = l.category is SubjectCategory.CORE
        best_core = best.category is SubjectCategory.CORE
        if (l_core and not best_core) or (l_core == best_core and l.remaining > best.remaining):
            best = l
    return best
