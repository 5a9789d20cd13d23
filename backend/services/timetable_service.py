from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field
from typing import Sequence

from core.config import make_rng, settings
from core.store import DatasetStore, SchoolDataset
from models.class_section import grade_of
from models.subject import Subject
from models.teacher_assignment import TeacherAssignment
from models.time_slot import has_teaching_slot
from models.timetable_entry import EntryOrigin, TimetableEntry
from services.conflict_detector import ConflictInfo, EditView, OverrideRequiredError, detect_conflict
from services.load_reconciler import check_load_limit, reconcile_assignment, teacher_total_periods
from solver.timetable_generator import GenerationResult, generate_timetable


logger = logging.getLogger(__name__)


class InvalidEditError(ValueError):
    pass


class EntryNotFoundError(LookupError):
    pass


@dataclass
class EditResult:
    entries: list[TimetableEntry]
    assignments: list[TeacherAssignment]
    entry: TimetableEntry | None = None
    overridden: list[ConflictInfo] = field(default_factory=list)


def run_generation(store: DatasetStore, *, seed: int | None = None, rng: random.Random | None = None) -> GenerationResult:
    """Regenerate the whole grid and swap it into the dataset."""
    with store.planning() as ds:
        result = generate_timetable(
            classes=ds.classes,
            staff=ds.staff,
            subjects=ds.subjects,
            assignments=ds.assignments,
            existing_entries=ds.entries,
            days=settings.school_days,
            rng=rng or make_rng(seed),
        )
        ds.entries = result.entries
    return result


def entries_for_class(entries: Sequence[TimetableEntry], class_name: str) -> list[TimetableEntry]:
    return [e for e in entries if e.class_name == class_name]


def entries_for_teacher(entries: Sequence[TimetableEntry], teacher_id: str) -> list[TimetableEntry]:
    return [e for e in entries if e.teacher_id == teacher_id]


def subjects_for_edit(
    ds: SchoolDataset,
    *,
    teacher_id: str,
    class_name: str,
) -> list[Subject]:
    """Subjects the teacher holds for the class's grade; the whole catalog when none."""
    grade = grade_of(class_name)
    assigned = {l.subject for a in ds.assignments if a.key == (teacher_id, grade) for l in a.loads}
    if assigned:
        return [s for s in ds.subjects if s.name in assigned]
    return list(ds.subjects)


def save_manual_entry(
    ds: SchoolDataset,
    *,
    teacher_id: str,
    class_name: str,
    day: str,
    slot_id: int,
    subject: str,
    view: EditView = EditView.CLASS,
    override: bool = False,
) -> EditResult:
    """Pin a MANUAL entry into one cell.

    The occupant of the edited cell (the class's cell from the class grid, the
    teacher's cell from the teacher grid) is replaced. A clash elsewhere or a
    weekly load over the limit requires ``override``.
    """
    view = EditView(view)
    teacher = ds.staff_member(teacher_id)
    if teacher is None:
        raise InvalidEditError(f"Unknown teacher {teacher_id!r}.")
    cls = ds.class_section(class_name)
    if cls is None:
        raise InvalidEditError(f"Unknown class {class_name!r}.")
    if not has_teaching_slot(cls.wing, slot_id):
        raise InvalidEditError(f"{cls.wing.value} has no teaching period {slot_id}.")
    subj = ds.subject(subject)
    if subj is None:
        raise InvalidEditError(f"Unknown subject {subject!r}.")
    if day not in settings.school_days:
        raise InvalidEditError(f"{day!r} is not a school day.")

    overridden: list[ConflictInfo] = []
    conflict = detect_conflict(
        ds.entries, teacher_id=teacher_id, class_name=class_name, day=day, slot_id=slot_id, view=view
    )
    if conflict is not None:
        if not override:
            raise OverrideRequiredError(conflict)
        overridden.append(conflict)

    entry = TimetableEntry(
        class_name=class_name,
        day=day,
        slot_id=slot_id,
        subject=subj.name,
        subject_category=subj.category,
        teacher_id=teacher.id,
        teacher_name=teacher.name,
        wing=cls.wing,
        origin=EntryOrigin.MANUAL,
    )

    if view is EditView.CLASS:
        kept = [e for e in ds.entries if e.cell != (class_name, day, slot_id)]
    else:
        kept = [e for e in ds.entries if not (e.teacher_id == teacher_id and e.day == day and e.slot_id == slot_id)]
    entries = kept + [entry]

    grade = grade_of(class_name)
    before = teacher_total_periods(ds.assignments, teacher_id)
    assignments = reconcile_assignment(ds.assignments, entries, teacher_id=teacher_id, grade=grade, subject=subj.name)
    after = teacher_total_periods(assignments, teacher_id)
    alert = check_load_limit(after, limit=settings.weekly_load_limit, teacher_id=teacher_id) if after > before else None
    if alert is not None:
        if not override:
            raise OverrideRequiredError(alert)
        overridden.append(alert)

    for info in overridden:
        logger.warning("Manual edit %s %s P%d committed over %s", class_name, day, slot_id, info.conflict_type.value)

    ds.entries = entries
    ds.assignments = assignments
    return EditResult(entries=entries, assignments=assignments, entry=entry, overridden=overridden)


def remove_entry(ds: SchoolDataset, *, entry_id: uuid.UUID) -> EditResult:
    target = next((e for e in ds.entries if e.id == entry_id), None)
    if target is None:
        raise EntryNotFoundError(f"Timetable entry {entry_id} not found.")

    entries = [e for e in ds.entries if e.id != entry_id]
    assignments = list(ds.assignments)
    if target.is_manual:
        assignments = reconcile_assignment(
            assignments,
            entries,
            teacher_id=target.teacher_id,
            grade=grade_of(target.class_name),
            subject=target.subject,
        )

    ds.entries = entries
    ds.assignments = assignments
    return EditResult(entries=entries, assignments=assignments, entry=target)
