from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Sequence

from core.config import settings
from models.class_section import ClassSection, sections_by_grade
from models.teacher_assignment import SubjectLoad, TeacherAssignment
from services.conflict_detector import OverrideRequiredError
from services.load_reconciler import check_load_limit, teacher_total_periods


logger = logging.getLogger(__name__)


class InvalidAssignmentError(ValueError):
    pass


class AssignmentNotFoundError(LookupError):
    pass


def _gate_load(
    assignments: Sequence[TeacherAssignment],
    *,
    teacher_id: str,
    grade: str,
    loads: Iterable[SubjectLoad],
    override: bool,
    limit: int | None,
) -> None:
    total = teacher_total_periods(assignments, teacher_id, grade=grade, grade_loads=loads)
    alert = check_load_limit(total, limit=limit or settings.weekly_load_limit, teacher_id=teacher_id)
    if alert is None:
        return
    if not override:
        raise OverrideRequiredError(alert)
    logger.warning("Load limit override for %s: %d periods/week", teacher_id, total)


def save_assignment(
    assignments: Sequence[TeacherAssignment],
    *,
    teacher_id: str,
    grade: str,
    loads: Sequence[SubjectLoad],
    override: bool = False,
    limit: int | None = None,
    max_subjects: int | None = None,
) -> list[TeacherAssignment]:
    """Replace the (teacher, grade) quota with ``loads``."""
    max_subjects = max_subjects or settings.max_subjects_per_grade
    if not loads:
        raise InvalidAssignmentError("At least one subject load is required.")
    if len(loads) > max_subjects:
        raise InvalidAssignmentError(f"Maximum of {max_subjects} subjects per grade.")
    subjects = [l.subject for l in loads]
    if len(set(subjects)) != len(subjects):
        raise InvalidAssignmentError("A subject may appear only once per grade.")
    if any(l.periods < 0 for l in loads):
        raise InvalidAssignmentError("Periods per week cannot be negative.")

    _gate_load(assignments, teacher_id=teacher_id, grade=grade, loads=loads, override=override, limit=limit)

    previous = next((a for a in assignments if a.key == (teacher_id, grade)), None)
    updated = TeacherAssignment(
        teacher_id=teacher_id,
        grade=grade,
        loads=tuple(loads),
        target_sections=previous.target_sections if previous else (),
    )
    return [a for a in assignments if a.key != (teacher_id, grade)] + [updated]


def bulk_allocate(
    assignments: Sequence[TeacherAssignment],
    classes: Iterable[ClassSection],
    *,
    teacher_id: str,
    grade: str,
    subjects: Sequence[str],
    periods: int,
    override: bool = False,
    limit: int | None = None,
) -> list[TeacherAssignment]:
    """Give each of ``subjects`` the same period count across every section of the grade."""
    current = next((a for a in assignments if a.key == (teacher_id, grade)), None)
    if current is None:
        raise AssignmentNotFoundError(f"No assignment for teacher {teacher_id} in grade {grade}.")
    if not subjects:
        raise InvalidAssignmentError("Select at least one subject.")
    if periods < 0:
        raise InvalidAssignmentError("Periods per week cannot be negative.")

    loads = tuple(SubjectLoad(subject=s, periods=periods) for s in dict.fromkeys(subjects))
    _gate_load(assignments, teacher_id=teacher_id, grade=grade, loads=loads, override=override, limit=limit)

    sections = tuple(sections_by_grade(classes).get(grade, []))
    updated = replace(current, loads=loads, target_sections=sections)
    return [updated if a.key == current.key else a for a in assignments]


def delete_grade_assignment(assignments: Sequence[TeacherAssignment], *, teacher_id: str, grade: str) -> list[TeacherAssignment]:
    remaining = [a for a in assignments if a.key != (teacher_id, grade)]
    if len(remaining) == len(assignments):
        raise AssignmentNotFoundError(f"No assignment for teacher {teacher_id} in grade {grade}.")
    return remaining


def clear_teacher(assignments: Sequence[TeacherAssignment], *, teacher_id: str) -> list[TeacherAssignment]:
    return [a for a in assignments if a.teacher_id != teacher_id]
