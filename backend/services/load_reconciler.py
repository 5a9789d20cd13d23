from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Sequence

from models.class_section import grade_of
from models.teacher_assignment import SubjectLoad, TeacherAssignment
from models.timetable_entry import TimetableEntry
from services.conflict_detector import ConflictInfo, ConflictType


logger = logging.getLogger(__name__)


def manual_count(entries: Iterable[TimetableEntry], *, teacher_id: str, grade: str, subject: str) -> int:
    return sum(
        1
        for e in entries
        if e.is_manual and e.teacher_id == teacher_id and e.subject == subject and grade_of(e.class_name) == grade
    )


def reconcile_assignment(
    assignments: Sequence[TeacherAssignment],
    entries: Iterable[TimetableEntry],
    *,
    teacher_id: str,
    grade: str,
    subject: str,
) -> list[TeacherAssignment]:
    """Raise the (teacher, grade, subject) quota to cover the manual cells using it.

    Quotas only grow here: an existing load keeps ``max(periods, manual)``.
    Returns a new list; the input is not modified.
    """
    count = manual_count(entries, teacher_id=teacher_id, grade=grade, subject=subject)

    out = list(assignments)
    for i, a in enumerate(out):
        if a.teacher_id != teacher_id or a.grade != grade:
            continue

        existing = a.load_for(subject)
        if existing is None:
            loads = a.loads + (SubjectLoad(subject=subject, periods=count),)
            logger.debug("Reconcile: added %s=%d to %s/%s", subject, count, teacher_id, grade)
        elif count > existing.periods:
            loads = tuple(SubjectLoad(subject=l.subject, periods=count) if l.subject == subject else l for l in a.loads)
            logger.debug("Reconcile: raised %s to %d for %s/%s", subject, count, teacher_id, grade)
        else:
            return out
        out[i] = replace(a, loads=loads)
        return out

    out.append(TeacherAssignment(teacher_id=teacher_id, grade=grade, loads=(SubjectLoad(subject=subject, periods=count),)))
    logger.debug("Reconcile: created %s/%s with %s=%d", teacher_id, grade, subject, count)
    return out


def teacher_total_periods(
    assignments: Iterable[TeacherAssignment],
    teacher_id: str,
    *,
    grade: str | None = None,
    grade_loads: Iterable[SubjectLoad] = (),
) -> int:
    """Weekly periods across all grades; ``grade_loads`` stand in for ``grade``'s current loads."""
    total = 0
    for a in assignments:
        if a.teacher_id == teacher_id and a.grade != grade:
            total += a.total_periods
    if grade is not None:
        total += sum(l.periods for l in grade_loads)
    return total


def check_load_limit(total: int, *, limit: int, teacher_id: str | None = None) -> ConflictInfo | None:
    if total <= limit:
        return None
    return ConflictInfo(
        conflict_type=ConflictType.LOAD_LIMIT_EXCEEDED,
        message=(
            f"Load Alert: Resulting workload of {total} periods exceeds the standard "
            f"{limit}-period weekly limit."
        ),
        metadata={"teacher_id": teacher_id, "total_periods": total, "limit": limit},
    )
