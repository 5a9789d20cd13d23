from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from models.timetable_entry import TimetableEntry


class ConflictType(str, Enum):
    TEACHER_CONFLICT = "TEACHER_CONFLICT"
    ROOM_CONFLICT = "ROOM_CONFLICT"
    LOAD_LIMIT_EXCEEDED = "LOAD_LIMIT_EXCEEDED"


class EditView(str, Enum):
    """Which grid the edit is made from; decides the direction of the check."""

    CLASS = "CLASS"
    TEACHER = "TEACHER"


@dataclass(frozen=True)
class ConflictInfo:
    conflict_type: ConflictType
    message: str
    severity: str = "WARN"
    metadata: dict[str, Any] = field(default_factory=dict)


class OverrideRequiredError(RuntimeError):
    """An advisory gate tripped; the write goes through only with an explicit override."""

    def __init__(self, conflict: ConflictInfo) -> None:
        super().__init__(conflict.message)
        self.conflict = conflict


def _teacher_conflict(
    entries: Iterable[TimetableEntry], *, teacher_id: str, class_name: str, day: str, slot_id: int
) -> ConflictInfo | None:
    for e in entries:
        if e.teacher_id == teacher_id and e.day == day and e.slot_id == slot_id and e.class_name != class_name:
            return ConflictInfo(
                conflict_type=ConflictType.TEACHER_CONFLICT,
                message=f"Conflict: {e.teacher_name} is already assigned to Class {e.class_name} during this period.",
                metadata={"entry_id": str(e.id), "class_name": e.class_name, "teacher_id": e.teacher_id},
            )
    return None


def _room_conflict(
    entries: Iterable[TimetableEntry], *, teacher_id: str, class_name: str, day: str, slot_id: int
) -> ConflictInfo | None:
    for e in entries:
        if e.class_name == class_name and e.day == day and e.slot_id == slot_id and e.teacher_id != teacher_id:
            return ConflictInfo(
                conflict_type=ConflictType.ROOM_CONFLICT,
                message=f"Conflict: Room {e.class_name} is already occupied by {e.teacher_name} during this period.",
                metadata={"entry_id": str(e.id), "class_name": e.class_name, "teacher_id": e.teacher_id},
            )
    return None


def detect_conflict(
    entries: Iterable[TimetableEntry],
    *,
    teacher_id: str,
    class_name: str,
    day: str,
    slot_id: int,
    view: EditView | None = None,
) -> ConflictInfo | None:
    """First occupant clashing with a proposed single-cell edit, if any.

    From the class grid only the teacher can clash elsewhere; from the teacher
    grid only the room can. Without a view both are checked, teacher first.
    Never blocks the write.
    """
    entries = list(entries)
    view = EditView(view) if view is not None else None
    kwargs = dict(teacher_id=teacher_id, class_name=class_name, day=day, slot_id=slot_id)
    if view is EditView.CLASS:
        return _teacher_conflict(entries, **kwargs)
    if view is EditView.TEACHER:
        return _room_conflict(entries, **kwargs)
    return _teacher_conflict(entries, **kwargs) or _room_conflict(entries, **kwargs)
