from __future__ import annotations

from typing import Iterable, NamedTuple

from models.timetable_entry import TimetableEntry


class SlotKey(NamedTuple):
    owner: str
    day: str
    slot_id: int


class AvailabilityIndex:
    """Occupancy for one planning pass.

    Tracks which (teacher, day, slot) and (class, day, slot) cells are taken.
    Keys are tuples, so ids containing separators cannot collide.
    """

    def __init__(self) -> None:
        self._teacher_busy: set[SlotKey] = set()
        self._class_busy: set[SlotKey] = set()

    @classmethod
    def from_entries(cls, entries: Iterable[TimetableEntry]) -> "AvailabilityIndex":
        index = cls()
        for e in entries:
            index.occupy(teacher_id=e.teacher_id, class_name=e.class_name, day=e.day, slot_id=e.slot_id)
        return index

    def teacher_busy(self, teacher_id: str, day: str, slot_id: int) -> bool:
        return SlotKey(teacher_id, day, slot_id) in self._teacher_busy

    def class_busy(self, class_name: str, day: str, slot_id: int) -> bool:
        return SlotKey(class_name, day, slot_id) in self._class_busy

    def is_free(self, *, teacher_id: str, class_name: str, day: str, slot_id: int) -> bool:
        return not self.teacher_busy(teacher_id, day, slot_id) and not self.class_busy(class_name, day, slot_id)

    def occupy(self, *, teacher_id: str, class_name: str, day: str, slot_id: int) -> None:
        self._teacher_busy.add(SlotKey(teacher_id, day, slot_id))
        self._class_busy.add(SlotKey(class_name, day, slot_id))

    def __len__(self) -> int:
        return len(self._class_busy)
