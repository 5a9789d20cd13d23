from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Wing(str, Enum):
    PRIMARY = "PRIMARY"
    SECONDARY_BOYS = "SECONDARY_BOYS"
    SECONDARY_GIRLS = "SECONDARY_GIRLS"

    @property
    def is_secondary(self) -> bool:
        return self is not Wing.PRIMARY


@dataclass(frozen=True)
class TimeSlot:
    # Break rows use ordinal 0 and never carry entries.
    id: int
    label: str
    start_time: str
    end_time: str
    is_break: bool = False


def _p(n: int, start: str, end: str) -> TimeSlot:
    return TimeSlot(id=n, label=f"P{n}", start_time=start, end_time=end)


def _recess(start: str, end: str) -> TimeSlot:
    return TimeSlot(id=0, label="RECESS", start_time=start, end_time=end, is_break=True)


PRIMARY_SLOTS: tuple[TimeSlot, ...] = (
    _p(1, "07:20", "08:00"),
    _p(2, "08:00", "08:40"),
    _p(3, "08:40", "09:20"),
    _p(4, "09:20", "10:00"),
    _recess("10:00", "10:20"),
    _p(5, "10:20", "11:00"),
    _p(6, "11:00", "11:40"),
    _p(7, "11:40", "12:20"),
    _p(8, "12:20", "13:00"),
)

SECONDARY_GIRLS_SLOTS: tuple[TimeSlot, ...] = PRIMARY_SLOTS + (_p(9, "13:00", "13:40"),)

SECONDARY_BOYS_SLOTS: tuple[TimeSlot, ...] = (
    _p(1, "07:20", "08:00"),
    _p(2, "08:00", "08:40"),
    _p(3, "08:40", "09:20"),
    _p(4, "09:20", "10:00"),
    _p(5, "10:00", "10:40"),
    _recess("10:40", "11:00"),
    _p(6, "11:00", "11:40"),
    _p(7, "11:40", "12:20"),
    _p(8, "12:20", "13:00"),
    _p(9, "13:00", "13:40"),
)

_SLOTS_BY_WING: dict[Wing, tuple[TimeSlot, ...]] = {
    Wing.PRIMARY: PRIMARY_SLOTS,
    Wing.SECONDARY_GIRLS: SECONDARY_GIRLS_SLOTS,
    Wing.SECONDARY_BOYS: SECONDARY_BOYS_SLOTS,
}

# Highest teaching ordinal across every wing.
MAX_SLOT = 9


def slots_for_wing(wing: Wing | str) -> tuple[TimeSlot, ...]:
    return _SLOTS_BY_WING[Wing(wing)]


def teaching_slot_count(wing: Wing | str) -> int:
    return sum(1 for s in slots_for_wing(wing) if not s.is_break)


def has_teaching_slot(wing: Wing | str, slot_id: int) -> bool:
    return any(s.id == slot_id for s in slots_for_wing(wing) if not s.is_break)
