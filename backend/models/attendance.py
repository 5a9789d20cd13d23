from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable


@dataclass(frozen=True)
class AttendanceRecord:
    user_id: str
    date: date


def present_ids(records: Iterable[AttendanceRecord], on: date) -> set[str]:
    return {r.user_id for r in records if r.date == on}
