from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date

from models.time_slot import Wing


@dataclass(frozen=True)
class SubstitutionRecord:
    date: date
    slot_id: int
    class_name: str
    subject: str
    absent_teacher_id: str
    absent_teacher_name: str
    substitute_teacher_id: str
    substitute_teacher_name: str
    wing: Wing
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "wing", Wing(self.wing))
