from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum

from models.subject import SubjectCategory
from models.time_slot import Wing


class EntryOrigin(str, Enum):
    MANUAL = "MANUAL"
    CLASS_TEACHER_AUTO = "CLASS_TEACHER_AUTO"
    SYNCHRONIZED_BLOCK = "SYNCHRONIZED_BLOCK"
    GENERAL_FILL = "GENERAL_FILL"


@dataclass(frozen=True)
class TimetableEntry:
    class_name: str
    day: str
    slot_id: int
    subject: str
    subject_category: SubjectCategory
    teacher_id: str
    teacher_name: str
    wing: Wing
    origin: EntryOrigin
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "subject_category", SubjectCategory(self.subject_category))
        object.__setattr__(self, "wing", Wing(self.wing))
        object.__setattr__(self, "origin", EntryOrigin(self.origin))

    @property
    def is_manual(self) -> bool:
        return self.origin is EntryOrigin.MANUAL

    @property
    def cell(self) -> tuple[str, str, int]:
        return (self.class_name, self.day, self.slot_id)
