from __future__ import annotations

import uuid
from typing import Any, Literal

from pydantic import BaseModel, Field

from models.subject import SubjectCategory
from models.time_slot import MAX_SLOT, Wing
from models.timetable_entry import EntryOrigin
from services.conflict_detector import ConflictType, EditView


class TimetableEntryOut(BaseModel):
    id: uuid.UUID
    class_name: str
    day: str
    slot_id: int
    subject: str
    subject_category: SubjectCategory
    teacher_id: str
    teacher_name: str
    wing: Wing
    origin: EntryOrigin

    class Config:
        from_attributes = True


class GenerateRequest(BaseModel):
    seed: int | None = None


class GenerateResponse(BaseModel):
    entries_written: int = 0
    placed: dict[str, int] = Field(default_factory=dict)
    unplaced_periods: int = 0


class ConflictOut(BaseModel):
    severity: Literal["INFO", "WARN", "ERROR"] = "WARN"
    conflict_type: ConflictType
    message: str
    metadata: dict[str, Any] = Field(default_factory=dict)

    class Config:
        from_attributes = True


class CellEdit(BaseModel):
    teacher_id: str = Field(min_length=1)
    class_name: str = Field(min_length=1)
    day: str = Field(min_length=1)
    slot_id: int = Field(ge=1, le=MAX_SLOT)
    view: EditView = EditView.CLASS


class ConflictCheckResponse(BaseModel):
    ok: bool
    conflict: ConflictOut | None = None


class ManualEntryRequest(CellEdit):
    subject: str = Field(min_length=1)
    override: bool = False


class ManualEntryResponse(BaseModel):
    entry: TimetableEntryOut
    overridden: list[ConflictOut] = Field(default_factory=list)
