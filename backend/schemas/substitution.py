from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, Field

from models.time_slot import MAX_SLOT, Wing


class SubstitutionOut(BaseModel):
    id: uuid.UUID
    date: date
    slot_id: int
    class_name: str
    subject: str
    absent_teacher_id: str
    absent_teacher_name: str
    substitute_teacher_id: str
    substitute_teacher_name: str
    wing: Wing

    class Config:
        from_attributes = True


class SubstitutionPut(BaseModel):
    slot_id: int = Field(ge=1, le=MAX_SLOT)
    class_name: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    absent_teacher_id: str = Field(min_length=1)
    substitute_teacher_id: str = Field(min_length=1)


class SubstitutionCreate(SubstitutionPut):
    date: date


class FillRequest(BaseModel):
    date: date
    seed: int | None = None


class UncoveredDuty(BaseModel):
    class_name: str
    slot_id: int
    subject: str
    teacher_id: str
    teacher_name: str

    class Config:
        from_attributes = True


class FillResponse(BaseModel):
    date: date
    purged: int = 0
    filled: list[SubstitutionOut] = Field(default_factory=list)
    uncovered: list[UncoveredDuty] = Field(default_factory=list)


class PurgeRequest(BaseModel):
    date: date


class PurgeResponse(BaseModel):
    date: date
    purged: int = 0
