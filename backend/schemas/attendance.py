from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class AttendancePut(BaseModel):
    present_ids: list[str] = Field(default_factory=list)


class AttendanceOut(BaseModel):
    date: date
    present_ids: list[str] = Field(default_factory=list)
