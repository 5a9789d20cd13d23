from __future__ import annotations

from pydantic import BaseModel, Field

from models.staff import StaffRole
from models.subject import SubjectCategory
from models.time_slot import Wing


class ClassSectionIn(BaseModel):
    name: str = Field(min_length=1)
    wing: Wing
    display_name: str | None = None


class ClassSectionOut(ClassSectionIn):
    grade: str

    class Config:
        from_attributes = True


class SubjectIn(BaseModel):
    name: str = Field(min_length=1)
    category: SubjectCategory = SubjectCategory.CORE


class SubjectOut(SubjectIn):
    class Config:
        from_attributes = True


class StaffIn(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: StaffRole
    class_teacher_of: str | None = None


class StaffOut(StaffIn):
    class Config:
        from_attributes = True


class TimeSlotOut(BaseModel):
    id: int
    label: str
    start_time: str
    end_time: str
    is_break: bool = False

    class Config:
        from_attributes = True
