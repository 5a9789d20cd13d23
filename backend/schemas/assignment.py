from __future__ import annotations

from pydantic import BaseModel, Field


class SubjectLoadIn(BaseModel):
    subject: str = Field(min_length=1)
    periods: int = Field(ge=0)


class SubjectLoadOut(SubjectLoadIn):
    class Config:
        from_attributes = True


class AssignmentPut(BaseModel):
    loads: list[SubjectLoadIn] = Field(min_length=1)
    override: bool = False


class BulkAllocateRequest(BaseModel):
    subjects: list[str] = Field(min_length=1)
    periods: int = Field(ge=0)
    override: bool = False


class AssignmentOut(BaseModel):
    teacher_id: str
    grade: str
    loads: list[SubjectLoadOut] = Field(default_factory=list)
    # Empty means every section of the grade.
    target_sections: list[str] = Field(default_factory=list)
    total_periods: int = 0

    class Config:
        from_attributes = True
