from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_store
from core.store import DatasetStore
from models.class_section import ClassSection
from models.staff import StaffMember
from models.subject import Subject
from models.time_slot import Wing, slots_for_wing
from schemas.catalog import (
    ClassSectionIn,
    ClassSectionOut,
    StaffIn,
    StaffOut,
    SubjectIn,
    SubjectOut,
    TimeSlotOut,
)


router = APIRouter()


def _require_unique(values: list[str], code: str) -> None:
    if len(set(values)) != len(values):
        raise HTTPException(status_code=400, detail=code)


@router.get("/classes", response_model=list[ClassSectionOut])
def list_classes(store: DatasetStore = Depends(get_store)) -> list[ClassSectionOut]:
    return [ClassSectionOut.model_validate(c) for c in store.dataset.classes]


@router.put("/classes", response_model=list[ClassSectionOut])
def replace_classes(payload: list[ClassSectionIn], store: DatasetStore = Depends(get_store)) -> list[ClassSectionOut]:
    _require_unique([c.name for c in payload], "DUPLICATE_CLASS_NAME")
    with store.exclusive() as ds:
        ds.classes = [ClassSection(**c.model_dump()) for c in payload]
        return [ClassSectionOut.model_validate(c) for c in ds.classes]


@router.get("/subjects", response_model=list[SubjectOut])
def list_subjects(store: DatasetStore = Depends(get_store)) -> list[SubjectOut]:
    return [SubjectOut.model_validate(s) for s in store.dataset.subjects]


@router.put("/subjects", response_model=list[SubjectOut])
def replace_subjects(payload: list[SubjectIn], store: DatasetStore = Depends(get_store)) -> list[SubjectOut]:
    _require_unique([s.name for s in payload], "DUPLICATE_SUBJECT_NAME")
    with store.exclusive() as ds:
        ds.subjects = [Subject(**s.model_dump()) for s in payload]
        return [SubjectOut.model_validate(s) for s in ds.subjects]


@router.get("/staff", response_model=list[StaffOut])
def list_staff(store: DatasetStore = Depends(get_store)) -> list[StaffOut]:
    return [StaffOut.model_validate(m) for m in store.dataset.staff]


@router.put("/staff", response_model=list[StaffOut])
def replace_staff(payload: list[StaffIn], store: DatasetStore = Depends(get_store)) -> list[StaffOut]:
    _require_unique([m.id for m in payload], "DUPLICATE_STAFF_ID")
    with store.exclusive() as ds:
        ds.staff = [StaffMember(**m.model_dump()) for m in payload]
        return [StaffOut.model_validate(m) for m in ds.staff]


@router.get("/slots/{wing}", response_model=list[TimeSlotOut])
def list_slots(wing: Wing) -> list[TimeSlotOut]:
    return [TimeSlotOut.model_validate(s) for s in slots_for_wing(wing)]
