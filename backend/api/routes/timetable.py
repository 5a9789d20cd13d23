from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import bad_request, get_store
from core.config import settings
from core.store import DatasetStore
from schemas.catalog import SubjectOut
from schemas.timetable import (
    CellEdit,
    ConflictCheckResponse,
    ConflictOut,
    GenerateRequest,
    GenerateResponse,
    ManualEntryRequest,
    ManualEntryResponse,
    TimetableEntryOut,
)
from services.conflict_detector import detect_conflict
from services.timetable_service import (
    EntryNotFoundError,
    InvalidEditError,
    entries_for_class,
    entries_for_teacher,
    remove_entry,
    run_generation,
    save_manual_entry,
    subjects_for_edit,
)


router = APIRouter()


def _grid_order(entry) -> tuple[int, int, str]:
    days = settings.school_days
    day_index = days.index(entry.day) if entry.day in days else len(days)
    return (day_index, entry.slot_id, entry.class_name)


@router.get("", response_model=list[TimetableEntryOut])
def get_timetable(
    class_name: str | None = Query(default=None),
    teacher_id: str | None = Query(default=None),
    store: DatasetStore = Depends(get_store),
) -> list[TimetableEntryOut]:
    rows = store.dataset.entries
    if class_name:
        rows = entries_for_class(rows, class_name)
    if teacher_id:
        rows = entries_for_teacher(rows, teacher_id)
    return [TimetableEntryOut.model_validate(e) for e in sorted(rows, key=_grid_order)]


@router.post("/generate", response_model=GenerateResponse)
def generate(payload: GenerateRequest, store: DatasetStore = Depends(get_store)) -> GenerateResponse:
    result = run_generation(store, seed=payload.seed)
    return GenerateResponse(
        entries_written=len(result.generated),
        placed=result.placed,
        unplaced_periods=result.unplaced_periods,
    )


@router.post("/conflicts", response_model=ConflictCheckResponse)
def check_conflict(payload: CellEdit, store: DatasetStore = Depends(get_store)) -> ConflictCheckResponse:
    conflict = detect_conflict(
        store.dataset.entries,
        teacher_id=payload.teacher_id,
        class_name=payload.class_name,
        day=payload.day,
        slot_id=payload.slot_id,
        view=payload.view,
    )
    if conflict is None:
        return ConflictCheckResponse(ok=True)
    return ConflictCheckResponse(ok=False, conflict=ConflictOut.model_validate(conflict))


@router.post("/entries", response_model=ManualEntryResponse)
def save_entry(payload: ManualEntryRequest, store: DatasetStore = Depends(get_store)) -> ManualEntryResponse:
    with store.exclusive() as ds:
        try:
            result = save_manual_entry(
                ds,
                teacher_id=payload.teacher_id,
                class_name=payload.class_name,
                day=payload.day,
                slot_id=payload.slot_id,
                subject=payload.subject,
                view=payload.view,
                override=payload.override,
            )
        except InvalidEditError as exc:
            raise bad_request("INVALID_EDIT", exc)
    return ManualEntryResponse(
        entry=TimetableEntryOut.model_validate(result.entry),
        overridden=[ConflictOut.model_validate(c) for c in result.overridden],
    )


@router.delete("/entries/{entry_id}")
def delete_entry(entry_id: uuid.UUID, store: DatasetStore = Depends(get_store)) -> dict:
    with store.exclusive() as ds:
        try:
            remove_entry(ds, entry_id=entry_id)
        except EntryNotFoundError:
            raise HTTPException(status_code=404, detail="TIMETABLE_ENTRY_NOT_FOUND")
    return {"ok": True}


@router.get("/subjects", response_model=list[SubjectOut])
def get_edit_subjects(
    teacher_id: str = Query(min_length=1),
    class_name: str = Query(min_length=1),
    store: DatasetStore = Depends(get_store),
) -> list[SubjectOut]:
    subjects = subjects_for_edit(store.dataset, teacher_id=teacher_id, class_name=class_name)
    return [SubjectOut.model_validate(s) for s in subjects]
