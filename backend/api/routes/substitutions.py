from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import bad_request, get_store
from core.store import DatasetStore
from schemas.substitution import (
    FillRequest,
    FillResponse,
    PurgeRequest,
    PurgeResponse,
    SubstitutionCreate,
    SubstitutionOut,
    SubstitutionPut,
    UncoveredDuty,
)
from services.substitution_filler import run_purge, run_substitution_fill
from services.substitution_ledger import (
    InvalidSubstitutionError,
    SubstitutionNotFoundError,
    WingGroup,
    add_substitution,
    delete_substitution,
    list_substitutions,
    update_substitution,
)


router = APIRouter()


@router.get("", response_model=list[SubstitutionOut])
def get_substitutions(
    on: date = Query(alias="date"),
    wing_group: WingGroup | None = Query(default=None),
    substitute_id: str | None = Query(default=None),
    store: DatasetStore = Depends(get_store),
) -> list[SubstitutionOut]:
    rows = list_substitutions(store.dataset.substitutions, on=on, wing_group=wing_group, substitute_id=substitute_id)
    return [SubstitutionOut.model_validate(r) for r in rows]


@router.post("/fill", response_model=FillResponse)
def fill(payload: FillRequest, store: DatasetStore = Depends(get_store)) -> FillResponse:
    result = run_substitution_fill(store, on=payload.date, seed=payload.seed)
    return FillResponse(
        date=payload.date,
        purged=result.purged,
        filled=[SubstitutionOut.model_validate(r) for r in result.filled],
        uncovered=[UncoveredDuty.model_validate(e) for e in result.uncovered],
    )


@router.post("/purge", response_model=PurgeResponse)
def purge(payload: PurgeRequest, store: DatasetStore = Depends(get_store)) -> PurgeResponse:
    return PurgeResponse(date=payload.date, purged=run_purge(store, on=payload.date))


@router.post("", response_model=SubstitutionOut)
def create_substitution(payload: SubstitutionCreate, store: DatasetStore = Depends(get_store)) -> SubstitutionOut:
    with store.exclusive() as ds:
        try:
            record = add_substitution(
                ds,
                on=payload.date,
                slot_id=payload.slot_id,
                class_name=payload.class_name,
                subject=payload.subject,
                absent_teacher_id=payload.absent_teacher_id,
                substitute_teacher_id=payload.substitute_teacher_id,
            )
        except InvalidSubstitutionError as exc:
            raise bad_request("INVALID_SUBSTITUTION", exc)
    return SubstitutionOut.model_validate(record)


@router.put("/{record_id}", response_model=SubstitutionOut)
def put_substitution(
    record_id: uuid.UUID,
    payload: SubstitutionPut,
    store: DatasetStore = Depends(get_store),
) -> SubstitutionOut:
    with store.exclusive() as ds:
        try:
            record = update_substitution(ds, record_id=record_id, **payload.model_dump())
        except SubstitutionNotFoundError:
            raise HTTPException(status_code=404, detail="SUBSTITUTION_NOT_FOUND")
        except InvalidSubstitutionError as exc:
            raise bad_request("INVALID_SUBSTITUTION", exc)
    return SubstitutionOut.model_validate(record)


@router.delete("/{record_id}")
def remove_substitution(record_id: uuid.UUID, store: DatasetStore = Depends(get_store)) -> dict:
    with store.exclusive() as ds:
        try:
            delete_substitution(ds, record_id=record_id)
        except SubstitutionNotFoundError:
            raise HTTPException(status_code=404, detail="SUBSTITUTION_NOT_FOUND")
    return {"ok": True}
