from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_store
from core.store import DatasetStore
from models.attendance import AttendanceRecord, present_ids
from schemas.attendance import AttendanceOut, AttendancePut


router = APIRouter()


@router.get("", response_model=AttendanceOut)
def get_attendance(on: date = Query(alias="date"), store: DatasetStore = Depends(get_store)) -> AttendanceOut:
    return AttendanceOut(date=on, present_ids=sorted(present_ids(store.dataset.attendance, on)))


@router.put("/{on}", response_model=AttendanceOut)
def put_attendance(on: date, payload: AttendancePut, store: DatasetStore = Depends(get_store)) -> AttendanceOut:
    ids = list(dict.fromkeys(payload.present_ids))
    with store.exclusive() as ds:
        unknown = [i for i in ids if ds.staff_member(i) is None]
        if unknown:
            raise HTTPException(status_code=400, detail={"code": "UNKNOWN_STAFF", "ids": unknown})
        others = [r for r in ds.attendance if r.date != on]
        ds.attendance = others + [AttendanceRecord(user_id=i, date=on) for i in ids]
    return AttendanceOut(date=on, present_ids=sorted(ids))
