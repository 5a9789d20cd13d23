from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import bad_request, get_store
from core.store import DatasetStore
from models.teacher_assignment import SubjectLoad
from schemas.assignment import AssignmentOut, AssignmentPut, BulkAllocateRequest
from services.faculty_load import (
    AssignmentNotFoundError,
    InvalidAssignmentError,
    bulk_allocate,
    clear_teacher,
    delete_grade_assignment,
    save_assignment,
)


router = APIRouter()


def _require_teacher(store: DatasetStore, teacher_id: str) -> None:
    if store.dataset.staff_member(teacher_id) is None:
        raise HTTPException(status_code=404, detail="TEACHER_NOT_FOUND")


def _out(assignments, teacher_id: str, grade: str) -> AssignmentOut:
    saved = next(a for a in assignments if a.key == (teacher_id, grade))
    return AssignmentOut.model_validate(saved)


@router.get("", response_model=list[AssignmentOut])
def list_assignments(
    teacher_id: str | None = Query(default=None),
    store: DatasetStore = Depends(get_store),
) -> list[AssignmentOut]:
    rows = store.dataset.assignments
    if teacher_id:
        rows = [a for a in rows if a.teacher_id == teacher_id]
    return [AssignmentOut.model_validate(a) for a in rows]


@router.put("/{teacher_id}/{grade}", response_model=AssignmentOut)
def put_assignment(
    teacher_id: str,
    grade: str,
    payload: AssignmentPut,
    store: DatasetStore = Depends(get_store),
) -> AssignmentOut:
    _require_teacher(store, teacher_id)
    loads = [SubjectLoad(subject=l.subject, periods=l.periods) for l in payload.loads]
    with store.exclusive() as ds:
        unknown = [l.subject for l in loads if ds.subject(l.subject) is None]
        if unknown:
            raise HTTPException(status_code=400, detail={"code": "UNKNOWN_SUBJECT", "subjects": unknown})
        try:
            ds.assignments = save_assignment(
                ds.assignments,
                teacher_id=teacher_id,
                grade=grade,
                loads=loads,
                override=payload.override,
            )
        except InvalidAssignmentError as exc:
            raise bad_request("INVALID_ASSIGNMENT", exc)
        return _out(ds.assignments, teacher_id, grade)


@router.post("/{teacher_id}/{grade}/bulk", response_model=AssignmentOut)
def bulk_allocate_assignment(
    teacher_id: str,
    grade: str,
    payload: BulkAllocateRequest,
    store: DatasetStore = Depends(get_store),
) -> AssignmentOut:
    _require_teacher(store, teacher_id)
    with store.exclusive() as ds:
        try:
            ds.assignments = bulk_allocate(
                ds.assignments,
                ds.classes,
                teacher_id=teacher_id,
                grade=grade,
                subjects=payload.subjects,
                periods=payload.periods,
                override=payload.override,
            )
        except AssignmentNotFoundError:
            raise HTTPException(status_code=404, detail="ASSIGNMENT_NOT_FOUND")
        except InvalidAssignmentError as exc:
            raise bad_request("INVALID_ASSIGNMENT", exc)
        return _out(ds.assignments, teacher_id, grade)


@router.delete("/{teacher_id}/{grade}")
def delete_assignment(teacher_id: str, grade: str, store: DatasetStore = Depends(get_store)) -> dict:
    with store.exclusive() as ds:
        try:
            ds.assignments = delete_grade_assignment(ds.assignments, teacher_id=teacher_id, grade=grade)
        except AssignmentNotFoundError:
            raise HTTPException(status_code=404, detail="ASSIGNMENT_NOT_FOUND")
    return {"ok": True}


@router.delete("/{teacher_id}")
def clear_teacher_assignments(teacher_id: str, store: DatasetStore = Depends(get_store)) -> dict:
    with store.exclusive() as ds:
        before = len(ds.assignments)
        ds.assignments = clear_teacher(ds.assignments, teacher_id=teacher_id)
        removed = before - len(ds.assignments)
    return {"ok": True, "removed": removed}
