from __future__ import annotations

from fastapi import HTTPException

from core import store as store_module
from core.store import DatasetStore


def get_store() -> DatasetStore:
    # Resolved per request so tests can swap the store with reset_store().
    return store_module.get_store()


def bad_request(code: str, exc: Exception) -> HTTPException:
    return HTTPException(status_code=400, detail={"code": code, "message": str(exc)})
