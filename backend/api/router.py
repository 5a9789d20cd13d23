from __future__ import annotations

from fastapi import APIRouter

from api.routes import assignments, attendance, catalog, substitutions, timetable


api_router = APIRouter()
api_router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
api_router.include_router(assignments.router, prefix="/assignments", tags=["assignments"])
api_router.include_router(timetable.router, prefix="/timetable", tags=["timetable"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
api_router.include_router(substitutions.router, prefix="/substitutions", tags=["substitutions"])
