from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from api.router import api_router
from core import store as store_module
from core.bootstrap import ensure_default_catalog
from core.config import settings
from core.logging import setup_logging
from core.store import PlanningInProgressError
from services.conflict_detector import OverrideRequiredError


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    setup_logging(environment=settings.environment, level_override=settings.log_level)
    is_production = settings.environment.lower() == "production"
    app = FastAPI(
        title="School Timetable Planner API",
        version="0.1.0",
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
    )

    @app.exception_handler(OverrideRequiredError)
    def _override_required(_request, exc: OverrideRequiredError):
        info = exc.conflict
        return JSONResponse(
            status_code=409,
            content={
                "code": "OVERRIDE_REQUIRED",
                "message": info.message,
                "conflict": {
                    "conflict_type": info.conflict_type.value,
                    "severity": info.severity,
                    "message": info.message,
                    "metadata": info.metadata,
                },
            },
        )

    @app.exception_handler(PlanningInProgressError)
    def _planning_in_progress(_request, exc: PlanningInProgressError):
        logger.warning("Rejected concurrent planning request (409)")
        return JSONResponse(
            status_code=409,
            content={
                "code": "PLANNING_IN_PROGRESS",
                "message": str(exc),
            },
        )

    allow_origins = [settings.frontend_origin]
    allow_origin_regex = None
    if not is_production:
        allow_origins.extend(["http://localhost:5173", "http://127.0.0.1:5173"])
        allow_origin_regex = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_origin_regex=allow_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict:
        planner = "busy" if store_module.get_store().busy else "idle"
        return {"app": "ok", "school": settings.school_name, "planner": planner}

    ensure_default_catalog(store_module.get_store())
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
