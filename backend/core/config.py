from __future__ import annotations

import random
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic.aliases import AliasChoices
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


BACKEND_DIR = Path(__file__).resolve().parents[1]

DEFAULT_SCHOOL_DAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=BACKEND_DIR / ".env", env_file_encoding="utf-8", extra="ignore")

    # Runtime
    environment: str = Field(default="development", validation_alias=AliasChoices("environment", "ENVIRONMENT"))
    frontend_origin: str = Field(
        default="http://localhost:5173",
        validation_alias=AliasChoices("frontend_origin", "FRONTEND_ORIGIN"),
    )

    log_level: str | None = Field(default=None, validation_alias=AliasChoices("log_level", "LOG_LEVEL"))

    school_name: str = Field(
        default="Ibn Al Hytham Islamic School",
        validation_alias=AliasChoices("school_name", "SCHOOL_NAME"),
    )

    # Planning
    school_days: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_SCHOOL_DAYS),
        validation_alias=AliasChoices("school_days", "SCHOOL_DAYS"),
    )
    weekly_load_limit: int = Field(
        default=28,
        ge=1,
        validation_alias=AliasChoices("weekly_load_limit", "WEEKLY_LOAD_LIMIT"),
    )
    max_subjects_per_grade: int = Field(
        default=8,
        ge=1,
        validation_alias=AliasChoices("max_subjects_per_grade", "MAX_SUBJECTS_PER_GRADE"),
    )

    # Reproducible runs: a fixed seed makes tie-breaking and substitute picks repeatable.
    deterministic_scheduling: bool = Field(
        default=False,
        validation_alias=AliasChoices("deterministic_scheduling", "DETERMINISTIC_SCHEDULING"),
    )
    schedule_seed: int | None = Field(
        default=None,
        validation_alias=AliasChoices("schedule_seed", "SCHEDULE_SEED"),
    )

    seed_default_catalog: bool = Field(
        default=True,
        validation_alias=AliasChoices("seed_default_catalog", "SEED_DEFAULT_CATALOG"),
    )

    @field_validator("frontend_origin")
    @classmethod
    def _normalize_frontend_origin(cls, v: str) -> str:
        # Starlette CORS expects the Origin to match exactly (no trailing slash).
        return v.strip().rstrip("/")

    @field_validator("school_days", mode="before")
    @classmethod
    def _split_school_days(cls, v):
        if isinstance(v, str):
            v = v.split(",")
        return v

    @field_validator("school_days")
    @classmethod
    def _normalize_school_days(cls, v: list[str]) -> list[str]:
        days = [d.strip().capitalize() for d in v if d and d.strip()]
        if not days:
            raise ValueError("SCHOOL_DAYS must name at least one day")
        if len(set(days)) != len(days):
            raise ValueError("SCHOOL_DAYS must not repeat a day")
        return days

    @property
    def effective_seed(self) -> int | None:
        if self.schedule_seed is not None:
            return self.schedule_seed
        if self.deterministic_scheduling:
            return 0
        return None


settings = Settings()


def make_rng(seed: int | None = None) -> random.Random:
    """Random source for a planning pass.

    An explicit seed wins; otherwise the configured seed (if any) is used.
    """
    if seed is None:
        seed = settings.effective_seed
    return random.Random(seed)
