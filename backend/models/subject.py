from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SubjectCategory(str, Enum):
    CORE = "CORE"
    SECOND_LANGUAGE = "SECOND_LANGUAGE"
    SECOND_LANGUAGE_SENIOR = "SECOND_LANGUAGE_SENIOR"
    THIRD_LANGUAGE = "THIRD_LANGUAGE"
    RELIGIOUS_MORAL_EDUCATION = "RELIGIOUS_MORAL_EDUCATION"


# Categories every sibling section of a grade takes in the same period.
SYNC_CATEGORIES: tuple[SubjectCategory, ...] = (
    SubjectCategory.SECOND_LANGUAGE,
    SubjectCategory.SECOND_LANGUAGE_SENIOR,
    SubjectCategory.THIRD_LANGUAGE,
    SubjectCategory.RELIGIOUS_MORAL_EDUCATION,
)


@dataclass(frozen=True)
class Subject:
    name: str
    category: SubjectCategory = SubjectCategory.CORE

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", SubjectCategory(self.category))
