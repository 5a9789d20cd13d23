from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from models.time_slot import Wing


_ROMAN_TOKEN = re.compile(r"[IVX]+")
_DIGIT_TOKEN = re.compile(r"\d+")


def grade_of(class_name: str) -> str:
    """Grade token of a class name: ``"IV A"`` -> ``"IV"``, ``"10 B"`` -> ``"10"``.

    Roman numerals win over digits; a name with neither is its own grade.
    """
    m = _ROMAN_TOKEN.search(class_name) or _DIGIT_TOKEN.search(class_name)
    return m.group(0) if m else class_name


@dataclass(frozen=True)
class ClassSection:
    name: str
    wing: Wing
    display_name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "wing", Wing(self.wing))

    @property
    def grade(self) -> str:
        return grade_of(self.name)


def sections_by_grade(classes: Iterable[ClassSection]) -> dict[str, list[str]]:
    """Sibling class names per grade, in catalog order."""
    grouped: dict[str, list[str]] = defaultdict(list)
    for cls in classes:
        grouped[cls.grade].append(cls.name)
    return dict(grouped)
