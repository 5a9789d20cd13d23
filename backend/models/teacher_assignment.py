from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SubjectLoad:
    subject: str
    periods: int


@dataclass(frozen=True)
class TeacherAssignment:
    """Weekly quota of one teacher for one grade.

    ``target_sections`` empty means the quota applies to every section of the grade.
    """

    teacher_id: str
    grade: str
    loads: tuple[SubjectLoad, ...] = ()
    target_sections: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "loads", tuple(self.loads))
        object.__setattr__(self, "target_sections", tuple(self.target_sections))

    @property
    def key(self) -> tuple[str, str]:
        return (self.teacher_id, self.grade)

    @property
    def total_periods(self) -> int:
        return sum(load.periods for load in self.loads)

    def applies_to(self, class_name: str) -> bool:
        return not self.target_sections or class_name in self.target_sections

    def load_for(self, subject: str) -> SubjectLoad | None:
        for load in self.loads:
            if load.subject == subject:
                return load
        return None
