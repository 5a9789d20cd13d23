from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from models.time_slot import Wing


class StaffRole(str, Enum):
    ADMIN = "ADMIN"
    INCHARGE_ALL = "INCHARGE_ALL"
    INCHARGE_PRIMARY = "INCHARGE_PRIMARY"
    INCHARGE_SECONDARY = "INCHARGE_SECONDARY"
    TEACHER_PRIMARY = "TEACHER_PRIMARY"
    TEACHER_SECONDARY = "TEACHER_SECONDARY"
    TEACHER_SENIOR_SECONDARY = "TEACHER_SENIOR_SECONDARY"
    ADMIN_STAFF = "ADMIN_STAFF"

    @property
    def is_teaching(self) -> bool:
        return self.value.startswith("TEACHER_")


PRIMARY_ROLES = frozenset({StaffRole.TEACHER_PRIMARY, StaffRole.INCHARGE_PRIMARY})
SECONDARY_ROLES = frozenset(
    {StaffRole.TEACHER_SECONDARY, StaffRole.TEACHER_SENIOR_SECONDARY, StaffRole.INCHARGE_SECONDARY}
)


def can_cover_wing(role: StaffRole, wing: Wing) -> bool:
    """Whether staff with ``role`` may substitute for a duty in ``wing``."""
    if Wing(wing) is Wing.PRIMARY:
        return StaffRole(role) in PRIMARY_ROLES
    return StaffRole(role) in SECONDARY_ROLES


@dataclass(frozen=True)
class StaffMember:
    id: str
    name: str
    role: StaffRole
    class_teacher_of: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", StaffRole(self.role))
