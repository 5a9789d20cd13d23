from __future__ import annotations

import logging

from core.config import settings
from core.store import DatasetStore
from models.class_section import ClassSection
from models.staff import StaffMember, StaffRole
from models.subject import Subject, SubjectCategory
from models.time_slot import Wing


logger = logging.getLogger(__name__)


_CORE = (
    "Mathematics",
    "English",
    "Science",
    "Social Studies",
    "Bahrain History",
    "CEP",
    "EVS",
    "GK",
    "PHYSICS",
    "CHEMISTRY",
    "BIOLOGY",
    "COMPUTER SCIENCE",
    "IP",
    "BUSINESS STUDIES",
    "ECONOMICS",
    "ACCOUNTANCY",
    "MARKETING",
    "MANAGEMENT",
)

_BLOCKS: dict[SubjectCategory, tuple[str, ...]] = {
    SubjectCategory.SECOND_LANGUAGE: ("Hindi", "Arabic", "Urdu (2nd Lang)"),
    SubjectCategory.SECOND_LANGUAGE_SENIOR: ("Hindi IX-X", "Arabic IX-X", "Urdu IX-X", "Malayalam IX-X"),
    SubjectCategory.THIRD_LANGUAGE: ("Urdu (3rd Lang)", "Malayalam (3rd Lang)", "English Core"),
    SubjectCategory.RELIGIOUS_MORAL_EDUCATION: ("Islamic Studies", "Moral Science", "Islamic Education"),
}

# Specialist periods are scheduled like any core subject.
_SPECIALIST = ("Art & Craft", "PHE", "Library")


def default_subjects() -> list[Subject]:
    out = [Subject(name=n) for n in _CORE]
    for category, names in _BLOCKS.items():
        out.extend(Subject(name=n, category=category) for n in names)
    out.extend(Subject(name=n) for n in _SPECIALIST)
    return out


def default_classes() -> list[ClassSection]:
    return [
        ClassSection(name="I A", wing=Wing.PRIMARY),
        ClassSection(name="IV A", wing=Wing.PRIMARY),
        ClassSection(name="IX B", wing=Wing.SECONDARY_BOYS),
        ClassSection(name="X B", wing=Wing.SECONDARY_GIRLS),
    ]


def default_staff() -> list[StaffMember]:
    return [
        StaffMember(id="1", name="System Admin", role=StaffRole.ADMIN),
        StaffMember(id="2", name="General Incharge", role=StaffRole.INCHARGE_ALL),
        StaffMember(id="3", name="Primary Incharge", role=StaffRole.INCHARGE_PRIMARY),
        StaffMember(id="4", name="Mohammed Ali", role=StaffRole.TEACHER_PRIMARY, class_teacher_of="IV A"),
        StaffMember(id="5", name="Fatima Zohra", role=StaffRole.TEACHER_SECONDARY, class_teacher_of="X B"),
        StaffMember(id="6", name="Senior Teacher", role=StaffRole.TEACHER_SENIOR_SECONDARY),
        StaffMember(id="7", name="Ahmed Registrar", role=StaffRole.ADMIN_STAFF),
    ]


def ensure_default_catalog(store: DatasetStore) -> bool:
    """Seed the default catalog into an empty dataset.

    Returns True when anything was seeded. Lists that already hold data are
    left untouched.
    """
    if not settings.seed_default_catalog:
        return False

    seeded = False
    with store.exclusive() as ds:
        if not ds.subjects:
            ds.subjects = default_subjects()
            seeded = True
        if not ds.classes:
            ds.classes = default_classes()
            seeded = True
        if not ds.staff:
            ds.staff = default_staff()
            seeded = True

    if seeded:
        logger.info(
            "Seeded default catalog for %s: %d subjects, %d classes, %d staff",
            settings.school_name,
            len(store.dataset.subjects),
            len(store.dataset.classes),
            len(store.dataset.staff),
        )
    return seeded
