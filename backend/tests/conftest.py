from __future__ import annotations

import pytest

from core.store import SchoolDataset, reset_store
from models.class_section import ClassSection
from models.staff import StaffMember, StaffRole
from models.subject import Subject, SubjectCategory
from models.teacher_assignment import SubjectLoad, TeacherAssignment
from models.time_slot import Wing
from models.timetable_entry import EntryOrigin, TimetableEntry


@pytest.fixture
def subjects() -> list[Subject]:
    return [
        Subject("Mathematics"),
        Subject("English"),
        Subject("Science"),
        Subject("Arabic", SubjectCategory.SECOND_LANGUAGE),
        Subject("Hindi", SubjectCategory.SECOND_LANGUAGE),
        Subject("Islamic Studies", SubjectCategory.RELIGIOUS_MORAL_EDUCATION),
        Subject("Moral Science", SubjectCategory.RELIGIOUS_MORAL_EDUCATION),
    ]


@pytest.fixture
def classes() -> list[ClassSection]:
    return [
        ClassSection("IV A", Wing.PRIMARY),
        ClassSection("IV B", Wing.PRIMARY),
        ClassSection("IX B", Wing.SECONDARY_BOYS),
    ]


@pytest.fixture
def staff() -> list[StaffMember]:
    return [
        StaffMember("t1", "Mohammed Ali", StaffRole.TEACHER_PRIMARY, class_teacher_of="IV A"),
        StaffMember("t2", "Aisha Noor", StaffRole.TEACHER_PRIMARY, class_teacher_of="IV B"),
        StaffMember("t3", "Yusuf Khan", StaffRole.TEACHER_PRIMARY),
        StaffMember("t4", "Priya Menon", StaffRole.TEACHER_PRIMARY),
        StaffMember("t5", "Fatima Zohra", StaffRole.TEACHER_SECONDARY, class_teacher_of="IX B"),
        StaffMember("t6", "Omar Saleh", StaffRole.TEACHER_SENIOR_SECONDARY),
        StaffMember("p1", "Primary Incharge", StaffRole.INCHARGE_PRIMARY),
        StaffMember("a1", "Ahmed Registrar", StaffRole.ADMIN_STAFF),
    ]


@pytest.fixture
def assignments() -> list[TeacherAssignment]:
    return [
        TeacherAssignment("t1", "IV", (SubjectLoad("Mathematics", 6), SubjectLoad("Science", 4)), ("IV A",)),
        TeacherAssignment("t2", "IV", (SubjectLoad("English", 6), SubjectLoad("Mathematics", 6)), ("IV B",)),
        TeacherAssignment("t3", "IV", (SubjectLoad("Arabic", 3), SubjectLoad("Islamic Studies", 2)), ("IV A",)),
        TeacherAssignment("t4", "IV", (SubjectLoad("Hindi", 3), SubjectLoad("Moral Science", 2)), ("IV B",)),
        TeacherAssignment("t5", "IX", (SubjectLoad("Mathematics", 7), SubjectLoad("Science", 6))),
        TeacherAssignment("t6", "IX", (SubjectLoad("English", 6), SubjectLoad("Arabic", 4))),
    ]


@pytest.fixture
def dataset(classes, subjects, staff, assignments) -> SchoolDataset:
    return SchoolDataset(classes=classes, subjects=subjects, staff=staff, assignments=assignments)


@pytest.fixture
def store(dataset):
    return reset_store(dataset)


@pytest.fixture
def make_entry():
    def _make(
        class_name: str,
        day: str,
        slot_id: int,
        teacher_id: str,
        subject: str = "Mathematics",
        *,
        category: SubjectCategory = SubjectCategory.CORE,
        wing: Wing = Wing.PRIMARY,
        origin: EntryOrigin = EntryOrigin.MANUAL,
        teacher_name: str | None = None,
    ) -> TimetableEntry:
        return TimetableEntry(
            class_name=class_name,
            day=day,
            slot_id=slot_id,
            subject=subject,
            subject_category=category,
            teacher_id=teacher_id,
            teacher_name=teacher_name or teacher_id,
            wing=wing,
            origin=origin,
        )

    return _make
