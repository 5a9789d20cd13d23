from __future__ import annotations

import pytest

from models.class_section import ClassSection, grade_of, sections_by_grade
from models.staff import StaffRole, can_cover_wing
from models.teacher_assignment import SubjectLoad, TeacherAssignment
from models.time_slot import Wing, has_teaching_slot, slots_for_wing, teaching_slot_count


@pytest.mark.parametrize(
    "name,grade",
    [("IV A", "IV"), ("IX B", "IX"), ("X B", "X"), ("10 C", "10"), ("P1 A", "1"), ("KG", "KG")],
)
def test_grade_of(name, grade):
    assert grade_of(name) == grade


def test_sections_by_grade_keeps_catalog_order():
    classes = [
        ClassSection("IV B", Wing.PRIMARY),
        ClassSection("IX B", Wing.SECONDARY_BOYS),
        ClassSection("IV A", Wing.PRIMARY),
    ]
    assert sections_by_grade(classes) == {"IV": ["IV B", "IV A"], "IX": ["IX B"]}


def test_wing_slot_tables():
    assert teaching_slot_count(Wing.PRIMARY) == 8
    assert teaching_slot_count(Wing.SECONDARY_GIRLS) == 9
    assert teaching_slot_count("SECONDARY_BOYS") == 9

    boys = slots_for_wing(Wing.SECONDARY_BOYS)
    assert [s.label for s in boys][5] == "RECESS"
    assert boys[5].id == 0 and boys[5].is_break
    girls = slots_for_wing(Wing.SECONDARY_GIRLS)
    assert [s.label for s in girls][4] == "RECESS"


def test_teaching_slot_belongs_to_wing():
    assert has_teaching_slot(Wing.PRIMARY, 8)
    assert not has_teaching_slot(Wing.PRIMARY, 9)
    assert has_teaching_slot("SECONDARY_BOYS", 9)
    assert not has_teaching_slot(Wing.SECONDARY_GIRLS, 0)


def test_role_wing_compatibility():
    assert can_cover_wing(StaffRole.TEACHER_PRIMARY, Wing.PRIMARY)
    assert can_cover_wing(StaffRole.INCHARGE_PRIMARY, Wing.PRIMARY)
    assert not can_cover_wing(StaffRole.TEACHER_SECONDARY, Wing.PRIMARY)

    for wing in (Wing.SECONDARY_BOYS, Wing.SECONDARY_GIRLS):
        assert can_cover_wing(StaffRole.TEACHER_SECONDARY, wing)
        assert can_cover_wing(StaffRole.TEACHER_SENIOR_SECONDARY, wing)
        assert can_cover_wing(StaffRole.INCHARGE_SECONDARY, wing)
        assert not can_cover_wing(StaffRole.TEACHER_PRIMARY, wing)
        assert not can_cover_wing(StaffRole.INCHARGE_ALL, wing)
        assert not can_cover_wing(StaffRole.ADMIN_STAFF, wing)


def test_teaching_roles():
    teaching = {r for r in StaffRole if r.is_teaching}
    assert teaching == {StaffRole.TEACHER_PRIMARY, StaffRole.TEACHER_SECONDARY, StaffRole.TEACHER_SENIOR_SECONDARY}


def test_assignment_helpers():
    a = TeacherAssignment("t1", "IV", [SubjectLoad("Mathematics", 5), SubjectLoad("Science", 3)], ["IV A"])
    assert a.key == ("t1", "IV")
    assert a.total_periods == 8
    assert a.applies_to("IV A") and not a.applies_to("IV B")
    assert a.load_for("Science").periods == 3
    assert a.load_for("Art") is None
    assert TeacherAssignment("t1", "IV").applies_to("IV B")
