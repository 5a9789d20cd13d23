from __future__ import annotations

import uuid

import pytest

from core.store import PlanningInProgressError
from models.teacher_assignment import SubjectLoad, TeacherAssignment
from models.time_slot import Wing
from models.timetable_entry import EntryOrigin
from services.conflict_detector import ConflictType, EditView, OverrideRequiredError
from services.timetable_service import (
    EntryNotFoundError,
    InvalidEditError,
    remove_entry,
    run_generation,
    save_manual_entry,
    subjects_for_edit,
)


def test_manual_entry_is_pinned_and_reconciled(dataset):
    result = save_manual_entry(dataset, teacher_id="t3", class_name="IV A", day="Sunday", slot_id=5, subject="English")

    assert result.entry.origin is EntryOrigin.MANUAL
    assert result.entry.teacher_name == "Yusuf Khan"
    assert result.entry.wing is Wing.PRIMARY
    assert dataset.entries == [result.entry]
    t3 = next(a for a in dataset.assignments if a.key == ("t3", "IV"))
    assert t3.load_for("English").periods == 1


def test_class_view_replaces_the_cell_occupant(dataset, make_entry):
    old = make_entry("IV A", "Sunday", 5, "t1", origin=EntryOrigin.GENERAL_FILL)
    dataset.entries = [old]

    result = save_manual_entry(dataset, teacher_id="t3", class_name="IV A", day="Sunday", slot_id=5, subject="Arabic")

    assert old not in dataset.entries
    assert dataset.entries == [result.entry]
    assert result.overridden == []


def test_teacher_clash_needs_override(dataset, make_entry):
    elsewhere = make_entry("IV B", "Sunday", 5, "t3", "Arabic")
    dataset.entries = [elsewhere]
    edit = dict(teacher_id="t3", class_name="IV A", day="Sunday", slot_id=5, subject="Arabic")

    with pytest.raises(OverrideRequiredError) as info:
        save_manual_entry(dataset, **edit)
    assert info.value.conflict.conflict_type is ConflictType.TEACHER_CONFLICT
    assert dataset.entries == [elsewhere]

    result = save_manual_entry(dataset, override=True, **edit)
    assert [c.conflict_type for c in result.overridden] == [ConflictType.TEACHER_CONFLICT]
    assert elsewhere in dataset.entries and result.entry in dataset.entries


def test_teacher_view_checks_the_room(dataset, make_entry):
    occupant = make_entry("IV A", "Sunday", 5, "t1")
    own = make_entry("IV B", "Sunday", 5, "t3", "Arabic")
    dataset.entries = [occupant, own]
    edit = dict(teacher_id="t3", class_name="IV A", day="Sunday", slot_id=5, subject="Arabic", view=EditView.TEACHER)

    with pytest.raises(OverrideRequiredError) as info:
        save_manual_entry(dataset, **edit)
    assert info.value.conflict.conflict_type is ConflictType.ROOM_CONFLICT

    result = save_manual_entry(dataset, override=True, **edit)
    # The teacher's previous cell is the one replaced from this grid.
    assert own not in dataset.entries
    assert occupant in dataset.entries
    assert result.entry in dataset.entries


def test_load_limit_gate_on_manual_edit(dataset):
    dataset.assignments = [TeacherAssignment("t5", "IX", (SubjectLoad("Mathematics", 28),))]
    edit = dict(teacher_id="t5", class_name="IX B", day="Sunday", slot_id=3, subject="English")

    with pytest.raises(OverrideRequiredError) as info:
        save_manual_entry(dataset, **edit)
    assert info.value.conflict.conflict_type is ConflictType.LOAD_LIMIT_EXCEEDED
    assert dataset.entries == []
    assert dataset.assignments[0].total_periods == 28

    save_manual_entry(dataset, override=True, **edit)
    assert dataset.assignments[0].total_periods == 29


def test_edit_within_existing_quota_does_not_trip_gate(dataset):
    dataset.assignments = [TeacherAssignment("t5", "IX", (SubjectLoad("Mathematics", 28),))]
    result = save_manual_entry(dataset, teacher_id="t5", class_name="IX B", day="Sunday", slot_id=3, subject="Mathematics")
    assert result.overridden == []


@pytest.mark.parametrize(
    "edit",
    [
        dict(teacher_id="nobody", class_name="IV A", day="Sunday", slot_id=2, subject="Arabic"),
        dict(teacher_id="t3", class_name="VII Z", day="Sunday", slot_id=2, subject="Arabic"),
        dict(teacher_id="t3", class_name="IV A", day="Sunday", slot_id=2, subject="Latin"),
        dict(teacher_id="t3", class_name="IV A", day="Friday", slot_id=2, subject="Arabic"),
        dict(teacher_id="t3", class_name="IV A", day="Sunday", slot_id=9, subject="Arabic"),
    ],
)
def test_invalid_edits(dataset, edit):
    with pytest.raises(InvalidEditError):
        save_manual_entry(dataset, **edit)
    assert dataset.entries == []


def test_removing_manual_entry_keeps_quota(dataset):
    first = save_manual_entry(dataset, teacher_id="t3", class_name="IV A", day="Sunday", slot_id=5, subject="English")
    save_manual_entry(dataset, teacher_id="t3", class_name="IV A", day="Monday", slot_id=5, subject="English")

    remove_entry(dataset, entry_id=first.entry.id)

    assert len(dataset.entries) == 1
    t3 = next(a for a in dataset.assignments if a.key == ("t3", "IV"))
    assert t3.load_for("English").periods == 2


def test_remove_unknown_entry(dataset):
    with pytest.raises(EntryNotFoundError):
        remove_entry(dataset, entry_id=uuid.uuid4())


def test_subjects_for_edit(dataset):
    assert [s.name for s in subjects_for_edit(dataset, teacher_id="t3", class_name="IV B")] == [
        "Arabic",
        "Islamic Studies",
    ]
    everything = subjects_for_edit(dataset, teacher_id="t3", class_name="IX B")
    assert len(everything) == len(dataset.subjects)


def test_generation_swaps_in_full_grid(store, make_entry):
    pinned = make_entry("IV A", "Sunday", 5, "t1")
    store.dataset.entries = [pinned]

    result = run_generation(store, seed=4)

    assert store.dataset.entries == result.entries
    assert pinned in store.dataset.entries
    assert result.generated and all(not e.is_manual for e in result.generated)


def test_generation_refuses_to_overlap(store):
    with store.planning():
        with pytest.raises(PlanningInProgressError):
            run_generation(store, seed=1)
    assert not store.busy


def test_last_period_only_for_wings_that_have_it(dataset):
    with pytest.raises(InvalidEditError):
        save_manual_entry(dataset, teacher_id="t1", class_name="IV A", day="Sunday", slot_id=9, subject="Mathematics")
    assert dataset.assignments[0].total_periods == 10

    result = save_manual_entry(dataset, teacher_id="t5", class_name="IX B", day="Sunday", slot_id=9, subject="Mathematics")
    assert result.entry.slot_id == 9
