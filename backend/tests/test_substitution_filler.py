from __future__ import annotations

import random
from datetime import date

import pytest

from models.attendance import AttendanceRecord
from models.substitution_record import SubstitutionRecord
from models.time_slot import Wing
from services.substitution_filler import fill_substitutions, purge_stale_substitutions, run_substitution_fill


SUNDAY = date(2026, 10, 18)
MONDAY = date(2026, 10, 19)


def _present(*ids, on=SUNDAY):
    return [AttendanceRecord(user_id=i, date=on) for i in ids]


def _record(absent, substitute, slot_id=2, class_name="IV A", on=SUNDAY, wing=Wing.PRIMARY):
    return SubstitutionRecord(
        date=on,
        slot_id=slot_id,
        class_name=class_name,
        subject="Mathematics",
        absent_teacher_id=absent,
        absent_teacher_name=absent,
        substitute_teacher_id=substitute,
        substitute_teacher_name=substitute,
        wing=wing,
    )


@pytest.fixture
def sunday_grid(make_entry):
    return [
        make_entry("IV A", "Sunday", 2, "t1"),
        make_entry("IV A", "Sunday", 3, "t1"),
        make_entry("IV B", "Sunday", 2, "t2", "English"),
        make_entry("IV A", "Monday", 2, "t1"),
        make_entry("IX B", "Sunday", 4, "t5", wing=Wing.SECONDARY_BOYS),
    ]


def _fill(grid, attendance, staff, records=(), seed=3, on=SUNDAY):
    return fill_substitutions(
        on=on,
        entries=grid,
        attendance=attendance,
        staff=staff,
        records=records,
        rng=random.Random(seed),
    )


def test_purge_removes_records_of_returning_teachers():
    records = [_record("t1", "t3"), _record("t2", "t4", slot_id=3), _record("t1", "t4", on=MONDAY)]
    attendance = _present("t1", "t3", "t4")

    kept, purged = purge_stale_substitutions(records, attendance, on=SUNDAY)

    assert purged == 1
    assert kept == records[1:]


def test_purge_is_idempotent():
    records = [_record("t1", "t3"), _record("t2", "t4", slot_id=3)]
    attendance = _present("t2")

    once, _ = purge_stale_substitutions(records, attendance, on=SUNDAY)
    twice, purged_again = purge_stale_substitutions(once, attendance, on=SUNDAY)

    assert once == twice
    assert purged_again == 0


def test_absent_teacher_duties_are_covered(sunday_grid, staff):
    attendance = _present("t2", "t3", "t5", "t6")
    result = _fill(sunday_grid, attendance, staff)

    assert {(r.class_name, r.slot_id) for r in result.filled} == {("IV A", 2), ("IV A", 3)}
    for r in result.filled:
        assert r.absent_teacher_id == "t1"
        assert r.absent_teacher_name == "Mohammed Ali"
        assert r.date == SUNDAY
        assert r.wing is Wing.PRIMARY
    # t2 teaches IV B in slot 2, so only t3 can cover it.
    slot_two = next(r for r in result.filled if r.slot_id == 2)
    assert slot_two.substitute_teacher_id == "t3"
    assert slot_two.substitute_teacher_name == "Yusuf Khan"
    assert result.uncovered == []


def test_substitute_is_not_booked_twice_in_one_slot(sunday_grid, staff):
    attendance = _present("t3", "t4")
    result = _fill(sunday_grid, attendance, staff)

    slot_two = [r for r in result.filled if r.slot_id == 2]
    assert {r.class_name for r in slot_two} == {"IV A", "IV B"}
    assert {r.substitute_teacher_id for r in slot_two} == {"t3", "t4"}


def test_duty_left_uncovered_without_candidates(sunday_grid, staff):
    attendance = _present("t5", "t6")
    result = _fill(sunday_grid, attendance, staff)

    assert result.filled == []
    assert {(e.class_name, e.slot_id) for e in result.uncovered} == {("IV A", 2), ("IV A", 3), ("IV B", 2)}


def test_secondary_duty_needs_secondary_staff(sunday_grid, staff):
    attendance = _present("t1", "t2", "t3", "t4", "p1", "t6")
    result = _fill(sunday_grid, attendance, staff)

    assert len(result.filled) == 1
    assert result.filled[0].class_name == "IX B"
    assert result.filled[0].substitute_teacher_id == "t6"


def test_incharge_can_cover_primary(sunday_grid, staff):
    attendance = _present("p1", "t5", "t6")
    result = _fill(sunday_grid, attendance, staff)

    assert {r.substitute_teacher_id for r in result.filled} == {"p1"}
    assert {r.slot_id for r in result.filled} == {2, 3}


def test_non_teaching_absentees_are_ignored(make_entry, staff):
    grid = [make_entry("IV A", "Sunday", 2, "p1")]
    result = _fill(grid, _present("t3"), staff)
    assert result.filled == [] and result.uncovered == []


def test_surviving_records_are_respected(sunday_grid, staff):
    existing = [_record("t1", "t4", slot_id=2)]
    attendance = _present("t2", "t3", "t4", "t5", "t6")
    result = _fill(sunday_grid, attendance, staff, records=existing)

    assert [(r.class_name, r.slot_id) for r in result.filled] == [("IV A", 3)]
    assert result.records[0] is existing[0]
    assert len(result.records) == 2


def test_existing_substitution_keeps_substitute_busy(make_entry, staff):
    grid = [make_entry("IV A", "Sunday", 2, "t1"), make_entry("IV B", "Sunday", 2, "t2")]
    # t3 already covers t2's slot; only t4 remains for t1.
    existing = [_record("t2", "t3", slot_id=2, class_name="IV B")]
    result = _fill(grid, _present("t3", "t4"), staff, records=existing)

    assert [r.substitute_teacher_id for r in result.filled] == ["t4"]


def test_stale_record_purged_during_fill(sunday_grid, staff):
    stale = _record("t1", "t4", slot_id=2)
    other_day = _record("t1", "t4", on=MONDAY)
    result = _fill(sunday_grid, _present("t1", "t2", "t3", "t4", "t5", "t6"), staff, records=[stale, other_day])

    assert result.purged == 1
    assert result.records == [other_day]


def test_weekday_taken_from_date(sunday_grid, staff):
    result = _fill(sunday_grid, _present("t3", "t4", on=MONDAY), staff, on=MONDAY)
    assert {(r.class_name, r.slot_id, r.date) for r in result.filled} == {("IV A", 2, MONDAY)}


def test_weekday_name_ignores_locale(sunday_grid, staff):
    class LocalisedDate(date):
        def strftime(self, fmt):
            return "Sonntag"

    on = LocalisedDate(2026, 10, 18)
    result = _fill(sunday_grid, _present("t2", "t3", on=on), staff, on=on)
    assert {(r.class_name, r.slot_id) for r in result.filled} == {("IV A", 2), ("IV A", 3)}


def test_same_seed_same_picks(sunday_grid, staff):
    attendance = _present("t3", "t4", "p1")
    a = _fill(sunday_grid, attendance, staff, seed=11)
    b = _fill(sunday_grid, attendance, staff, seed=11)
    assert [r.substitute_teacher_id for r in a.filled] == [r.substitute_teacher_id for r in b.filled]


def test_run_fill_updates_the_store(store, sunday_grid):
    store.dataset.entries = sunday_grid
    store.dataset.attendance = _present("t2", "t3", "t5", "t6")

    result = run_substitution_fill(store, on=SUNDAY, seed=2)

    assert store.dataset.substitutions == result.records
    assert len(store.dataset.substitutions) == 2
