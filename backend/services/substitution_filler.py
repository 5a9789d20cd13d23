from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Sequence

from core.config import make_rng
from core.store import DatasetStore
from models.attendance import AttendanceRecord, present_ids
from models.staff import StaffMember, can_cover_wing
from models.substitution_record import SubstitutionRecord
from models.timetable_entry import TimetableEntry


logger = logging.getLogger(__name__)

# Indexed by date.weekday(); matches the English day names in settings.school_days.
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass
class FillResult:
    records: list[SubstitutionRecord]
    filled: list[SubstitutionRecord] = field(default_factory=list)
    purged: int = 0
    uncovered: list[TimetableEntry] = field(default_factory=list)


def purge_stale_substitutions(
    records: Iterable[SubstitutionRecord],
    attendance: Iterable[AttendanceRecord],
    *,
    on: date,
) -> tuple[list[SubstitutionRecord], int]:
    """Drop records for ``on`` whose absent teacher has since been marked present."""
    present = present_ids(attendance, on)
    records = list(records)
    kept = [r for r in records if r.date != on or r.absent_teacher_id not in present]
    return kept, len(records) - len(kept)


def fill_substitutions(
    *,
    on: date,
    entries: Sequence[TimetableEntry],
    attendance: Iterable[AttendanceRecord],
    staff: Sequence[StaffMember],
    records: Iterable[SubstitutionRecord],
    day_name: str | None = None,
    rng: random.Random | None = None,
) -> FillResult:
    """Purge stale records for ``on`` then cover every uncovered duty of absent teachers.

    Returns the full replacement record list. Duties with no eligible
    substitute are reported in ``uncovered`` and get no record.
    """
    rng = rng or make_rng()
    day_name = day_name or WEEKDAY_NAMES[on.weekday()]
    attendance = list(attendance)
    present = present_ids(attendance, on)

    kept, purged = purge_stale_substitutions(records, attendance, on=on)
    todays = [r for r in kept if r.date == on]

    busy_regular = {(e.teacher_id, e.slot_id) for e in entries if e.day == day_name}
    busy_subbing = {(r.substitute_teacher_id, r.slot_id) for r in todays}
    covered = {(r.absent_teacher_id, r.slot_id, r.class_name) for r in todays}

    filled: list[SubstitutionRecord] = []
    uncovered: list[TimetableEntry] = []
    absent = [m for m in staff if m.role.is_teaching and m.id not in present]

    for teacher in absent:
        duties = [e for e in entries if e.teacher_id == teacher.id and e.day == day_name]
        for duty in duties:
            if (teacher.id, duty.slot_id, duty.class_name) in covered:
                continue

            candidates = [
                m
                for m in staff
                if m.id in present
                and can_cover_wing(m.role, duty.wing)
                and (m.id, duty.slot_id) not in busy_regular
                and (m.id, duty.slot_id) not in busy_subbing
            ]
            if not candidates:
                uncovered.append(duty)
                continue

            substitute = rng.choice(candidates)
            record = SubstitutionRecord(
                date=on,
                slot_id=duty.slot_id,
                class_name=duty.class_name,
                subject=duty.subject,
                absent_teacher_id=teacher.id,
                absent_teacher_name=teacher.name,
                substitute_teacher_id=substitute.id,
                substitute_teacher_name=substitute.name,
                wing=duty.wing,
            )
            filled.append(record)
            busy_subbing.add((substitute.id, duty.slot_id))
            covered.add((teacher.id, duty.slot_id, duty.class_name))

    logger.info(
        "Substitutions for %s (%s): filled=%d purged=%d uncovered=%d",
        on.isoformat(),
        day_name,
        len(filled),
        purged,
        len(uncovered),
    )
    return FillResult(records=kept + filled, filled=filled, purged=purged, uncovered=uncovered)


def run_substitution_fill(
    store: DatasetStore,
    *,
    on: date,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> FillResult:
    with store.planning() as ds:
        result = fill_substitutions(
            on=on,
            entries=ds.entries,
            attendance=ds.attendance,
            staff=ds.staff,
            records=ds.substitutions,
            rng=rng or make_rng(seed),
        )
        ds.substitutions = result.records
    return result


def run_purge(store: DatasetStore, *, on: date) -> int:
    with store.planning() as ds:
        kept, purged = purge_stale_substitutions(ds.substitutions, ds.attendance, on=on)
        ds.substitutions = kept
    if purged:
        logger.info("Purged %d stale substitution records for %s", purged, on.isoformat())
    return purged
