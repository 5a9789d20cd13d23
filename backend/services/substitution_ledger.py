from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date
from enum import Enum
from typing import Iterable, Sequence

from core.store import SchoolDataset
from models.substitution_record import SubstitutionRecord
from models.time_slot import Wing, has_teaching_slot


logger = logging.getLogger(__name__)


class WingGroup(str, Enum):
    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"

    def matches(self, wing: Wing) -> bool:
        return Wing(wing).is_secondary is (self is WingGroup.SECONDARY)


class InvalidSubstitutionError(ValueError):
    pass


class SubstitutionNotFoundError(LookupError):
    pass


def list_substitutions(
    records: Iterable[SubstitutionRecord],
    *,
    on: date,
    wing_group: WingGroup | None = None,
    substitute_id: str | None = None,
) -> list[SubstitutionRecord]:
    out = [r for r in records if r.date == on]
    if wing_group is not None:
        group = WingGroup(wing_group)
        out = [r for r in out if group.matches(r.wing)]
    if substitute_id:
        out = [r for r in out if r.substitute_teacher_id == substitute_id]
    return sorted(out, key=lambda r: (r.slot_id, r.class_name))


def _resolve(
    ds: SchoolDataset,
    *,
    absent_teacher_id: str,
    substitute_teacher_id: str,
    class_name: str,
    subject: str,
    slot_id: int,
):
    absent = ds.staff_member(absent_teacher_id)
    if absent is None:
        raise InvalidSubstitutionError(f"Unknown absent teacher {absent_teacher_id!r}.")
    substitute = ds.staff_member(substitute_teacher_id)
    if substitute is None:
        raise InvalidSubstitutionError(f"Unknown substitute teacher {substitute_teacher_id!r}.")
    if absent.id == substitute.id:
        raise InvalidSubstitutionError("A teacher cannot substitute for themselves.")
    cls = ds.class_section(class_name)
    if cls is None:
        raise InvalidSubstitutionError(f"Unknown class {class_name!r}.")
    if not subject:
        raise InvalidSubstitutionError("Subject is required.")
    if not has_teaching_slot(cls.wing, slot_id):
        raise InvalidSubstitutionError(f"{cls.wing.value} has no teaching period {slot_id}.")
    return absent, substitute, cls


def add_substitution(
    ds: SchoolDataset,
    *,
    on: date,
    slot_id: int,
    class_name: str,
    subject: str,
    absent_teacher_id: str,
    substitute_teacher_id: str,
) -> SubstitutionRecord:
    absent, substitute, cls = _resolve(
        ds,
        absent_teacher_id=absent_teacher_id,
        substitute_teacher_id=substitute_teacher_id,
        class_name=class_name,
        subject=subject,
        slot_id=slot_id,
    )
    record = SubstitutionRecord(
        date=on,
        slot_id=slot_id,
        class_name=cls.name,
        subject=subject,
        absent_teacher_id=absent.id,
        absent_teacher_name=absent.name,
        substitute_teacher_id=substitute.id,
        substitute_teacher_name=substitute.name,
        wing=cls.wing,
    )
    ds.substitutions = ds.substitutions + [record]
    logger.info("Manual substitution %s covers %s in %s P%d", substitute.id, absent.id, cls.name, slot_id)
    return record


def update_substitution(
    ds: SchoolDataset,
    *,
    record_id: uuid.UUID,
    slot_id: int,
    class_name: str,
    subject: str,
    absent_teacher_id: str,
    substitute_teacher_id: str,
) -> SubstitutionRecord:
    current = _find(ds.substitutions, record_id)
    absent, substitute, cls = _resolve(
        ds,
        absent_teacher_id=absent_teacher_id,
        substitute_teacher_id=substitute_teacher_id,
        class_name=class_name,
        subject=subject,
        slot_id=slot_id,
    )
    updated = replace(
        current,
        slot_id=slot_id,
        class_name=cls.name,
        subject=subject,
        absent_teacher_id=absent.id,
        absent_teacher_name=absent.name,
        substitute_teacher_id=substitute.id,
        substitute_teacher_name=substitute.name,
        wing=cls.wing,
    )
    ds.substitutions = [updated if r.id == record_id else r for r in ds.substitutions]
    return updated


def delete_substitution(ds: SchoolDataset, *, record_id: uuid.UUID) -> SubstitutionRecord:
    current = _find(ds.substitutions, record_id)
    ds.substitutions = [r for r in ds.substitutions if r.id != record_id]
    return current


def _find(records: Sequence[SubstitutionRecord], record_id: uuid.UUID) -> SubstitutionRecord:
    found = next((r for r in records if r.id == record_id), None)
    if found is None:
        raise SubstitutionNotFoundError(f"Substitution {record_id} not found.")
    return found
