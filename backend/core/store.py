from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import ContextManager, Iterator

from models.attendance import AttendanceRecord
from models.class_section import ClassSection
from models.staff import StaffMember
from models.subject import Subject
from models.substitution_record import SubstitutionRecord
from models.teacher_assignment import TeacherAssignment
from models.timetable_entry import TimetableEntry


class PlanningInProgressError(RuntimeError):
    """Raised when a pass is requested while another one holds the dataset."""


_EDIT_WAIT_SECONDS = 5.0


@dataclass
class SchoolDataset:
    classes: list[ClassSection] = field(default_factory=list)
    subjects: list[Subject] = field(default_factory=list)
    staff: list[StaffMember] = field(default_factory=list)
    assignments: list[TeacherAssignment] = field(default_factory=list)
    entries: list[TimetableEntry] = field(default_factory=list)
    attendance: list[AttendanceRecord] = field(default_factory=list)
    substitutions: list[SubstitutionRecord] = field(default_factory=list)

    def staff_member(self, staff_id: str) -> StaffMember | None:
        return next((m for m in self.staff if m.id == staff_id), None)

    def class_section(self, class_name: str) -> ClassSection | None:
        return next((c for c in self.classes if c.name == class_name), None)

    def subject(self, name: str) -> Subject | None:
        return next((s for s in self.subjects if s.name == name), None)


class DatasetStore:
    """In-memory dataset with single-writer access.

    Passes read the dataset, compute replacement lists, and assign them back
    while holding the lock, so callers never observe partial results.
    """

    def __init__(self, dataset: SchoolDataset | None = None) -> None:
        self.dataset = dataset or SchoolDataset()
        self._lock = threading.Lock()

    @contextmanager
    def exclusive(self, *, wait: bool = True) -> Iterator[SchoolDataset]:
        acquired = self._lock.acquire(timeout=_EDIT_WAIT_SECONDS) if wait else self._lock.acquire(blocking=False)
        if not acquired:
            raise PlanningInProgressError("Another planning run is in progress for this dataset.")
        try:
            yield self.dataset
        finally:
            self._lock.release()

    def planning(self) -> ContextManager[SchoolDataset]:
        # Full passes never queue behind one another.
        return self.exclusive(wait=False)

    @property
    def busy(self) -> bool:
        return self._lock.locked()


_store = DatasetStore()


def get_store() -> DatasetStore:
    return _store


def reset_store(dataset: SchoolDataset | None = None) -> DatasetStore:
    global _store
    _store = DatasetStore(dataset)
    return _store
