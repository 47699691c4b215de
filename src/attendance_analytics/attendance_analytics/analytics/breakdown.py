from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..core.constants import EPIC_EXCELLENT_FROM, EPIC_FAIR_FROM, EPIC_GOOD_FROM
from .predicates import is_exempted, is_informed_absence, is_uninformed_absence


@dataclass(frozen=True)
class AttendanceBreakdown:
    """Counts for a set of records.

    ``absent`` counts regular absences only (exempted absences are attended).
    """

    present: int
    late: int
    absent: int
    exempted: int
    attended: int
    total: int
    percentage: float

    def as_dict(self) -> dict:
        return {
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "exempted": self.exempted,
            "attended": self.attended,
            "total": self.total,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class CohortBreakdown(AttendanceBreakdown):
    total_students: int = 0
    session_count: int = 0


@dataclass(frozen=True)
class AbsenceBreakdown:
    uninformed: int
    informed: int
    exempted: int

    @property
    def total(self) -> int:
        # Exempted absences are not reported as absences.
        return self.uninformed + self.informed

    def as_dict(self) -> dict:
        return {
            "uninformed": self.uninformed,
            "informed": self.informed,
            "exempted": self.exempted,
            "total": self.total,
        }


def absence_breakdown(records: Iterable[AttendanceRecord]) -> AbsenceBreakdown:
    uninformed = informed = exempted = 0
    for r in records:
        if is_uninformed_absence(r):
            uninformed += 1
        elif is_informed_absence(r):
            informed += 1
        elif is_exempted(r):
            exempted += 1
    return AbsenceBreakdown(uninformed=uninformed, informed=informed, exempted=exempted)


@dataclass(frozen=True)
class EpicStatus:
    text: str
    variant: str


def classify_epic_status(percentage: float) -> EpicStatus:
    if percentage >= EPIC_EXCELLENT_FROM:
        return EpicStatus(text="Excellent", variant="success")
    if percentage >= EPIC_GOOD_FROM:
        return EpicStatus(text="Good", variant="info")
    if percentage >= EPIC_FAIR_FROM:
        return EpicStatus(text="Fair", variant="warning")
    return EpicStatus(text="Needs Attention", variant="error")
