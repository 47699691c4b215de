from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ..attendance.model import AttendanceRecord
from .breakdown import CohortBreakdown
from .calculator.cohort_calculator import CohortBreakdownCalculator


@dataclass(frozen=True)
class SessionSummary:
    session_date: date
    session_number: int
    total_students: int
    breakdown: CohortBreakdown
    is_cancelled: bool

    @property
    def attendance_percentage(self) -> float:
        return self.breakdown.percentage

    def as_dict(self) -> dict:
        b = self.breakdown
        return {
            "sessionNumber": self.session_number,
            "sessionDate": self.session_date.isoformat(),
            "totalStudents": self.total_students,
            "presentCount": b.present,
            "lateCount": b.late,
            "absentCount": b.absent,
            "exemptedCount": b.exempted,
            "attendedCount": b.attended,
            "attendancePercentage": b.percentage,
            "isCancelled": self.is_cancelled,
            "breakdown": b.as_dict(),
        }


def summarize_session(
    *,
    session_date: date,
    session_number: int,
    records: Sequence[AttendanceRecord],
    total_students: int,
) -> SessionSummary:
    """Breakdown of one session.

    A session nobody has a row for while the cohort has active members is
    reported as cancelled rather than as 0% attendance.
    """
    breakdown = CohortBreakdownCalculator(total_students=total_students).calculate(records)
    return SessionSummary(
        session_date=session_date,
        session_number=int(session_number),
        total_students=int(total_students),
        breakdown=breakdown,
        is_cancelled=total_students > 0 and len(records) == 0,
    )
