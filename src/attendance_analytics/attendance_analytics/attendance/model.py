from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AbsenceType, AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's mark for one session."""

    cohort_id: str
    epic_id: str
    student_id: str
    session_date: date
    session_number: int
    status: AttendanceStatus
    absence_type: Optional[AbsenceType] = None
    updated_at: Optional[datetime] = None

    @property
    def session_key(self) -> tuple[date, int]:
        return self.session_date, self.session_number
