from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_epic(
        self,
        *,
        cohort_id: str,
        epic_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records of an epic, optionally bounded by date (inclusive)."""

        raise NotImplementedError

    def list_for_session(
        self,
        *,
        cohort_id: str,
        epic_id: str,
        session_date: date,
        session_number: int,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
