from __future__ import annotations

from typing import Sequence

from ...attendance.model import AttendanceRecord
from ..breakdown import AttendanceBreakdown
from .base import BreakdownCalculator, attended_ratio, round_percentage


class StudentBreakdownCalculator(BreakdownCalculator):
    """Per-student rule: attended / number of the student's records."""

    def calculate(self, records: Sequence[AttendanceRecord]) -> AttendanceBreakdown:
        counts = self._counts(records)
        percentage = attended_ratio(counts["attended"], counts["total"])
        return AttendanceBreakdown(**counts, percentage=round_percentage(percentage))
