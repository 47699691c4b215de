from __future__ import annotations

from typing import Sequence

from ...attendance.model import AttendanceRecord
from ..breakdown import CohortBreakdown
from ..predicates import counts_as_attended, group_by_session
from .base import BreakdownCalculator, attended_ratio, round_percentage


class CohortBreakdownCalculator(BreakdownCalculator):
    """Per-cohort rule: mean of per-session percentages.

    Every session weighs the same no matter how many rows it has, so this is
    not total attended / total possible. ``total`` stays the raw record count.
    """

    def __init__(self, *, total_students: int = 0):
        self._total_students = int(total_students)

    def session_percentages(self, records: Sequence[AttendanceRecord]) -> list[float]:
        percentages = []
        for _, session_records in sorted(group_by_session(records).items()):
            attended = sum(1 for r in session_records if counts_as_attended(r))
            percentages.append(attended_ratio(attended, len(session_records)))
        return percentages

    def calculate(self, records: Sequence[AttendanceRecord]) -> CohortBreakdown:
        counts = self._counts(records)
        percentages = self.session_percentages(records)
        mean = sum(percentages) / len(percentages) if percentages else 0.0
        return CohortBreakdown(
            **counts,
            percentage=round_percentage(mean),
            total_students=self._total_students,
            session_count=len(percentages),
        )
