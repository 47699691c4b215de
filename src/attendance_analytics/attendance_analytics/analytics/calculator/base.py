from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...core.enums import AttendanceStatus
from ..breakdown import AttendanceBreakdown
from ..predicates import counts_as_attended, is_exempted, is_regular_absence


def round_half_up(value: float) -> float:
    """Round half up to 2 decimal places."""
    return math.floor(value * 100 + 0.5) / 100


def round_percentage(value: float) -> float:
    """Round half up to 2 decimal places, clamped to [0, 100]."""
    return min(max(round_half_up(value), 0.0), 100.0)


def attended_ratio(attended: int, total: int) -> float:
    return attended / total * 100 if total > 0 else 0.0


class BreakdownCalculator(ABC):
    """Calculator interface (Strategy Pattern for breakdown modes)."""

    @abstractmethod
    def calculate(self, records: Sequence[AttendanceRecord]) -> AttendanceBreakdown:
        raise NotImplementedError

    @staticmethod
    def _counts(records: Sequence[AttendanceRecord]) -> dict:
        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        late = sum(1 for r in records if r.status == AttendanceStatus.LATE)
        exempted = sum(1 for r in records if is_exempted(r))
        absent = sum(1 for r in records if is_regular_absence(r))
        attended = sum(1 for r in records if counts_as_attended(r))
        return {
            "present": present,
            "late": late,
            "absent": absent,
            "exempted": exempted,
            "attended": attended,
            "total": len(records),
        }
