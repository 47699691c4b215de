from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def list_published(self, *, cohort_id: str, start_date: date, end_date: date) -> Sequence[Holiday]:
        """Published global holidays followed by the cohort's own, within [start, end]."""

        raise NotImplementedError
