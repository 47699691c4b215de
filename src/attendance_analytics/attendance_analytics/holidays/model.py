from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import HolidayStatus, HolidayType


@dataclass(frozen=True)
class Holiday:
    """A non-instructional date, global or scoped to one cohort."""

    holiday_id: str
    holiday_date: date
    title: str
    holiday_type: HolidayType
    status: HolidayStatus
    cohort_id: Optional[str] = None
