"""Month grid of session summaries overlaid with holidays."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import iter_days, month_range
from ..holidays.model import Holiday
from .calculator.base import round_percentage
from .predicates import group_by_session
from .sessions import SessionSummary, summarize_session


@dataclass(frozen=True)
class CalendarDay:
    day: date
    sessions: list[SessionSummary]
    overall_attendance: float
    holidays: list[Holiday] = field(default_factory=list)

    @property
    def total_sessions(self) -> int:
        return len(self.sessions)

    @property
    def is_holiday(self) -> bool:
        return bool(self.holidays)

    def as_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "sessions": [s.as_dict() for s in self.sessions],
            "totalSessions": self.total_sessions,
            "overallAttendance": self.overall_attendance,
            "isHoliday": self.is_holiday,
            "holidays": [
                {
                    "id": h.holiday_id,
                    "date": h.holiday_date.isoformat(),
                    "title": h.title,
                    "holidayType": h.holiday_type.value,
                    "cohortId": h.cohort_id,
                }
                for h in self.holidays
            ],
        }


@dataclass(frozen=True)
class MonthlyStats:
    days_with_attendance: int
    total_sessions: int
    average_attendance: float


@dataclass(frozen=True)
class CalendarMonth:
    month: str
    days: list[CalendarDay]
    stats: MonthlyStats

    def as_dict(self) -> dict:
        return {
            "month": self.month,
            "days": [d.as_dict() for d in self.days],
            "monthlyStats": {
                "daysWithAttendance": self.stats.days_with_attendance,
                "totalSessions": self.stats.total_sessions,
                "averageAttendance": self.stats.average_attendance,
            },
        }


def build_calendar(
    *,
    year: int,
    month: int,
    records: Sequence[AttendanceRecord],
    holidays: Sequence[Holiday],
    total_students: int,
) -> CalendarMonth:
    start, end = month_range(year, month)

    sessions_by_day: dict[date, list[SessionSummary]] = {}
    for (session_date, session_number), session_records in sorted(group_by_session(records).items()):
        if not start <= session_date <= end:
            continue
        summary = summarize_session(
            session_date=session_date,
            session_number=session_number,
            records=session_records,
            total_students=total_students,
        )
        sessions_by_day.setdefault(session_date, []).append(summary)

    holidays_by_day: dict[date, list[Holiday]] = {}
    for holiday in holidays:
        holidays_by_day.setdefault(holiday.holiday_date, []).append(holiday)

    days = []
    for day in iter_days(start, end):
        sessions = sessions_by_day.get(day, [])
        days.append(
            CalendarDay(
                day=day,
                sessions=sessions,
                overall_attendance=_mean([s.attendance_percentage for s in sessions]),
                holidays=holidays_by_day.get(day, []),
            )
        )

    # Days without sessions count as 0 in the monthly average.
    stats = MonthlyStats(
        days_with_attendance=sum(1 for d in days if d.total_sessions > 0),
        total_sessions=sum(d.total_sessions for d in days),
        average_attendance=_mean([d.overall_attendance for d in days]),
    )
    return CalendarMonth(month=f"{year:04d}-{month:02d}", days=days, stats=stats)


def _mean(values: Sequence[float]) -> float:
    return round_percentage(sum(values) / len(values)) if values else 0.0
