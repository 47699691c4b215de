from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from .predicates import counts_as_attended, is_exempted, sort_by_session


@dataclass(frozen=True)
class StreakMark:
    session_date: date
    session_number: int
    status: str


@dataclass(frozen=True)
class Streak:
    current: int
    longest: int
    last_attendance_date: Optional[date] = None
    history: list[StreakMark] = field(default_factory=list)


def current_streak(records: Sequence[AttendanceRecord]) -> int:
    """Attended sessions counted back from the most recent one."""
    streak = 0
    for record in sort_by_session(records, descending=True):
        if not counts_as_attended(record):
            break
        streak += 1
    return streak


def longest_streak(records: Sequence[AttendanceRecord]) -> int:
    longest = 0
    running = 0
    for record in sort_by_session(records):
        if counts_as_attended(record):
            running += 1
            longest = max(longest, running)
        else:
            running = 0
    return longest


def last_attended_date(records: Sequence[AttendanceRecord]) -> Optional[date]:
    """Date of the most recent attended session, None if never attended."""
    for record in sort_by_session(records, descending=True):
        if counts_as_attended(record):
            return record.session_date
    return None


def streak_history(records: Sequence[AttendanceRecord]) -> list[StreakMark]:
    return [
        StreakMark(
            session_date=r.session_date,
            session_number=r.session_number,
            status="exempted" if is_exempted(r) else r.status.value,
        )
        for r in sort_by_session(records, descending=True)
    ]


def build_streak(records: Sequence[AttendanceRecord]) -> Streak:
    return Streak(
        current=current_streak(records),
        longest=longest_streak(records),
        last_attendance_date=last_attended_date(records),
        history=streak_history(records),
    )
