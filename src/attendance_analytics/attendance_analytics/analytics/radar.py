"""Drop-out radar: students whose latest absences are all unexplained."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..cohorts.model import CohortMember
from ..core.constants import DROP_OUT_MIN_CONSECUTIVE, SEVERITY_CRITICAL_FROM, SEVERITY_HIGH_FROM
from ..core.enums import AttendanceStatus, Severity
from .predicates import is_uninformed_absence, sort_by_session
from .streaks import last_attended_date


@dataclass(frozen=True)
class DropOutCandidate:
    member: CohortMember
    consecutive_uninformed_absences: int
    last_attendance_date: Optional[date]
    total_absences: int
    total_sessions: int

    @property
    def severity(self) -> Severity:
        return classify_severity(self.consecutive_uninformed_absences)


def consecutive_uninformed_absences(records: Sequence[AttendanceRecord]) -> int:
    """Count back from the most recent session while absences stay uninformed.

    Informed and exempted absences stop the count just like attendance does.
    """
    count = 0
    for record in sort_by_session(records, descending=True):
        if not is_uninformed_absence(record):
            break
        count += 1
    return count


def classify_severity(consecutive: int) -> Severity:
    if consecutive >= SEVERITY_CRITICAL_FROM:
        return Severity.CRITICAL
    if consecutive >= SEVERITY_HIGH_FROM:
        return Severity.HIGH
    return Severity.MEDIUM


def evaluate_member(member: CohortMember, records: Sequence[AttendanceRecord]) -> Optional[DropOutCandidate]:
    consecutive = consecutive_uninformed_absences(records)
    if consecutive < DROP_OUT_MIN_CONSECUTIVE:
        return None
    return DropOutCandidate(
        member=member,
        consecutive_uninformed_absences=consecutive,
        last_attendance_date=last_attended_date(records),
        total_absences=sum(1 for r in records if r.status == AttendanceStatus.ABSENT),
        total_sessions=len(records),
    )


def rank_candidates(candidates: Sequence[Optional[DropOutCandidate]]) -> list[DropOutCandidate]:
    found = [c for c in candidates if c is not None]
    found.sort(key=lambda c: c.consecutive_uninformed_absences, reverse=True)
    return found
