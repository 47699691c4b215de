"""Record predicates and ordering shared by every calculator.

All calculators decide "attended" through :func:`counts_as_attended` so that
``attended = present + late + exempted`` holds everywhere.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..core.enums import AbsenceType, AttendanceStatus


def is_exempted(record: AttendanceRecord) -> bool:
    return record.status == AttendanceStatus.ABSENT and record.absence_type == AbsenceType.EXEMPTED


def counts_as_attended(record: AttendanceRecord) -> bool:
    """Present, late, or an exempted absence."""
    return record.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE) or is_exempted(record)


def is_regular_absence(record: AttendanceRecord) -> bool:
    return record.status == AttendanceStatus.ABSENT and not is_exempted(record)


def is_uninformed_absence(record: AttendanceRecord) -> bool:
    # An absence with no type recorded is unexplained, same as "uninformed".
    return record.status == AttendanceStatus.ABSENT and record.absence_type in (None, AbsenceType.UNINFORMED)


def is_informed_absence(record: AttendanceRecord) -> bool:
    return record.status == AttendanceStatus.ABSENT and record.absence_type == AbsenceType.INFORMED


def sort_by_session(records: Iterable[AttendanceRecord], *, descending: bool = False) -> list[AttendanceRecord]:
    """Order by (session date, session number); returns a new list."""
    return sorted(records, key=lambda r: r.session_key, reverse=descending)


def dedupe_records(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    """Collapse repeated marks for the same student and session.

    The most recently updated row wins; rows without ``updated_at`` lose to
    rows that have one, and among equals the later row wins.
    """
    kept: dict[tuple, AttendanceRecord] = {}
    for record in records:
        key = (record.cohort_id, record.epic_id, record.student_id, record.session_date, record.session_number)
        existing = kept.get(key)
        if existing is None or _updated(record) >= _updated(existing):
            kept[key] = record
    return list(kept.values())


def _updated(record: AttendanceRecord) -> datetime:
    return record.updated_at or datetime.min


def group_by_session(records: Iterable[AttendanceRecord]) -> dict[tuple[date, int], list[AttendanceRecord]]:
    groups: dict[tuple[date, int], list[AttendanceRecord]] = defaultdict(list)
    for record in records:
        groups[record.session_key].append(record)
    return dict(groups)


def group_by_student(records: Iterable[AttendanceRecord]) -> dict[str, list[AttendanceRecord]]:
    groups: dict[str, list[AttendanceRecord]] = defaultdict(list)
    for record in records:
        groups[record.student_id].append(record)
    return dict(groups)


def distinct_sessions(records: Sequence[AttendanceRecord]) -> int:
    return len({r.session_key for r in records})
