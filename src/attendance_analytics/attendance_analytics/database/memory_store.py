from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..cohorts.model import CohortMember, Epic
from ..core.enums import HolidayStatus, HolidayType
from ..holidays.model import Holiday


@dataclass
class InMemoryRecordStore:
    """Record store held in process memory.

    Implements the attendance, cohort and holiday repositories at once; used by
    tests, the example script and the ``memory`` record-store setting.
    """

    records: list[AttendanceRecord] = field(default_factory=list)
    members: dict[str, CohortMember] = field(default_factory=dict)
    epics: dict[str, Epic] = field(default_factory=dict)
    holidays: list[Holiday] = field(default_factory=list)

    def add_records(self, records: Iterable[AttendanceRecord]) -> None:
        self.records.extend(records)

    def add_member(self, member: CohortMember) -> None:
        self.members[member.member_id] = member

    def add_epic(self, epic: Epic) -> None:
        self.epics[epic.epic_id] = epic

    def add_holiday(self, holiday: Holiday) -> None:
        self.holidays.append(holiday)

    # AttendanceRepository

    def list_for_epic(
        self,
        *,
        cohort_id: str,
        epic_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        items = [
            r
            for r in self.records
            if r.cohort_id == cohort_id
            and r.epic_id == epic_id
            and (date_from is None or r.session_date >= date_from)
            and (date_to is None or r.session_date <= date_to)
        ]
        items.sort(key=lambda r: r.session_key)
        return items

    def list_for_session(
        self,
        *,
        cohort_id: str,
        epic_id: str,
        session_date: date,
        session_number: int,
    ) -> Sequence[AttendanceRecord]:
        return [
            r
            for r in self.records
            if r.cohort_id == cohort_id
            and r.epic_id == epic_id
            and r.session_date == session_date
            and r.session_number == session_number
        ]

    # CohortRepository

    def list_active_members(self, cohort_id: str) -> Sequence[CohortMember]:
        return [m for m in self.members.values() if m.cohort_id == cohort_id and m.is_active]

    def get_member(self, member_id: str) -> Optional[CohortMember]:
        return self.members.get(member_id)

    def get_epic(self, epic_id: str) -> Optional[Epic]:
        return self.epics.get(epic_id)

    # HolidayRepository

    def list_published(self, *, cohort_id: str, start_date: date, end_date: date) -> Sequence[Holiday]:
        in_range = sorted(
            (
                h
                for h in self.holidays
                if h.status == HolidayStatus.PUBLISHED and start_date <= h.holiday_date <= end_date
            ),
            key=lambda h: h.holiday_date,
        )
        global_days = [h for h in in_range if h.holiday_type == HolidayType.GLOBAL]
        cohort_days = [
            h for h in in_range if h.holiday_type == HolidayType.COHORT_SPECIFIC and h.cohort_id == cohort_id
        ]
        return [*global_days, *cohort_days]
