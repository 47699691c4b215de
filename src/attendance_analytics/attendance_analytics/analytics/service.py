from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Callable, Optional, Sequence, TypeVar

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..cohorts.model import CohortMember, Epic
from ..cohorts.repository import CohortRepository
from ..common.datetime_utils import month_range, parse_month, today_local, utc_now_iso
from ..core.constants import NO_TOP_STREAK_NAMES, PERFECT_ATTENDANCE, POOR_ATTENDANCE_BELOW
from ..core.exceptions import NotFoundError
from ..holidays.repository import HolidayRepository
from .breakdown import absence_breakdown, classify_epic_status
from .calculator.base import round_half_up
from .calculator.cohort_calculator import CohortBreakdownCalculator
from .calculator.student_calculator import StudentBreakdownCalculator
from .leaderboard import LeaderboardEntry, StudentStanding, paginate, rank_of, rank_standings
from .month_calendar import build_calendar
from .predicates import dedupe_records, distinct_sessions, group_by_student
from .radar import evaluate_member, rank_candidates
from .sessions import summarize_session
from .streaks import Streak, build_streak, current_streak

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AttendanceAnalyticsService:
    """Stateless attendance calculations over the record store.

    Every call fetches its own snapshot; nothing is cached between calls.
    Per-student work fans out over a thread pool when ``max_workers > 1``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        cohorts: CohortRepository,
        holidays: HolidayRepository,
        *,
        max_workers: int = 0,
    ):
        self._attendance = attendance
        self._cohorts = cohorts
        self._holidays = holidays
        self._max_workers = int(max_workers or 0)
        self._student_calculator = StudentBreakdownCalculator()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def session_stats(self, *, cohort_id: str, epic_id: str, session_date: date, session_number: int) -> dict:
        records = dedupe_records(
            self._attendance.list_for_session(
                cohort_id=cohort_id,
                epic_id=epic_id,
                session_date=session_date,
                session_number=session_number,
            )
        )
        total_students = len(self._cohorts.list_active_members(cohort_id))
        logger.debug("session %s#%s: %d records, %d students", session_date, session_number, len(records), total_students)

        summary = summarize_session(
            session_date=session_date,
            session_number=session_number,
            records=records,
            total_students=total_students,
        )
        return summary.as_dict()

    def epic_stats(
        self,
        *,
        cohort_id: str,
        epic_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> dict:
        records = self._records(cohort_id=cohort_id, epic_id=epic_id, date_from=date_from, date_to=date_to)
        members = self._cohorts.list_active_members(cohort_id)
        total_students = len(members)

        breakdown = CohortBreakdownCalculator(total_students=total_students).calculate(records)
        standings = self._standings(members, records)
        status = classify_epic_status(breakdown.percentage)
        today = today_local()

        return {
            "totalStudents": total_students,
            "totalSessions": distinct_sessions(records),
            "attendanceBreakdown": {
                "present": breakdown.present,
                "late": breakdown.late,
                "absent": breakdown.absent,
                "exempted": breakdown.exempted,
                "attended": breakdown.attended,
                "total": breakdown.total,
                "attendancePercentage": breakdown.percentage,
            },
            "absenceBreakdown": absence_breakdown(records).as_dict(),
            "topStreakData": self._epic_top_streak(cohort_id=cohort_id, epic_id=epic_id, members=members),
            "epicStatus": {"text": status.text, "variant": status.variant},
            "studentsWithPerfectAttendance": sum(
                1 for s in standings if s.attendance_percentage == PERFECT_ATTENDANCE
            ),
            "studentsWithPoorAttendance": sum(
                1 for s in standings if s.attendance_percentage < POOR_ATTENDANCE_BELOW
            ),
            "dateRange": {
                "from": (date_from or today).isoformat(),
                "to": (date_to or today).isoformat(),
            },
        }

    def calendar_data(self, *, cohort_id: str, epic_id: str, month: str) -> dict:
        year, month_number = parse_month(month)
        start, end = month_range(year, month_number)

        records = self._records(cohort_id=cohort_id, epic_id=epic_id, date_from=start, date_to=end)
        holidays = self._holidays.list_published(cohort_id=cohort_id, start_date=start, end_date=end)
        total_students = len(self._cohorts.list_active_members(cohort_id))
        logger.debug("calendar %s: %d records, %d holidays", month, len(records), len(holidays))

        grid = build_calendar(
            year=year,
            month=month_number,
            records=records,
            holidays=holidays,
            total_students=total_students,
        )
        return grid.as_dict()

    def leaderboard(
        self,
        *,
        cohort_id: str,
        epic_id: str,
        limit: int,
        offset: int,
        public: bool = False,
    ) -> dict:
        epic = self._require_epic(epic_id)
        members = self._cohorts.list_active_members(cohort_id)
        records = self._records(cohort_id=cohort_id, epic_id=epic_id)

        ranked = rank_standings(self._standings(members, records))
        page = paginate(ranked, limit=limit, offset=offset)

        return {
            "entries": [_entry_dict(e, public=public) for e in page],
            "totalStudents": len(ranked),
            "epicInfo": _epic_dict(epic),
            "calculatedAt": utc_now_iso(),
        }

    def public_leaderboard(self, *, cohort_id: str, epic_id: str, limit: int, offset: int) -> dict:
        return self.leaderboard(cohort_id=cohort_id, epic_id=epic_id, limit=limit, offset=offset, public=True)

    def student_stats(
        self,
        *,
        cohort_id: str,
        student_id: str,
        epic_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> dict:
        member = self._require_member(student_id, cohort_id=cohort_id)
        epic = self._require_epic(epic_id)

        records = self._records(cohort_id=cohort_id, epic_id=epic_id, date_from=date_from, date_to=date_to)
        own = group_by_student(records).get(member.member_id, [])
        breakdown = self._student_calculator.calculate(own)
        streak = build_streak(own)

        ranked = rank_standings(self._standings(self._cohorts.list_active_members(cohort_id), records))

        return {
            "student": _student_dict(member),
            "attendancePercentage": breakdown.percentage,
            "currentStreak": streak.current,
            "longestStreak": streak.longest,
            "totalSessions": breakdown.total,
            "presentSessions": breakdown.present,
            "lateSessions": breakdown.late,
            "absentSessions": breakdown.absent,
            "exemptedSessions": breakdown.exempted,
            "attendedSessions": breakdown.attended,
            "rank": rank_of(ranked, member.member_id),
            "rankOutOf": len(ranked),
            "epicInfo": _epic_dict(epic),
        }

    def student_streaks(self, *, cohort_id: str, epic_id: str, student_id: Optional[str] = None) -> dict:
        records = self._records(cohort_id=cohort_id, epic_id=epic_id)
        by_student = group_by_student(records)
        members = self._cohorts.list_active_members(cohort_id)

        cohort_streaks = self._map_members(
            lambda m: (m, current_streak(by_student.get(m.member_id, []))),
            members,
        )

        if student_id:
            selected = [self._require_member(student_id, cohort_id=cohort_id)]
        else:
            selected = list(members)

        streaks = self._map_members(lambda m: (m, build_streak(by_student.get(m.member_id, []))), selected)
        average = sum(s.current for _, s in streaks) / len(streaks) if streaks else 0.0

        return {
            "streaks": [_streak_dict(m, s) for m, s in streaks],
            "topStreak": _top_streak(cohort_streaks),
            "averageStreak": round_half_up(average),
        }

    def drop_out_radar(self, *, cohort_id: str, epic_id: str) -> dict:
        epic = self._require_epic(epic_id)
        members = self._cohorts.list_active_members(cohort_id)
        by_student = group_by_student(self._records(cohort_id=cohort_id, epic_id=epic_id))

        candidates = rank_candidates(
            self._map_members(lambda m: evaluate_member(m, by_student.get(m.member_id, [])), members)
        )
        logger.debug("drop-out radar %s/%s: %d of %d flagged", cohort_id, epic_id, len(candidates), len(members))

        return {
            "candidates": [
                {
                    "student": _student_dict(c.member, contact=True),
                    "consecutiveUninformedAbsences": c.consecutive_uninformed_absences,
                    "severity": c.severity.value,
                    "lastAttendanceDate": _iso(c.last_attendance_date),
                    "totalAbsences": c.total_absences,
                    "totalSessions": c.total_sessions,
                }
                for c in candidates
            ],
            "totalCandidates": len(candidates),
            "epicInfo": _epic_dict(epic),
            "calculatedAt": utc_now_iso(),
        }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _records(
        self,
        *,
        cohort_id: str,
        epic_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[AttendanceRecord]:
        rows = self._attendance.list_for_epic(
            cohort_id=cohort_id,
            epic_id=epic_id,
            date_from=date_from,
            date_to=date_to,
        )
        records = dedupe_records(rows)
        if len(records) != len(rows):
            logger.debug("collapsed %d duplicate attendance rows", len(rows) - len(records))
        return records

    def _epic_top_streak(self, *, cohort_id: str, epic_id: str, members: Sequence[CohortMember]) -> dict:
        # Top streak spans the whole epic regardless of the requested date range.
        by_student = group_by_student(self._records(cohort_id=cohort_id, epic_id=epic_id))
        return _top_streak(
            self._map_members(lambda m: (m, current_streak(by_student.get(m.member_id, []))), members)
        )

    def _require_epic(self, epic_id: str) -> Epic:
        epic = self._cohorts.get_epic(epic_id)
        if not epic:
            raise NotFoundError(f"Epic {epic_id} not found")
        return epic

    def _require_member(self, member_id: str, *, cohort_id: str) -> CohortMember:
        member = self._cohorts.get_member(member_id)
        if not member or member.cohort_id != cohort_id:
            raise NotFoundError(f"Student {member_id} not found in cohort {cohort_id}")
        return member

    def _standings(
        self, members: Sequence[CohortMember], records: Sequence[AttendanceRecord]
    ) -> list[StudentStanding]:
        by_student = group_by_student(records)

        def standing(member: CohortMember) -> StudentStanding:
            own = by_student.get(member.member_id, [])
            breakdown = self._student_calculator.calculate(own)
            return StudentStanding(
                member=member,
                attendance_percentage=breakdown.percentage,
                current_streak=current_streak(own),
                total_sessions=breakdown.total,
                attended_sessions=breakdown.attended,
            )

        return self._map_members(standing, members)

    def _map_members(self, fn: Callable[[CohortMember], T], members: Sequence[CohortMember]) -> list[T]:
        if self._max_workers > 1 and len(members) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                return list(pool.map(fn, members))
        return [fn(m) for m in members]


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _epic_dict(epic: Epic) -> dict:
    return {"id": epic.epic_id, "name": epic.name}


def _student_dict(member: CohortMember, *, public: bool = False, contact: bool = False) -> dict:
    if public:
        initial = f"{member.last_name[:1]}." if member.last_name else ""
        return {"id": member.member_id, "firstName": member.first_name, "lastName": initial}

    out = {
        "id": member.member_id,
        "firstName": member.first_name,
        "lastName": member.last_name,
        "email": member.email,
    }
    if contact:
        out["phone"] = member.phone
    return out


def _entry_dict(entry: LeaderboardEntry, *, public: bool) -> dict:
    s = entry.standing
    return {
        "student": _student_dict(s.member, public=public),
        "attendancePercentage": s.attendance_percentage,
        "currentStreak": s.current_streak,
        "totalSessions": s.total_sessions,
        "presentSessions": s.attended_sessions,
        "rank": entry.rank,
        "badge": entry.badge,
    }


def _streak_dict(member: CohortMember, streak: Streak) -> dict:
    return {
        "student": {"id": member.member_id, "firstName": member.first_name, "lastName": member.last_name},
        "currentStreak": streak.current,
        "longestStreak": streak.longest,
        "lastAttendanceDate": _iso(streak.last_attendance_date),
        "streakHistory": [
            {"date": m.session_date.isoformat(), "sessionNumber": m.session_number, "status": m.status}
            for m in streak.history
        ],
    }


def _top_streak(pairs: Sequence[tuple[CohortMember, int]]) -> dict:
    if not pairs:
        return {"value": 0, "studentNames": list(NO_TOP_STREAK_NAMES)}
    top = max(value for _, value in pairs)
    names = [m.full_name for m, value in pairs if value == top] if top > 0 else []
    return {"value": top, "studentNames": names}
