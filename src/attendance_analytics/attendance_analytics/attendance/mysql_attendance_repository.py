from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AbsenceType, AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "cohort_id, epic_id, student_id, session_date, session_number, status, absence_type, updated_at"


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_epic(
        self,
        *,
        cohort_id: str,
        epic_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["cohort_id=%s", "epic_id=%s"]
        params: list[object] = [cohort_id, epic_id]

        if date_from is not None:
            clauses.append("session_date >= %s")
            params.append(date_from)
        if date_to is not None:
            clauses.append("session_date <= %s")
            params.append(date_to)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY session_date ASC, session_number ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_session(
        self,
        *,
        cohort_id: str,
        epic_id: str,
        session_date: date,
        session_number: int,
    ) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE cohort_id=%s AND epic_id=%s AND session_date=%s AND session_number=%s
                """,
                (cohort_id, epic_id, session_date, int(session_number)),
            )
            return [_to_record(r) for r in fetchall(cur)]


def _to_record(r: dict) -> AttendanceRecord:
    absence_type = r.get("absence_type")
    return AttendanceRecord(
        cohort_id=str(r["cohort_id"]),
        epic_id=str(r["epic_id"]),
        student_id=str(r["student_id"]),
        session_date=normalize_mysql_date(r["session_date"]),
        session_number=int(r["session_number"]),
        status=AttendanceStatus(r["status"]),
        absence_type=AbsenceType(absence_type) if absence_type else None,
        updated_at=r.get("updated_at"),
    )
