from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import MemberStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import CohortMember, Epic
from .repository import CohortRepository

_MEMBER_COLUMNS = "id, cohort_id, first_name, last_name, email, phone, dropped_out_status"


class MySQLCohortRepository(CohortRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_members(self, cohort_id: str) -> Sequence[CohortMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_MEMBER_COLUMNS}
                FROM cohort_students
                WHERE cohort_id=%s AND dropped_out_status=%s
                ORDER BY first_name ASC, last_name ASC, id ASC
                """,
                (cohort_id, MemberStatus.ACTIVE.value),
            )
            return [_to_member(r) for r in fetchall(cur)]

    def get_member(self, member_id: str) -> Optional[CohortMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_MEMBER_COLUMNS} FROM cohort_students WHERE id=%s",
                (member_id,),
            )
            r = fetchone(cur)
            return _to_member(r) if r else None

    def get_epic(self, epic_id: str) -> Optional[Epic]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, cohort_id, name FROM cohort_epics WHERE id=%s",
                (epic_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Epic(epic_id=str(r["id"]), cohort_id=str(r["cohort_id"]), name=r["name"])


def _to_member(r: dict) -> CohortMember:
    return CohortMember(
        member_id=str(r["id"]),
        cohort_id=str(r["cohort_id"]),
        first_name=r.get("first_name") or "",
        last_name=r.get("last_name") or "",
        email=r.get("email"),
        phone=r.get("phone"),
        dropped_out_status=MemberStatus(r["dropped_out_status"]),
    )
