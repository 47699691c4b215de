from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import HolidayStatus, HolidayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import Holiday
from .repository import HolidayRepository

_COLUMNS = "id, date, title, holiday_type, status, cohort_id"


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_published(self, *, cohort_id: str, start_date: date, end_date: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM holidays
                WHERE holiday_type=%s AND status=%s AND date BETWEEN %s AND %s
                ORDER BY date ASC
                """,
                (HolidayType.GLOBAL.value, HolidayStatus.PUBLISHED.value, start_date, end_date),
            )
            global_rows = fetchall(cur)

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM holidays
                WHERE holiday_type=%s AND cohort_id=%s AND status=%s AND date BETWEEN %s AND %s
                ORDER BY date ASC
                """,
                (HolidayType.COHORT_SPECIFIC.value, cohort_id, HolidayStatus.PUBLISHED.value, start_date, end_date),
            )
            cohort_rows = fetchall(cur)

        return [_to_holiday(r) for r in [*global_rows, *cohort_rows]]


def _to_holiday(r: dict) -> Holiday:
    cohort_id = r.get("cohort_id")
    return Holiday(
        holiday_id=str(r["id"]),
        holiday_date=normalize_mysql_date(r["date"]),
        title=r.get("title") or "",
        holiday_type=HolidayType(r["holiday_type"]),
        status=HolidayStatus(r["status"]),
        cohort_id=str(cohort_id) if cohort_id is not None else None,
    )
