from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .analytics.dispatcher import CalculationDispatcher
from .analytics.service import AttendanceAnalyticsService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .cohorts.mysql_cohort_repository import MySQLCohortRepository
from .cohorts.repository import CohortRepository
from .core.constants import DEFAULT_DATA_SOURCE
from .database.connection import DBConfig, DatabaseConnection
from .database.memory_store import InMemoryRecordStore
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository
    cohorts_repo: CohortRepository
    holidays_repo: HolidayRepository

    analytics_service: AttendanceAnalyticsService
    dispatcher: CalculationDispatcher

    data_source: str = DEFAULT_DATA_SOURCE


def build_container(
    *,
    db_config: Optional[dict] = None,
    store: Optional[InMemoryRecordStore] = None,
    max_workers: int = 0,
    data_source: str = DEFAULT_DATA_SOURCE,
) -> Container:
    """Wire repositories, service and dispatcher.

    Passing ``store`` serves every relation from memory; otherwise ``db_config``
    is required and the MySQL repositories are used.
    """
    if store is not None:
        attendance_repo, cohorts_repo, holidays_repo = store, store, store
    else:
        if not db_config:
            raise ValueError("db_config is required when no in-memory store is given")
        config = DBConfig(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            connect_timeout=int(db_config.get("connect_timeout", 10)),
        )
        conn = DatabaseConnection.get_instance(config)
        attendance_repo = MySQLAttendanceRepository(conn)
        cohorts_repo = MySQLCohortRepository(conn)
        holidays_repo = MySQLHolidayRepository(conn)

    analytics_service = AttendanceAnalyticsService(
        attendance_repo,
        cohorts_repo,
        holidays_repo,
        max_workers=max_workers,
    )
    dispatcher = CalculationDispatcher(analytics_service, data_source=data_source)

    return Container(
        attendance_repo=attendance_repo,
        cohorts_repo=cohorts_repo,
        holidays_repo=holidays_repo,
        analytics_service=analytics_service,
        dispatcher=dispatcher,
        data_source=data_source,
    )
