from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from ..common.datetime_utils import utc_now_iso
from ..core.constants import DEFAULT_DATA_SOURCE
from ..core.exceptions import DomainError, NotFoundError, RecordStoreError, ValidationError
from .actions import (
    CalendarDataRequest,
    CalculationRequest,
    DropOutRadarRequest,
    EpicStatsRequest,
    LeaderboardRequest,
    PublicLeaderboardRequest,
    SessionStatsRequest,
    StudentStatsRequest,
    StudentStreaksRequest,
    parse_request,
    request_filters,
)
from .service import AttendanceAnalyticsService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationResponse:
    success: bool
    data: Optional[dict]
    error: Optional[str]
    metadata: dict = field(default_factory=dict)
    status_code: int = 200

    def as_dict(self) -> dict:
        return {
            "success": self.success,
            "data": self.data,
            "error": self.error,
            "metadata": self.metadata,
        }


def _status_for(exc: DomainError) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, RecordStoreError):
        return 503
    return 500


class CalculationDispatcher:
    """Routes ``{action, params}`` payloads to the analytics service.

    A request either succeeds with a complete payload or fails with
    ``data: None``; partial results are never returned.
    """

    def __init__(self, service: AttendanceAnalyticsService, *, data_source: str = DEFAULT_DATA_SOURCE):
        self._service = service
        self._data_source = data_source
        self._handlers: dict[type, Callable[[Any], dict]] = {
            SessionStatsRequest: self._session_stats,
            EpicStatsRequest: self._epic_stats,
            CalendarDataRequest: self._calendar_data,
            LeaderboardRequest: self._leaderboard,
            PublicLeaderboardRequest: self._public_leaderboard,
            StudentStatsRequest: self._student_stats,
            StudentStreaksRequest: self._student_streaks,
            DropOutRadarRequest: self._drop_out_radar,
        }

    def dispatch(self, payload: Any) -> CalculationResponse:
        action_name = payload.get("action") if isinstance(payload, Mapping) else None
        try:
            action, request = parse_request(payload)
            logger.info("attendance calculation %s", action.value)
            data = self._handle(request)
        except DomainError as exc:
            if isinstance(exc, RecordStoreError):
                logger.error("attendance calculation %s failed: %s", action_name, exc)
            else:
                logger.warning("attendance calculation %s rejected: %s", action_name, exc)
            return CalculationResponse(
                success=False,
                data=None,
                error=str(exc),
                metadata={
                    "calculationTime": utc_now_iso(),
                    "dataSource": self._data_source,
                    "action": action_name,
                    "error": True,
                },
                status_code=_status_for(exc),
            )

        return CalculationResponse(
            success=True,
            data=data,
            error=None,
            metadata={
                "calculationTime": utc_now_iso(),
                "dataSource": self._data_source,
                "action": action.value,
                "filters": request_filters(request),
            },
        )

    def _handle(self, request: CalculationRequest) -> dict:
        return self._handlers[type(request)](request)

    def _session_stats(self, r: SessionStatsRequest) -> dict:
        return self._service.session_stats(
            cohort_id=r.cohort_id,
            epic_id=r.epic_id,
            session_date=r.session_date,
            session_number=r.session_number,
        )

    def _epic_stats(self, r: EpicStatsRequest) -> dict:
        return self._service.epic_stats(
            cohort_id=r.cohort_id,
            epic_id=r.epic_id,
            date_from=r.date_from,
            date_to=r.date_to,
        )

    def _calendar_data(self, r: CalendarDataRequest) -> dict:
        return self._service.calendar_data(cohort_id=r.cohort_id, epic_id=r.epic_id, month=r.month)

    def _leaderboard(self, r: LeaderboardRequest) -> dict:
        return self._service.leaderboard(cohort_id=r.cohort_id, epic_id=r.epic_id, limit=r.limit, offset=r.offset)

    def _public_leaderboard(self, r: PublicLeaderboardRequest) -> dict:
        return self._service.public_leaderboard(
            cohort_id=r.cohort_id, epic_id=r.epic_id, limit=r.limit, offset=r.offset
        )

    def _student_stats(self, r: StudentStatsRequest) -> dict:
        return self._service.student_stats(
            cohort_id=r.cohort_id,
            student_id=r.student_id,
            epic_id=r.epic_id,
            date_from=r.date_from,
            date_to=r.date_to,
        )

    def _student_streaks(self, r: StudentStreaksRequest) -> dict:
        return self._service.student_streaks(cohort_id=r.cohort_id, epic_id=r.epic_id, student_id=r.student_id)

    def _drop_out_radar(self, r: DropOutRadarRequest) -> dict:
        return self._service.drop_out_radar(cohort_id=r.cohort_id, epic_id=r.epic_id)
