"""Typed calculation requests.

Each recognised action maps to exactly one request type; anything else is
rejected here, before the record store is touched.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Callable, Mapping, Optional, Union

from ..common.datetime_utils import parse_month
from ..common.validators import (
    optional_date,
    optional_id,
    optional_int,
    require_date,
    require_date_order,
    require_id,
    require_int,
    require_param,
)
from ..core.constants import DEFAULT_LEADERBOARD_LIMIT, DEFAULT_LEADERBOARD_OFFSET
from ..core.enums import Action
from ..core.exceptions import UnknownActionError, ValidationError


@dataclass(frozen=True)
class SessionStatsRequest:
    cohort_id: str
    epic_id: str
    session_date: date
    session_number: int


@dataclass(frozen=True)
class EpicStatsRequest:
    cohort_id: str
    epic_id: str
    date_from: Optional[date] = None
    date_to: Optional[date] = None


@dataclass(frozen=True)
class CalendarDataRequest:
    cohort_id: str
    epic_id: str
    month: str


@dataclass(frozen=True)
class LeaderboardRequest:
    cohort_id: str
    epic_id: str
    limit: int = DEFAULT_LEADERBOARD_LIMIT
    offset: int = DEFAULT_LEADERBOARD_OFFSET


@dataclass(frozen=True)
class PublicLeaderboardRequest(LeaderboardRequest):
    pass


@dataclass(frozen=True)
class StudentStatsRequest:
    cohort_id: str
    student_id: str
    epic_id: str
    date_from: Optional[date] = None
    date_to: Optional[date] = None


@dataclass(frozen=True)
class StudentStreaksRequest:
    cohort_id: str
    epic_id: str
    student_id: Optional[str] = None


@dataclass(frozen=True)
class DropOutRadarRequest:
    cohort_id: str
    epic_id: str


CalculationRequest = Union[
    SessionStatsRequest,
    EpicStatsRequest,
    CalendarDataRequest,
    LeaderboardRequest,
    PublicLeaderboardRequest,
    StudentStatsRequest,
    StudentStreaksRequest,
    DropOutRadarRequest,
]


def request_filters(request: CalculationRequest) -> dict:
    """Validated parameters as JSON-friendly camelCase values."""
    out = {}
    for key, value in asdict(request).items():
        head, *rest = key.split("_")
        name = head + "".join(part.capitalize() for part in rest)
        out[name] = value.isoformat() if isinstance(value, date) else value
    return out


def _session_stats(params: Mapping[str, Any]) -> SessionStatsRequest:
    return SessionStatsRequest(
        cohort_id=require_id(params, "cohortId"),
        epic_id=require_id(params, "epicId"),
        session_date=require_date(params, "sessionDate"),
        session_number=require_int(params, "sessionNumber", minimum=1),
    )


def _epic_stats(params: Mapping[str, Any]) -> EpicStatsRequest:
    date_from = optional_date(params, "dateFrom")
    date_to = optional_date(params, "dateTo")
    require_date_order(date_from, date_to)
    return EpicStatsRequest(
        cohort_id=require_id(params, "cohortId"),
        epic_id=require_id(params, "epicId"),
        date_from=date_from,
        date_to=date_to,
    )


def _calendar_data(params: Mapping[str, Any]) -> CalendarDataRequest:
    month = str(require_param(params, "month")).strip()
    parse_month(month)
    return CalendarDataRequest(
        cohort_id=require_id(params, "cohortId"),
        epic_id=require_id(params, "epicId"),
        month=month,
    )


def _pagination(params: Mapping[str, Any]) -> dict:
    return {
        "cohort_id": require_id(params, "cohortId"),
        "epic_id": require_id(params, "epicId"),
        "limit": optional_int(params, "limit", default=DEFAULT_LEADERBOARD_LIMIT, minimum=1),
        "offset": optional_int(params, "offset", default=DEFAULT_LEADERBOARD_OFFSET, minimum=0),
    }


def _leaderboard(params: Mapping[str, Any]) -> LeaderboardRequest:
    return LeaderboardRequest(**_pagination(params))


def _public_leaderboard(params: Mapping[str, Any]) -> PublicLeaderboardRequest:
    return PublicLeaderboardRequest(**_pagination(params))


def _student_stats(params: Mapping[str, Any]) -> StudentStatsRequest:
    date_from = optional_date(params, "dateFrom")
    date_to = optional_date(params, "dateTo")
    require_date_order(date_from, date_to)
    return StudentStatsRequest(
        cohort_id=require_id(params, "cohortId"),
        student_id=require_id(params, "studentId"),
        epic_id=require_id(params, "epicId"),
        date_from=date_from,
        date_to=date_to,
    )


def _student_streaks(params: Mapping[str, Any]) -> StudentStreaksRequest:
    return StudentStreaksRequest(
        cohort_id=require_id(params, "cohortId"),
        epic_id=require_id(params, "epicId"),
        student_id=optional_id(params, "studentId"),
    )


def _drop_out_radar(params: Mapping[str, Any]) -> DropOutRadarRequest:
    return DropOutRadarRequest(
        cohort_id=require_id(params, "cohortId"),
        epic_id=require_id(params, "epicId"),
    )


_PARSERS: dict[Action, Callable[[Mapping[str, Any]], CalculationRequest]] = {
    Action.SESSION_STATS: _session_stats,
    Action.EPIC_STATS: _epic_stats,
    Action.CALENDAR_DATA: _calendar_data,
    Action.LEADERBOARD: _leaderboard,
    Action.STUDENT_STATS: _student_stats,
    Action.STUDENT_STREAKS: _student_streaks,
    Action.PUBLIC_LEADERBOARD: _public_leaderboard,
    Action.DROP_OUT_RADAR: _drop_out_radar,
}


def parse_action(value: Any) -> Action:
    try:
        return Action(value)
    except ValueError:
        raise UnknownActionError(f"Unknown action: {value}")


def parse_request(payload: Any) -> tuple[Action, CalculationRequest]:
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be an object with action and params")

    action_name = payload.get("action")
    params = payload.get("params")
    if not action_name or params is None:
        raise ValidationError("Missing required fields: action and params")
    if not isinstance(params, Mapping):
        raise ValidationError("params must be an object")

    action = parse_action(action_name)
    return action, _PARSERS[action](params)
