from datetime import date

import pytest

from src.attendance_analytics.attendance_analytics.analytics.actions import (
    CalendarDataRequest,
    LeaderboardRequest,
    PublicLeaderboardRequest,
    SessionStatsRequest,
    StudentStreaksRequest,
    parse_request,
    request_filters,
)
from src.attendance_analytics.attendance_analytics.core.enums import Action
from src.attendance_analytics.attendance_analytics.core.exceptions import UnknownActionError, ValidationError


def test_session_stats_request_is_typed():
    action, req = parse_request(
        {
            "action": "getSessionStats",
            "params": {"cohortId": "c1", "epicId": "e1", "sessionDate": "2025-03-03", "sessionNumber": "2"},
        }
    )

    assert action == Action.SESSION_STATS
    assert req == SessionStatsRequest(cohort_id="c1", epic_id="e1", session_date=date(2025, 3, 3), session_number=2)


def test_session_number_must_be_positive():
    with pytest.raises(ValidationError):
        parse_request(
            {
                "action": "getSessionStats",
                "params": {"cohortId": "c1", "epicId": "e1", "sessionDate": "2025-03-03", "sessionNumber": 0},
            }
        )


def test_malformed_date_is_rejected():
    with pytest.raises(ValidationError, match="sessionDate"):
        parse_request(
            {
                "action": "getSessionStats",
                "params": {"cohortId": "c1", "epicId": "e1", "sessionDate": "03/03/2025", "sessionNumber": 1},
            }
        )


def test_date_range_must_be_ordered():
    with pytest.raises(ValidationError):
        parse_request(
            {
                "action": "getEpicStats",
                "params": {"cohortId": "c1", "epicId": "e1", "dateFrom": "2025-03-10", "dateTo": "2025-03-01"},
            }
        )


def test_leaderboard_defaults_and_public_variant():
    _, req = parse_request({"action": "getLeaderboard", "params": {"cohortId": "c1", "epicId": "e1"}})
    _, public = parse_request(
        {"action": "getPublicLeaderboard", "params": {"cohortId": "c1", "epicId": "e1", "limit": 5, "offset": 10}}
    )

    assert type(req) is LeaderboardRequest
    assert (req.limit, req.offset) == (50, 0)
    assert type(public) is PublicLeaderboardRequest
    assert (public.limit, public.offset) == (5, 10)


def test_negative_offset_is_rejected():
    with pytest.raises(ValidationError):
        parse_request({"action": "getLeaderboard", "params": {"cohortId": "c1", "epicId": "e1", "offset": -1}})


def test_month_must_be_year_and_month():
    _, req = parse_request({"action": "getCalendarData", "params": {"cohortId": "c1", "epicId": "e1", "month": "2024-02"}})

    assert req == CalendarDataRequest(cohort_id="c1", epic_id="e1", month="2024-02")
    for bad in ("2024-13", "2024-2", "February", "0000-01"):
        with pytest.raises(ValidationError):
            parse_request({"action": "getCalendarData", "params": {"cohortId": "c1", "epicId": "e1", "month": bad}})


def test_student_id_is_optional_for_streaks():
    _, req = parse_request({"action": "getStudentStreaks", "params": {"cohortId": "c1", "epicId": "e1", "studentId": ""}})

    assert req == StudentStreaksRequest(cohort_id="c1", epic_id="e1", student_id=None)


def test_unknown_action():
    with pytest.raises(UnknownActionError, match="getNothing"):
        parse_request({"action": "getNothing", "params": {}})


def test_params_must_be_an_object():
    with pytest.raises(ValidationError):
        parse_request({"action": "getLeaderboard", "params": ["c1"]})


def test_request_filters_use_camel_case():
    req = SessionStatsRequest(cohort_id="c1", epic_id="e1", session_date=date(2025, 3, 3), session_number=1)

    assert request_filters(req) == {
        "cohortId": "c1",
        "epicId": "e1",
        "sessionDate": "2025-03-03",
        "sessionNumber": 1,
    }


def test_limit_out_of_integer_range_is_rejected():
    with pytest.raises(ValidationError, match="limit"):
        parse_request({"action": "getLeaderboard", "params": {"cohortId": "c1", "epicId": "e1", "limit": float("inf")}})
