from datetime import date

from tests.builders import holiday, record

from src.attendance_analytics.attendance_analytics.analytics.month_calendar import build_calendar


def test_month_covers_every_day_including_leap_day():
    leap = build_calendar(year=2024, month=2, records=[], holidays=[], total_students=0)
    common = build_calendar(year=2023, month=2, records=[], holidays=[], total_students=0)

    assert len(leap.days) == 29
    assert leap.days[-1].day == date(2024, 2, 29)
    assert len(common.days) == 28
    assert leap.month == "2024-02"


def test_average_counts_days_without_sessions_as_zero():
    records = [
        record("s1", "2025-04-10", "present"),
        record("s2", "2025-04-10", "late"),
    ]

    grid = build_calendar(year=2025, month=4, records=records, holidays=[], total_students=2)

    assert len(grid.days) == 30
    assert grid.stats.days_with_attendance == 1
    assert grid.stats.total_sessions == 1
    assert grid.stats.average_attendance == 3.33


def test_day_overall_is_mean_of_its_sessions():
    records = [
        record("s1", "2025-04-01", "present", number=1),
        record("s2", "2025-04-01", "present", number=1),
        record("s1", "2025-04-01", "present", number=2),
        record("s2", "2025-04-01", "absent", number=2),
    ]

    grid = build_calendar(year=2025, month=4, records=records, holidays=[], total_students=2)
    first = grid.days[0]

    assert first.total_sessions == 2
    assert [s.session_number for s in first.sessions] == [1, 2]
    assert [s.attendance_percentage for s in first.sessions] == [100.0, 50.0]
    assert first.overall_attendance == 75.0
    assert grid.days[1].overall_attendance == 0.0
    assert grid.days[1].sessions == []


def test_sessions_carry_roster_size_and_are_not_cancelled():
    records = [record("s1", "2025-04-03", "absent")]

    grid = build_calendar(year=2025, month=4, records=records, holidays=[], total_students=5)
    session = grid.days[2].sessions[0]

    assert session.total_students == 5
    assert session.is_cancelled is False
    assert session.breakdown.absent == 1


def test_holidays_are_flagged_on_matching_days():
    holidays = [
        holiday("h1", "2025-04-14", title="New Year"),
        holiday("h2", "2025-04-14", title="Cohort break", cohort_id="c1"),
        holiday("h3", "2025-04-20", title="Retreat", cohort_id="c1"),
    ]

    grid = build_calendar(year=2025, month=4, records=[], holidays=holidays, total_students=3)
    by_day = {d.day: d for d in grid.days}

    assert by_day[date(2025, 4, 14)].is_holiday is True
    assert [h.holiday_id for h in by_day[date(2025, 4, 14)].holidays] == ["h1", "h2"]
    assert by_day[date(2025, 4, 20)].is_holiday is True
    assert by_day[date(2025, 4, 15)].is_holiday is False


def test_payload_shape():
    records = [record("s1", "2025-04-02", "present")]
    grid = build_calendar(
        year=2025,
        month=4,
        records=records,
        holidays=[holiday("h1", "2025-04-02")],
        total_students=1,
    )

    payload = grid.as_dict()
    day = payload["days"][1]

    assert payload["month"] == "2025-04"
    assert payload["monthlyStats"] == {"daysWithAttendance": 1, "totalSessions": 1, "averageAttendance": 3.33}
    assert day["date"] == "2025-04-02"
    assert day["isHoliday"] is True
    assert day["holidays"][0]["holidayType"] == "global"
    assert day["sessions"][0]["attendancePercentage"] == 100.0


def test_last_month_of_the_calendar_does_not_overflow():
    grid = build_calendar(year=9999, month=12, records=[], holidays=[], total_students=0)

    assert len(grid.days) == 31
    assert grid.days[-1].day == date(9999, 12, 31)
