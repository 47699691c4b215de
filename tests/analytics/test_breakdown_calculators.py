from tests.builders import record

from src.attendance_analytics.attendance_analytics.analytics.breakdown import absence_breakdown, classify_epic_status
from src.attendance_analytics.attendance_analytics.analytics.calculator.base import round_half_up, round_percentage
from src.attendance_analytics.attendance_analytics.analytics.calculator.cohort_calculator import CohortBreakdownCalculator
from src.attendance_analytics.attendance_analytics.analytics.calculator.student_calculator import StudentBreakdownCalculator


def _mixed_records():
    return [
        record("s1", "2024-01-01", "present", number=1),
        record("s1", "2024-01-02", "absent", number=2, absence_type="exempted"),
        record("s1", "2024-01-03", "absent", number=3, absence_type="uninformed"),
        record("s1", "2024-01-04", "late", number=4),
    ]


def test_student_breakdown_counts_exempted_as_attended():
    b = StudentBreakdownCalculator().calculate(_mixed_records())

    assert (b.present, b.late, b.exempted, b.absent) == (1, 1, 1, 1)
    assert b.total == 4
    assert b.attended == 3
    assert b.percentage == 75.0


def test_student_breakdown_empty_is_zero():
    b = StudentBreakdownCalculator().calculate([])

    assert (b.present, b.late, b.exempted, b.absent, b.attended, b.total) == (0, 0, 0, 0, 0, 0)
    assert b.percentage == 0.0


def test_student_breakdown_rounds_to_two_decimals():
    one_of_three = [
        record("s1", "2024-01-01", "present"),
        record("s1", "2024-01-02", "absent"),
        record("s1", "2024-01-03", "absent", absence_type="informed"),
    ]
    two_of_three = [
        record("s1", "2024-01-01", "present"),
        record("s1", "2024-01-02", "late"),
        record("s1", "2024-01-03", "absent"),
    ]

    assert StudentBreakdownCalculator().calculate(one_of_three).percentage == 33.33
    assert StudentBreakdownCalculator().calculate(two_of_three).percentage == 66.67


def test_student_breakdown_invariants_hold_for_any_mix():
    statuses = [
        ("present", None),
        ("late", None),
        ("absent", None),
        ("absent", "uninformed"),
        ("absent", "informed"),
        ("absent", "exempted"),
    ]
    for size in range(len(statuses) + 1):
        records = [
            record("s1", f"2024-02-{i + 1:02d}", status, absence_type=kind)
            for i, (status, kind) in enumerate(statuses[:size])
        ]
        b = StudentBreakdownCalculator().calculate(records)

        assert b.attended == b.present + b.late + b.exempted
        assert b.total == b.present + b.late + b.absent + b.exempted
        assert 0.0 <= b.percentage <= 100.0


def test_cohort_breakdown_is_mean_of_session_percentages():
    records = [
        # Session 1: 3 of 4 attended -> 75%
        record("s1", "2024-03-01", "present"),
        record("s2", "2024-03-01", "present"),
        record("s3", "2024-03-01", "late"),
        record("s4", "2024-03-01", "absent"),
        # Session 2: only one row, attended -> 100%
        record("s1", "2024-03-02", "present"),
    ]

    b = CohortBreakdownCalculator(total_students=4).calculate(records)

    # Ratio of totals would give 4 / 5 = 80%.
    assert b.percentage == 87.5
    assert b.total == 5
    assert b.attended == 4
    assert b.session_count == 2
    assert b.total_students == 4


def test_cohort_breakdown_separates_sessions_on_same_day():
    records = [
        record("s1", "2024-03-01", "present", number=1),
        record("s2", "2024-03-01", "present", number=1),
        record("s1", "2024-03-01", "absent", number=2),
        record("s2", "2024-03-01", "present", number=2),
    ]

    calc = CohortBreakdownCalculator(total_students=2)

    assert calc.session_percentages(records) == [100.0, 50.0]
    assert calc.calculate(records).percentage == 75.0


def test_cohort_breakdown_with_no_records_is_zero():
    b = CohortBreakdownCalculator(total_students=0).calculate([])

    assert b.percentage == 0.0
    assert b.session_count == 0
    assert b.total == 0


def test_round_percentage_rounds_half_up_and_clamps():
    assert round_percentage(0.125) == 0.13
    assert round_percentage(100 / 30) == 3.33
    assert round_percentage(100.0) == 100.0
    assert round_percentage(-0.001) == 0.0


def test_round_half_up_does_not_clamp():
    assert round_half_up(1.125) == 1.13
    assert round_half_up(150.0) == 150.0


def test_absence_breakdown_excludes_exempted_from_total():
    records = _mixed_records() + [
        record("s1", "2024-01-05", "absent"),
        record("s1", "2024-01-06", "absent", absence_type="informed"),
    ]

    b = absence_breakdown(records)

    assert b.uninformed == 2
    assert b.informed == 1
    assert b.exempted == 1
    assert b.total == 3


def test_epic_status_bands():
    assert classify_epic_status(95).text == "Excellent"
    assert classify_epic_status(90).variant == "success"
    assert classify_epic_status(75).text == "Good"
    assert classify_epic_status(60).text == "Fair"
    assert classify_epic_status(59.99).text == "Needs Attention"
    assert classify_epic_status(0).variant == "error"
