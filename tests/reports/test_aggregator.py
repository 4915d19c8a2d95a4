from datetime import date, timedelta

from attendance_tracker.reports import aggregator
from attendance_tracker.reports.reference.configured import ConfiguredReferenceTimes
from attendance_tracker.reports.reference.fixed import FixedReferenceTimes
from attendance_tracker.settings.model import ShiftTimes

MARCH_START = date(2025, 3, 1)
MARCH_END = date(2025, 3, 31)


def _days(n, start=MARCH_START):
    return [start + timedelta(days=i) for i in range(n)]


def test_attendance_percentage_from_present_and_absent_days(make_record):
    days = _days(25)
    records = [make_record(day=d) for d in days[:22]] + [make_record(day=d, present=False) for d in days[22:]]

    [summary] = aggregator.summarize(records, MARCH_START, MARCH_END, FixedReferenceTimes())

    assert summary.present_days == 22
    assert summary.absent_days == 3
    assert summary.attendance_percentage == 88.0
    assert summary.total_hours == 176.0
    assert summary.avg_hours_per_day == 8.0
    assert summary.hours_efficiency == 100.0
    assert summary.punctuality_percentage == 100.0


def test_summarize_is_idempotent(make_record):
    records = [
        make_record(day=date(2025, 3, 3), time_in="09:10", time_out="18:00"),
        make_record("EMP0002", day=date(2025, 3, 3), shift="night", time_in="21:00", time_out="05:00"),
        make_record(day=date(2025, 3, 4), present=False),
    ]

    first = aggregator.summarize(records, MARCH_START, MARCH_END, FixedReferenceTimes())
    second = aggregator.summarize(records, MARCH_START, MARCH_END, FixedReferenceTimes())

    assert first == second


def test_records_outside_the_range_are_ignored(make_record):
    records = [make_record(day=date(2025, 2, 28)), make_record(day=date(2025, 3, 3)), make_record(day=date(2025, 4, 1))]

    [summary] = aggregator.summarize(records, MARCH_START, MARCH_END, FixedReferenceTimes())

    assert summary.present_days == 1


def test_no_present_days_means_full_punctuality_and_zero_efficiency(make_record):
    records = [make_record(day=d, present=False) for d in _days(3)]

    [summary] = aggregator.summarize(records, MARCH_START, MARCH_END, FixedReferenceTimes())

    assert summary.punctuality_percentage == 100.0
    assert summary.hours_efficiency == 0.0
    assert summary.attendance_percentage == 0.0
    assert summary.performance_score == 50.0
    assert summary.avg_hours_per_day == 0.0


def test_late_arrivals_and_early_departures(make_record):
    records = [
        make_record(day=date(2025, 3, 3), time_in="09:00", time_out="17:00"),
        make_record(day=date(2025, 3, 4), time_in="09:10", time_out="17:00"),
        make_record(day=date(2025, 3, 5), time_in="09:30", time_out="16:00"),
        make_record(day=date(2025, 3, 6), time_in="08:45", time_out="16:59"),
    ]

    [summary] = aggregator.summarize(records, MARCH_START, MARCH_END, FixedReferenceTimes())

    assert summary.on_time_days == 2
    assert summary.late_days == 2
    assert summary.avg_lateness_minutes == 20.0
    assert summary.early_departures == 2
    assert summary.punctuality_percentage == 50.0


def test_night_shift_uses_night_reference_times(make_record):
    records = [
        make_record(day=date(2025, 3, 3), shift="night", time_in="21:00", time_out="05:00"),
        make_record(day=date(2025, 3, 4), shift="night", time_in="21:45", time_out="04:30"),
    ]

    [summary] = aggregator.summarize(records, MARCH_START, MARCH_END, FixedReferenceTimes())

    assert summary.on_time_days == 1
    assert summary.late_days == 1
    assert summary.avg_lateness_minutes == 45.0
    assert summary.early_departures == 1


def test_punctuality_compares_clock_strings(make_record):
    # A night worker arriving after midnight still compares as earlier than 21:00.
    record = make_record(day=date(2025, 3, 3), shift="night", time_in="00:30", time_out="08:30")

    [summary] = aggregator.summarize([record], MARCH_START, MARCH_END, FixedReferenceTimes())

    assert summary.on_time_days == 1
    assert summary.late_days == 0


def test_configured_policy_reads_shift_settings(make_record):
    records = [make_record(day=date(2025, 3, 3), time_in="08:30", time_out="17:00")]
    policy = ConfiguredReferenceTimes({"morning": ShiftTimes("08:00", "16:00"), "night": ShiftTimes("21:00", "05:00")})

    [fixed] = aggregator.summarize(records, MARCH_START, MARCH_END, FixedReferenceTimes())
    [configured] = aggregator.summarize(records, MARCH_START, MARCH_END, policy)

    assert fixed.late_days == 0
    assert configured.late_days == 1
    assert configured.avg_lateness_minutes == 30.0


def test_configured_policy_falls_back_for_unknown_shift():
    policy = ConfiguredReferenceTimes({"morning": ShiftTimes("08:00", "16:00")})

    assert policy.for_shift("evening").start == "21:00"


def test_summaries_are_ordered_by_name(make_record, make_employee):
    records = [make_record("EMP0001", day=date(2025, 3, 3)), make_record("EMP0002", day=date(2025, 3, 3))]
    employees = {
        "EMP0001": make_employee("EMP0001", "Zara Khan"),
        "EMP0002": make_employee("EMP0002", "Adam Lee"),
    }

    summaries = aggregator.summarize(records, MARCH_START, MARCH_END, FixedReferenceTimes(), employees)

    assert [s.employee_name for s in summaries] == ["Adam Lee", "Zara Khan"]


def test_summary_from_counts_derives_ratios():
    summary = aggregator.summary_from_counts(
        employee_id="EMP0001",
        employee_name="John Smith",
        department="IT",
        shift="morning",
        present_days=4,
        absent_days=1,
        total_hours=30.0,
        overtime_hours=2.0,
        on_time_days=3,
        late_days=1,
        late_minutes=12,
        early_departures=0,
    )

    assert summary.attendance_percentage == 80.0
    assert summary.punctuality_percentage == 75.0
    assert summary.hours_efficiency == 93.75
    assert summary.performance_score == 84.375
    assert summary.avg_lateness_minutes == 12.0
    assert summary.to_dict()["performance_score"] == 84.38


def test_employee_analytics_weekly_and_monthly(make_record, make_employee):
    employee = make_employee("EMP0001", "John Smith")
    records = [
        make_record(day=date(2025, 3, 3), time_in="09:00", time_out="19:00"),
        make_record(day=date(2025, 3, 4), present=False),
        make_record(day=date(2025, 3, 10), time_in="09:15", time_out="17:00"),
        make_record(day=date(2025, 4, 1), time_in="09:00", time_out="17:00"),
        make_record("EMP0002", day=date(2025, 3, 3)),
    ]

    analytics = aggregator.employee_analytics(records, employee, MARCH_START, date(2025, 4, 30), FixedReferenceTimes())

    assert analytics.total_days == 4
    assert analytics.present_days == 3
    assert analytics.absent_days == 1
    assert analytics.total_hours == 23.75
    assert analytics.overtime_hours == 2.0
    assert analytics.attendance_percentage == 75.0
    assert analytics.late_days == 1
    assert analytics.avg_lateness_minutes == 15.0
    assert [w.period for w in analytics.weekly_stats] == ["2025-W10", "2025-W11", "2025-W14"]
    assert analytics.weekly_stats[0].absent_days == 1
    assert [(m.period, m.present_days) for m in analytics.monthly_stats] == [("2025-03", 2), ("2025-04", 1)]


def test_employee_analytics_without_records(make_employee):
    analytics = aggregator.employee_analytics([], make_employee(), MARCH_START, MARCH_END, FixedReferenceTimes())

    assert analytics.total_days == 0
    assert analytics.attendance_percentage == 0.0
    assert analytics.punctuality_score == 100.0
    assert analytics.weekly_stats == ()
