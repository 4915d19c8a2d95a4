from datetime import date

import pytest

from attendance_tracker.core.enums import PunctualitySource
from attendance_tracker.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def seeded(store, make_employee, make_record):
    store.employees["EMP0001"] = make_employee("EMP0001", "John Smith", department="IT")
    store.employees["EMP0002"] = make_employee("EMP0002", "Sarah Johnson", department="HR")
    store.employees["EMP0003"] = make_employee("EMP0003", "Idle Person", department="HR")
    for record in [
        make_record("EMP0001", day=date(2025, 3, 3), time_in="09:00", time_out="18:00"),
        make_record("EMP0001", day=date(2025, 3, 4), time_in="09:20", time_out="17:00"),
        make_record("EMP0001", day=date(2025, 3, 14), time_in="09:00", time_out="17:00"),
        make_record("EMP0002", day=date(2025, 3, 3), time_in="08:55", time_out="17:05"),
        make_record("EMP0002", day=date(2025, 3, 4), present=False),
        make_record("EMP0002", day=date(2025, 3, 14), present=False),
    ]:
        store.put_record(record)
    return store


def test_summary_falls_back_when_the_procedure_is_missing(container, report_repo, seeded):
    summaries = container.report_service.attendance_summary(2025, 3)

    assert report_repo.calls == 1
    assert [s.employee_id for s in summaries] == ["EMP0001", "EMP0002"]
    john, sarah = summaries
    assert john.present_days == 3
    assert john.late_days == 1
    assert john.overtime_hours == 1.0
    assert sarah.attendance_percentage == pytest.approx(100 / 3)


def test_summary_uses_procedure_rows_when_available(container, report_repo, seeded):
    report_repo.rows = [
        {
            "employee_id": "EMP0009",
            "employee_name": "From Procedure",
            "department": "Ops",
            "shift": "night",
            "present_days": 2,
            "absent_days": 0,
            "total_hours": 16.0,
            "overtime_hours": 0.0,
            "on_time_days": 1,
            "late_days": 1,
            "late_minutes": 10,
            "early_departures": 0,
        }
    ]

    [summary] = container.report_service.attendance_summary(2025, 3)

    assert summary.employee_name == "From Procedure"
    assert summary.punctuality_percentage == 50.0
    assert summary.avg_lateness_minutes == 10.0


def test_settings_policy_skips_the_procedure(make_container, report_repo, seeded):
    container = make_container(PunctualitySource.SETTINGS)
    container.settings_service.save_shift("morning", "09:30", "17:00")

    summaries = container.report_service.attendance_summary(2025, 3)

    assert report_repo.calls == 0
    john = next(s for s in summaries if s.employee_id == "EMP0001")
    assert john.late_days == 0


def test_summary_for_range_rejects_reversed_dates(container):
    with pytest.raises(ValidationError):
        container.report_service.summary_for_range(date(2025, 3, 31), date(2025, 3, 1))


def test_employee_analytics_unknown_employee(container):
    with pytest.raises(NotFoundError):
        container.report_service.employee_analytics("EMP9999", date(2025, 3, 1), date(2025, 3, 31))


def test_dashboard(container, seeded):
    stats = container.report_service.dashboard(date(2025, 3, 14))

    assert stats.total_employees == 3
    assert stats.departments == 2
    assert stats.present_today == 1
    assert stats.absent_today == 1
    assert stats.attendance_percentage == pytest.approx(400 / 6)
    assert stats.top_performer["employee_id"] == "EMP0002"
    assert [n["employee_id"] for n in stats.needs_attention] == ["EMP0002"]
    assert len(stats.recent_activity) == 6
    assert stats.to_dict()["attendance_percentage"] == 66.67


def test_summary_workbook_is_an_xlsx_file(container, seeded):
    data = container.report_service.summary_workbook(2025, 3)

    assert data[:2] == b"PK"


def test_dashboard_ignores_employees_without_a_department(container, seeded, make_employee):
    seeded.employees["EMP0004"] = make_employee("EMP0004", "New Hire", department=None)

    stats = container.report_service.dashboard(date(2025, 3, 14))

    assert stats.total_employees == 4
    assert stats.departments == 2
