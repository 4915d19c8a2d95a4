from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from attendance_tracker.attendance.calculator.standard_calculator import StandardHoursCalculator
from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.backup.model import Snapshot
from attendance_tracker.container import wire_services
from attendance_tracker.core.enums import PunctualitySource, Role
from attendance_tracker.core.exceptions import StoreError
from attendance_tracker.employees.model import Employee
from attendance_tracker.settings.model import SettingRow
from attendance_tracker.users.model import User

FIXED_NOW = datetime(2025, 3, 14, 10, 0, 0)  # a Friday


class InMemoryStore:
    def __init__(self):
        self.employees: dict[str, Employee] = {}
        self.attendance: dict[tuple[str, date], AttendanceRecord] = {}
        self.settings: dict[str, SettingRow] = {}
        self.next_attendance_id = 1

    def put_record(self, record: AttendanceRecord) -> AttendanceRecord:
        key = (record.employee_id, record.date)
        existing = self.attendance.get(key)
        record_id = existing.id if existing else self.next_attendance_id
        if not existing:
            self.next_attendance_id += 1
        stored = replace(record, id=record_id, employee_name=None, department=None)
        self.attendance[key] = stored
        return stored

    def joined(self, record: AttendanceRecord) -> AttendanceRecord:
        employee = self.employees.get(record.employee_id)
        return replace(
            record,
            employee_name=employee.name if employee else None,
            department=employee.department if employee else None,
        )


class FakeEmployeeRepo:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def list_all(self):
        return sorted(self._store.employees.values(), key=lambda e: e.name)

    def get_by_id(self, employee_id):
        return self._store.employees.get(employee_id)

    def list_ids(self):
        return list(self._store.employees)

    def insert(self, employee):
        if employee.id in self._store.employees:
            raise StoreError("duplicate key")
        self._store.employees[employee.id] = employee

    def update(self, employee):
        if employee.id not in self._store.employees:
            return False
        self._store.employees[employee.id] = employee
        return True

    def delete_by_id(self, employee_id):
        if self._store.employees.pop(employee_id, None) is None:
            return False
        for key in [k for k in self._store.attendance if k[0] == employee_id]:
            del self._store.attendance[key]
        return True


class FakeAttendanceRepo:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def list_range(self, start, end, employee_id=None):
        rows = [
            self._store.joined(r)
            for (emp_id, day), r in self._store.attendance.items()
            if start <= day <= end and (employee_id is None or emp_id == employee_id)
        ]
        return sorted(rows, key=lambda r: (r.date, r.employee_id))

    def get_for_employee_and_date(self, employee_id, day):
        r = self._store.attendance.get((employee_id, day))
        return self._store.joined(r) if r else None

    def upsert(self, record):
        self._store.put_record(record)

    def delete_by_id(self, record_id):
        for key, r in list(self._store.attendance.items()):
            if r.id == int(record_id):
                del self._store.attendance[key]
                return True
        return False

    def list_recent(self, limit):
        rows = sorted(self._store.attendance.values(), key=lambda r: r.id or 0, reverse=True)
        return [self._store.joined(r) for r in rows[:limit]]


class FakeSettingsRepo:
    def __init__(self, store: InMemoryStore):
        self._store = store
        self.fail = False

    def load_rows(self):
        if self.fail:
            raise StoreError("connection refused")
        return list(self._store.settings.values())

    def save(self, key, value):
        if self.fail:
            raise StoreError("connection refused")
        self._store.settings[key] = SettingRow(key=key, value=value)


class FakeReportRepo:
    """Behaves like a database without the summary procedure unless rows are given."""

    def __init__(self):
        self.rows: Optional[list[dict]] = None
        self.calls = 0

    def summary_counts(self, start, end):
        self.calls += 1
        if self.rows is None:
            raise StoreError("PROCEDURE get_attendance_summary does not exist")
        return self.rows


class FakeBackupRepo:
    def __init__(self, store: InMemoryStore):
        self._store = store
        self.fail_on_insert = False

    def dump(self):
        return Snapshot(
            employees=[e.to_row() for e in sorted(self._store.employees.values(), key=lambda e: e.id)],
            attendance=[r.to_row() for r in sorted(self._store.attendance.values(), key=lambda r: (r.date, r.employee_id))],
            settings=[s.to_row() for s in self._store.settings.values()],
        )

    def replace_all(self, snapshot):
        # Build the new state first and swap it in at the end, like a committed transaction.
        if self.fail_on_insert:
            raise StoreError("insert failed")
        employees = {row["id"]: Employee.from_row(row) for row in snapshot.employees}
        records = [AttendanceRecord.from_row(row) for row in snapshot.attendance]
        if any(r.employee_id not in employees for r in records):
            raise StoreError("foreign key constraint fails")

        self._store.employees = employees
        self._store.attendance = {}
        self._store.next_attendance_id = 1
        for record in records:
            self._store.put_record(record)
        self._store.settings = {row["key"]: SettingRow(key=row["key"], value=row["value"]) for row in snapshot.settings}

    def clear_all(self):
        self._store.employees.clear()
        self._store.attendance.clear()
        self._store.settings.clear()

    def replace_employees(self, employees, attendance):
        if self.fail_on_insert:
            raise StoreError("insert failed")
        ids = {e["id"] for e in employees}
        for key in [k for k in self._store.attendance if k[0] in ids]:
            del self._store.attendance[key]
        for row in employees:
            self._store.employees[row["id"]] = Employee.from_row(row)
        for row in attendance:
            self._store.put_record(AttendanceRecord.from_row(row))


class FakeUserRepo:
    def __init__(self):
        self._users: dict[int, User] = {}
        self._next_id = 1

    def add(self, *, full_name, username, password, role):
        return self.create_user(
            full_name=full_name, username=username, password_hash=generate_password_hash(password), role=role
        )

    def get_by_id(self, user_id):
        return self._users.get(int(user_id))

    def get_by_username(self, username):
        return next((u for u in self._users.values() if u.username == username), None)

    def list_all(self):
        return sorted(self._users.values(), key=lambda u: u.full_name)

    def create_user(self, *, full_name, username, password_hash, role):
        user_id = self._next_id
        self._next_id += 1
        self._users[user_id] = User(
            user_id=user_id, full_name=full_name, username=username, password_hash=password_hash, role=role
        )
        return user_id

    def update_password(self, user_id, password_hash):
        user = self._users.get(int(user_id))
        if not user:
            return False
        self._users[user.user_id] = replace(user, password_hash=password_hash)
        return True

    def update_role(self, user_id, role):
        user = self._users.get(int(user_id))
        if not user:
            return False
        self._users[user.user_id] = replace(user, role=role)
        return True

    def delete_by_id(self, user_id):
        return self._users.pop(int(user_id), None) is not None


def _employee(employee_id="EMP0001", name="John Smith", **kwargs) -> Employee:
    kwargs.setdefault("department", "IT")
    return Employee(id=employee_id, name=name, **kwargs)


def _record(employee_id="EMP0001", day=date(2025, 3, 3), present=True, time_in="09:00", time_out="17:00", **kwargs):
    record = AttendanceRecord(
        employee_id=employee_id,
        date=day,
        present=present,
        time_in=time_in if present else None,
        time_out=time_out if present else None,
        **kwargs,
    )
    return StandardHoursCalculator().apply(record)


@pytest.fixture
def make_employee():
    return _employee


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def report_repo():
    return FakeReportRepo()


@pytest.fixture
def settings_repo(store):
    return FakeSettingsRepo(store)


@pytest.fixture
def backup_repo(store):
    return FakeBackupRepo(store)


@pytest.fixture
def user_repo():
    repo = FakeUserRepo()
    repo.add(full_name="Administrator", username="admin", password="admin123", role=Role.ADMIN)
    repo.add(full_name="Vera Viewer", username="viewer", password="viewer123", role=Role.VIEWER)
    repo.add(full_name="Mona Manager", username="manager", password="manager123", role=Role.MANAGER)
    return repo


@pytest.fixture
def make_container(store, settings_repo, report_repo, backup_repo, user_repo):
    def _make(punctuality_source=PunctualitySource.FIXED):
        return wire_services(
            employees_repo=FakeEmployeeRepo(store),
            attendance_repo=FakeAttendanceRepo(store),
            settings_repo=settings_repo,
            reports_repo=report_repo,
            backups_repo=backup_repo,
            users_repo=user_repo,
            punctuality_source=punctuality_source,
            clock=lambda: FIXED_NOW,
        )

    return _make


@pytest.fixture
def container(make_container):
    return make_container()


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from attendance_tracker.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username="admin", password="admin123"):
        resp = client.post("/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
