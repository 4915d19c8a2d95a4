from __future__ import annotations

from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import PROFILE_FIELDS, Employee
from .repository import EmployeeRepository

_COLUMNS = ("id", "name", *PROFILE_FIELDS, "shift", "weekends", "created_at", "updated_at")
_SELECT = f"SELECT {', '.join(_COLUMNS)} FROM employees"


def _to_employee(r: dict[str, Any]) -> Employee:
    return Employee.from_row({**r, "weekends": load_json(r.get("weekends"))})


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY name")
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE id=%s", (employee_id,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_ids(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM employees")
            return [str(r["id"]) for r in fetchall(cur)]

    def insert(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(id, name, department, father_name, dob, cnic, address,
                                      phone1, phone2, education, shift, weekends)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee.id,
                    employee.name,
                    *(getattr(employee, name) for name in PROFILE_FIELDS),
                    employee.shift,
                    dump_json(list(employee.weekends)),
                ),
            )

    def update(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, department=%s, father_name=%s, dob=%s, cnic=%s, address=%s,
                    phone1=%s, phone2=%s, education=%s, shift=%s, weekends=%s
                WHERE id=%s
                """,
                (
                    employee.name,
                    *(getattr(employee, name) for name in PROFILE_FIELDS),
                    employee.shift,
                    dump_json(list(employee.weekends)),
                    employee.id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (employee_id,))
            return cur.rowcount > 0
