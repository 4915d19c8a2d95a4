from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Any, Sequence

from ..codec import csv_codec
from ..common.results import ImportResult
from ..common.validators import blank_to_none, require_non_empty, require_weekdays
from ..core.constants import DEFAULT_SHIFT, DEFAULT_WEEKENDS, EMPLOYEE_ID_PREFIX
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from .model import PROFILE_FIELDS, Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_ID_SEQUENCE = re.compile(rf"^{EMPLOYEE_ID_PREFIX}(\d+)$")


class EmployeeService:
    """Use case: manage employees and their CSV import/export."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def next_employee_id(self) -> str:
        """EMP0001, EMP0002, ... following the highest numeric id in use."""
        highest = 0
        for employee_id in self._employees.list_ids():
            m = _ID_SEQUENCE.match(employee_id)
            if m:
                highest = max(highest, int(m.group(1)))
        return f"{EMPLOYEE_ID_PREFIX}{highest + 1:04d}"

    def _build(self, data: dict[str, Any], *, employee_id: str) -> Employee:
        weekends = data.get("weekends")
        return Employee(
            id=employee_id,
            name=require_non_empty(data.get("name"), "Employee name"),
            **{name: blank_to_none(data.get(name)) for name in PROFILE_FIELDS},
            shift=blank_to_none(data.get("shift")) or DEFAULT_SHIFT,
            weekends=require_weekdays(weekends) if weekends is not None else DEFAULT_WEEKENDS,
        )

    def add_employee(self, data: dict[str, Any]) -> Employee:
        employee_id = blank_to_none(data.get("id"))
        if employee_id and self._employees.get_by_id(employee_id):
            raise ValidationError(f"Employee id {employee_id} already exists")

        employee = self._build(data, employee_id=employee_id or self.next_employee_id())
        self._employees.insert(employee)
        logger.info("Added employee %s (%s)", employee.id, employee.name)
        return employee

    def update_employee(self, employee_id: str, data: dict[str, Any]) -> Employee:
        current = self.get_employee(employee_id)
        merged = {**current.to_row(), **data}
        employee = replace(self._build(merged, employee_id=current.id), created_at=current.created_at)
        self._employees.update(employee)
        return employee

    def delete_employee(self, employee_id: str) -> None:
        if not self._employees.delete_by_id(employee_id):
            raise NotFoundError(f"Employee {employee_id} not found")
        logger.info("Deleted employee %s and their attendance", employee_id)

    # CSV

    def import_csv(self, text: str) -> ImportResult:
        """Add each named row; a failing row is logged and skipped."""
        if not csv_codec.has_name_header(text):
            return ImportResult(success=False, count=0)

        rows = csv_codec.decode_employees(text)
        count = 0
        for row in rows:
            try:
                self.add_employee(row)
                count += 1
            except DomainError as e:
                logger.warning("Skipping employee row %r: %s", row.get("name"), e)
        return ImportResult(success=True, count=count)

    def export_csv(self) -> str:
        return csv_codec.encode_employees(self.list_employees())

    @staticmethod
    def csv_template() -> str:
        return csv_codec.EMPLOYEE_TEMPLATE
