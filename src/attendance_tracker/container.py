from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .attendance.calculator.standard_calculator import StandardHoursCalculator
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .backup.mysql_backup_repository import MySQLBackupRepository
from .backup.repository import BackupRepository
from .backup.service import BackupService
from .common.datetime_utils import now_local
from .core.enums import PunctualitySource
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .navigation import ViewRouter, build_view_router
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.reference.factory import ReferenceTimesFactory
from .reports.repository import ReportRepository
from .reports.service import ReportService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    settings_repo: SettingsRepository
    reports_repo: ReportRepository
    backups_repo: BackupRepository
    users_repo: UserRepository

    employee_service: EmployeeService
    attendance_service: AttendanceService
    settings_service: SettingsService
    report_service: ReportService
    backup_service: BackupService
    auth_service: AuthService
    user_service: UserService
    view_router: ViewRouter


def wire_services(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    settings_repo: SettingsRepository,
    reports_repo: ReportRepository,
    backups_repo: BackupRepository,
    users_repo: UserRepository,
    punctuality_source: PunctualitySource = PunctualitySource.FIXED,
    clock: Callable = now_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build every service on top of the given repositories (MySQL or in-memory)."""
    settings_service = SettingsService(settings_repo)
    employee_service = EmployeeService(employees_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        settings_service,
        calculator=StandardHoursCalculator(),
    )
    report_service = ReportService(
        attendance_repo,
        employees_repo,
        reports_repo,
        reference_factory=ReferenceTimesFactory(
            source=PunctualitySource(punctuality_source),
            load_settings=settings_service.get_settings,
        ),
    )
    backup_service = BackupService(backups_repo, clock=clock)
    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    view_router = build_view_router(
        employee_service=employee_service,
        attendance_service=attendance_service,
        settings_service=settings_service,
        report_service=report_service,
        today=lambda: clock().date(),
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        reports_repo=reports_repo,
        backups_repo=backups_repo,
        users_repo=users_repo,
        employee_service=employee_service,
        attendance_service=attendance_service,
        settings_service=settings_service,
        report_service=report_service,
        backup_service=backup_service,
        auth_service=auth_service,
        user_service=user_service,
        view_router=view_router,
    )


def build_container(*, db_config: dict, punctuality_source: str = PunctualitySource.FIXED.value) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_services(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        backups_repo=MySQLBackupRepository(conn),
        users_repo=MySQLUserRepository(conn),
        punctuality_source=PunctualitySource(punctuality_source),
        conn=conn,
    )
