from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"
    VIEWER = "viewer"


class Permission(str, Enum):
    VIEW_DASHBOARD = "viewDashboard"
    VIEW_SYSTEM_STATUS = "viewSystemStatus"

    VIEW_EMPLOYEES = "viewEmployees"
    ADD_EMPLOYEES = "addEmployees"
    EDIT_EMPLOYEES = "editEmployees"
    DELETE_EMPLOYEES = "deleteEmployees"
    VIEW_EMPLOYEE_DETAILS = "viewEmployeeDetails"
    EXPORT_EMPLOYEE_DATA = "exportEmployeeData"
    IMPORT_EMPLOYEE_DATA = "importEmployeeData"

    VIEW_ATTENDANCE = "viewAttendance"
    MARK_ATTENDANCE = "markAttendance"
    EDIT_ATTENDANCE = "editAttendance"
    DELETE_ATTENDANCE = "deleteAttendance"
    VIEW_ATTENDANCE_CALENDAR = "viewAttendanceCalendar"
    EXPORT_ATTENDANCE_DATA = "exportAttendanceData"
    IMPORT_ATTENDANCE_DATA = "importAttendanceData"

    VIEW_REPORTS = "viewReports"
    VIEW_ATTENDANCE_SUMMARY = "viewAttendanceSummary"
    VIEW_PUNCTUALITY_REPORTS = "viewPunctualityReports"
    VIEW_EMPLOYEE_ANALYTICS = "viewEmployeeAnalytics"
    EXPORT_REPORTS = "exportReports"
    PRINT_REPORTS = "printReports"

    VIEW_SETTINGS = "viewSettings"
    EDIT_WEEKEND_SETTINGS = "editWeekendSettings"
    EDIT_HOLIDAY_SETTINGS = "editHolidaySettings"
    EDIT_SHIFT_SETTINGS = "editShiftSettings"
    VIEW_DATABASE_SETTINGS = "viewDatabaseSettings"
    EXPORT_DATABASE = "exportDatabase"
    IMPORT_DATABASE = "importDatabase"
    CLEAR_DATABASE = "clearDatabase"
    GENERATE_SAMPLE_DATA = "generateSampleData"

    VIEW_USER_SETTINGS = "viewUserSettings"
    EDIT_USER_PROFILE = "editUserProfile"
    CHANGE_PASSWORD = "changePassword"
    VIEW_USER_MANAGEMENT = "viewUserManagement"
    MANAGE_USERS = "manageUsers"
    ASSIGN_ROLES = "assignRoles"


class PunctualitySource(str, Enum):
    """Where punctuality reference times come from."""

    FIXED = "fixed"
    SETTINGS = "settings"


class DayStatus(str, Enum):
    """Per-day status shown on the attendance calendar."""

    PRESENT = "present"
    ABSENT = "absent"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"
    UNMARKED = "unmarked"


class View(str, Enum):
    DASHBOARD = "dashboard"
    EMPLOYEES = "employees"
    ATTENDANCE = "attendance"
    REPORTS = "reports"
    SETTINGS = "settings"
