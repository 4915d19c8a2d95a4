"""Role -> permission table.

A session resolves its permission set once at login (see ``users.service``)
and keeps it as an immutable ``frozenset``.
"""

from __future__ import annotations

from .enums import Permission, Role

P = Permission

_MANAGER = frozenset(
    {
        P.VIEW_DASHBOARD,
        P.VIEW_SYSTEM_STATUS,
        P.VIEW_EMPLOYEES,
        P.ADD_EMPLOYEES,
        P.EDIT_EMPLOYEES,
        P.DELETE_EMPLOYEES,
        P.VIEW_EMPLOYEE_DETAILS,
        P.EXPORT_EMPLOYEE_DATA,
        P.IMPORT_EMPLOYEE_DATA,
        P.VIEW_ATTENDANCE,
        P.MARK_ATTENDANCE,
        P.EDIT_ATTENDANCE,
        P.DELETE_ATTENDANCE,
        P.VIEW_ATTENDANCE_CALENDAR,
        P.EXPORT_ATTENDANCE_DATA,
        P.IMPORT_ATTENDANCE_DATA,
        P.VIEW_REPORTS,
        P.VIEW_ATTENDANCE_SUMMARY,
        P.VIEW_PUNCTUALITY_REPORTS,
        P.VIEW_EMPLOYEE_ANALYTICS,
        P.EXPORT_REPORTS,
        P.PRINT_REPORTS,
        P.VIEW_SETTINGS,
        P.EDIT_WEEKEND_SETTINGS,
        P.EDIT_HOLIDAY_SETTINGS,
        P.EDIT_SHIFT_SETTINGS,
        P.EXPORT_DATABASE,
        P.GENERATE_SAMPLE_DATA,
        P.VIEW_USER_SETTINGS,
        P.EDIT_USER_PROFILE,
        P.CHANGE_PASSWORD,
    }
)

_EMPLOYEE = frozenset(
    {
        P.VIEW_DASHBOARD,
        P.VIEW_EMPLOYEES,
        P.VIEW_EMPLOYEE_DETAILS,
        P.VIEW_ATTENDANCE,
        P.MARK_ATTENDANCE,
        P.VIEW_ATTENDANCE_CALENDAR,
        P.VIEW_REPORTS,
        P.VIEW_ATTENDANCE_SUMMARY,
        P.PRINT_REPORTS,
        P.VIEW_USER_SETTINGS,
        P.EDIT_USER_PROFILE,
        P.CHANGE_PASSWORD,
    }
)

_VIEWER = frozenset(
    {
        P.VIEW_DASHBOARD,
        P.VIEW_SYSTEM_STATUS,
        P.VIEW_EMPLOYEES,
        P.VIEW_EMPLOYEE_DETAILS,
        P.VIEW_ATTENDANCE,
        P.VIEW_ATTENDANCE_CALENDAR,
        P.VIEW_REPORTS,
        P.VIEW_ATTENDANCE_SUMMARY,
        P.VIEW_PUNCTUALITY_REPORTS,
        P.VIEW_EMPLOYEE_ANALYTICS,
        P.PRINT_REPORTS,
        P.VIEW_USER_SETTINGS,
        P.EDIT_USER_PROFILE,
        P.CHANGE_PASSWORD,
    }
)

ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset(Permission),
    Role.MANAGER: _MANAGER,
    Role.EMPLOYEE: _EMPLOYEE,
    Role.VIEWER: _VIEWER,
}


def permissions_for(role: Role) -> frozenset[Permission]:
    return ROLE_PERMISSIONS.get(role, frozenset())


def has_permission(role: Role, permission: Permission) -> bool:
    return permission in permissions_for(role)
