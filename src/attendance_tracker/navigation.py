"""View routing.

Each application view maps to one handler and the permission needed to open
it. Callers dispatch by direct call with the session user; there is no event
bus in between.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Mapping, Optional

from .core.enums import Permission, View
from .core.exceptions import AuthenticationError, NotFoundError
from .users.service import SessionUser


@dataclass(frozen=True)
class ViewRoute:
    permission: Permission
    handler: Callable[..., Any]


class ViewRouter:
    def __init__(self, routes: Mapping[View, ViewRoute]):
        self._routes = dict(routes)

    def resolve(self, view: "View | str") -> View:
        try:
            return View(view)
        except ValueError:
            raise NotFoundError(f"Unknown view: {view}")

    def available_views(self, user: SessionUser) -> list[View]:
        return [view for view, route in self._routes.items() if user.can(route.permission)]

    def dispatch(self, view: "View | str", user: Optional[SessionUser], **params: Any) -> Any:
        """Run the handler for ``view`` after checking the user's permission."""
        view = self.resolve(view)
        route = self._routes.get(view)
        if route is None:
            raise NotFoundError(f"No handler for view: {view.value}")
        if user is None:
            raise AuthenticationError("Please log in to continue")
        user.require(route.permission)
        return route.handler(**params)


def build_view_router(
    *,
    employee_service,
    attendance_service,
    settings_service,
    report_service,
    today: Callable[[], date],
) -> ViewRouter:
    def _year_month(year: Optional[int], month: Optional[int]) -> tuple[int, int]:
        day = today()
        return int(year or day.year), int(month or day.month)

    def dashboard(**_: Any) -> dict[str, Any]:
        return report_service.dashboard(today()).to_dict()

    def employees(**_: Any) -> list[dict[str, Any]]:
        return [e.to_row() for e in employee_service.list_employees()]

    def attendance(year: Optional[int] = None, month: Optional[int] = None, **_: Any) -> list[dict[str, Any]]:
        return [r.to_dict() for r in attendance_service.get_by_month(*_year_month(year, month))]

    def reports(year: Optional[int] = None, month: Optional[int] = None, **_: Any) -> list[dict[str, Any]]:
        return [s.to_dict() for s in report_service.attendance_summary(*_year_month(year, month))]

    def settings(**_: Any) -> dict[str, Any]:
        return settings_service.get_settings().to_values()

    return ViewRouter(
        {
            View.DASHBOARD: ViewRoute(Permission.VIEW_DASHBOARD, dashboard),
            View.EMPLOYEES: ViewRoute(Permission.VIEW_EMPLOYEES, employees),
            View.ATTENDANCE: ViewRoute(Permission.VIEW_ATTENDANCE, attendance),
            View.REPORTS: ViewRoute(Permission.VIEW_REPORTS, reports),
            View.SETTINGS: ViewRoute(Permission.VIEW_SETTINGS, settings),
        }
    )
