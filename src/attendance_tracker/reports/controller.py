from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import month_bounds, now_local
from ..common.web import date_value, permission_required, year_month_args
from ..core.enums import Permission
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    @app.route("/api/dashboard", endpoint="dashboard")
    @permission_required(Permission.VIEW_DASHBOARD)
    def dashboard():
        return jsonify(service.dashboard(now_local().date()).to_dict())

    @app.route("/api/reports/summary", endpoint="attendance_summary")
    @permission_required(Permission.VIEW_ATTENDANCE_SUMMARY)
    def attendance_summary():
        if "start" in request.args or "end" in request.args:
            start = date_value(request.args.get("start"), "start")
            end = date_value(request.args.get("end"), "end")
            summaries = service.summary_for_range(start, end)
        else:
            summaries = service.attendance_summary(*year_month_args())
        return jsonify([s.to_dict() for s in summaries])

    @app.route("/api/reports/summary.xlsx", endpoint="attendance_summary_xlsx")
    @permission_required(Permission.EXPORT_REPORTS)
    def attendance_summary_xlsx():
        year, month = year_month_args()
        out = io.BytesIO(service.summary_workbook(year, month))
        return send_file(
            out,
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            as_attachment=True,
            download_name=f"attendance_summary_{year}_{month:02d}.xlsx",
        )

    @app.route("/api/reports/employees/<employee_id>/analytics", endpoint="employee_analytics")
    @permission_required(Permission.VIEW_EMPLOYEE_ANALYTICS)
    def employee_analytics(employee_id: str):
        if "start" in request.args or "end" in request.args:
            start = date_value(request.args.get("start"), "start")
            end = date_value(request.args.get("end"), "end")
        else:
            start, end = month_bounds(*year_month_args())
        return jsonify(service.employee_analytics(employee_id, start, end).to_dict())
