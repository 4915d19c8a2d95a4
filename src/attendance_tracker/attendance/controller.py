from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import date_value, json_body, permission_required, uploaded_text, year_month_args
from ..core.enums import Permission
from ..container import Container
from ..employees.controller import csv_response


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", endpoint="list_attendance")
    @permission_required(Permission.VIEW_ATTENDANCE)
    def list_attendance():
        year, month = year_month_args()
        employee_id = request.args.get("employee_id")
        if employee_id:
            records = service.get_by_employee(employee_id, year, month)
        else:
            records = service.get_by_month(year, month)
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @permission_required(Permission.MARK_ATTENDANCE)
    def mark_attendance():
        data = json_body()
        record = service.mark(
            str(data.get("employee_id") or ""),
            date_value(data.get("date"), "date"),
            bool(data.get("present")),
            time_in=data.get("time_in"),
            time_out=data.get("time_out"),
        )
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route("/api/attendance/<int:record_id>", methods=["DELETE"], endpoint="delete_attendance")
    @permission_required(Permission.DELETE_ATTENDANCE)
    def delete_attendance(record_id: int):
        service.delete_record(record_id)
        return jsonify({"success": True, "message": "Attendance record deleted"})

    @app.route("/api/attendance/calendar", endpoint="attendance_calendar")
    @permission_required(Permission.VIEW_ATTENDANCE_CALENDAR)
    def attendance_calendar():
        year, month = year_month_args()
        days = service.month_calendar(request.args.get("employee_id", ""), year, month)
        return jsonify([d.to_dict() for d in days])

    @app.route("/api/attendance/export.csv", endpoint="export_attendance")
    @permission_required(Permission.EXPORT_ATTENDANCE_DATA)
    def export_attendance():
        year, month = year_month_args()
        return csv_response(service.export_csv(year, month), f"attendance_{year}_{month:02d}.csv")

    @app.route("/api/attendance/template.csv", endpoint="attendance_template")
    @permission_required(Permission.IMPORT_ATTENDANCE_DATA)
    def attendance_template():
        return csv_response(service.csv_template(), "attendance_template.csv")

    @app.route("/api/attendance/import", methods=["POST"], endpoint="import_attendance")
    @permission_required(Permission.IMPORT_ATTENDANCE_DATA)
    def import_attendance():
        result = service.import_csv(uploaded_text())
        return jsonify(result.to_dict()), (200 if result.success else 400)
