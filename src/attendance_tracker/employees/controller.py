from __future__ import annotations

from flask import Flask, Response, jsonify

from ..common.web import json_body, permission_required, uploaded_text
from ..core.enums import Permission
from ..container import Container


def csv_response(text: str, filename: str) -> Response:
    return Response(
        text,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", endpoint="list_employees")
    @permission_required(Permission.VIEW_EMPLOYEES)
    def list_employees():
        return jsonify([e.to_row() for e in service.list_employees()])

    @app.route("/api/employees", methods=["POST"], endpoint="add_employee")
    @permission_required(Permission.ADD_EMPLOYEES)
    def add_employee():
        employee = service.add_employee(json_body())
        return jsonify({"success": True, "employee": employee.to_row()}), 201

    @app.route("/api/employees/export.csv", endpoint="export_employees")
    @permission_required(Permission.EXPORT_EMPLOYEE_DATA)
    def export_employees():
        return csv_response(service.export_csv(), "employees.csv")

    @app.route("/api/employees/template.csv", endpoint="employee_template")
    @permission_required(Permission.IMPORT_EMPLOYEE_DATA)
    def employee_template():
        return csv_response(service.csv_template(), "employee_template.csv")

    @app.route("/api/employees/import", methods=["POST"], endpoint="import_employees")
    @permission_required(Permission.IMPORT_EMPLOYEE_DATA)
    def import_employees():
        result = service.import_csv(uploaded_text())
        return jsonify(result.to_dict()), (200 if result.success else 400)

    @app.route("/api/employees/<employee_id>", endpoint="get_employee")
    @permission_required(Permission.VIEW_EMPLOYEE_DETAILS)
    def get_employee(employee_id: str):
        return jsonify(service.get_employee(employee_id).to_row())

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    @permission_required(Permission.EDIT_EMPLOYEES)
    def update_employee(employee_id: str):
        employee = service.update_employee(employee_id, json_body())
        return jsonify({"success": True, "employee": employee.to_row()})

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @permission_required(Permission.DELETE_EMPLOYEES)
    def delete_employee(employee_id: str):
        service.delete_employee(employee_id)
        return jsonify({"success": True, "message": "Employee deleted"})
