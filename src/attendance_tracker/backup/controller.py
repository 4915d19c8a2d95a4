from __future__ import annotations

import json

from flask import Flask, Response, jsonify, request

from ..common.web import permission_required, uploaded_text
from ..core.enums import Permission
from ..container import Container


def _download(text: str, mimetype: str, filename: str) -> Response:
    return Response(text, mimetype=mimetype, headers={"Content-Disposition": f"attachment; filename={filename}"})


def register(app: Flask, container: Container) -> None:
    service = container.backup_service

    def _result(result):
        return jsonify(result.to_dict()), (200 if result.success else 400)

    @app.route("/api/database/export.json", endpoint="export_database_json")
    @permission_required(Permission.EXPORT_DATABASE)
    def export_database_json():
        return _download(json.dumps(service.export_json(), indent=2), "application/json", "attendance_backup.json")

    @app.route("/api/database/export.sql", endpoint="export_database_sql")
    @permission_required(Permission.EXPORT_DATABASE)
    def export_database_sql():
        return _download(service.export_sql(), "application/sql", "attendance_backup.sql")

    @app.route("/api/database/import", methods=["POST"], endpoint="import_database")
    @permission_required(Permission.IMPORT_DATABASE)
    def import_database():
        fmt = (request.args.get("format") or "").lower()
        upload = request.files.get("file")
        if not fmt and upload is not None and upload.filename:
            fmt = "sql" if upload.filename.lower().endswith(".sql") else "json"
        text = uploaded_text()
        if fmt == "sql":
            return _result(service.import_sql(text))
        return _result(service.import_json(text))

    @app.route("/api/database/clear", methods=["POST"], endpoint="clear_database")
    @permission_required(Permission.CLEAR_DATABASE)
    def clear_database():
        return _result(service.clear_database())

    @app.route("/api/database/sample-data", methods=["POST"], endpoint="generate_sample_data")
    @permission_required(Permission.GENERATE_SAMPLE_DATA)
    def generate_sample_data():
        return _result(service.generate_sample_data())
