import io
import json


def test_api_requires_login(client):
    resp = client.get("/api/employees")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_bad_login(client):
    resp = client.post("/login", json={"username": "admin", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid username or password"


def test_me_lists_permitted_views(client, login):
    login("viewer", "viewer123")

    data = client.get("/api/me").get_json()

    assert data["role"] == "viewer"
    assert "settings" not in data["views"]
    assert "viewEmployees" in data["permissions"]


def test_viewer_cannot_add_employees(client, login):
    login("viewer", "viewer123")

    resp = client.post("/api/employees", json={"name": "John"})

    assert resp.status_code == 403


def test_admin_adds_and_lists_employees(client, login):
    login()

    created = client.post("/api/employees", json={"name": "John Smith", "department": "IT"})
    listed = client.get("/api/employees")

    assert created.status_code == 201
    assert created.get_json()["employee"]["id"] == "EMP0001"
    assert [e["name"] for e in listed.get_json()] == ["John Smith"]


def test_validation_errors_map_to_400(client, login):
    login()

    resp = client.post("/api/employees", json={"name": ""})

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "Employee name is required"}


def test_unknown_employee_is_404(client, login):
    login()

    assert client.get("/api/employees/EMP0404").status_code == 404


def test_mark_attendance_and_export_csv(client, login):
    login()
    client.post("/api/employees", json={"name": "John Smith", "department": "IT"})

    marked = client.post(
        "/api/attendance",
        json={"employee_id": "EMP0001", "date": "2025-03-03", "present": True, "time_in": "09:00", "time_out": "19:30"},
    )
    exported = client.get("/api/attendance/export.csv?year=2025&month=3")

    assert marked.get_json()["record"]["overtime_hours"] == 2.5
    assert exported.mimetype == "text/csv"
    assert "attachment" in exported.headers["Content-Disposition"]
    assert exported.get_data(as_text=True).splitlines()[1] == (
        "EMP0001,John Smith,IT,2025-03-03,Yes,09:00,19:30,morning,8,2.5"
    )


def test_marking_a_weekend_is_400(client, login):
    login()
    client.post("/api/employees", json={"name": "John Smith"})

    resp = client.post("/api/attendance", json={"employee_id": "EMP0001", "date": "2025-03-01", "present": True})

    assert resp.status_code == 400


def test_employee_csv_upload(client, login):
    login()
    upload = io.BytesIO(b"name,department\nAlice,IT\nBob,HR\n")

    resp = client.post(
        "/api/employees/import",
        data={"file": (upload, "employees.csv")},
        content_type="multipart/form-data",
    )

    assert resp.get_json() == {"success": True, "count": 2}


def test_summary_report(client, login):
    login()
    client.post("/api/employees", json={"name": "John Smith"})
    client.post("/api/attendance", json={"employee_id": "EMP0001", "date": "2025-03-03", "present": True})

    data = client.get("/api/reports/summary?year=2025&month=3").get_json()

    assert data[0]["present_days"] == 1
    assert data[0]["punctuality_percentage"] == 100.0


def test_view_dispatch_route(client, login):
    login("viewer", "viewer123")

    assert client.get("/api/views/employees").status_code == 200
    assert client.get("/api/views/settings").status_code == 403
    assert client.get("/api/views/payroll").status_code == 404


def test_manager_cannot_clear_the_database(client, login):
    login("manager", "manager123")

    assert client.post("/api/database/clear").status_code == 403


def test_database_json_export_and_import(client, login):
    login()
    client.post("/api/employees", json={"name": "John Smith"})
    backup = client.get("/api/database/export.json").get_data()
    client.post("/api/database/clear")

    resp = client.post(
        "/api/database/import",
        data={"file": (io.BytesIO(backup), "attendance_backup.json")},
        content_type="multipart/form-data",
    )

    assert resp.get_json()["success"] is True
    assert [e["name"] for e in client.get("/api/employees").get_json()] == ["John Smith"]
    assert json.loads(backup)["version"] == "2.0"


def test_logout_ends_the_session(client, login):
    login()
    client.post("/logout")

    assert client.get("/api/me").status_code == 401


def test_non_string_name_is_a_validation_error(client, login):
    login()

    resp = client.post("/api/employees", json={"name": 123})

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "Employee name is required"}


def test_non_string_shift_time_is_a_validation_error(client, login):
    login()

    resp = client.put(
        "/api/settings/shifts",
        json={"shifts": {"morning": {"start": 900, "end": "17:00"}, "night": {"start": "21:00", "end": "05:00"}}},
    )

    assert resp.status_code == 400


def test_upload_that_is_not_utf8_is_a_validation_error(client, login):
    login()
    upload = io.BytesIO(b"name,department\n\xff\xfeAlice,IT\n")

    resp = client.post(
        "/api/employees/import",
        data={"file": (upload, "employees.csv")},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
