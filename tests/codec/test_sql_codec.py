from datetime import datetime

import pytest

from attendance_tracker.codec import sql_codec
from attendance_tracker.core.exceptions import ImportFormatError

GENERATED_AT = datetime(2025, 3, 14, 10, 0, 0)


def _employee(**overrides):
    row = {
        "id": "EMP0001",
        "name": "Liam O'Brien",
        "department": "IT",
        "father_name": None,
        "dob": "1990-05-15",
        "cnic": None,
        "address": "1 Quay St; Dublin",
        "phone1": "0300-1234567",
        "phone2": None,
        "education": "BS -- Computer Science",
        "shift": "morning",
        "weekends": [0, 6],
        "created_at": "2025-03-01T09:00:00",
        "updated_at": None,
    }
    row.update(overrides)
    return row


def test_quote():
    assert sql_codec.quote(None) == "NULL"
    assert sql_codec.quote(True) == "TRUE"
    assert sql_codec.quote(8) == "8"
    assert sql_codec.quote(2.5) == "2.5"
    assert sql_codec.quote("O'Brien") == "'O''Brien'"
    assert sql_codec.quote([0, 6]) == "'[0,6]'"


def test_round_trip_keeps_quotes_semicolons_and_dashes():
    tables = {
        "employees": [_employee(), _employee(id="EMP0002", name="Jane")],
        "attendance": [
            {
                "employee_id": "EMP0001",
                "date": "2025-03-03",
                "present": True,
                "time_in": "09:00",
                "time_out": "19:30",
                "shift": "morning",
                "hours": 8.0,
                "overtime_hours": 2.5,
                "created_at": None,
                "updated_at": None,
            }
        ],
        "settings": [{"key": "holidays", "value": [{"date": "2025-03-23", "name": "Pakistan Day"}]}],
    }

    decoded = sql_codec.decode_sql(sql_codec.encode_sql(tables, generated_at=GENERATED_AT))

    assert decoded["employees"][0]["name"] == "Liam O'Brien"
    assert decoded["employees"][0]["address"] == "1 Quay St; Dublin"
    assert decoded["employees"][0]["education"] == "BS -- Computer Science"
    assert decoded["employees"][0]["weekends"] == [0, 6]
    assert decoded["employees"][0]["father_name"] is None
    assert len(decoded["employees"]) == 2
    [record] = decoded["attendance"]
    assert record["present"] is True
    assert record["hours"] == 8.0
    assert record["overtime_hours"] == 2.5
    assert decoded["settings"][0]["value"] == [{"date": "2025-03-23", "name": "Pakistan Day"}]
    assert decoded["settings"][0]["created_at"] is None


def test_export_header():
    text = sql_codec.encode_sql({}, generated_at=GENERATED_AT)

    assert text.startswith("-- Employee Attendance System Database Export\n-- Generated on 2025-03-14T10:00:00\n")
    assert "INSERT" not in text


def test_comments_with_quotes_are_ignored():
    text = """
    -- Bob's export; don't edit
    INSERT INTO settings (key, value, created_at, updated_at) VALUES ('weekends', '[0,6]', NULL, NULL);
    """

    decoded = sql_codec.decode_sql(text)

    assert decoded["settings"] == [{"key": "weekends", "value": [0, 6], "created_at": None, "updated_at": None}]


def test_other_statements_and_tables_are_ignored():
    text = "SET FOREIGN_KEY_CHECKS=0; INSERT INTO users (id) VALUES (1); DELETE FROM employees;"

    assert sql_codec.decode_sql(text) == {"employees": [], "attendance": [], "settings": []}


def test_wrong_value_count_is_rejected():
    text = "INSERT INTO settings (key, value, created_at, updated_at) VALUES ('weekends', '[0,6]');"

    with pytest.raises(ImportFormatError):
        sql_codec.decode_sql(text)


def test_unterminated_quote_is_rejected():
    with pytest.raises(ImportFormatError):
        sql_codec.decode_sql("INSERT INTO settings VALUES ('weekends, '[0,6]', NULL, NULL);")


def test_invalid_json_column_is_rejected():
    text = "INSERT INTO settings VALUES ('shifts', '{broken', NULL, NULL);"

    with pytest.raises(ImportFormatError):
        sql_codec.decode_sql(text)


def test_tokenize():
    assert sql_codec.tokenize("'a, b', NULL, 3, 2.5, TRUE, 'it''s'") == ["a, b", None, 3, 2.5, True, "it's"]
