from datetime import date

from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.codec import csv_codec
from attendance_tracker.employees.model import Employee


def test_employee_csv_round_trip_with_quoted_fields():
    employees = [
        Employee(
            id="EMP0001",
            name='Ali "The Rock" Khan',
            department="IT",
            address="12 Main St, Block B",
            shift="night",
            weekends=(5, 6),
        ),
        Employee(id="EMP0002", name="Jane Smith"),
    ]

    rows = csv_codec.decode_employees(csv_codec.encode_employees(employees))

    assert [r["id"] for r in rows] == ["EMP0001", "EMP0002"]
    assert rows[0]["name"] == 'Ali "The Rock" Khan'
    assert rows[0]["address"] == "12 Main St, Block B"
    assert rows[0]["shift"] == "night"
    assert rows[0]["weekends"] == (5, 6)
    assert rows[1]["department"] is None
    assert rows[1]["weekends"] == (0, 6)


def test_employee_export_header_and_weekends_format():
    text = csv_codec.encode_employees([Employee(id="EMP0001", name="John")])

    header, line = text.split("\n")
    assert header == "id,name,department,fatherName,dob,cnic,address,phone1,phone2,education,shift,weekends"
    assert line.endswith(',morning,"[0,6]"')


def test_empty_exports_are_empty_strings():
    assert csv_codec.encode_employees([]) == ""
    assert csv_codec.encode_attendance([]) == ""


def test_headers_are_matched_loosely():
    text = "ID,Name,Father_Name,Shift\nEMP0007,Omar,Khalid,morning"

    [row] = csv_codec.decode_employees(text)

    assert row["id"] == "EMP0007"
    assert row["father_name"] == "Khalid"


def test_rows_with_wrong_column_count_or_no_name_are_skipped():
    text = "id,name,department\nEMP0001,John,IT\nEMP0002,Jane\nEMP0003,,HR\nEMP0004,Omar,Ops"

    rows = csv_codec.decode_employees(text)

    assert [r["id"] for r in rows] == ["EMP0001", "EMP0004"]


def test_bad_weekends_fall_back_to_default():
    [row] = csv_codec.decode_employees('name,weekends\nJohn,"not json"')

    assert row["weekends"] == (0, 6)


def test_has_name_header():
    assert csv_codec.has_name_header("ID, Name ,dept\n1,x,y")
    assert not csv_codec.has_name_header("id,department\n1,IT")
    assert not csv_codec.has_name_header("")


def test_employee_template_yields_two_rows():
    rows = csv_codec.decode_employees(csv_codec.EMPLOYEE_TEMPLATE)

    assert [r["name"] for r in rows] == ["John Doe", "Jane Smith"]
    assert rows[1]["phone2"] is None


def test_attendance_export_format():
    record = AttendanceRecord(
        employee_id="EMP0001",
        date=date(2025, 3, 3),
        present=True,
        time_in="09:00",
        time_out="19:30",
        hours=8.0,
        overtime_hours=2.5,
        employee_name="John Smith",
        department="IT",
    )

    header, line = csv_codec.encode_attendance([record]).split("\n")

    assert header == "Employee ID,Employee Name,Department,Date,Present,Time In,Time Out,Shift,Hours,Overtime Hours"
    assert line == "EMP0001,John Smith,IT,2025-03-03,Yes,09:00,19:30,morning,8,2.5"


def test_attendance_decode_present_values():
    text = "\n".join(
        [
            "employeeId,date,present,timeIn,timeOut,shift",
            "EMP0001,2025-03-03,1,09:00,17:00,",
            "EMP0001,2025-03-04,TRUE,09:00,17:00,night",
            "EMP0001,2025-03-05,0,,,morning",
            ",2025-03-06,1,09:00,17:00,morning",
        ]
    )

    rows = csv_codec.decode_attendance(text)

    assert [r["present"] for r in rows] == [True, True, False]
    assert rows[0]["shift"] == "morning"
    assert rows[2]["time_in"] is None


def test_unclosed_quote_only_skips_its_own_line():
    rows = csv_codec.decode_employees('name,department\n"Bob,IT\nAlice,HR\nCarl,Ops')

    assert [r["name"] for r in rows] == ["Alice", "Carl"]


def test_multiline_values_are_flattened_on_export():
    text = csv_codec.encode_employees([Employee(id="EMP0001", name="John", address="Line one\nLine two")])

    assert len(text.splitlines()) == 2
    [row] = csv_codec.decode_employees(text)
    assert row["address"] == "Line one Line two"
