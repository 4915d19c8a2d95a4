"""SQL dump encode/decode.

The dump is a list of ``INSERT INTO <table> (...) VALUES (...),(...);``
statements for the employees, attendance and settings tables. The decoder
reads exactly that shape back; it is not a general SQL parser.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import date, datetime
from typing import Any, Iterator, Mapping, Optional, Sequence

from ..core.exceptions import ImportFormatError

logger = logging.getLogger(__name__)

TABLE_COLUMNS: dict[str, tuple[str, ...]] = {
    "employees": (
        "id", "name", "department", "father_name", "dob", "cnic", "address",
        "phone1", "phone2", "education", "shift", "weekends", "created_at", "updated_at",
    ),
    "attendance": (
        "employee_id", "date", "present", "time_in", "time_out", "shift",
        "hours", "overtime_hours", "created_at", "updated_at",
    ),
    "settings": ("key", "value", "created_at", "updated_at"),
}
_TABLE_TITLES = {"employees": "Employees", "attendance": "Attendance", "settings": "Settings"}
_JSON_COLUMNS = {"employees": "weekends", "settings": "value"}

_INSERT = re.compile(r"^INSERT\s+INTO\s+`?(\w+)`?\s*(?:\([^)]*\))?\s*VALUES\s*(.*)$", re.IGNORECASE | re.DOTALL)
_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")


# Encoding

def quote(value: Any) -> str:
    """Render one value as a SQL literal."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:g}"
    if isinstance(value, (datetime, date)):
        value = value.isoformat()
    elif isinstance(value, (list, dict)):
        value = json.dumps(value, separators=(",", ":"))
    return "'" + str(value).replace("'", "''") + "'"


def encode_sql(tables: Mapping[str, Sequence[Mapping[str, Any]]], *, generated_at: datetime) -> str:
    parts = [
        "-- Employee Attendance System Database Export",
        f"-- Generated on {generated_at.isoformat()}",
        "",
    ]
    for table, columns in TABLE_COLUMNS.items():
        parts.append(f"-- {_TABLE_TITLES[table]} Table")
        rows = tables.get(table) or []
        if rows:
            values = ",\n".join("(" + ", ".join(quote(row.get(c)) for c in columns) + ")" for row in rows)
            parts.append(f"INSERT INTO {table} ({', '.join(columns)}) VALUES\n{values};")
        parts.append("")
    return "\n".join(parts) + "\n"


# Decoding

def split_statements(text: str) -> Iterator[str]:
    """Split on ';' outside quotes, dropping '--' comments."""
    current: list[str] = []
    quote_char: Optional[str] = None
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if quote_char:
            current.append(ch)
            if ch == quote_char:
                if i + 1 < n and text[i + 1] == quote_char:
                    current.append(text[i + 1])
                    i += 1
                else:
                    quote_char = None
        elif ch in ("'", '"'):
            quote_char = ch
            current.append(ch)
        elif ch == "-" and text.startswith("--", i):
            newline = text.find("\n", i)
            i = n if newline == -1 else newline
            continue
        elif ch == ";":
            statement = "".join(current).strip()
            if statement:
                yield statement
            current = []
        else:
            current.append(ch)
        i += 1

    if quote_char:
        raise ImportFormatError("Unterminated quoted value in SQL data")
    statement = "".join(current).strip()
    if statement:
        yield statement


def split_tuples(values_text: str) -> Iterator[str]:
    """Yield the inside of each top-level '( ... )' group."""
    i, n = 0, len(values_text)
    while i < n:
        ch = values_text[i]
        if ch.isspace() or ch == ",":
            i += 1
            continue
        if ch != "(":
            raise ImportFormatError(f"Unexpected text in VALUES list: {values_text[i:i + 20]!r}")

        start = i + 1
        quote_char: Optional[str] = None
        i += 1
        while i < n:
            ch = values_text[i]
            if quote_char:
                if ch == quote_char:
                    if i + 1 < n and values_text[i + 1] == quote_char:
                        i += 1
                    else:
                        quote_char = None
            elif ch in ("'", '"'):
                quote_char = ch
            elif ch == ")":
                break
            i += 1
        else:
            raise ImportFormatError("Unterminated value tuple in SQL data")
        yield values_text[start:i]
        i += 1


def _literal(token: str) -> Any:
    token = token.strip()
    upper = token.upper()
    if upper == "NULL":
        return None
    if upper == "TRUE":
        return True
    if upper == "FALSE":
        return False
    if _NUMBER.match(token):
        return float(token) if "." in token else int(token)
    if not token:
        raise ImportFormatError("Empty value in SQL tuple")
    return token


def tokenize(tuple_text: str) -> list[Any]:
    """Split one tuple body into Python values. Quoted values stay strings."""
    values: list[Any] = []
    current: list[str] = []
    quoted = False
    quote_char: Optional[str] = None
    i, n = 0, len(tuple_text)
    while i < n:
        ch = tuple_text[i]
        if quote_char:
            if ch == quote_char:
                if i + 1 < n and tuple_text[i + 1] == quote_char:
                    current.append(ch)
                    i += 1
                else:
                    quote_char = None
            else:
                current.append(ch)
        elif ch in ("'", '"'):
            if quoted or "".join(current).strip():
                raise ImportFormatError(f"Misplaced quote in SQL tuple: ({tuple_text})")
            quote_char = ch
            quoted = True
            current = []
        elif ch == ",":
            values.append("".join(current) if quoted else _literal("".join(current)))
            current, quoted = [], False
        elif quoted:
            if not ch.isspace():
                raise ImportFormatError(f"Text after quoted value in SQL tuple: ({tuple_text})")
        else:
            current.append(ch)
        i += 1

    if quote_char:
        raise ImportFormatError(f"Unterminated quoted value in SQL tuple: ({tuple_text})")
    values.append("".join(current) if quoted else _literal("".join(current)))
    return values


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "t", "yes")
    return bool(value)


def _row(table: str, values: list[Any]) -> dict[str, Any]:
    columns = TABLE_COLUMNS[table]
    if len(values) != len(columns):
        raise ImportFormatError(f"{table}: expected {len(columns)} values per row, got {len(values)}")
    row = dict(zip(columns, values))

    json_column = _JSON_COLUMNS.get(table)
    if json_column and isinstance(row[json_column], str):
        try:
            row[json_column] = json.loads(row[json_column])
        except ValueError as e:
            raise ImportFormatError(f"{table}: {json_column} is not valid JSON") from e

    if table == "attendance":
        row["present"] = _as_bool(row["present"])
        row["hours"] = float(row["hours"] or 0)
        row["overtime_hours"] = float(row["overtime_hours"] or 0)
    return row


def decode_sql(text: str) -> dict[str, list[dict[str, Any]]]:
    """Rows per table from an SQL dump. Raises ImportFormatError on malformed tuples."""
    tables: dict[str, list[dict[str, Any]]] = {name: [] for name in TABLE_COLUMNS}
    for statement in split_statements(text or ""):
        m = _INSERT.match(statement)
        if not m:
            logger.debug("Ignoring SQL statement: %.40s", statement)
            continue
        table = m.group(1).lower()
        if table not in TABLE_COLUMNS:
            logger.debug("Ignoring INSERT into unknown table %s", table)
            continue
        for tuple_text in split_tuples(m.group(2)):
            tables[table].append(_row(table, tokenize(tuple_text)))
    return tables
