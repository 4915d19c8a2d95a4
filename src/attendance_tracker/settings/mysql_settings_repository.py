from __future__ import annotations

from typing import Any, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, load_json
from .model import SettingRow
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_rows(self) -> Sequence[SettingRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT `key`, value, created_at, updated_at FROM settings ORDER BY `key`")
            return [
                SettingRow(
                    key=str(r["key"]),
                    value=load_json(r["value"]),
                    created_at=r.get("created_at"),
                    updated_at=r.get("updated_at"),
                )
                for r in fetchall(cur)
            ]

    def save(self, key: str, value: Any) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings(`key`, value) VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE value=VALUES(value)
                """,
                (key, dump_json(value)),
            )
