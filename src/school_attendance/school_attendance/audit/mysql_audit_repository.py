from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AuditLogEntry
from .repository import AuditLogRepository


class MySQLAuditLogRepository(AuditLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, *, action: str, user_email: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO audit_log(user_email, action) VALUES(%s,%s)",
                (user_email, action),
            )
            return int(cur.lastrowid)

    def list_recent(self, limit: int) -> Sequence[AuditLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, created_at, user_email, action
                FROM audit_log
                ORDER BY created_at DESC, log_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                AuditLogEntry(
                    log_id=int(r["log_id"]),
                    created_at=r["created_at"],
                    user_email=r["user_email"],
                    action=r["action"],
                )
                for r in fetchall(cur)
            ]
