from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Profile
from .repository import ProfileRepository


def _to_profile(r: dict) -> Profile:
    return Profile(
        profile_id=str(r["profile_id"]),
        full_name=r.get("full_name") or "",
        email=r["email"],
        role=Role(r["role"]),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT profile_id, full_name, email, role FROM profiles WHERE profile_id=%s",
                (profile_id,),
            )
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def list_all(self) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT profile_id, full_name, email, role FROM profiles ORDER BY email")
            return [_to_profile(r) for r in fetchall(cur)]

    def update_role(self, profile_id: str, role: Role) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET role=%s WHERE profile_id=%s", (role.value, profile_id))
            return cur.rowcount > 0

    def delete_by_id(self, profile_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM profiles WHERE profile_id=%s", (profile_id,))
            return cur.rowcount > 0
