from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Gender
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewStudent, Student
from .repository import StudentRepository

_COLUMNS = "student_id, name, class_name, nis, email, gender, parent_id"


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        name=r["name"],
        class_name=r["class_name"],
        nis=r.get("nis") or "",
        email=r.get("email"),
        gender=Gender(r["gender"]) if r.get("gender") else None,
        parent_id=r.get("parent_id"),
    )


def _params(s: NewStudent) -> tuple:
    return (s.name, s.class_name, s.nis or "", s.email, s.gender.value if s.gender else None, s.parent_id)


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY name ASC")
            return [_to_student(r) for r in fetchall(cur)]

    def list_by_parent(self, parent_id: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE parent_id=%s ORDER BY name ASC", (parent_id,))
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def insert_one(self, student: NewStudent) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, class_name, nis, email, gender, parent_id)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                _params(student),
            )
            return int(cur.lastrowid)

    def insert_many(self, students: Sequence[NewStudent]) -> int:
        if not students:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO students(name, class_name, nis, email, gender, parent_id)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                [_params(s) for s in students],
            )
            return len(students)

    def update(self, student_id: int, student: NewStudent) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET name=%s, class_name=%s, nis=%s, email=%s, gender=%s, parent_id=%s
                WHERE student_id=%s
                """,
                (*_params(student), int(student_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0
