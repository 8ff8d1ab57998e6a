from __future__ import annotations

from datetime import datetime

import pytest

from src.school_attendance.school_attendance.attendance.model import AttendanceRecord
from src.school_attendance.school_attendance.audit.model import AuditLogEntry
from src.school_attendance.school_attendance.audit.service import AuditService
from src.school_attendance.school_attendance.container import assemble_container
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, Role
from src.school_attendance.school_attendance.students.model import Student
from src.school_attendance.school_attendance.users.model import Profile

SUPER_ADMIN_EMAIL = "admin@example.com"


class FakeStudentsRepo:
    def __init__(self, students=()):
        self._items = {s.student_id: s for s in students}
        self._next_id = max(self._items, default=0) + 1
        self.insert_many_calls = 0

    def list_all(self):
        return sorted(self._items.values(), key=lambda s: s.name)

    def list_by_parent(self, parent_id):
        return [s for s in self.list_all() if s.parent_id == parent_id]

    def get_by_id(self, student_id):
        return self._items.get(int(student_id))

    def insert_one(self, student):
        sid = self._next_id
        self._next_id += 1
        self._items[sid] = Student(student_id=sid, **vars(student))
        return sid

    def insert_many(self, students):
        self.insert_many_calls += 1
        for s in students:
            self.insert_one(s)
        return len(students)

    def update(self, student_id, student):
        if int(student_id) not in self._items:
            return False
        self._items[int(student_id)] = Student(student_id=int(student_id), **vars(student))
        return True

    def delete_by_id(self, student_id):
        return self._items.pop(int(student_id), None) is not None


class FakeAttendanceRepo:
    def __init__(self, records=()):
        self._items = {(r.student_id, r.work_date, r.lesson_hour): r for r in records}
        self.upsert_calls = 0

    def list_all(self):
        return list(self._items.values())

    def list_for_students(self, student_ids):
        ids = set(student_ids)
        rows = [r for r in self._items.values() if r.student_id in ids]
        return sorted(rows, key=lambda r: r.work_date, reverse=True)

    def upsert_many(self, entries):
        self.upsert_calls += 1
        for e in entries:
            existing = self._items.get(e.key)
            self._items[e.key] = AttendanceRecord(
                attendance_id=existing.attendance_id if existing else len(self._items) + 1,
                student_id=e.student_id,
                work_date=e.work_date,
                lesson_hour=e.lesson_hour,
                status=e.status,
                taken_by=e.taken_by,
            )
        return len(entries)


class FakeProfilesRepo:
    def __init__(self, profiles=()):
        self._items = {p.profile_id: p for p in profiles}

    def get_by_id(self, profile_id):
        return self._items.get(profile_id)

    def list_all(self):
        return sorted(self._items.values(), key=lambda p: p.email)

    def update_role(self, profile_id, role):
        p = self._items.get(profile_id)
        if not p:
            return False
        self._items[profile_id] = Profile(profile_id=p.profile_id, full_name=p.full_name, email=p.email, role=role)
        return True

    def delete_by_id(self, profile_id):
        return self._items.pop(profile_id, None) is not None


class FakeAuditRepo:
    def __init__(self, now=None):
        self.entries: list[AuditLogEntry] = []
        self._now = now or datetime(2025, 3, 10, 9, 0, 0)

    def append(self, *, action, user_email):
        entry = AuditLogEntry(log_id=len(self.entries) + 1, created_at=self._now, user_email=user_email, action=action)
        self.entries.append(entry)
        return entry.log_id

    def list_recent(self, limit):
        return list(reversed(self.entries))[:limit]


def make_record(student_id, day, status, lesson_hour=1):
    return AttendanceRecord(
        attendance_id=0,
        student_id=student_id,
        work_date=day,
        lesson_hour=lesson_hour,
        status=AttendanceStatus.parse(status) if isinstance(status, str) else status,
    )


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 10, 9, 0, 0)


@pytest.fixture
def students():
    return [
        Student(student_id=1, name="Ani", class_name="10-A", nis="001", parent_id="parent-1"),
        Student(student_id=2, name="Budi", class_name="10-A", nis="002"),
        Student(student_id=3, name="Citra", class_name="11-B", nis="003", parent_id="parent-1"),
    ]


@pytest.fixture
def profiles():
    return [
        Profile(profile_id="admin-1", full_name="Super Admin", email=SUPER_ADMIN_EMAIL, role=Role.TEACHER),
        Profile(profile_id="teacher-1", full_name="Bu Guru", email="guru@example.com", role=Role.TEACHER),
        Profile(profile_id="parent-1", full_name="Pak Wali", email="ortu@example.com", role=Role.PARENT),
    ]


@pytest.fixture
def audit_repo(fixed_now):
    return FakeAuditRepo(now=fixed_now)


@pytest.fixture
def audit_service(audit_repo):
    return AuditService(audit_repo, default_limit=20)


@pytest.fixture
def container(students, profiles, audit_repo):
    return assemble_container(
        students_repo=FakeStudentsRepo(students),
        attendance_repo=FakeAttendanceRepo(),
        profiles_repo=FakeProfilesRepo(profiles),
        audit_repo=audit_repo,
        super_admin_email=SUPER_ADMIN_EMAIL,
    )
