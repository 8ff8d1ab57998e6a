from __future__ import annotations

from datetime import date

import pytest

from conftest import FakeAttendanceRepo, FakeStudentsRepo, make_record

from src.school_attendance.school_attendance.attendance.model import AttendanceSheetQuery
from src.school_attendance.school_attendance.attendance.service import AttendanceService
from src.school_attendance.school_attendance.core.enums import AttendanceStatus
from src.school_attendance.school_attendance.core.exceptions import ValidationError

DAY = date(2025, 3, 10)
ACTOR = "guru@example.com"


@pytest.fixture
def attendance_repo():
    return FakeAttendanceRepo([make_record(2, DAY, "Sakit")])


@pytest.fixture
def service(students, attendance_repo, audit_service):
    return AttendanceService(attendance_repo, FakeStudentsRepo(students), audit_service)


def test_class_names(service):
    assert service.class_names() == ["10-A", "11-B"]


def test_sheet_is_prefilled_with_saved_status_else_present(service):
    rows = service.class_sheet(AttendanceSheetQuery("10-A", DAY, 1))
    assert [(r.name, r.status) for r in rows] == [("Ani", "Hadir"), ("Budi", "Sakit")]

    other_hour = service.class_sheet(AttendanceSheetQuery("10-A", DAY, 2))
    assert {r.status for r in other_hour} == {"Hadir"}


def test_save_writes_one_entry_per_student_in_one_upsert(service, attendance_repo, audit_repo):
    saved = service.save_class_attendance(
        AttendanceSheetQuery("10-A", DAY, 3),
        {2: "Alpa"},
        actor_email=ACTOR,
        actor_id="teacher-1",
    )

    assert saved == 2
    assert attendance_repo.upsert_calls == 1
    stored = {r.student_id: r.status for r in attendance_repo.list_all() if r.lesson_hour == 3}
    assert stored == {1: AttendanceStatus.PRESENT, 2: AttendanceStatus.ABSENT}
    assert audit_repo.entries[-1].action == "Menyimpan absensi jam ke-3 untuk kelas 10-A pada tanggal 2025-03-10."


def test_saving_twice_replaces_status(service, attendance_repo):
    query = AttendanceSheetQuery("10-A", DAY, 1)
    service.save_class_attendance(query, {1: "Izin"}, actor_email=ACTOR)
    service.save_class_attendance(query, {1: "Tidur"}, actor_email=ACTOR)

    rows = [r for r in attendance_repo.list_all() if r.lesson_hour == 1]
    assert len(rows) == 2
    assert {r.student_id: r.status.value for r in rows} == {1: "Tidur", 2: "Hadir"}


def test_fill_status_marks_everyone(service, attendance_repo):
    service.save_class_attendance(AttendanceSheetQuery("10-A", DAY, 4), {}, actor_email=ACTOR, fill_status="Sakit")
    assert {r.status for r in attendance_repo.list_all() if r.lesson_hour == 4} == {AttendanceStatus.SICK}


def test_save_rejects_bad_input(service, attendance_repo):
    with pytest.raises(ValidationError):
        service.save_class_attendance(AttendanceSheetQuery("10-A", DAY, 0), {}, actor_email=ACTOR)
    with pytest.raises(ValidationError):
        service.save_class_attendance(AttendanceSheetQuery("10-A", DAY, 1), {3: "Hadir"}, actor_email=ACTOR)
    with pytest.raises(ValidationError):
        service.save_class_attendance(AttendanceSheetQuery("10-A", DAY, 1), {1: "Terlambat"}, actor_email=ACTOR)
    with pytest.raises(ValidationError):
        service.save_class_attendance(AttendanceSheetQuery("12-C", DAY, 1), {}, actor_email=ACTOR)
    assert attendance_repo.upsert_calls == 0


def test_sheet_query_from_args():
    query = AttendanceSheetQuery.from_args({"class": "10-A", "lesson_hour": "2"}, today=DAY)
    assert query == AttendanceSheetQuery("10-A", DAY, 2)

    with pytest.raises(ValidationError):
        AttendanceSheetQuery.from_args({"class": ""}, today=DAY)
    with pytest.raises(ValidationError):
        AttendanceSheetQuery.from_args({"class": "10-A", "date": "10/03/2025"}, today=DAY)


def test_status_parse_accepts_legacy_spelling():
    assert AttendanceStatus.parse("Alpa") is AttendanceStatus.ABSENT
    assert AttendanceStatus.parse("hadir") is AttendanceStatus.PRESENT
    with pytest.raises(ValueError):
        AttendanceStatus.parse("Terlambat")
