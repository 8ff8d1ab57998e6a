from __future__ import annotations

import io

import pytest
from openpyxl import Workbook

from src.school_attendance.school_attendance.main import create_app


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, profile_id: str, email: str, role: str) -> None:
    with client.session_transaction() as sess:
        sess["profile_id"] = profile_id
        sess["email"] = email
        sess["role"] = role


def as_teacher(client):
    login(client, "teacher-1", "guru@example.com", "teacher")


def _xlsx(rows) -> bytes:
    wb = Workbook()
    for r in rows:
        wb.active.append(r)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def test_requires_login(client):
    resp = client.get("/api/students")
    assert resp.status_code == 403
    assert resp.get_json() == {"success": False, "message": "Silakan masuk terlebih dahulu"}


def test_parent_cannot_open_teacher_pages(client):
    login(client, "parent-1", "ortu@example.com", "parent")
    assert client.get("/api/recap").status_code == 403


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_student_crud(client, container):
    as_teacher(client)

    created = client.post("/api/students", json={"name": "Dewi", "class": "10-A", "gender": "P"})
    assert created.status_code == 201
    student_id = created.get_json()["student"]["id"]

    resp = client.put(f"/api/students/{student_id}", json={"name": "Dewi S", "class": "10-B"})
    assert resp.get_json()["student"]["class"] == "10-B"
    # gender was not sent, so it is kept
    assert resp.get_json()["student"]["gender"] == "P"

    assert client.delete(f"/api/students/{student_id}").status_code == 200
    assert client.delete(f"/api/students/{student_id}").status_code == 404

    bad = client.post("/api/students", json={"name": "", "class": "10-A"})
    assert bad.status_code == 400
    assert bad.get_json()["message"] == "Nama siswa wajib diisi"


def test_roster_import_and_missing_header(client, container):
    as_teacher(client)
    data = _xlsx([["Nama", "Kelas", "Jenis Kelamin", "NISN"], ["Eko", 12, "L", "009"], ["Fani", 12, "P", "010"]])

    resp = client.post(
        "/api/students/import",
        data={"file": (io.BytesIO(data), "siswa.xlsx")},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 200
    assert resp.get_json()["count"] == 2
    assert {"12A", "12B"} <= {s.class_name for s in container.students_repo.list_all()}

    bad = client.post(
        "/api/students/import",
        data={"file": (io.BytesIO(_xlsx([["Nama"], ["Eko"]])), "siswa.xlsx"), "layout": "grade_gender"},
        content_type="multipart/form-data",
    )
    assert bad.status_code == 400
    assert "Header kolom tidak sesuai" in bad.get_json()["message"]


def test_quick_import(client, container):
    as_teacher(client)
    resp = client.post(
        "/api/students/quick-import",
        data={"file": (io.BytesIO(_xlsx([["Siti"], ["Umar"]])), "nama.xlsx"), "class": "9-C"},
        content_type="multipart/form-data",
    )
    assert resp.get_json()["count"] == 2
    assert [s.name for s in container.students_repo.list_all() if s.class_name == "9-C"] == ["Siti", "Umar"]


def test_attendance_sheet_roundtrip(client):
    as_teacher(client)

    saved = client.post(
        "/api/attendance/sheet",
        json={"class": "10-A", "date": "2025-03-10", "lesson_hour": 2, "statuses": {"2": "Izin"}},
    )
    assert saved.get_json()["saved"] == 2

    sheet = client.get("/api/attendance/sheet?class=10-A&date=2025-03-10&lesson_hour=2").get_json()
    assert [(s["name"], s["status"]) for s in sheet["students"]] == [("Ani", "Hadir"), ("Budi", "Izin")]

    recap = client.get("/api/recap?class=10-A&month=2025-03").get_json()
    assert [(r["name"], r["presence_percentage"]) for r in recap["rows"]] == [("Ani", 100), ("Budi", 0)]
    assert recap["rows"][0]["classification"]["label"] == "Baik"


def test_recap_export_download(client):
    as_teacher(client)
    resp = client.get("/api/recap/export?class=10-A&month=2025-03&format=pdf")
    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert "rekap-absensi-10-A-2025-03.pdf" in resp.headers["Content-Disposition"]

    assert client.get("/api/recap/export?format=docx").status_code == 400


def test_parent_sees_only_own_children(client):
    login(client, "parent-1", "ortu@example.com", "parent")

    overview = client.get("/api/parent/overview").get_json()
    assert [c["student"]["name"] for c in overview["children"]] == ["Ani", "Citra"]
    assert overview["children"][0]["summary"]["presence_percentage"] == 100

    assert client.get("/api/students/1/detail").status_code == 200
    assert client.get("/api/students/2/detail").status_code == 403


def test_admin_user_management(client):
    login(client, "admin-1", "admin@example.com", "teacher")

    me = client.get("/api/me").get_json()
    assert me["profile"]["is_super_admin"] is True

    resp = client.post("/api/admin/users/parent-1/role", json={"role": "teacher"})
    assert resp.get_json()["user"]["role"] == "teacher"
    assert client.delete("/api/admin/users/admin-1").status_code == 403

    feed = client.get("/api/audit?limit=5").get_json()["entries"]
    assert feed[0]["action"] == "Super admin mengubah peran ortu@example.com menjadi teacher"


def test_non_admin_cannot_manage_users(client):
    as_teacher(client)
    assert client.get("/api/admin/users").status_code == 403


def test_dashboard(client):
    as_teacher(client)
    client.post("/api/attendance/sheet", json={"class": "10-A", "date": "2025-03-10", "statuses": {"1": "Sakit"}})

    data = client.get("/api/dashboard?date=2025-03-10").get_json()
    assert data["present_count"] == 1
    assert data["total_students"] == 3
    assert data["absences"][0]["name"] == "Ani"
