from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import AttendanceSheetQuery


def register(app: Flask, container: Container) -> None:
    def teacher_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "profile_id" not in session:
                raise AuthorizationError("Silakan masuk terlebih dahulu")
            if session.get("role") != Role.TEACHER.value:
                raise AuthorizationError("Halaman ini hanya untuk guru")
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/classes", endpoint="class_names")
    @teacher_required
    def class_names():
        return jsonify({"success": True, "classes": container.attendance_service.class_names()})

    @app.route("/api/attendance/sheet", endpoint="attendance_sheet")
    @teacher_required
    def attendance_sheet():
        query = AttendanceSheetQuery.from_args(request.args, today=now_local().date())
        rows = container.attendance_service.class_sheet(query)
        return jsonify(
            {
                "success": True,
                "class": query.class_name,
                "date": query.work_date.isoformat(),
                "lesson_hour": query.lesson_hour,
                "students": [r.to_dict() for r in rows],
            }
        )

    @app.route("/api/attendance/sheet", methods=["POST"], endpoint="save_attendance_sheet")
    @teacher_required
    def save_attendance_sheet():
        payload = request.get_json(silent=True) or {}
        query = AttendanceSheetQuery.from_args(
            {k: str(payload[k]) for k in ("class", "date", "lesson_hour") if payload.get(k) is not None},
            today=now_local().date(),
        )
        statuses = payload.get("statuses") or {}
        if not isinstance(statuses, dict):
            raise ValidationError("Format status absensi tidak valid")
        try:
            statuses = {int(k): v for k, v in statuses.items()}
        except ValueError:
            raise ValidationError("ID siswa tidak valid")

        saved = container.attendance_service.save_class_attendance(
            query,
            statuses,
            actor_email=session["email"],
            actor_id=session["profile_id"],
            fill_status=payload.get("fill_status"),
        )
        return jsonify({"success": True, "saved": saved, "message": "Absensi berhasil disimpan."})
