from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..roster.reader import parse_spreadsheet


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

    def uploaded_table():
        f = request.files.get("file")
        if f is None or not f.filename:
            raise ValidationError("File wajib diunggah")
        return f.filename, parse_spreadsheet(f.filename, f.read())

    def student_fields(payload: dict) -> dict:
        # Only keys present in the request; an update leaves the others untouched.
        keys = {"name": "name", "class": "class_name", "nis": "nis", "email": "email", "gender": "gender", "parent_id": "parent_id"}
        return {field: payload[key] for key, field in keys.items() if key in payload}

    @app.route("/api/students", endpoint="list_students")
    @teacher_required
    def list_students():
        students = container.student_service.list_students(search=request.args.get("search"))
        return jsonify({"success": True, "students": [s.to_dict() for s in students]})

    @app.route("/api/students", methods=["POST"], endpoint="add_student")
    @teacher_required
    def add_student():
        payload = request.get_json(silent=True) or {}
        student = container.student_service.add_student(actor_email=session["email"], **student_fields(payload))
        return jsonify({"success": True, "student": student.to_dict(), "message": "Siswa berhasil ditambahkan."}), 201

    @app.route("/api/students/<int:student_id>", methods=["PUT"], endpoint="update_student")
    @teacher_required
    def update_student(student_id: int):
        payload = request.get_json(silent=True) or {}
        student = container.student_service.update_student(
            student_id, actor_email=session["email"], **student_fields(payload)
        )
        return jsonify({"success": True, "student": student.to_dict(), "message": "Data siswa berhasil diperbarui."})

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    @teacher_required
    def delete_student(student_id: int):
        container.student_service.delete_student(student_id, actor_email=session["email"])
        return jsonify({"success": True, "message": "Siswa berhasil dihapus."})

    @app.route("/api/students/import/preview", methods=["POST"], endpoint="preview_import")
    @teacher_required
    def preview_import():
        _, table = uploaded_table()
        result = container.student_service.preview_roster(table, layout=request.form.get("layout") or None)
        return jsonify(
            {"success": True, "count": result.count, "students": [s.to_dict() for s in result.students]}
        )

    @app.route("/api/students/import", methods=["POST"], endpoint="import_students")
    @teacher_required
    def import_students():
        filename, table = uploaded_table()
        result = container.student_service.import_roster(
            table,
            actor_email=session["email"],
            filename=filename,
            layout=request.form.get("layout") or None,
        )
        return jsonify({"success": True, "count": result.count, "message": f"{result.count} siswa berhasil diimpor."})

    @app.route("/api/students/quick-import", methods=["POST"], endpoint="quick_import_students")
    @teacher_required
    def quick_import_students():
        _, table = uploaded_table()
        result = container.student_service.quick_import(
            request.form.get("class") or "", table, actor_email=session["email"]
        )
        return jsonify({"success": True, "count": result.count, "message": f"{result.count} siswa berhasil ditambahkan."})
