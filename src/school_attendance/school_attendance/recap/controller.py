from __future__ import annotations

import io
from functools import wraps

from flask import Flask, jsonify, request, send_file, session

from ..common.datetime_utils import now_local, parse_iso_date
from ..container import Container
from ..core.enums import ExportFormat, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .classifier import classify_presence
from .model import RecapFilter


def register(app: Flask, container: Container) -> None:
    def role_required(*roles: Role):
        allowed = {r.value for r in roles}

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                if "profile_id" not in session:
                    raise AuthorizationError("Silakan masuk terlebih dahulu")
                if session.get("role") not in allowed:
                    raise AuthorizationError("Anda tidak memiliki akses ke halaman ini")
                return view(*args, **kwargs)

            return wrapper

        return decorator

    @app.route("/api/dashboard", endpoint="dashboard")
    @role_required(Role.TEACHER)
    def dashboard():
        date_s = request.args.get("date")
        day = parse_iso_date(date_s) if date_s else now_local().date()
        return jsonify({"success": True, **container.recap_service.daily_dashboard(day)})

    @app.route("/api/recap", endpoint="recap")
    @role_required(Role.TEACHER)
    def recap():
        filt = RecapFilter.from_args(request.args, today=now_local().date())
        rows = container.recap_service.class_recap(filt)
        data = []
        for r in rows:
            item = r.to_dict()
            item["classification"] = classify_presence(r.presence_percentage).to_dict()
            data.append(item)
        interval = filt.interval()
        return jsonify(
            {
                "success": True,
                "period": filt.period.value,
                "start": interval.start.isoformat(),
                "end": interval.end.isoformat(),
                "class": filt.class_name,
                "rows": data,
            }
        )

    @app.route("/api/recap/export", endpoint="recap_export")
    @role_required(Role.TEACHER)
    def recap_export():
        filt = RecapFilter.from_args(request.args, today=now_local().date())
        try:
            fmt = ExportFormat((request.args.get("format") or ExportFormat.XLSX.value).lower())
        except ValueError:
            raise ValidationError("Format ekspor tidak didukung")

        export = container.recap_service.export(filt, fmt)
        return send_file(
            io.BytesIO(export.content),
            download_name=export.filename,
            as_attachment=True,
            mimetype=export.mimetype,
        )

    @app.route("/api/students/<int:student_id>/detail", endpoint="student_detail")
    @role_required(Role.TEACHER, Role.PARENT)
    def student_detail(student_id: int):
        parent_id = session["profile_id"] if session.get("role") == Role.PARENT.value else None
        detail = container.recap_service.student_detail(student_id, parent_id=parent_id)
        return jsonify({"success": True, **detail})

    @app.route("/api/parent/overview", endpoint="parent_overview")
    @role_required(Role.PARENT)
    def parent_overview():
        children = container.recap_service.parent_overview(session["profile_id"])
        return jsonify({"success": True, "children": children})
