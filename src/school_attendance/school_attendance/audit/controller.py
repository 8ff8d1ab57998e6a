from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


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

    @app.route("/api/audit", endpoint="audit_feed")
    @teacher_required
    def audit_feed():
        limit = request.args.get("limit", type=int)
        return jsonify({"success": True, "entries": container.audit_service.recent(limit)})
