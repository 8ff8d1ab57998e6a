from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "profile_id" not in session:
                raise AuthorizationError("Silakan masuk terlebih dahulu")
            return view(*args, **kwargs)

        return wrapper

    def current_profile():
        return container.profile_service.get_profile(session["profile_id"])

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        profile = current_profile()
        data = profile.to_dict()
        data["is_super_admin"] = container.profile_service.is_super_admin(profile)
        return jsonify({"success": True, "profile": data})

    @app.route("/api/admin/users", endpoint="admin_users")
    @login_required
    def admin_users():
        profiles = container.profile_service.list_profiles(current_profile())
        return jsonify({"success": True, "users": [p.to_dict() for p in profiles]})

    @app.route("/api/admin/users/<profile_id>/role", methods=["POST"], endpoint="change_user_role")
    @login_required
    def change_user_role(profile_id: str):
        payload = request.get_json(silent=True) or {}
        updated = container.profile_service.change_role(
            current_profile(), profile_id, payload.get("role") or Role.PARENT.value
        )
        return jsonify({"success": True, "user": updated.to_dict(), "message": "Peran pengguna berhasil diubah."})

    @app.route("/api/admin/users/<profile_id>", methods=["DELETE"], endpoint="delete_user")
    @login_required
    def delete_user(profile_id: str):
        deleted = container.profile_service.delete_profile(current_profile(), profile_id)
        return jsonify({"success": True, "message": f"Pengguna {deleted.email} berhasil dihapus."})
