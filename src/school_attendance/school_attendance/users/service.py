from __future__ import annotations

from ..audit.service import AuditService
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Profile
from .repository import ProfileRepository


class ProfileService:
    """Use cases: look up the signed-in profile and let the super admin manage accounts."""

    def __init__(self, profiles: ProfileRepository, audit: AuditService, *, super_admin_email: str):
        self._profiles = profiles
        self._audit = audit
        self._super_admin_email = (super_admin_email or "").strip()

    def get_profile(self, profile_id: str) -> Profile:
        profile = self._profiles.get_by_id(profile_id)
        if not profile:
            raise NotFoundError("Profil pengguna tidak ditemukan")
        return profile

    def is_super_admin(self, profile: Profile) -> bool:
        return profile.is_super_admin(self._super_admin_email)

    def _require_super_admin(self, actor: Profile) -> None:
        if not self.is_super_admin(actor):
            raise AuthorizationError("Hanya super admin yang dapat mengelola pengguna")

    def _target(self, profile_id: str) -> Profile:
        target = self.get_profile(profile_id)
        if self.is_super_admin(target):
            raise AuthorizationError("Akun super admin tidak dapat diubah atau dihapus")
        return target

    def list_profiles(self, actor: Profile) -> list[Profile]:
        self._require_super_admin(actor)
        return list(self._profiles.list_all())

    def change_role(self, actor: Profile, profile_id: str, role: str | Role) -> Profile:
        self._require_super_admin(actor)
        try:
            new_role = Role(role)
        except ValueError:
            raise ValidationError("Peran tidak valid")

        target = self._target(profile_id)
        if not self._profiles.update_role(target.profile_id, new_role) and target.role is not new_role:
            raise NotFoundError("Profil pengguna tidak ditemukan")
        self._audit.record(f"Super admin mengubah peran {target.email} menjadi {new_role.value}", actor.email)
        return Profile(profile_id=target.profile_id, full_name=target.full_name, email=target.email, role=new_role)

    def delete_profile(self, actor: Profile, profile_id: str) -> Profile:
        self._require_super_admin(actor)
        target = self._target(profile_id)
        if not self._profiles.delete_by_id(target.profile_id):
            raise NotFoundError("Profil pengguna tidak ditemukan")
        self._audit.record(f"Super admin menghapus pengguna: {target.email}", actor.email)
        return target
