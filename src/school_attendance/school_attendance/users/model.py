from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Domain entity: a signed-in account (teacher or parent).

    The id is issued by the external auth provider, so it is a string.
    """

    profile_id: str
    full_name: str
    email: str
    role: Role

    def is_super_admin(self, super_admin_email: str) -> bool:
        return bool(super_admin_email) and self.email.strip().lower() == super_admin_email.strip().lower()

    def to_dict(self) -> dict:
        return {"id": self.profile_id, "full_name": self.full_name, "email": self.email, "role": self.role.value}
