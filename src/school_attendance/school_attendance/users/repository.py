from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Profile


class ProfileRepository(Protocol):
    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Profile]:
        """Ordered by email."""
        raise NotImplementedError

    def update_role(self, profile_id: str, role: Role) -> bool:
        raise NotImplementedError

    def delete_by_id(self, profile_id: str) -> bool:
        raise NotImplementedError
