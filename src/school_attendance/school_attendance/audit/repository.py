from __future__ import annotations

from typing import Protocol, Sequence

from .model import AuditLogEntry


class AuditLogRepository(Protocol):
    def append(self, *, action: str, user_email: str) -> int:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AuditLogEntry]:
        """Newest first."""
        raise NotImplementedError
