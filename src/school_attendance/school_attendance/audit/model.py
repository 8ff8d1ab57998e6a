from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AuditLogEntry:
    """Append-only activity record shown in the dashboard feed."""

    log_id: int
    created_at: datetime
    user_email: str
    action: str
