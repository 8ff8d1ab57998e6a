from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_AUDIT_LOG_LIMIT
from ..core.exceptions import PersistenceError
from .repository import AuditLogRepository

logger = logging.getLogger(__name__)

# (seconds per unit, label), largest unit first
_UNITS = (
    (31536000, "tahun"),
    (2592000, "bulan"),
    (86400, "hari"),
    (3600, "jam"),
    (60, "menit"),
)


def time_since(created_at: datetime, now: Optional[datetime] = None) -> str:
    """Relative label such as ``"3 menit lalu"``.

    A unit is used only once more than one whole unit has passed.
    """
    now = now or now_local()
    seconds = (now - created_at).total_seconds()
    for size, label in _UNITS:
        interval = seconds / size
        if interval > 1:
            return f"{int(interval)} {label} lalu"
    return f"{int(max(seconds, 0))} detik lalu"


class AuditService:
    def __init__(self, audit_log: AuditLogRepository, *, default_limit: int = DEFAULT_AUDIT_LOG_LIMIT):
        self._audit_log = audit_log
        self._default_limit = int(default_limit)

    def record(self, action: str, actor_email: str) -> None:
        """Append one entry. A failing audit write never undoes the action it describes."""
        logger.info("AUDIT: [%s] %s", actor_email, action)
        try:
            self._audit_log.append(action=action, user_email=actor_email)
        except PersistenceError:
            logger.exception("Could not store audit entry for %s", actor_email)

    def recent(self, limit: Optional[int] = None, *, now: Optional[datetime] = None) -> list[dict]:
        now = now or now_local()
        entries = self._audit_log.list_recent(max(int(limit or self._default_limit), 1))
        return [
            {
                "id": e.log_id,
                "created_at": e.created_at.isoformat(),
                "user_email": e.user_email,
                "action": e.action,
                "time_since": time_since(e.created_at, now),
            }
            for e in entries
        ]
