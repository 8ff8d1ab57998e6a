from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import FAIR_PRESENCE_FROM, GOOD_PRESENCE_ABOVE, PARENT_WARNING_BELOW
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class PresenceLabel:
    label: str
    tier: str
    css_class: str

    def to_dict(self) -> dict:
        return {"label": self.label, "tier": self.tier, "css_class": self.css_class}


GOOD = PresenceLabel(label="Baik", tier="good", css_class="text-green-600")
FAIR = PresenceLabel(label="Cukup", tier="fair", css_class="text-yellow-600")
NEEDS_ATTENTION = PresenceLabel(label="Perlu Perhatian", tier="needs_attention", css_class="text-red-600")

_STATUS_BADGES = {
    AttendanceStatus.PRESENT: "bg-green-100 text-green-800",
    AttendanceStatus.SICK: "bg-yellow-100 text-yellow-800",
    AttendanceStatus.EXCUSED: "bg-blue-100 text-blue-800",
    AttendanceStatus.ABSENT: "bg-red-100 text-red-800",
    AttendanceStatus.SLEEPING: "bg-slate-100 text-slate-800",
}


def classify_presence(percentage: int) -> PresenceLabel:
    if percentage > GOOD_PRESENCE_ABOVE:
        return GOOD
    if percentage >= FAIR_PRESENCE_FROM:
        return FAIR
    return NEEDS_ATTENTION


def needs_warning(percentage: int) -> bool:
    """Parents see a warning below this threshold."""
    return percentage < PARENT_WARNING_BELOW


def status_badge(status: AttendanceStatus) -> str:
    return _STATUS_BADGES.get(status, "bg-gray-100 text-gray-800")
