"""Example: use the service layer directly (no Flask).

Prints this month's recap for every class, the way the recap page shows it.
"""

import importlib

from config import get_settings_module

from src.school_attendance.school_attendance.common.datetime_utils import now_local
from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.recap.classifier import classify_presence
from src.school_attendance.school_attendance.recap.model import RecapFilter


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, super_admin_email=settings.SUPER_ADMIN_EMAIL)
    filt = RecapFilter.from_args({}, today=now_local().date())
    for row in container.recap_service.class_recap(filt):
        label = classify_presence(row.presence_percentage).label
        print(f"{row.class_name:6} {row.name:30} {row.presence_percentage:3}% {label}")


if __name__ == "__main__":
    main()
