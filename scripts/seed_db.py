from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.school_attendance.school_attendance.database.bootstrap import apply_seed_sql, ensure_super_admin_profile
from src.school_attendance.school_attendance.database.connection import DBConfig

logger = logging.getLogger("seed_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    super_admin_email = getattr(settings, "SUPER_ADMIN_EMAIL", "")
    if super_admin_email:
        profile_id = ensure_super_admin_profile(db_config, email=super_admin_email)
        logger.info("Super admin profile %s (%s)", super_admin_email, profile_id)

    logger.info("Seeded %s", DBConfig.from_dict(db_config).describe())


if __name__ == "__main__":
    main()
