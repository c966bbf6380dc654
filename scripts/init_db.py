from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_attendance.hr_attendance.database.bootstrap import SCHEMA_PATH, apply_schema, list_tables
from src.hr_attendance.hr_attendance.database.connection import DBConfig

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    apply_schema(config, schema_path=SCHEMA_PATH)
    tables = list_tables(config)
    logger.info(
        "Applied %s -> %s@%s:%s/%s (tables=%d)",
        SCHEMA_PATH.name, config.user, config.host, config.port, config.database, len(tables),
    )


if __name__ == "__main__":
    main()
