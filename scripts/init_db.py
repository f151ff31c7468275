from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.mom_portal.mom_portal.app_logger import setup_logging
from src.mom_portal.mom_portal.database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create the MoM portal database and tables")
    parser.add_argument("--seed", action="store_true", help="also load seed.sql and the demo accounts")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", None))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    if args.seed:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_users(db_config)

    tables = list_tables(db_config)
    print(f"OK: {db_config.get('database')} on {db_config.get('host')}:{db_config.get('port', 3306)}")
    for name in tables:
        print(f"  - {name}")


if __name__ == "__main__":
    main()
