from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.restaurant_manager.restaurant_manager.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)

    print(f"OK: Seeded {db_config.get('database')} with demo users:")
    for u in DEMO_USERS:
        print(f"  {u.role.value:<17} {u.email} / {u.password}")


if __name__ == "__main__":
    main()
