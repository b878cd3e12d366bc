"""Example: use the service layer directly (no Flask).

Prints the vacation balance of the demo crew user for the current year.
Run scripts/init_db.py and scripts/seed_db.py first.
"""

import importlib
import sys
from datetime import date

from dotenv import load_dotenv

from config import get_settings_module

from src.restaurant_manager.restaurant_manager.container import build_container_from_settings


def main() -> int:
    load_dotenv()
    settings = importlib.import_module(get_settings_module())
    container = build_container_from_settings(settings)

    crew = container.users_repo.get_by_email("crew@demo.local")
    if crew is None:
        print("crew@demo.local not found; run scripts/seed_db.py first")
        return 1

    balance = container.vacation_service.get_balance(current_user_id=crew.user_id, year=date.today().year)
    print(balance)
    return 0


if __name__ == "__main__":
    sys.exit(main())
