import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "restaurant_test_db"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

GOD_MODE_ROLES = ["SYSTEM_ARCHITECT", "SUPER_ADMIN"]

VACATION_YEAR_MIN = 2025
DEFAULT_VACATION_ALLOWANCE = 20.0
VACATION_ROLLOUT_PHASE = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
