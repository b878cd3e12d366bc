import os

from config import env_list

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "restaurant_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

GOD_MODE_ROLES = env_list("GOD_MODE_ROLES", "SYSTEM_ARCHITECT,SUPER_ADMIN")

VACATION_YEAR_MIN = int(os.getenv("VACATION_YEAR_MIN", "2025"))
DEFAULT_VACATION_ALLOWANCE = float(os.getenv("DEFAULT_VACATION_ALLOWANCE", "20"))
VACATION_ROLLOUT_PHASE = bool(int(os.getenv("VACATION_ROLLOUT_PHASE", "0")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
