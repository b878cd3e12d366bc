import os

from config import env_list

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "restaurant_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Roles that implicitly hold every permission
GOD_MODE_ROLES = env_list("GOD_MODE_ROLES", "SYSTEM_ARCHITECT,SUPER_ADMIN")

# Vacation
VACATION_YEAR_MIN = int(os.getenv("VACATION_YEAR_MIN", "2025"))
DEFAULT_VACATION_ALLOWANCE = float(os.getenv("DEFAULT_VACATION_ALLOWANCE", "20"))
VACATION_ROLLOUT_PHASE = bool(int(os.getenv("VACATION_ROLLOUT_PHASE", "1")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
