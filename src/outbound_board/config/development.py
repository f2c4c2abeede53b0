import os

from .base import DEFAULT_ROSTER, HOLIDAYS, LOG_WINDOW, SESSION_HOURS, TICK_SECONDS, WORK_END, WORK_START, WORKDAYS
from .base import db_config, env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# memory | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")
DB_CONFIG = db_config()

# If enabled with the mysql backend, tables are created on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "1")

IMPLICIT_PROVISIONING = env_bool("IMPLICIT_PROVISIONING", "0")
TICKER_ENABLED = env_bool("TICKER_ENABLED", "1")

ADMIN_NAME = os.getenv("ADMIN_NAME", "admin")
ADMIN_PIN = os.getenv("ADMIN_PIN", "0000")
SEED_EMPLOYEES = DEFAULT_ROSTER
