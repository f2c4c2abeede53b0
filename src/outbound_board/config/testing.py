from .base import DEFAULT_ROSTER, db_config

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORE_BACKEND = "memory"
DB_CONFIG = db_config()
AUTO_INIT_DB = False

WORK_START = "09:00"
WORK_END = "18:00"
WORKDAYS = [0, 1, 2, 3, 4]
HOLIDAYS = []

LOG_WINDOW = 50
TICK_SECONDS = 60
SESSION_HOURS = 24

IMPLICIT_PROVISIONING = False
TICKER_ENABLED = False

ADMIN_NAME = "admin"
ADMIN_PIN = "0000"
SEED_EMPLOYEES = DEFAULT_ROSTER
