import os

from .base import HOLIDAYS, LOG_WINDOW, SESSION_HOURS, TICK_SECONDS, WORK_END, WORK_START, WORKDAYS
from .base import db_config, env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
DB_CONFIG = db_config()

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "0")

IMPLICIT_PROVISIONING = env_bool("IMPLICIT_PROVISIONING", "0")
TICKER_ENABLED = True

ADMIN_NAME = os.getenv("ADMIN_NAME", "admin")
ADMIN_PIN = os.getenv("ADMIN_PIN", "")
SEED_EMPLOYEES = []
