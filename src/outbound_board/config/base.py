import os

# Demo roster: name, department, PIN
DEFAULT_ROSTER = [
    {"name": "김민수", "department": "영업팀", "pin": "1234"},
    {"name": "이지연", "department": "마케팅팀", "pin": "1234"},
    {"name": "박성훈", "department": "개발팀", "pin": "1234"},
    {"name": "정유진", "department": "디자인팀", "pin": "1234"},
    {"name": "최태영", "department": "영업팀", "pin": "1234"},
    {"name": "한소희", "department": "관리팀", "pin": "1234"},
]


def env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def env_list(name: str, default: str = "") -> list:
    return [v.strip() for v in os.getenv(name, default).split(",") if v.strip()]


def db_config(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "outbound_board"),
    }


WORK_START = os.getenv("WORK_START", "09:00")
WORK_END = os.getenv("WORK_END", "18:00")
WORKDAYS = [int(d) for d in env_list("WORKDAYS", "0,1,2,3,4")]
HOLIDAYS = env_list("HOLIDAYS")

LOG_WINDOW = int(os.getenv("LOG_WINDOW", "50"))
TICK_SECONDS = float(os.getenv("TICK_SECONDS", "60"))
SESSION_HOURS = int(os.getenv("SESSION_HOURS", "24"))
