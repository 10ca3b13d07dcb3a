import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
# Required: create_app refuses to start without it.
JWT_SECRET = os.getenv("JWT_SECRET", "")
JWT_EXPIRES_DAYS = int(os.getenv("JWT_EXPIRES_DAYS", "7"))

DB_BACKEND = os.getenv("DB_BACKEND", "mysql")
SQLITE_PATH = os.getenv("SQLITE_PATH", "database/timetracker.db")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timetracker_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
