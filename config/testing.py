import os
import tempfile

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"
JWT_EXPIRES_DAYS = 7

DB_BACKEND = "sqlite"
SQLITE_PATH = os.path.join(tempfile.gettempdir(), "timetracker-test.db")

DB_CONFIG = {}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = True
