import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "store_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

FETCH_RETRIES = 2
AUTO_DETECT_SHIFT = True

AUTO_INIT_DB = False
