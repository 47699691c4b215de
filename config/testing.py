import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_test_db"),
    "connect_timeout": 2,
}

RECORD_STORE = "memory"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

ANALYTICS_MAX_WORKERS = 0

DATA_SOURCE = "attendance-calculations"
