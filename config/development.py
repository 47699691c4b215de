import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

# "mysql" or "memory"
RECORD_STORE = os.getenv("RECORD_STORE", "mysql")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# 0 or 1 runs per-student calculations sequentially
ANALYTICS_MAX_WORKERS = int(os.getenv("ANALYTICS_MAX_WORKERS", "0"))

DATA_SOURCE = os.getenv("DATA_SOURCE", "attendance-calculations")
