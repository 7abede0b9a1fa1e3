import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "qr_attendance_test"),
    "connection_timeout": 2,
    "statement_timeout": 2,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

QR_AUTO_ROTATE = False
DEFAULT_TOKEN_ROTATION_SECONDS = 10

AUTO_INIT_DB = False
