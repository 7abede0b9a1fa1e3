import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "qr_attendance"),
    "connection_timeout": int(os.getenv("DB_TIMEOUT", "5")),
    "statement_timeout": int(os.getenv("DB_STATEMENT_TIMEOUT", "5")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Rotate QR tokens in a background thread while the app runs
QR_AUTO_ROTATE = bool(int(os.getenv("QR_AUTO_ROTATE", "1")))
DEFAULT_TOKEN_ROTATION_SECONDS = int(os.getenv("TOKEN_ROTATION_SECONDS", "10"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
