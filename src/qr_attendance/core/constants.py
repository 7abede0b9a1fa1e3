"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_ROTATION_SECONDS = 10
DEFAULT_CHECK_IN_TIME = "09:00"
DEFAULT_CHECK_OUT_TIME = "17:00"
DEFAULT_GRACE_MINUTES = 0

# 32 bytes -> 256 bits of entropy per token secret
TOKEN_SECRET_BYTES = 32
PAYLOAD_SEPARATOR = "|"

DEFAULT_DB_TIMEOUT_SECONDS = 5
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_REPORT_DAYS = 7
MIN_PASSWORD_LENGTH = 6
DEFAULT_LOG_PAGE_SIZE = 25
MIN_PAYROLL_YEAR = 2000
