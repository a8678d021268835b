import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "welfare_test_db"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

CYCLE_LENGTH_DAYS = 14
DEFAULT_CACHE_TTL_SECONDS = 300
CACHE_TTL_SECONDS = {}
STRICT_AGGREGATION = True
SLOW_REQUEST_MS = float(os.getenv("SLOW_REQUEST_MS", "1000"))
