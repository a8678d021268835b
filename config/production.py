import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "welfare_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

CYCLE_LENGTH_DAYS = int(os.getenv("CYCLE_LENGTH_DAYS", "14"))
DEFAULT_CACHE_TTL_SECONDS = int(os.getenv("DEFAULT_CACHE_TTL_SECONDS", "300"))
CACHE_TTL_SECONDS = {}
STRICT_AGGREGATION = bool(int(os.getenv("STRICT_AGGREGATION", "0")))
SLOW_REQUEST_MS = float(os.getenv("SLOW_REQUEST_MS", "1000"))
