import os

# memory | file | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "file")
STORE_DIR = os.getenv("STORE_DIR", "var/store")
STORE_NAMESPACE = os.getenv("STORE_NAMESPACE", "")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "roster_ledger"),
}

# If enabled, the MySQL key-value table is created on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

SEED_PATH = os.getenv("SEED_PATH", "data/roster_seed.csv")
SCHEMA_VERSION = os.getenv("SCHEMA_VERSION", "4")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True
