STORE_BACKEND = "memory"
STORE_DIR = ""
STORE_NAMESPACE = "test"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "roster_ledger_test",
}

AUTO_INIT_DB = False

SEED_PATH = ""
SCHEMA_VERSION = "4"

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True
