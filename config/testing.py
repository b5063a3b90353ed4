import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORE_BACKEND = "memory"
STORE_PATH = os.getenv("STORE_PATH", "var/shopclock-test.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shopclock_test"),
}

AUTO_INIT_DB = False

BACKUP_DIR = os.getenv("BACKUP_DIR", "var/test-backups")
AUTO_BACKUP_ON_START = False

DEFAULT_STAFF_NAMES = ("Alice", "Bob", "Charlie")
