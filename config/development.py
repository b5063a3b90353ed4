import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# file | mysql | memory
STORE_BACKEND = os.getenv("STORE_BACKEND", "file")
STORE_PATH = os.getenv("STORE_PATH", "var/shopclock.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shopclock"),
}

# If enabled with the mysql backend, the kv_store table is created on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

BACKUP_DIR = os.getenv("BACKUP_DIR", "backups")
AUTO_BACKUP_ON_START = bool(int(os.getenv("AUTO_BACKUP_ON_START", "1")))

DEFAULT_STAFF_NAMES = ("Alice", "Bob", "Charlie")
