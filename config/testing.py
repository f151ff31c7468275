import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "mom_portal_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

JWT_SECRET = "test-jwt-secret"
JWT_EXPIRES_HOURS = 1

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads/test-documents")
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

RATE_LIMIT_MAX_REQUESTS = 1000
RATE_LIMIT_WINDOW_SECONDS = 60

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
