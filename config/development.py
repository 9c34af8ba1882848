import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Self-mark window: present until start + LATE, late until end + CLOSE.
SELF_MARK_LATE_MINUTES = int(os.getenv("SELF_MARK_LATE_MINUTES", "15"))
SELF_MARK_CLOSE_MINUTES = int(os.getenv("SELF_MARK_CLOSE_MINUTES", "15"))

# Rate shown when there is nothing to divide by.
FACULTY_EMPTY_RATE = 0
STUDENT_DASHBOARD_EMPTY_RATE = 100

REPORT_PARALLEL_READS = bool(int(os.getenv("REPORT_PARALLEL_READS", "1")))
