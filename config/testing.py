import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

SELF_MARK_LATE_MINUTES = 15
SELF_MARK_CLOSE_MINUTES = 15

FACULTY_EMPTY_RATE = 0
STUDENT_DASHBOARD_EMPTY_RATE = 100

# Sequential reads keep test failures deterministic.
REPORT_PARALLEL_READS = False
