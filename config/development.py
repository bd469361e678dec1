import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# memory | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_attendance"),
}

# Shift window, business-local "HH:MM"
SHIFT_START = os.getenv("SHIFT_START", "20:00")
SHIFT_END = os.getenv("SHIFT_END", "05:00")
GRACE_PERIOD_MINS = int(os.getenv("GRACE_PERIOD_MINS", "30"))
CHECKOUT_EARLY_RELAXATION_MINS = int(os.getenv("CHECKOUT_EARLY_RELAXATION_MINS", "30"))
BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "Asia/Karachi")

FRIDAY_LATE_EXEMPT_EMPLOYEE_IDS = [
    v.strip() for v in os.getenv("FRIDAY_LATE_EXEMPT_EMPLOYEE_IDS", "DABA010").split(",") if v.strip()
]
FRIDAY_LATE_EXEMPT_CUTOFF = os.getenv("FRIDAY_LATE_EXEMPT_CUTOFF", "01:00")

AUTO_CHECKOUT_ENABLED = bool(int(os.getenv("AUTO_CHECKOUT_ENABLED", "0")))
AUTO_CHECKOUT_EXEMPT_ROLES = [
    v.strip() for v in os.getenv("AUTO_CHECKOUT_EXEMPT_ROLES", "EMPLOYEE").split(",") if v.strip()
]

# Days the absence sweep runs for, and paid absences per month.
WORKING_DAYS = [v.strip() for v in os.getenv("WORKING_DAYS", "Mon,Tue,Wed,Thu,Fri").split(",") if v.strip()]
ABSENCE_ALLOWANCE_PER_MONTH = int(os.getenv("ABSENCE_ALLOWANCE_PER_MONTH", "0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True
