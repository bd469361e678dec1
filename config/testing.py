SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"
DB_CONFIG = {}

SHIFT_START = "20:00"
SHIFT_END = "05:00"
GRACE_PERIOD_MINS = 30
CHECKOUT_EARLY_RELAXATION_MINS = 30
BUSINESS_TIMEZONE = "Asia/Karachi"

FRIDAY_LATE_EXEMPT_EMPLOYEE_IDS = ["DABA010"]
FRIDAY_LATE_EXEMPT_CUTOFF = "01:00"

AUTO_CHECKOUT_ENABLED = False
AUTO_CHECKOUT_EXEMPT_ROLES = ["EMPLOYEE"]

WORKING_DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri"]
ABSENCE_ALLOWANCE_PER_MONTH = 0

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True
