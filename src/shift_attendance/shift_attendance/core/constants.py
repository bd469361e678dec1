"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

DEFAULT_SHIFT_START = "20:00"
DEFAULT_SHIFT_END = "05:00"
DEFAULT_GRACE_PERIOD_MINUTES = 30
DEFAULT_EARLY_CHECKOUT_RELAXATION_MINUTES = 30
DEFAULT_TIMEZONE = "Asia/Karachi"
DEFAULT_FRIDAY_EXEMPT_CUTOFF = "01:00"

# A single check-in/check-out pair longer than this is treated as clock skew.
MAX_SANE_SHIFT_HOURS = 18
# Used for the hourly rate when the configured shift has zero duration.
FALLBACK_SHIFT_HOURS = 8

WEEKLY_HOURS_THRESHOLD = 40
PAYROLL_DAYS_PER_MONTH = 30
PAID_LEAVES_PER_MONTH = 1
LATE_ALLOWANCE_PER_MONTH = 3

# Cached derived hours are only rewritten when they drift by more than this.
HOURS_TOLERANCE = 0.01

EMPLOYEE_ID_PREFIX = "BS-"

# Progressive monthly tax brackets.
TAX_FREE_THRESHOLD = 50_000
LOWER_BRACKET_LIMIT = 100_000
LOWER_BRACKET_RATE = 0.01
UPPER_BRACKET_BASE_TAX = 500
UPPER_BRACKET_RATE = 0.05

AUTO_ABSENCE_ID_PREFIX = "auto-absence:"

# Keyed store collections.
ATTENDANCE_KEY = "attendance"
USERS_KEY = "users"
PROFILES_KEY = "ess_profiles"
LEAVES_KEY = "leaves"
NOTIFICATIONS_KEY = "notifications"
WFH_KEY = "wfh_requests"

# Absence sweep.
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
DEFAULT_WORKING_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri")
DEFAULT_ABSENCE_ALLOWANCE_PER_MONTH = 0
