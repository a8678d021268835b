"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Everything here can be overridden through the settings modules in ``config``.
"""

DEFAULT_CYCLE_LENGTH_DAYS = 14
DEFAULT_HISTORY_LIMIT = 10
DEFAULT_ACTIVITY_PAGE_SIZE = 50

# Cache TTLs (seconds)
DEFAULT_CACHE_TTL_SECONDS = 5 * 60
EMPLOYEES_TTL_SECONDS = 10 * 60
DASHBOARD_STATS_TTL_SECONDS = 5 * 60
ACTIVITIES_TTL_SECONDS = 15 * 60
EMPLOYEE_HISTORY_TTL_SECONDS = 30 * 60
TRENDS_TTL_SECONDS = 5 * 60
RISK_SCORES_TTL_SECONDS = 3 * 60
PERFORMANCE_TTL_SECONDS = 10 * 60
EXECUTIVE_SUMMARY_TTL_SECONDS = 2 * 60

# Risk scoring
RISK_SCORE_NO_ACTIVITY = 8.0
RISK_SCORE_SEVERE_GAP = 9.0
RISK_SCORE_GAP = 7.0
RISK_SCORE_OVERDUE_HISTORY = 6.0
RISK_SCORE_LOW_COMPLETION = 5.0
RISK_SCORE_BASELINE = 2.0

RISK_SEVERE_GAP_DAYS = 21
RISK_GAP_DAYS = 14
RISK_OVERDUE_HISTORY_LIMIT = 3
RISK_MIN_COMPLETION_RATIO = 0.8

RISK_CRITICAL_THRESHOLD = 8.0
RISK_HIGH_THRESHOLD = 6.0
RISK_MEDIUM_THRESHOLD = 4.0

# Executive summary
PERFORMANCE_WINDOW_DAYS = 30
DASHBOARD_WEEK_DAYS = 7
MAX_CRITICAL_ALERTS = 3
OVERDUE_ALERT_THRESHOLD = 5
TARGET_COMPLETION_RATE = 80
TREND_TOLERANCE_POINTS = 5.0

MIN_TREND_MONTHS = 1
MAX_TREND_MONTHS = 24
DEFAULT_TREND_MONTHS = 6

# Request timing
SLOW_REQUEST_THRESHOLD_MS = 1000.0
MAX_TIMING_SAMPLES = 100
