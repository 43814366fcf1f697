# Estimated USD cost of refreshing one platform's metrics
PLATFORM_COSTS: dict[str, float] = {
    "youtube": 0.0,
    "twitter": 0.003,
    "instagram": 0.005,
    "facebook": 0.005,
    "linkedin": 0.004,
    "tiktok": 0.003,
    "spotify": 0.0,
    "apple_podcasts": 0.0,
}
DEFAULT_PLATFORM_COST = 0.005

# Higher value = dispatched sooner by the job queue
BACKGROUND_REFRESH_PRIORITY = 30
MANUAL_REFRESH_PRIORITY = 80

QUEUE_NAMES: dict[str, str] = {
    "refresh": "metrics-refresh",
}

# Arbitrary but fixed key for pg_try_advisory_lock
BACKGROUND_REFRESH_LOCK_ID = 72_410_031

DEFAULT_JOB_TIMEOUT = 900  # 15 minutes

# Budget health thresholds (percent of limit spent)
BUDGET_CRITICAL_PERCENT = 90.0
BUDGET_WARNING_PERCENT = 75.0
