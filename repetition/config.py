from django.conf import settings

# Days until the next review, indexed by level (Fibonacci-shaped backoff)
INTERVAL_DAYS = (1, 1, 2, 3, 5, 8, 13, 21)
MAX_LEVEL = 7

WEEK_WINDOW_DAYS = 7
MONTH_WINDOW_DAYS = 30
DEFAULT_DUE_WINDOW_DAYS = 7

DEFAULT_STORE_RETRY_ATTEMPTS = 3
DEFAULT_STORE_RETRY_WAIT = 0.05  # seconds, doubled per attempt
MAX_STORE_RETRY_WAIT = 1.0


def store_retry_attempts() -> int:
    return int(getattr(settings, "REPETITION_STORE_RETRY_ATTEMPTS", DEFAULT_STORE_RETRY_ATTEMPTS))


def store_retry_wait() -> float:
    return float(getattr(settings, "REPETITION_STORE_RETRY_WAIT", DEFAULT_STORE_RETRY_WAIT))
