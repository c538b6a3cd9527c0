from datetime import datetime, timedelta

from .enums import Outcome
from ..config import INTERVAL_DAYS, MAX_LEVEL


def clamp_level(level: int) -> int:
    return max(0, min(MAX_LEVEL, int(level)))


def days_for_level(level: int) -> int:
    # Levels past the end of the table keep the longest interval
    index = max(0, min(int(level), len(INTERVAL_DAYS) - 1))
    return INTERVAL_DAYS[index]


def next_level(current_level: int, outcome: Outcome) -> int:
    level = clamp_level(current_level)
    outcome = Outcome(outcome)

    if outcome == Outcome.AGAIN:
        return 0
    if outcome == Outcome.FAIL:
        return clamp_level(level - 1)
    if outcome == Outcome.PASS:
        return clamp_level(level + 1)
    return clamp_level(level + 2)


def next_due_date(new_level: int, anchor: datetime) -> datetime:
    # anchor is the time of the review being recorded, never a later read
    return anchor + timedelta(days=days_for_level(new_level))
