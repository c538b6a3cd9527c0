"""Read-side projections over scheduling state.

These functions never touch the database and never raise on partial data:
an item without a due date or level, or a history entry without a
timestamp, simply does not contribute to the affected counts.

Bucket boundaries, for a fixed ``now``::

    due_today       due_at <= now
    due_this_week   now < due_at < now + 7d
    due_this_month  now + 7d <= due_at < now + 30d
    due_later       due_at >= now + 30d
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable

from ..config import MONTH_WINDOW_DAYS, WEEK_WINDOW_DAYS, DEFAULT_DUE_WINDOW_DAYS
from ..utils.time import start_of_day, start_of_month, start_of_week, to_utc


@dataclass
class Buckets:
    due_today: list = field(default_factory=list)
    due_this_week: list = field(default_factory=list)
    due_this_month: list = field(default_factory=list)
    due_later: list = field(default_factory=list)

    def all(self) -> list:
        return self.due_today + self.due_this_week + self.due_this_month + self.due_later

    def as_dict(self, render=lambda item: item) -> dict:
        return {
            "due_today": [render(i) for i in self.due_today],
            "due_this_week": [render(i) for i in self.due_this_week],
            "due_this_month": [render(i) for i in self.due_this_month],
            "due_later": [render(i) for i in self.due_later],
            "all": [render(i) for i in self.all()],
        }


@dataclass
class ReviewStats:
    by_level: dict = field(default_factory=dict)
    due_now: int = 0
    due_this_week: int = 0
    total_reviewed: int = 0
    completed_today: int = 0
    completed_this_week: int = 0
    completed_this_month: int = 0

    def as_dict(self) -> dict:
        return {
            "by_level": {str(level): count for level, count in sorted(self.by_level.items())},
            "due_now": self.due_now,
            "due_this_week": self.due_this_week,
            "total_reviewed": self.total_reviewed,
            "completed_today": self.completed_today,
            "completed_this_week": self.completed_this_week,
            "completed_this_month": self.completed_this_month,
        }


def _due_at(item):
    due_at = getattr(item, "due_at", None)
    return to_utc(due_at) if due_at is not None else None


def _scheduled(items: Iterable) -> list:
    """Active items that have a due date, earliest first."""
    scheduled = [i for i in items if getattr(i, "active", False) and _due_at(i) is not None]
    scheduled.sort(key=_due_at)
    return scheduled


def bucket_for(due_at: datetime, now: datetime) -> str:
    due_at, now = to_utc(due_at), to_utc(now)
    if due_at <= now:
        return "due_today"
    if due_at < now + timedelta(days=WEEK_WINDOW_DAYS):
        return "due_this_week"
    if due_at < now + timedelta(days=MONTH_WINDOW_DAYS):
        return "due_this_month"
    return "due_later"


def project_buckets(items: Iterable, now: datetime) -> Buckets:
    buckets = Buckets()
    for item in _scheduled(items):
        getattr(buckets, bucket_for(_due_at(item), now)).append(item)
    return buckets


def due_within(items: Iterable, now: datetime, days: int = DEFAULT_DUE_WINDOW_DAYS) -> list:
    until = to_utc(now) + timedelta(days=days)
    return [i for i in _scheduled(items) if _due_at(i) <= until]


def stats(items: Iterable, history: Iterable, now: datetime) -> ReviewStats:
    result = ReviewStats()

    levels = Counter()
    for item in items:
        if not getattr(item, "active", False):
            continue
        level = getattr(item, "level", None)
        if level is not None:
            levels[level] += 1
        due_at = _due_at(item)
        if due_at is None:
            continue
        bucket = bucket_for(due_at, now)
        if bucket == "due_today":
            result.due_now += 1
        elif bucket == "due_this_week":
            result.due_this_week += 1
    result.by_level = dict(levels)

    today, week, month = start_of_day(now), start_of_week(now), start_of_month(now)
    for entry in history:
        result.total_reviewed += 1
        occurred_at = getattr(entry, "occurred_at", None)
        if occurred_at is None:
            continue
        occurred_at = to_utc(occurred_at)
        if occurred_at >= today:
            result.completed_today += 1
        if occurred_at >= week:
            result.completed_this_week += 1
        if occurred_at >= month:
            result.completed_this_month += 1

    return result
