from django.utils import timezone
import structlog

from ..config import DEFAULT_DUE_WINDOW_DAYS
from ..data.repos import history_for_user, items_for_user
from ..domain.buckets import due_within, project_buckets, stats

logger = structlog.get_logger()


def due_problems(user_id, now=None, days=DEFAULT_DUE_WINDOW_DAYS):
    now = now or timezone.now()
    items = due_within(items_for_user(user_id), now, days)
    logger.info("due_problems_listed", user_id=str(user_id), days=days, count=len(items))
    return items


def schedule_overview(user_id, now=None):
    now = now or timezone.now()
    buckets = project_buckets(items_for_user(user_id), now)
    logger.info("schedule_projected",
        user_id=str(user_id),
        due_today=len(buckets.due_today),
        due_this_week=len(buckets.due_this_week),
        due_this_month=len(buckets.due_this_month),
        due_later=len(buckets.due_later),
    )
    return buckets


def review_stats(user_id, now=None):
    now = now or timezone.now()
    result = stats(items_for_user(user_id), history_for_user(user_id), now)
    logger.info("review_stats_computed",
        user_id=str(user_id),
        total_reviewed=result.total_reviewed,
        due_now=result.due_now,
    )
    return result
