from django.db import transaction, IntegrityError

from practice.models import Problem
from .models import SchedulingItem, ReviewHistoryEntry


def is_problem_schedulable(problem_id) -> bool:
    """A problem can enter review only if it exists and belongs to a topic."""
    return Problem.objects.filter(pk=problem_id, topic__isnull=False).exists()


def lock_item(user_id, problem_id):
    """
    Fetch the scheduling row and lock it for update.
    Must be called inside transaction.atomic().
    """
    return (SchedulingItem.objects
            .select_for_update()
            .filter(user_id=user_id, problem_id=problem_id)
            .first())


def get_or_create_item_for_update(user_id, problem_id):
    """
    Lock the scheduling row, creating it at level 0 if missing.
    Returns (item, created). Must be called inside transaction.atomic().
    """
    item = lock_item(user_id, problem_id)
    if item is not None:
        return item, False
    try:
        # Savepoint so a lost unique race does not poison the outer transaction
        with transaction.atomic():
            item = SchedulingItem.objects.create(
                user_id=user_id, problem_id=problem_id, level=0, active=False
            )
    except IntegrityError:
        # A concurrent request created the row first; wait for its lock
        return lock_item(user_id, problem_id), False
    return item, True


def save_item(item, fields):
    item.save(update_fields=[*fields, "updated_at"])


def append_history(item, occurred_at, outcome, level_before, level_after, is_enrollment=False):
    return ReviewHistoryEntry.objects.create(
        item=item,
        occurred_at=occurred_at,
        outcome=outcome,
        level_before=level_before,
        level_after=level_after,
        is_enrollment=is_enrollment,
    )


def attach_problems(items):
    """Set `item.problem` (or None) from the catalog with one query."""
    problems = Problem.objects.select_related("topic").in_bulk(list({i.problem_id for i in items}))
    for item in items:
        item.problem = problems.get(item.problem_id)
    return items


def items_for_user(user_id):
    items = list(SchedulingItem.objects
                 .filter(user_id=user_id)
                 .prefetch_related("history")
                 .order_by("due_at", "id"))
    return attach_problems(items)


def history_for_user(user_id):
    return list(ReviewHistoryEntry.objects.filter(item__user_id=user_id))
