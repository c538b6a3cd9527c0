from dataclasses import dataclass
from datetime import datetime

from django.db import transaction, OperationalError
from django.utils import timezone
import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .. import config
from ..data.repos import (
    append_history,
    get_or_create_item_for_update,
    is_problem_schedulable,
    lock_item,
    save_item,
)
from ..domain.enums import Outcome
from ..domain.errors import (
    AlreadyScheduled,
    InvalidReviewInput,
    NotSchedulable,
    SchedulerError,
    TransientStoreError,
)
from ..domain.logic import next_due_date, next_level
from ..utils.time import to_utc_iso

logger = structlog.get_logger()


@dataclass(frozen=True)
class ReviewOutcome:
    item_id: int
    outcome: Outcome
    level_before: int
    new_level: int
    due_at: datetime
    created: bool


@dataclass(frozen=True)
class EnrollmentOutcome:
    item_id: int
    level: int
    due_at: datetime
    reactivated: bool


def _validate_pair(user_id, problem_id):
    if not user_id or not str(user_id).strip():
        raise InvalidReviewInput("user_id is required", user_id=user_id, problem_id=problem_id)
    if not problem_id or not str(problem_id).strip():
        raise InvalidReviewInput("problem_id is required", user_id=user_id, problem_id=problem_id)
    return str(user_id), str(problem_id)


def _ensure_schedulable(user_id, problem_id):
    if not is_problem_schedulable(problem_id):
        raise NotSchedulable(
            f"Problem {problem_id} is missing or has no topic",
            user_id=user_id, problem_id=problem_id,
        )


def _rejected(exc: SchedulerError, operation: str):
    logger.warning("review_rejected",
        operation=operation,
        user_id=exc.user_id,
        problem_id=exc.problem_id,
        error=exc.code,
        detail=str(exc),
    )
    return exc


def record_review(user_id, problem_id, outcome, now=None) -> ReviewOutcome:
    try:
        user_id, problem_id = _validate_pair(user_id, problem_id)
        outcome = Outcome.parse(outcome)
        _ensure_schedulable(user_id, problem_id)
    except SchedulerError as exc:
        raise _rejected(exc, "record_review")

    # One clock reading per call; every timestamp below derives from it
    now = now or timezone.now()
    logger.info("review_received",
        user_id=user_id,
        problem_id=problem_id,
        outcome=outcome.value,
    )

    try:
        with transaction.atomic():
            # Serialize updates per (user, problem)
            item, created = get_or_create_item_for_update(user_id, problem_id)

            level_before = item.level
            level_after = next_level(level_before, outcome)
            due_at = next_due_date(level_after, now)

            item.level = level_after
            item.due_at = due_at
            item.last_reviewed_at = now
            item.active = True
            save_item(item, ["level", "due_at", "last_reviewed_at", "active"])

            append_history(item, now, outcome.value, level_before, level_after)
    except OperationalError as exc:
        logger.warning("store_conflict",
            operation="record_review",
            user_id=user_id,
            problem_id=problem_id,
            error=str(exc),
        )
        raise TransientStoreError(
            "Review could not be recorded, retry the request",
            user_id=user_id, problem_id=problem_id,
        ) from exc

    logger.info("review_recorded",
        user_id=user_id,
        problem_id=problem_id,
        outcome=outcome.value,
        level_before=level_before,
        level_after=level_after,
        created=created,
        due_at=to_utc_iso(due_at),
    )

    return ReviewOutcome(
        item_id=item.pk,
        outcome=outcome,
        level_before=level_before,
        new_level=level_after,
        due_at=due_at,
        created=created,
    )


def add_to_review(user_id, problem_id, initial_level=0, now=None) -> EnrollmentOutcome:
    try:
        user_id, problem_id = _validate_pair(user_id, problem_id)
        try:
            initial_level = int(initial_level)
        except (TypeError, ValueError):
            raise InvalidReviewInput(
                f"initial_level must be an integer, got {initial_level!r}",
                user_id=user_id, problem_id=problem_id,
            ) from None
        if not 0 <= initial_level <= config.MAX_LEVEL:
            raise InvalidReviewInput(
                f"initial_level must be between 0 and {config.MAX_LEVEL}",
                user_id=user_id, problem_id=problem_id,
            )
        _ensure_schedulable(user_id, problem_id)
    except SchedulerError as exc:
        raise _rejected(exc, "add_to_review")

    now = now or timezone.now()
    due_at = next_due_date(initial_level, now)

    try:
        with transaction.atomic():
            item, created = get_or_create_item_for_update(user_id, problem_id)
            if item.active:
                raise AlreadyScheduled(
                    f"Problem {problem_id} is already in review",
                    user_id=user_id, problem_id=problem_id,
                )

            item.level = initial_level
            item.due_at = due_at
            item.last_reviewed_at = now
            item.active = True
            save_item(item, ["level", "due_at", "last_reviewed_at", "active"])

            # Entering rotation counts as the first review
            append_history(item, now, Outcome.PASS.value, initial_level, initial_level,
                           is_enrollment=True)
    except AlreadyScheduled as exc:
        raise _rejected(exc, "add_to_review")
    except OperationalError as exc:
        logger.warning("store_conflict",
            operation="add_to_review",
            user_id=user_id,
            problem_id=problem_id,
            error=str(exc),
        )
        raise TransientStoreError(
            "Problem could not be added to review, retry the request",
            user_id=user_id, problem_id=problem_id,
        ) from exc

    logger.info("enrolled",
        user_id=user_id,
        problem_id=problem_id,
        level=initial_level,
        reactivated=not created,
        due_at=to_utc_iso(due_at),
    )
    return EnrollmentOutcome(item_id=item.pk, level=initial_level, due_at=due_at,
                             reactivated=not created)


def remove_from_review(user_id, problem_id) -> bool:
    """Take the pair out of rotation. Returns False when there was nothing to do."""
    try:
        user_id, problem_id = _validate_pair(user_id, problem_id)
    except SchedulerError as exc:
        raise _rejected(exc, "remove_from_review")

    try:
        with transaction.atomic():
            item = lock_item(user_id, problem_id)
            if item is None or not item.active:
                changed = False
            else:
                item.active = False
                item.due_at = None
                save_item(item, ["active", "due_at"])
                changed = True
    except OperationalError as exc:
        logger.warning("store_conflict",
            operation="remove_from_review",
            user_id=user_id,
            problem_id=problem_id,
            error=str(exc),
        )
        raise TransientStoreError(
            "Problem could not be removed from review, retry the request",
            user_id=user_id, problem_id=problem_id,
        ) from exc

    logger.info("removed", user_id=user_id, problem_id=problem_id, changed=changed)
    return changed


def _log_retry(retry_state):
    exc = retry_state.outcome.exception()
    logger.warning("store_retry",
        attempt=retry_state.attempt_number,
        user_id=getattr(exc, "user_id", None),
        problem_id=getattr(exc, "problem_id", None),
        error=str(exc),
    )


def run_with_store_retry(fn, *args, **kwargs):
    """
    Call a scheduler operation, re-running it from scratch on TransientStoreError.
    Precondition failures are never retried.
    """
    wait = config.store_retry_wait()
    retryer = Retrying(
        stop=stop_after_attempt(config.store_retry_attempts()),
        wait=wait_exponential(multiplier=wait, min=wait, max=config.MAX_STORE_RETRY_WAIT),
        retry=retry_if_exception_type(TransientStoreError),
        before_sleep=_log_retry,
        reraise=True,
    )
    return retryer(fn, *args, **kwargs)
