"""Failures the review scheduler reports to its callers.

Every error carries a stable ``code`` tag that the HTTP layer passes through
unchanged, so clients can tell a rejected transition from an applied one.
"""


class SchedulerError(Exception):
    code = "scheduler_error"

    def __init__(self, message: str = "", *, user_id=None, problem_id=None):
        super().__init__(message or self.code)
        self.user_id = user_id
        self.problem_id = problem_id


class InvalidReviewInput(SchedulerError, ValueError):
    """Malformed identifiers, outcome or level; raised before any transaction."""

    code = "invalid_input"


class NotSchedulable(SchedulerError):
    """The problem does not exist or has no topic association."""

    code = "not_schedulable"


class AlreadyScheduled(SchedulerError):
    """An active scheduling item already exists for the pair."""

    code = "already_scheduled"


class TransientStoreError(SchedulerError):
    """The transaction could not complete; nothing was written, retry from scratch."""

    code = "transient_store_error"
