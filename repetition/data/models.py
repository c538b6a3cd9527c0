from django.db import models
from django.utils import timezone

from ..config import MAX_LEVEL
from ..domain.enums import OUTCOME_CHOICES


class SchedulingItem(models.Model):
    user_id = models.CharField(max_length=64)
    problem_id = models.CharField(max_length=64)
    level = models.PositiveSmallIntegerField(default=0)
    last_reviewed_at = models.DateTimeField(null=True, blank=True)
    due_at = models.DateTimeField(null=True, blank=True)  # null = not scheduled
    active = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "scheduling_item"
        constraints = [
            models.UniqueConstraint(
                fields=["user_id", "problem_id"],
                name="uq_scheduling_item_user_problem",
            ),
            models.CheckConstraint(
                condition=models.Q(level__gte=0) & models.Q(level__lte=MAX_LEVEL),
                name="ck_scheduling_item_level_range",
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(active=False)
                    | models.Q(due_at__isnull=False, last_reviewed_at__isnull=False)
                ),
                name="ck_scheduling_item_active_is_scheduled",
            ),
        ]
        indexes = [
            models.Index(fields=["user_id", "active", "due_at"], name="idx_item_user_due"),
        ]

    def __str__(self):
        return f"{self.user_id}/{self.problem_id} L{self.level}"


class ReviewHistoryEntry(models.Model):
    item = models.ForeignKey(
        SchedulingItem, on_delete=models.CASCADE, related_name="history"
    )
    occurred_at = models.DateTimeField()
    outcome = models.CharField(max_length=8, choices=OUTCOME_CHOICES)
    level_before = models.PositiveSmallIntegerField()
    level_after = models.PositiveSmallIntegerField()
    is_enrollment = models.BooleanField(default=False)

    class Meta:
        db_table = "review_history"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["item", "id"], name="idx_history_item"),
        ]

    def save(self, *args, **kwargs):
        # Audit rows are append-only
        if not self._state.adding:
            raise ValueError("Review history entries are immutable")
        super().save(*args, **kwargs)
