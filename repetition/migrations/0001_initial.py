import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SchedulingItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_id", models.CharField(max_length=64)),
                ("problem_id", models.CharField(max_length=64)),
                ("level", models.PositiveSmallIntegerField(default=0)),
                ("last_reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("due_at", models.DateTimeField(blank=True, null=True)),
                ("active", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "scheduling_item",
                "indexes": [
                    models.Index(fields=["user_id", "active", "due_at"], name="idx_item_user_due"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user_id", "problem_id"),
                        name="uq_scheduling_item_user_problem",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(level__gte=0) & models.Q(level__lte=7),
                        name="ck_scheduling_item_level_range",
                    ),
                    models.CheckConstraint(
                        condition=(
                            models.Q(active=False)
                            | models.Q(due_at__isnull=False, last_reviewed_at__isnull=False)
                        ),
                        name="ck_scheduling_item_active_is_scheduled",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ReviewHistoryEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("occurred_at", models.DateTimeField()),
                (
                    "outcome",
                    models.CharField(
                        choices=[("again", "Again"), ("fail", "Fail"), ("pass", "Pass"), ("easy", "Easy")],
                        max_length=8,
                    ),
                ),
                ("level_before", models.PositiveSmallIntegerField()),
                ("level_after", models.PositiveSmallIntegerField()),
                ("is_enrollment", models.BooleanField(default=False)),
                (
                    "item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="history",
                        to="repetition.schedulingitem",
                    ),
                ),
            ],
            options={
                "db_table": "review_history",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["item", "id"], name="idx_history_item"),
                ],
            },
        ),
    ]
