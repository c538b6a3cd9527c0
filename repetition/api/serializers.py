from rest_framework import serializers

from practice.models import Problem, Topic
from ..config import MAX_LEVEL, DEFAULT_DUE_WINDOW_DAYS
from ..data.models import ReviewHistoryEntry, SchedulingItem
from ..domain.enums import LEGACY_REVIEW_OPTIONS, Outcome


class ReviewInSerializer(serializers.Serializer):
    user_id = serializers.CharField(max_length=64)
    problem_id = serializers.CharField(max_length=64)
    outcome = serializers.ChoiceField(choices=[o.value for o in Outcome], required=False)
    # Legacy clients send a boolean plus an optional option label
    was_successful = serializers.BooleanField(required=False)
    review_option = serializers.ChoiceField(
        choices=sorted(LEGACY_REVIEW_OPTIONS), required=False, allow_null=True
    )

    def validate(self, attrs):
        if "outcome" in attrs:
            attrs["outcome"] = Outcome.parse(attrs["outcome"])
        elif "was_successful" in attrs:
            attrs["outcome"] = Outcome.from_legacy(
                attrs["was_successful"], attrs.get("review_option")
            )
        else:
            raise serializers.ValidationError(
                {"outcome": "Provide either outcome or was_successful."}
            )
        return attrs


class EnrollInSerializer(serializers.Serializer):
    problem_id = serializers.CharField(max_length=64)
    initial_level = serializers.IntegerField(min_value=0, max_value=MAX_LEVEL, default=0)


class NowQuerySerializer(serializers.Serializer):
    now = serializers.DateTimeField(required=False)  # ISO-8601


class DueQuerySerializer(NowQuerySerializer):
    days = serializers.IntegerField(min_value=1, max_value=365, default=DEFAULT_DUE_WINDOW_DAYS)


class TopicSerializer(serializers.ModelSerializer):
    class Meta:
        model = Topic
        fields = ["id", "name"]


class ProblemSummarySerializer(serializers.ModelSerializer):
    topic = TopicSerializer(read_only=True)

    class Meta:
        model = Problem
        fields = ["name", "difficulty", "topic"]


class HistoryEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = ReviewHistoryEntry
        fields = ["occurred_at", "outcome", "level_before", "level_after", "is_enrollment"]


class SchedulingItemSerializer(serializers.ModelSerializer):
    # `problem` is attached by repos.attach_problems; None once it leaves the catalog
    problem = ProblemSummarySerializer(read_only=True)
    history = HistoryEntrySerializer(many=True, read_only=True)

    class Meta:
        model = SchedulingItem
        fields = ["problem_id", "problem", "level", "due_at", "last_reviewed_at", "active", "history"]
