from datetime import timedelta

from django.utils import timezone
from rest_framework import views, status
from rest_framework.response import Response
import structlog
import uuid

from ..services.queries import due_problems, review_stats, schedule_overview
from ..services.reviews import (
    add_to_review,
    record_review,
    remove_from_review,
    run_with_store_retry,
)
from ..utils.time import to_utc_iso
from .serializers import (
    DueQuerySerializer,
    EnrollInSerializer,
    NowQuerySerializer,
    ReviewInSerializer,
    SchedulingItemSerializer,
)

base_logger = structlog.get_logger()


def _request_logger():
    return base_logger.bind(request_id=str(uuid.uuid4()))


def _render_items(items):
    return SchedulingItemSerializer(items, many=True).data


class ReviewView(views.APIView):
    def post(self, request):
        logger = _request_logger()

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        user_id = s.validated_data["user_id"]
        problem_id = s.validated_data["problem_id"]
        outcome = s.validated_data["outcome"]

        result = run_with_store_retry(record_review, user_id, problem_id, outcome)

        logger.info(
            "review_api_response",
            user_id=user_id,
            problem_id=problem_id,
            outcome=outcome.value,
            new_level=result.new_level,
            due_at=to_utc_iso(result.due_at),
            status=status.HTTP_201_CREATED,
        )

        return Response(
            {
                "problem_id": problem_id,
                "outcome": outcome.value,
                "level_before": result.level_before,
                "new_level": result.new_level,
                "due_at": to_utc_iso(result.due_at),
            },
            status=status.HTTP_201_CREATED,
        )


class ScheduledProblemsView(views.APIView):
    def post(self, request, user_id):
        logger = _request_logger()

        s = EnrollInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        problem_id = s.validated_data["problem_id"]
        initial_level = s.validated_data["initial_level"]

        result = run_with_store_retry(add_to_review, user_id, problem_id, initial_level)

        logger.info(
            "enroll_api_response",
            user_id=user_id,
            problem_id=problem_id,
            level=result.level,
            reactivated=result.reactivated,
            due_at=to_utc_iso(result.due_at),
        )

        return Response(
            {
                "problem_id": problem_id,
                "level": result.level,
                "due_at": to_utc_iso(result.due_at),
            },
            status=status.HTTP_201_CREATED,
        )


class ScheduledProblemView(views.APIView):
    def delete(self, request, user_id, problem_id):
        logger = _request_logger()

        changed = run_with_store_retry(remove_from_review, user_id, problem_id)

        logger.info("remove_api_response", user_id=user_id, problem_id=problem_id, changed=changed)
        return Response(status=status.HTTP_204_NO_CONTENT)


class DueProblemsView(views.APIView):
    def get(self, request, user_id):
        logger = _request_logger()

        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        now = qs.validated_data.get("now") or timezone.now()
        days = qs.validated_data["days"]
        until = now + timedelta(days=days)

        items = due_problems(user_id, now=now, days=days)

        logger.info(
            "due_problems_api_response",
            user_id=user_id,
            until_utc=to_utc_iso(until),
            problem_count=len(items),
        )

        return Response(
            {
                "user_id": user_id,
                "until": to_utc_iso(until),
                "items": _render_items(items),
            }
        )


class ScheduleView(views.APIView):
    def get(self, request, user_id):
        qs = NowQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)

        buckets = schedule_overview(user_id, now=qs.validated_data.get("now"))
        return Response(buckets.as_dict(lambda item: SchedulingItemSerializer(item).data))


class ReviewStatsView(views.APIView):
    def get(self, request, user_id):
        qs = NowQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)

        result = review_stats(user_id, now=qs.validated_data.get("now"))
        return Response(result.as_dict())
