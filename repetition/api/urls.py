from django.urls import path
from .views import (
    DueProblemsView,
    ReviewStatsView,
    ReviewView,
    ScheduledProblemView,
    ScheduledProblemsView,
    ScheduleView,
)

urlpatterns = [
    path("reviews", ReviewView.as_view(), name="review"),
    path("users/<str:user_id>/scheduled-problems", ScheduledProblemsView.as_view(), name="scheduled-problems"),
    path("users/<str:user_id>/scheduled-problems/<str:problem_id>", ScheduledProblemView.as_view(), name="scheduled-problem"),
    path("users/<str:user_id>/due-problems", DueProblemsView.as_view(), name="due-problems"),
    path("users/<str:user_id>/schedule", ScheduleView.as_view(), name="schedule"),
    path("users/<str:user_id>/review-stats", ReviewStatsView.as_view(), name="review-stats"),
]
