import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from django.db import connection

from practice.models import Problem, Topic
from repetition.data.models import ReviewHistoryEntry, SchedulingItem
from repetition.services.reviews import add_to_review, record_review, run_with_store_retry


def run_concurrently(outcomes, user_id="u1", problem_id="two-sum"):
    barrier = threading.Barrier(len(outcomes))

    def review(outcome):
        try:
            barrier.wait(timeout=10)
            return run_with_store_retry(record_review, user_id, problem_id, outcome)
        finally:
            connection.close()

    with ThreadPoolExecutor(max_workers=len(outcomes)) as pool:
        futures = [pool.submit(review, o) for o in outcomes]
        return [f.result() for f in futures]


@pytest.fixture
def catalog(transactional_db):
    topic = Topic.objects.create(id="arrays", name="Arrays & Hashing")
    Problem.objects.create(id="two-sum", name="Two Sum", topic=topic)


@pytest.mark.django_db(transaction=True)
def test_concurrent_reviews_of_same_pair_are_not_lost(catalog):
    add_to_review("u1", "two-sum", 3)

    results = run_concurrently(["pass", "easy"])

    item = SchedulingItem.objects.get(user_id="u1", problem_id="two-sum")
    # 3 -> 4 -> 6 or 3 -> 5 -> 6; a lost update would leave 4 or 5
    assert item.level == 6
    assert item.history.count() == 3
    assert sorted(r.level_before for r in results) in ([3, 4], [3, 5])


@pytest.mark.django_db(transaction=True)
def test_concurrent_first_reviews_create_a_single_item(catalog):
    results = run_concurrently(["pass"] * 4)

    assert SchedulingItem.objects.filter(user_id="u1", problem_id="two-sum").count() == 1
    item = SchedulingItem.objects.get(user_id="u1", problem_id="two-sum")
    assert item.level == 4
    assert ReviewHistoryEntry.objects.filter(item=item).count() == 4
    assert sorted(r.level_before for r in results) == [0, 1, 2, 3]
    assert sum(r.created for r in results) == 1
