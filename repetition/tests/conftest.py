from datetime import datetime, timezone

import pytest

from practice.models import Problem, Topic


@pytest.fixture(autouse=True)
def no_retry_wait(settings):
    settings.REPETITION_STORE_RETRY_WAIT = 0


@pytest.fixture
def now():
    return datetime(2026, 3, 4, 12, 0, tzinfo=timezone.utc)  # a Wednesday


@pytest.fixture
def topic(db):
    return Topic.objects.create(id="arrays", name="Arrays & Hashing")


@pytest.fixture
def problem(topic):
    return Problem.objects.create(id="two-sum", name="Two Sum", difficulty="EASY", topic=topic)


@pytest.fixture
def other_problem(topic):
    return Problem.objects.create(id="group-anagrams", name="Group Anagrams", topic=topic)


@pytest.fixture
def orphan_problem(db):
    """A problem with no topic cannot enter review."""
    return Problem.objects.create(id="big-o-notation", name="Big-O Notation Primer")
