from datetime import datetime, timedelta, timezone

import pytest

from repetition.config import INTERVAL_DAYS, MAX_LEVEL
from repetition.domain.enums import Outcome
from repetition.domain.errors import InvalidReviewInput
from repetition.domain.logic import clamp_level, days_for_level, next_due_date, next_level

ANCHOR = datetime(2026, 1, 31, 23, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize("level,days", [(0, 1), (1, 1), (2, 2), (3, 3), (4, 5), (5, 8), (6, 13), (7, 21)])
def test_interval_table(level, days):
    assert days_for_level(level) == days


def test_interval_clamps_past_end_of_table():
    assert days_for_level(8) == 21
    assert days_for_level(100) == 21


def test_interval_clamps_negative_level():
    assert days_for_level(-3) == INTERVAL_DAYS[0]


@pytest.mark.parametrize(
    "level,outcome,expected",
    [
        (3, Outcome.AGAIN, 0),
        (3, Outcome.FAIL, 2),
        (3, Outcome.PASS, 4),
        (3, Outcome.EASY, 5),
        (7, Outcome.EASY, 7),
        (6, Outcome.EASY, 7),
        (7, Outcome.PASS, 7),
        (0, Outcome.FAIL, 0),
        (0, Outcome.AGAIN, 0),
    ],
)
def test_transition_table(level, outcome, expected):
    assert next_level(level, outcome) == expected


def test_transition_accepts_string_values():
    assert next_level(3, "easy") == 5
    assert next_level(3, "fail") == 2


def test_transition_never_leaves_range():
    for level in range(-2, MAX_LEVEL + 3):
        for outcome in Outcome:
            assert 0 <= next_level(level, outcome) <= MAX_LEVEL


def test_out_of_range_input_is_clamped_first():
    assert next_level(12, Outcome.FAIL) == MAX_LEVEL - 1
    assert next_level(-4, Outcome.PASS) == 1
    assert clamp_level(99) == MAX_LEVEL


def test_pure_functions_are_deterministic():
    results = {(next_level(4, Outcome.PASS), next_due_date(5, ANCHOR)) for _ in range(5)}
    assert results == {(5, ANCHOR + timedelta(days=8))}


def test_due_date_is_anchored_on_review_time():
    assert next_due_date(0, ANCHOR) == ANCHOR + timedelta(days=1)
    assert next_due_date(4, ANCHOR) == datetime(2026, 2, 5, 23, 30, tzinfo=timezone.utc)
    assert next_due_date(100, ANCHOR) == ANCHOR + timedelta(days=21)


class TestOutcomeParsing:
    def test_parse_is_case_insensitive(self):
        assert Outcome.parse(" PASS ") is Outcome.PASS
        assert Outcome.parse(Outcome.EASY) is Outcome.EASY

    def test_parse_rejects_unknown_values(self):
        with pytest.raises(InvalidReviewInput):
            Outcome.parse("hard")

    @pytest.mark.parametrize(
        "was_successful,option,expected",
        [
            (True, None, Outcome.PASS),
            (False, None, Outcome.FAIL),
            (True, "easy", Outcome.EASY),
            (False, "difficult", Outcome.FAIL),
            (False, "forgot", Outcome.AGAIN),
        ],
    )
    def test_legacy_mapping(self, was_successful, option, expected):
        assert Outcome.from_legacy(was_successful, option) is expected

    def test_legacy_mapping_rejects_unknown_option(self):
        with pytest.raises(InvalidReviewInput):
            Outcome.from_legacy(True, "added-to-repetition")
