from enum import Enum

from .errors import InvalidReviewInput


class Outcome(str, Enum):
    AGAIN = "again"  # forgot entirely
    FAIL = "fail"
    PASS = "pass"
    EASY = "easy"

    @classmethod
    def parse(cls, value) -> "Outcome":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidReviewInput(f"Unrecognized outcome: {value!r}") from None

    @classmethod
    def from_legacy(cls, was_successful: bool, review_option: str | None = None) -> "Outcome":
        """Translate the older `wasSuccessful` / `reviewOption` pair."""
        if review_option:
            try:
                return LEGACY_REVIEW_OPTIONS[review_option]
            except KeyError:
                raise InvalidReviewInput(
                    f"Unrecognized review option: {review_option!r}"
                ) from None
        return cls.PASS if was_successful else cls.FAIL


LEGACY_REVIEW_OPTIONS = {
    "forgot": Outcome.AGAIN,
    "difficult": Outcome.FAIL,
    "easy": Outcome.EASY,
}

OUTCOME_CHOICES = [(o.value, o.value.capitalize()) for o in Outcome]
