"""
Review extraction.

Caveat: the API never returns reviews on submissions of the account whose
token is used, so those submissions always show zero reviews.
"""

from typing import Any, Dict, Iterable, Tuple

from loguru import logger
from pydantic import ValidationError

from ..exceptions import ParseError
from ..models.records import ReviewRecord


def parse_score(value: Any) -> float:
    """Parse a numeric-string score such as ``"8.00"``."""
    if isinstance(value, bool):
        raise ParseError(f"Invalid review score {value!r}", field="score", value=value)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Invalid review score {value!r}", field="score", value=value) from e


def review_to_record(raw: Dict[str, Any]) -> ReviewRecord:
    """
    Convert a raw review with a non-null score into a ReviewRecord.

    Raises:
        ParseError: If the score is not numeric or the submission code is missing
    """
    score = parse_score(raw["score"])
    submission = raw.get("submission")
    if submission is None:
        raise ParseError("Review is missing 'submission'", field="submission")

    try:
        return ReviewRecord(
            score=score,
            text=raw.get("text") or "",
            submission_code=str(submission),
            reviewer_id=raw.get("user"),
        )
    except ValidationError as e:
        raise ParseError(f"Invalid review: {e}", field="review") from e


def extract_reviews(raw_results: Iterable[Any]) -> Tuple[ReviewRecord, ...]:
    """
    Extract scored reviews from raw review results.

    Reviews without a score are ignored; reviews with a malformed score are
    logged as a data-quality warning and skipped.
    """
    reviews = []
    for raw in raw_results:
        if raw is None:
            continue
        if not isinstance(raw, dict):
            logger.warning(f"Skipping review that is not an object: {raw!r}")
            continue
        if raw.get("score") is None:
            continue
        try:
            reviews.append(review_to_record(raw))
        except ParseError as e:
            logger.warning(f"Skipping review of {raw.get('submission')!r}: {e}")
    return tuple(reviews)
