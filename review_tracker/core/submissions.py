"""Mapping functions to convert raw pretalx submissions into the submission catalog."""

from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

from loguru import logger
from pydantic import ValidationError

from ..exceptions import ParseError
from ..models.records import VALID_STATES, SubmissionRecord

DEFAULT_TRACK = "JuliaCon"
DEFAULT_SUBMISSION_TYPE = "Talk"


def localized_label(value: Any, default: str) -> str:
    """
    Resolve a pretalx i18n field to its English label.

    Args:
        value: Raw field value, e.g. ``{"en": "JuliaCon"}``, a plain string or None
        default: Label used when the field or its English entry is absent

    Returns:
        The English label, or the default
    """
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        label = value.get("en")
        return label if isinstance(label, str) else default
    return default


def submission_to_record(
    raw: Dict[str, Any],
    review_url_for: Callable[[str], str],
    default_track: str = DEFAULT_TRACK,
    default_type: str = DEFAULT_SUBMISSION_TYPE,
) -> SubmissionRecord:
    """
    Convert a raw submission to a SubmissionRecord.

    Args:
        raw: Submission object from the submissions endpoint
        review_url_for: Builds the organizer review link for a submission code
        default_track: Track label for submissions without a track
        default_type: Type label for submissions without a submission type

    Returns:
        A SubmissionRecord with zero reviews

    Raises:
        ParseError: If a required field is missing or malformed
    """
    for field in ("code", "title", "state"):
        if raw.get(field) is None:
            raise ParseError(f"Submission is missing '{field}'", field=field)

    code = raw["code"]
    state = raw["state"]
    pending_state = raw.get("pending_state")
    if pending_state is None:
        pending_state = state

    try:
        return SubmissionRecord(
            code=code,
            review_url=review_url_for(code),
            title=raw["title"],
            track=localized_label(raw.get("track"), default_track),
            submission_type=localized_label(raw.get("submission_type"), default_type),
            state=state,
            pending_state=pending_state,
        )
    except ValidationError as e:
        raise ParseError(f"Invalid submission {code!r}: {e}", field="submission", value=code) from e


def build_catalog(
    raw_results: Iterable[Any],
    review_url_for: Callable[[str], str],
    default_track: str = DEFAULT_TRACK,
    default_type: str = DEFAULT_SUBMISSION_TYPE,
    valid_states: Optional[Sequence[str]] = None,
) -> Tuple[SubmissionRecord, ...]:
    """
    Build the submission catalog from raw submission results.

    Submissions whose state is not one of ``valid_states`` (e.g. withdrawn)
    are left out. Malformed submissions are logged and skipped.

    Args:
        raw_results: Raw submission objects, in arrival order
        review_url_for: Builds the organizer review link for a submission code
        default_track: Track label for submissions without a track
        default_type: Type label for submissions without a submission type
        valid_states: States to keep (defaults to submitted/accepted/rejected/confirmed)

    Returns:
        Tuple of SubmissionRecords sorted by title
    """
    states = tuple(valid_states) if valid_states is not None else VALID_STATES
    records = []
    skipped = 0

    for raw in raw_results:
        if not isinstance(raw, dict):
            logger.warning(f"Skipping submission that is not an object: {raw!r}")
            continue

        # Only include certain kind of proposals (exclude withdrawn)
        if raw.get("state") not in states:
            skipped += 1
            continue

        try:
            records.append(submission_to_record(raw, review_url_for, default_track, default_type))
        except ParseError as e:
            logger.warning(f"Skipping malformed submission {raw.get('code')!r}: {e}")

    if skipped:
        logger.debug(f"Left out {skipped} submissions in other states")

    return tuple(sorted(records, key=lambda record: record.title))
