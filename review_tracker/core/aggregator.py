"""Join reviews onto the submission catalog."""

from typing import Dict, List, Sequence, Tuple

from loguru import logger

from ..models.records import ReviewRecord, SubmissionRecord


def join_reviews(
    catalog: Sequence[SubmissionRecord],
    reviews: Sequence[ReviewRecord],
) -> Tuple[SubmissionRecord, ...]:
    """
    Update review status on the passed submissions.

    Every review whose submission code is in the catalog adds one to that
    submission's review count and appends its text plus a newline. Reviews of
    unknown submissions are dropped. If the catalog holds duplicate codes only
    the first one receives credit.

    Args:
        catalog: Submissions in catalog order
        reviews: Scored reviews

    Returns:
        A new tuple of submissions, in the same order, with review counts and texts filled in
    """
    index: Dict[str, int] = {}
    for position, submission in enumerate(catalog):
        index.setdefault(submission.code, position)

    counts = [0] * len(catalog)
    texts: List[List[str]] = [[] for _ in catalog]
    unmatched = 0

    for review in reviews:
        position = index.get(review.submission_code)
        if position is None:
            unmatched += 1
            continue
        counts[position] += 1
        texts[position].append(review.text + "\n")

    if unmatched:
        logger.debug(f"{unmatched} reviews reference submissions outside the catalog")

    return tuple(
        submission.model_copy(update={
            "review_count": counts[position],
            "review_text": "".join(texts[position]),
        })
        for position, submission in enumerate(catalog)
    )
