"""
Review coverage statistics.

Computes, for the submissions of one track, how many proposals and how many
individual reviews are still missing to reach the desired review count.
"""

from typing import Iterable, Sequence

import pandas as pd
from loguru import logger

from ..models.records import CoverageStats, SubmissionRecord

CATALOG_COLUMNS = list(SubmissionRecord.model_fields)


def catalog_frame(catalog: Sequence[SubmissionRecord]) -> pd.DataFrame:
    """Convert the catalog to a DataFrame whose index is the catalog position."""
    return pd.DataFrame(
        [submission.model_dump() for submission in catalog],
        columns=CATALOG_COLUMNS,
    )


def compute_coverage(
    catalog: Sequence[SubmissionRecord],
    desired_count: int = 3,
    track: str = "JuliaCon",
    excluded_types: Iterable[str] = (),
) -> CoverageStats:
    """
    Compute review coverage for one track.

    Args:
        catalog: Submissions with review counts filled in
        desired_count: Number of reviews every proposal should receive
        track: Track whose submissions are counted
        excluded_types: Submission types that are not reviewed

    Returns:
        CoverageStats with the under-reviewed submissions sorted by review count

    Raises:
        ValueError: If desired_count is negative
    """
    if desired_count < 0:
        raise ValueError(f"desired_count must not be negative, got {desired_count}")

    df = catalog_frame(catalog)
    in_scope = df[(df["track"] == track) & ~df["submission_type"].isin(list(excluded_types))]
    n_all = len(in_scope)
    n_total_desired = desired_count * n_all

    missing = in_scope[in_scope["review_count"] < desired_count]
    bin_counts = missing["review_count"].value_counts()

    count_in_bin = {}
    n_reviews_missing = 0
    for nbin in range(desired_count):
        count = int(bin_counts.get(nbin, 0))
        count_in_bin[nbin] = count
        n_reviews_missing += count * (desired_count - nbin)

    missing = missing.sort_values("review_count", kind="stable")
    missing_submissions = tuple(catalog[position] for position in missing.index)

    if n_all == 0:
        logger.warning(f"No submissions in track {track!r}, coverage is undefined")

    return CoverageStats(
        desired_count=desired_count,
        missing_submissions=missing_submissions,
        n_all=n_all,
        n_proposals_missing=len(missing_submissions),
        n_reviews_missing=n_reviews_missing,
        n_total_desired=n_total_desired,
        count_in_bin=count_in_bin,
    )
