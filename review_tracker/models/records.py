"""
Typed records built from raw pretalx API payloads.

Raw API pages are untyped JSON. Everything downstream of the extraction step
works with these frozen models instead, so a poll cycle can never leak partially
populated rows into the report.
"""

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field

VALID_STATES: Tuple[str, ...] = ("submitted", "accepted", "rejected", "confirmed")


class SubmissionRecord(BaseModel):
    """A conference proposal, normalized from the submissions endpoint."""

    code: str
    review_url: str
    title: str
    track: str
    submission_type: str
    state: str
    pending_state: str
    review_count: int = Field(default=0, ge=0)
    review_text: str = ""

    model_config = {"frozen": True}


class ReviewRecord(BaseModel):
    """A scored review, normalized from the reviews endpoint."""

    score: float
    text: str = ""
    submission_code: str
    reviewer_id: Optional[Any] = None

    model_config = {"frozen": True}


class CoverageStats(BaseModel):
    """
    Review coverage of the in-scope submissions against a desired review count.

    Percentages are ``None`` when their denominator is zero (no submissions in
    scope, or a desired count of zero); renderers show these as "n/a".
    """

    desired_count: int
    missing_submissions: Tuple[SubmissionRecord, ...] = ()
    n_all: int = 0
    n_proposals_missing: int = 0
    n_reviews_missing: int = 0
    n_total_desired: int = 0
    count_in_bin: Dict[int, int] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def n_proposals_done(self) -> int:
        return self.n_all - self.n_proposals_missing

    @property
    def n_reviews_done(self) -> int:
        return self.n_total_desired - self.n_reviews_missing

    @property
    def proposals_missing_pct(self) -> Optional[float]:
        if self.n_all == 0:
            return None
        return 100.0 * self.n_proposals_missing / self.n_all

    @property
    def reviews_missing_pct(self) -> Optional[float]:
        if self.n_total_desired == 0:
            return None
        return 100.0 * self.n_reviews_missing / self.n_total_desired

    @property
    def proposals_done_pct(self) -> Optional[float]:
        if self.n_all == 0:
            return None
        return 100.0 * (1 - self.n_proposals_missing / self.n_all)

    @property
    def reviews_done_pct(self) -> Optional[float]:
        if self.n_total_desired == 0:
            return None
        return 100.0 * (1 - self.n_reviews_missing / self.n_total_desired)
