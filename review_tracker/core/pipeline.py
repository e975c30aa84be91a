"""
Poll-cycle pipeline for the review tracker.

One cycle fetches every submission and review page from scratch, builds the
catalog, joins the reviews onto it and computes the coverage statistics.
Nothing is carried over between cycles.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from loguru import logger

from ..api.client import PretalxClient, PretalxEvent
from ..config import Settings, get_settings
from ..exceptions import FetchError
from ..models.records import CoverageStats, ReviewRecord, SubmissionRecord
from .aggregator import join_reviews
from .coverage import compute_coverage
from .paginator import fetch_all
from .reviews import extract_reviews
from .submissions import build_catalog


@dataclass(frozen=True)
class CycleResult:
    """Everything one poll cycle produced."""

    catalog: Tuple[SubmissionRecord, ...]
    reviews: Tuple[ReviewRecord, ...]
    stats: CoverageStats
    errors: Tuple[FetchError, ...] = field(default_factory=tuple)

    @property
    def complete(self) -> bool:
        """True when every page of both endpoints was fetched."""
        return not self.errors


class ReviewPipeline:
    """
    Runs the fetch, join and coverage steps for one pretalx event.
    """

    def __init__(
        self,
        client: PretalxClient,
        settings: Optional[Settings] = None,
        event: Optional[PretalxEvent] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            client: Authenticated pretalx client used as the page fetcher
            settings: Configuration (defaults to the cached settings)
            event: Event to track (defaults to the configured event)
        """
        self.client = client
        self.settings = settings or get_settings()
        self.event = event or PretalxEvent(
            name=self.settings.event_name,
            base_url=self.settings.pretalx_base_url,
        )

    def fetch_catalog(self) -> Tuple[Tuple[SubmissionRecord, ...], Optional[FetchError]]:
        """Fetch all submissions and build the catalog sorted by title."""
        walk = fetch_all(self.event.submissions_url, self.client.fetch_page)
        catalog = build_catalog(
            walk.results,
            self.event.submission_review_url,
            default_track=self.settings.default_track,
            default_type=self.settings.default_submission_type,
            valid_states=self.settings.valid_states,
        )
        logger.info(f"Fetched {len(walk.results)} submissions, {len(catalog)} in catalog")
        return catalog, walk.error

    def fetch_reviews(self) -> Tuple[Tuple[ReviewRecord, ...], Optional[FetchError]]:
        """Fetch all reviews and keep the scored ones."""
        walk = fetch_all(self.event.reviews_url, self.client.fetch_page)
        reviews = extract_reviews(walk.results)
        logger.info(f"Fetched {len(walk.results)} reviews, {len(reviews)} scored")
        return reviews, walk.error

    def run_cycle(self) -> CycleResult:
        """
        Run a single poll cycle.

        Returns:
            CycleResult with the joined catalog, the reviews, the coverage
            statistics and any fetch errors that made the data incomplete
        """
        cycle_start = time.time()
        errors: List[FetchError] = []

        catalog, error = self.fetch_catalog()
        if error is not None:
            errors.append(error)

        reviews, error = self.fetch_reviews()
        if error is not None:
            errors.append(error)

        catalog = join_reviews(catalog, reviews)
        stats = compute_coverage(
            catalog,
            desired_count=self.settings.desired_reviews,
            track=self.settings.track,
            excluded_types=self.settings.excluded_types,
        )

        logger.info(
            f"Cycle completed in {time.time() - cycle_start:.2f}s: "
            f"{stats.n_proposals_missing}/{stats.n_all} proposals missing reviews"
        )
        for error in errors:
            logger.warning(f"Cycle data is incomplete: {error}")

        return CycleResult(catalog=catalog, reviews=reviews, stats=stats, errors=tuple(errors))
