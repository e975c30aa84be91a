"""
Core pipeline components: pagination, catalog building, review joining and coverage.
"""

from .aggregator import join_reviews
from .coverage import compute_coverage
from .paginator import PageWalk, fetch_all
from .pipeline import CycleResult, ReviewPipeline
from .reviews import extract_reviews
from .scheduler import ReportScheduler
from .submissions import build_catalog

__all__ = [
    "CycleResult",
    "PageWalk",
    "ReportScheduler",
    "ReviewPipeline",
    "build_catalog",
    "compute_coverage",
    "extract_reviews",
    "fetch_all",
    "join_reviews",
]
