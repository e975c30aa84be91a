"""
Models package for the review tracker.

This package contains the typed records produced from raw API payloads.
"""

from .records import VALID_STATES, CoverageStats, ReviewRecord, SubmissionRecord

__all__ = [
    "VALID_STATES",
    "CoverageStats",
    "ReviewRecord",
    "SubmissionRecord",
]
