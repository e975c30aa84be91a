"""Project-level pytest configuration and shared fixtures."""

from typing import Any, Dict, List, Optional

import pytest

from review_tracker.api.client import PretalxEvent
from review_tracker.config import Settings
from review_tracker.exceptions import FetchError

EVENT = PretalxEvent(name="testcon", base_url="https://pretalx.example.org")


class FakeFetcher:
    """Page fetcher serving canned pages by URL and recording every call."""

    def __init__(self, pages: Dict[str, Any], failures: Optional[Dict[str, FetchError]] = None):
        self.pages = pages
        self.failures = failures or {}
        self.calls: List[str] = []

    def __call__(self, url: str) -> Dict[str, Any]:
        self.calls.append(url)
        if url in self.failures:
            raise self.failures[url]
        return self.pages[url]

    # Mirrors PretalxClient so the fetcher can stand in for a client
    def fetch_page(self, url: str) -> Dict[str, Any]:
        return self(url)

    def close(self) -> None:
        pass


def make_submission(code, title=None, state="submitted", track=None, submission_type=None, **extra):
    """Raw submission object as returned by the submissions endpoint."""
    raw = {
        "code": code,
        "title": title if title is not None else f"Talk {code}",
        "state": state,
        "pending_state": None,
        "track": {"en": track} if track else None,
        "submission_type": {"en": submission_type} if submission_type else None,
    }
    raw.update(extra)
    return raw


def make_review(submission, score="8.00", text="", user="reviewer1"):
    """Raw review object as returned by the reviews endpoint."""
    return {"submission": submission, "score": score, "text": text, "user": user}


def paginate(base_url: str, results: List[Any], page_size: int = 2) -> Dict[str, Any]:
    """Split results into linked pages keyed by URL, starting at base_url."""
    pages = {}
    chunks = [results[i:i + page_size] for i in range(0, len(results), page_size)] or [[]]
    for index, chunk in enumerate(chunks):
        url = base_url if index == 0 else f"{base_url}?page={index + 1}"
        next_url = f"{base_url}?page={index + 2}" if index + 1 < len(chunks) else None
        pages[url] = {"count": len(results), "next": next_url, "previous": None, "results": chunk}
    return pages


@pytest.fixture
def event() -> PretalxEvent:
    return EVENT


@pytest.fixture
def settings() -> Settings:
    """Settings for the test event that ignore any local .env file."""
    return Settings(
        _env_file=None,
        pretalx_token="test-token",
        pretalx_base_url=EVENT.base_url,
        event_name=EVENT.name,
        desired_reviews=3,
        track="JuliaCon",
        poll_interval=1,
    )


@pytest.fixture
def api_pages() -> Dict[str, Any]:
    """Submission and review pages for a small event, spread over several pages."""
    submissions = [
        make_submission("ZZZ", title="Zebra tooling"),
        make_submission("AAA", title="Arrays everywhere", state="accepted"),
        make_submission("WDR", title="Withdrawn talk", state="withdrawn"),
        make_submission("KEY", title="Opening keynote", submission_type="Keynote"),
        make_submission("MMM", title="Macros in depth", state="confirmed"),
        make_submission("OTH", title="Other track talk", track="Workshop"),
    ]
    reviews = [
        make_review("AAA", "8.00", "great"),
        make_review("AAA", "7.00", "good"),
        make_review("AAA", "6.00", "fine"),
        make_review("ZZZ", "5.00", "meh"),
        make_review("ZZZ", None, "draft"),
        make_review("UNKNOWN", "9.00", "orphan"),
    ]
    pages = {}
    pages.update(paginate(EVENT.submissions_url, submissions, page_size=4))
    pages.update(paginate(EVENT.reviews_url, reviews, page_size=4))
    return pages
