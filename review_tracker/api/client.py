"""
HTTP client for the pretalx REST API.

This module provides the page fetcher used by the paginator: one authenticated
GET per page, with retry logic for transport errors and server errors.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from loguru import logger

from ..config import Settings
from ..exceptions import ConfigError, FetchError


@dataclass(frozen=True)
class PretalxEvent:
    """A pretalx event and the URLs derived from its slug."""

    name: str = "juliacon2023"
    base_url: str = "https://pretalx.com"

    @property
    def _root(self) -> str:
        return self.base_url.rstrip("/")

    @property
    def submissions_url(self) -> str:
        return f"{self._root}/api/events/{self.name}/submissions/"

    @property
    def reviews_url(self) -> str:
        return f"{self._root}/api/events/{self.name}/reviews/"

    def submission_review_url(self, code: str) -> str:
        """Organizer-facing page listing the reviews of one submission."""
        return f"{self._root}/orga/event/{self.name}/submissions/{code}/reviews/"


class PretalxClient:
    """
    HTTP client for the pretalx API.

    The API token is passed in explicitly and attached to the session headers;
    an empty token is rejected before any request is made.
    """

    def __init__(
        self,
        token: str,
        timeout: int = 30,
        max_retries: int = 2,
        backoff: float = 1.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the API client.

        Args:
            token: pretalx API token
            timeout: Request timeout in seconds
            max_retries: Retries for transport errors and 5xx responses
            backoff: Initial wait between retries in seconds, doubled per attempt
            session: Optional pre-built session (mainly for tests)

        Raises:
            ConfigError: If the token is empty
        """
        if not token or not token.strip():
            raise ConfigError("Empty pretalx token, cannot create an API client")

        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff = backoff
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Token {token.strip()}",
            "Accept": "application/json",
        })

    @classmethod
    def from_settings(cls, settings: Settings) -> "PretalxClient":
        """Build a client from settings, failing fast when no token is configured."""
        return cls(
            token=settings.require_token(),
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
        )

    def fetch_page(self, url: str) -> Dict[str, Any]:
        """
        Fetch and decode one page of a paginated endpoint.

        Args:
            url: Absolute URL of the page

        Returns:
            Dict[str, Any]: The decoded JSON page

        Raises:
            FetchError: If the page could not be fetched after all retries
        """
        wait_time = self.backoff

        for attempt in range(self.max_retries + 1):
            try:
                logger.debug(f"GET {url} (attempt {attempt + 1})")
                response = self.session.get(url, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                if attempt < self.max_retries:
                    logger.warning(f"Request failed, retrying in {wait_time}s: {e}")
                    time.sleep(wait_time)
                    wait_time *= 2
                    continue
                raise FetchError(
                    f"Request failed after {self.max_retries} retries: {e}", url=url
                ) from e

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError as e:
                    raise FetchError(
                        "Response body is not valid JSON", url=url, status_code=200
                    ) from e

            if 500 <= response.status_code < 600 and attempt < self.max_retries:
                logger.warning(
                    f"Server error {response.status_code} for {url}, retrying in {wait_time}s"
                )
                time.sleep(wait_time)
                wait_time *= 2
                continue

            logger.warning(f"Failed with status={response.status_code} url={url} body={response.text[:500]}")
            raise FetchError(
                f"HTTP {response.status_code}", url=url, status_code=response.status_code
            )

        raise FetchError(f"Request failed after {self.max_retries} retries", url=url)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "PretalxClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
