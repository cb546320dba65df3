"""
HTTP download of image bytes.

Content URIs handed out by the Docs API are short-lived signed URLs, so they
are fetched as-is without extra credentials.
"""

from typing import Optional

import requests
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from gdoc_extractor.storage.base import ImageFetcher
from gdoc_extractor.utils.errors import ImageFetchError
from gdoc_extractor.utils.logging import get_logger

logger = get_logger(__name__)


class HttpImageFetcher(ImageFetcher):
    """Download images with a shared requests session."""

    def __init__(
        self,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            timeout: Per-request timeout in seconds
            session: Optional preconfigured session
        """
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, uri: str) -> bytes:
        try:
            return self._download(uri)
        except requests.RequestException as e:
            raise ImageFetchError(uri, str(e)) from e

    @retry(
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        reraise=True,
    )
    def _download(self, uri: str) -> bytes:
        response = self.session.get(uri, timeout=self.timeout)
        response.raise_for_status()
        logger.debug(f"Fetched {len(response.content)} bytes")
        return response.content

    def close(self) -> None:
        self.session.close()
