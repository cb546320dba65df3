"""
Google Docs API client.

This module provides a thin, synchronous interface for fetching documents
from the Docs v1 API and converting them into the document model.
"""

from typing import Any, Dict, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError, TransportError
from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from gdoc_extractor.google_docs.parser import parse_document
from gdoc_extractor.models import Document
from gdoc_extractor.utils.errors import (
    DocsAuthenticationError,
    DocsQuotaExceededError,
    DocumentNotFoundError,
    GoogleDocsError,
)
from gdoc_extractor.utils.logging import get_logger, log_performance

logger = get_logger(__name__)

RETRYABLE_STATUSES = {429, 500, 502, 503, 504}

# Network failures below the HTTP layer; token refresh errors are GoogleAuthError
TRANSPORT_ERRORS = (OSError, httplib2.HttpLib2Error, TransportError)


def _is_retryable(error: BaseException) -> bool:
    if isinstance(error, HttpError):
        return error.resp.status in RETRYABLE_STATUSES
    return isinstance(error, TRANSPORT_ERRORS)


class GoogleDocsClient:
    """Client for Google Docs read operations."""

    def __init__(self, auth_manager: Any, service: Optional[Resource] = None) -> None:
        """
        Initialize Google Docs client.

        Args:
            auth_manager: GoogleDocsAuth or ServiceAccountAuth instance
            service: Prebuilt Docs service (skips connect())
        """
        self.auth_manager = auth_manager
        self._service = service

    def connect(self) -> None:
        """
        Connect to the Google Docs API.

        Raises:
            DocsAuthenticationError: If authentication fails
            GoogleDocsError: If the service cannot be built
        """
        if not self.auth_manager.is_authenticated:
            self.auth_manager.authenticate()

        try:
            self._service = build(
                "docs",
                "v1",
                credentials=self.auth_manager.credentials,
                cache_discovery=False,
            )
            logger.info("Connected to Google Docs API")
        except Exception as e:
            logger.error(f"Failed to build Docs service: {e}")
            raise GoogleDocsError(f"Failed to connect to Docs API: {str(e)}") from e

    def ensure_connected(self) -> None:
        """Ensure client is connected to the Docs API."""
        if not self._service:
            raise GoogleDocsError("Not connected to Docs API. Call connect() first.")

    @log_performance
    def get_document(self, document_id: str) -> Document:
        """
        Fetch and parse a document.

        Args:
            document_id: Google Docs document ID

        Returns:
            Parsed document

        Raises:
            DocumentNotFoundError: If the document does not exist or is not shared
            DocsQuotaExceededError: If the API quota is still exhausted after retries
            DocsAuthenticationError: If the credentials cannot be refreshed
            GoogleDocsError: For other API errors
        """
        self.ensure_connected()

        try:
            payload = self._fetch_payload(document_id)
        except HttpError as e:
            status = e.resp.status
            if status == 404:
                raise DocumentNotFoundError(document_id) from e
            if status == 429:
                retry_after = e.resp.get("retry-after")
                raise DocsQuotaExceededError(
                    retry_after=int(retry_after) if retry_after else None
                ) from e
            logger.error(f"Failed to fetch document {document_id}: {e}")
            raise GoogleDocsError(
                f"Failed to fetch document: {str(e)}",
                {"document_id": document_id, "status": status},
            ) from e
        except TRANSPORT_ERRORS as e:
            logger.error(f"Network error fetching document {document_id}: {e}")
            raise GoogleDocsError(
                f"Network error fetching document: {str(e)}",
                {"document_id": document_id},
            ) from e
        except GoogleAuthError as e:
            logger.error(f"Authentication error fetching document {document_id}: {e}")
            raise DocsAuthenticationError(
                f"Failed to authenticate: {str(e)}",
                {"document_id": document_id},
            ) from e

        document = parse_document(payload)
        logger.info(f"Document fetched: {document.title}")
        return document

    @retry(
        retry=retry_if_exception(_is_retryable),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=4, max=10),
        reraise=True,
    )
    def _fetch_payload(self, document_id: str) -> Dict[str, Any]:
        """Fetch the raw document resource with retry logic."""
        return self._service.documents().get(documentId=document_id).execute()


def create_docs_client(auth_manager: Any) -> GoogleDocsClient:
    """Create and connect a Docs client."""
    client = GoogleDocsClient(auth_manager)
    client.connect()
    return client
