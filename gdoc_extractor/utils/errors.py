"""
Custom exceptions for the Google Docs extractor.

This module defines all custom exceptions used throughout the application
for better error handling and debugging.
"""

from typing import Any, Optional


class GDocExtractorException(Exception):
    """Base exception for all extractor-specific errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Google Docs Exceptions
# =============================================================================


class GoogleDocsError(GDocExtractorException):
    """Base exception for Google Docs API operations."""

    pass


class DocsAuthenticationError(GoogleDocsError):
    """Authentication with the Google Docs API failed."""

    pass


class DocsQuotaExceededError(GoogleDocsError):
    """Google Docs API quota exceeded."""

    def __init__(self, retry_after: Optional[int] = None) -> None:
        """Initialize with retry information."""
        message = "Google Docs API quota exceeded"
        details = {}
        if retry_after:
            message += f". Retry after {retry_after} seconds"
            details["retry_after"] = retry_after
        super().__init__(message, details)


class DocumentNotFoundError(GoogleDocsError):
    """Document not found or not shared with the authenticated account."""

    def __init__(self, document_id: str) -> None:
        """Initialize with document ID."""
        message = f"Document with ID '{document_id}' not found in Google Docs"
        super().__init__(message, {"document_id": document_id})


class DocsParseError(GoogleDocsError):
    """The Docs API returned a payload that could not be parsed."""

    pass


# =============================================================================
# Image Export Exceptions
# =============================================================================


class ImageExportError(GDocExtractorException):
    """Base exception for image export failures."""

    pass


class ImageFetchError(ImageExportError):
    """Downloading image bytes from the source URI failed."""

    def __init__(self, uri: str, reason: str) -> None:
        """Initialize with the failing URI."""
        super().__init__(f"Failed to fetch image: {reason}", {"uri": uri})


class StorageUploadError(ImageExportError):
    """Writing an object to blob storage failed."""

    def __init__(self, bucket: str, key: str, reason: str) -> None:
        """Initialize with the target location."""
        super().__init__(
            f"Failed to upload s3://{bucket}/{key}: {reason}",
            {"bucket": bucket, "key": key},
        )


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(GDocExtractorException):
    """Base exception for configuration errors."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Required configuration is missing."""

    def __init__(self, config_name: str) -> None:
        """Initialize with missing config name."""
        message = f"Required configuration '{config_name}' is missing"
        super().__init__(message, {"config_name": config_name})


# =============================================================================
# Output Exceptions
# =============================================================================


class OutputWriteError(GDocExtractorException):
    """Writing the extracted JSON to disk failed."""

    pass
