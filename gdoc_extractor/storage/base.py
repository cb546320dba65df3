"""
Abstract interfaces for image storage and image download.

The export pass only talks to these interfaces, so the S3 and HTTP
implementations can be swapped for in-memory fakes.
"""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Object storage that images are written to."""

    @abstractmethod
    def put(self, bucket: str, key: str, data: bytes, content_type: str) -> None:
        """
        Write one object.

        Raises:
            StorageUploadError: If the write fails
        """
        pass

    def close(self) -> None:
        """Release the underlying client. Called once at the end of a batch."""
        pass


class ImageFetcher(ABC):
    """Blocking download of image bytes from a source URI."""

    @abstractmethod
    def fetch(self, uri: str) -> bytes:
        """
        Download the bytes behind `uri`.

        Raises:
            ImageFetchError: If the download fails
        """
        pass

    def close(self) -> None:
        pass
