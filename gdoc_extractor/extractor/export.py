"""
Image export pass.

Uploads every image of a document to blob storage at the key the rendered
JSON points to. Images are numbered over the whole unmodified tree, so when
the Introduction block holds an image the numbering here runs one ahead of
the render pass for every later image. That divergence is a known
limitation and is kept as is.
"""

from gdoc_extractor.extractor.images import collect_images
from gdoc_extractor.extractor.naming import image_key, topic_slug
from gdoc_extractor.models import Document, ExportReport, ImageUploadResult
from gdoc_extractor.storage.base import BlobStore, ImageFetcher
from gdoc_extractor.utils.errors import ImageExportError
from gdoc_extractor.utils.logging import LogContext, get_logger, log_performance

logger = get_logger(__name__)


class ImageExporter:
    """Copy document images from their source URIs into object storage."""

    def __init__(self, store: BlobStore, fetcher: ImageFetcher, bucket: str) -> None:
        """
        Initialize the exporter.

        Args:
            store: Destination object storage
            fetcher: Downloader for image source URIs
            bucket: Destination bucket name
        """
        self.store = store
        self.fetcher = fetcher
        self.bucket = bucket

    @log_performance
    def export(self, document: Document) -> ExportReport:
        """
        Upload all images of a document.

        A failed download or upload is logged and recorded in the report;
        the remaining images are still processed.

        Args:
            document: Source document

        Returns:
            Per-image outcome
        """
        slug = topic_slug(document.title)
        images = collect_images(document.blocks, document.inline_images)
        report = ExportReport(document_id=document.document_id, bucket=self.bucket)

        logger.info(f"Found {len(images)} images to process for document: {document.title}")

        for discovered in images:
            key = image_key(slug, document.document_id, discovered.sequence)
            result = ImageUploadResult(
                sequence=discovered.sequence,
                object_id=discovered.image.object_id,
                key=key,
            )

            with LogContext(image_key=key):
                uri = discovered.image.content_uri
                if not uri:
                    result.error = "Image has no content URI"
                    logger.warning(f"Skipping image {key}: no content URI")
                    report.results.append(result)
                    continue

                try:
                    data = self.fetcher.fetch(uri)
                    self.store.put(self.bucket, key, data, discovered.image.content_type)
                except ImageExportError as e:
                    result.error = str(e)
                    logger.error(f"Failed to process image {key}. Error: {e}")
                else:
                    result.uploaded = True
                    result.size_bytes = len(data)
                    logger.info(f"Successfully uploaded to s3://{self.bucket}/{key}")

            report.results.append(result)

        return report
