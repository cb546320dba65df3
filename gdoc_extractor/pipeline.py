"""
Batch extraction pipeline.

Documents are processed one at a time: fetch, render to JSON, write the JSON
file, then upload images. A failure on one document is logged and recorded,
and the batch moves on to the next document.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import BaseModel

from gdoc_extractor.extractor.builder import DocumentBuilder
from gdoc_extractor.extractor.export import ImageExporter
from gdoc_extractor.google_docs.client import GoogleDocsClient
from gdoc_extractor.models import ExportReport
from gdoc_extractor.utils.errors import GDocExtractorException, OutputWriteError
from gdoc_extractor.utils.logging import LogContext, get_logger

logger = get_logger(__name__)


class DocumentResult(BaseModel):
    """Outcome of processing one document."""

    document_id: str
    title: Optional[str] = None
    output_path: Optional[Path] = None
    export: Optional[ExportReport] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def read_document_ids(path: Path) -> List[str]:
    """
    Read document IDs from a file, one per line.

    Blank lines and lines starting with '#' are ignored.
    """
    ids = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            ids.append(line)
    return ids


class ExtractionPipeline:
    """Fetch, render and export a batch of documents."""

    def __init__(
        self,
        docs_client: GoogleDocsClient,
        output_dir: Path,
        exporter: Optional[ImageExporter] = None,
        builder: Optional[DocumentBuilder] = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            docs_client: Connected Google Docs client
            output_dir: Directory receiving one `<document id>.json` per document
            exporter: Image exporter, or None to skip uploads
            builder: Document builder (a default one is created if None)
        """
        self.docs_client = docs_client
        self.output_dir = output_dir
        self.exporter = exporter
        self.builder = builder or DocumentBuilder()

    def process_document(self, document_id: str) -> DocumentResult:
        """
        Process a single document.

        Raises:
            GDocExtractorException: If fetching or writing the document fails
        """
        logger.info("Fetching document...")
        document = self.docs_client.get_document(document_id)

        json_output = self.builder.to_json(document)
        output_path = self.output_dir / f"{document_id}.json"
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            output_path.write_text(json_output, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(
                f"Failed to write {output_path}: {e}", {"document_id": document_id}
            ) from e
        logger.info(f"Extracted JSON written to {output_path}")

        export_report = None
        if self.exporter is not None:
            logger.info("Uploading images to S3...")
            export_report = self.exporter.export(document)

        return DocumentResult(
            document_id=document_id,
            title=document.title,
            output_path=output_path,
            export=export_report,
        )

    def run(self, document_ids: Iterable[str]) -> List[DocumentResult]:
        """
        Process every document, isolating failures per document.

        The exporter's storage and download clients are closed once the batch
        is over.
        """
        results = []
        try:
            for document_id in document_ids:
                with LogContext(document_id=document_id):
                    logger.info(f"Processing Document ID: {document_id}")
                    try:
                        result = self.process_document(document_id)
                    except GDocExtractorException as e:
                        logger.error(f"Error processing document {document_id}: {e}")
                        result = DocumentResult(document_id=document_id, error=str(e))
                    else:
                        logger.info(f"Finished processing {document_id}")
                results.append(result)
        finally:
            self.close()

        logger.info("All documents processed.")
        return results

    def close(self) -> None:
        if self.exporter is not None:
            self.exporter.store.close()
            self.exporter.fetcher.close()
