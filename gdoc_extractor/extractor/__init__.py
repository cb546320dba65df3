"""Document tree transformation and image export."""

from gdoc_extractor.extractor.builder import DocumentBuilder, extract_content_as_json
from gdoc_extractor.extractor.export import ImageExporter

__all__ = ["DocumentBuilder", "ImageExporter", "extract_content_as_json"]
