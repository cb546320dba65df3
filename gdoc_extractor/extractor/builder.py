"""
Document assembly.

Turns a source document into the article JSON consumed by the renderer
front end:

    {
      "article_title": "...",
      "article_info": "...",
      "article_image": "/api/images/<slug>/<document id>/image_001.jpg",
      "document": [...]
    }
"""

import json
from typing import Any, Dict

from gdoc_extractor.extractor.naming import normalize_title, topic_slug
from gdoc_extractor.extractor.renderer import RenderContext
from gdoc_extractor.extractor.sections import find_introduction, render_sections
from gdoc_extractor.models import Document
from gdoc_extractor.utils.logging import get_logger

logger = get_logger(__name__)

MISSING_INTRODUCTION = "."
MISSING_COVER_IMAGE = ""
JSON_INDENT = 2


class DocumentBuilder:
    """Build the article tree for one document at a time."""

    def build_tree(self, document: Document) -> Dict[str, Any]:
        """
        Build the article tree.

        Args:
            document: Fully fetched source document

        Returns:
            Dict with article_title, article_info, article_image and document
            keys, in that order
        """
        introduction = find_introduction(document.blocks)
        context = RenderContext(
            document_id=document.document_id,
            topic_slug=topic_slug(document.title),
            inline_images=document.inline_images,
        )
        content = render_sections(document.blocks, context, introduction.indices)

        logger.debug(
            f"Rendered {len(content)} nodes from {len(document.blocks)} blocks",
            extra={
                "document_id": document.document_id,
                "images_rendered": context.counter.value,
                "has_introduction": introduction.text is not None,
            },
        )

        return {
            "article_title": normalize_title(document.title),
            "article_info": (
                introduction.text if introduction.text is not None else MISSING_INTRODUCTION
            ),
            "article_image": context.cover_image_url or MISSING_COVER_IMAGE,
            "document": content,
        }

    def to_json(self, document: Document) -> str:
        """Build the article tree and serialize it as indented JSON."""
        return json.dumps(self.build_tree(document), indent=JSON_INDENT, ensure_ascii=False)


def extract_content_as_json(document: Document) -> str:
    """Convenience wrapper around DocumentBuilder.to_json."""
    return DocumentBuilder().to_json(document)
