"""
Paragraph and table rendering.

Each block becomes a plain dict ready for JSON serialization. Inline images
are numbered through the render context as they are visited, and image #1 is
lifted out of the body to become the document cover.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from gdoc_extractor.extractor.images import ImageCounter
from gdoc_extractor.extractor.naming import image_url
from gdoc_extractor.extractor.styles import normalize_text_style
from gdoc_extractor.models import (
    Block,
    ImageRef,
    InlineImage,
    Paragraph,
    Table,
    TextRun,
)

Node = Dict[str, Any]

COVER_IMAGE_SEQUENCE = 1


@dataclass
class RenderContext:
    """State shared by one render invocation over one document."""

    document_id: str
    topic_slug: str
    inline_images: Mapping[str, InlineImage]
    counter: ImageCounter = field(default_factory=ImageCounter)
    cover_image_url: Optional[str] = None


def paragraph_text(paragraph: Paragraph) -> str:
    """Visible text of a paragraph with line breaks flattened, trimmed."""
    text = raw_paragraph_text(paragraph)
    return text.replace("\n", " ").replace("\v", " ").strip()


def raw_paragraph_text(paragraph: Paragraph) -> str:
    """Concatenated text runs of a paragraph, untouched."""
    return "".join(run.content for run in paragraph.runs if isinstance(run, TextRun))


def render_paragraph(paragraph: Paragraph, context: RenderContext) -> Optional[Node]:
    """
    Render a paragraph or list item.

    Returns None when nothing inside the paragraph produced output, e.g. a
    bare line break or a paragraph holding only the cover image.
    """
    node: Node = {}
    if paragraph.bullet is not None:
        node["type"] = "listItem"
        nesting_level = paragraph.bullet.nesting_level
        node["nestingLevel"] = nesting_level if nesting_level is not None else 0
    else:
        node["type"] = "paragraph"

    if paragraph.style is not None:
        if paragraph.style.named_style_type is not None:
            node["styleType"] = paragraph.style.named_style_type
        if paragraph.style.alignment is not None:
            node["alignment"] = paragraph.style.alignment

    content: List[Node] = []
    for run in paragraph.runs:
        if isinstance(run, TextRun):
            text_node = _render_text_run(run)
            if text_node is not None:
                content.append(text_node)
        elif isinstance(run, ImageRef):
            image_node = _render_image_ref(run, context)
            if image_node is not None:
                content.append(image_node)
        else:
            raise TypeError(f"Unexpected inline run: {type(run).__name__}")

    if not content:
        return None
    node["content"] = content
    return node


def _render_text_run(run: TextRun) -> Optional[Node]:
    if run.content == "\n":
        return None
    node: Node = {"type": "text", "value": run.content}
    style = normalize_text_style(run.style)
    if style:
        node["style"] = style
    return node


def _render_image_ref(ref: ImageRef, context: RenderContext) -> Optional[Node]:
    image = context.inline_images.get(ref.inline_object_id)
    if image is None:
        return None

    sequence = context.counter.next()
    url = image_url(context.topic_slug, context.document_id, sequence)
    if sequence == COVER_IMAGE_SEQUENCE:
        context.cover_image_url = url
        return None

    node: Node = {"type": "image", "objectId": ref.inline_object_id, "url": url}
    if image.width is not None:
        node["width"] = image.width
    if image.height is not None:
        node["height"] = image.height
    return node


def render_table(table: Table, context: RenderContext) -> Node:
    """Render a table, recursing into each cell's blocks."""
    rows = []
    for row in table.rows:
        cells = [
            {"type": "tableCell", "content": render_blocks(cell.content, context)}
            for cell in row.cells
        ]
        rows.append({"type": "tableRow", "cells": cells})
    return {"type": "table", "rows": rows}


def render_block(block: Block, context: RenderContext) -> Optional[Node]:
    """Render one block of either kind."""
    if isinstance(block, Paragraph):
        return render_paragraph(block, context)
    if isinstance(block, Table):
        return render_table(block, context)
    raise TypeError(f"Unexpected block: {type(block).__name__}")


def render_blocks(blocks: Sequence[Block], context: RenderContext) -> List[Node]:
    """Render blocks in order, dropping those that produced nothing."""
    nodes = []
    for block in blocks:
        node = render_block(block, context)
        if node is not None:
            nodes.append(node)
    return nodes
