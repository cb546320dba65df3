"""
Conversion of Google Docs API payloads into the document model.

Only the parts of the Docs v1 `Document` resource the extractor uses are
read; unknown structural elements and paragraph elements are dropped.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from gdoc_extractor.models import (
    IMAGE_CONTENT_TYPE,
    Block,
    Bullet,
    Document,
    ImageRef,
    InlineImage,
    InlineRun,
    Paragraph,
    ParagraphStyle,
    Table,
    TableCell,
    TableRow,
    TextRun,
    TextStyle,
)
from gdoc_extractor.utils.errors import DocsParseError
from gdoc_extractor.utils.logging import get_logger

logger = get_logger(__name__)


def parse_document(payload: Dict[str, Any]) -> Document:
    """
    Parse a Docs API document resource.

    A payload without body content parses to an empty document.

    Raises:
        DocsParseError: If the payload has an unexpected shape
    """
    try:
        body = payload.get("body") or {}
        return Document(
            document_id=payload.get("documentId") or "",
            title=payload.get("title"),
            blocks=parse_blocks(body.get("content")),
            inline_images=parse_inline_images(payload.get("inlineObjects")),
        )
    except (AttributeError, TypeError, ValidationError) as e:
        raise DocsParseError(
            f"Malformed document payload: {e}",
            {"document_id": payload.get("documentId") if isinstance(payload, dict) else None},
        ) from e


def parse_blocks(elements: Optional[List[Dict[str, Any]]]) -> List[Block]:
    blocks: List[Block] = []
    for element in elements or []:
        if "paragraph" in element:
            blocks.append(parse_paragraph(element["paragraph"]))
        elif "table" in element:
            blocks.append(parse_table(element["table"]))
        else:
            logger.debug(f"Dropping structural element: {sorted(element)}")
    return blocks


def parse_paragraph(paragraph: Dict[str, Any]) -> Paragraph:
    style = paragraph.get("paragraphStyle")
    bullet = paragraph.get("bullet")

    runs: List[InlineRun] = []
    for element in paragraph.get("elements") or []:
        if "textRun" in element:
            text_run = element["textRun"]
            runs.append(
                TextRun(
                    content=text_run.get("content") or "",
                    style=parse_text_style(text_run.get("textStyle")),
                )
            )
        elif "inlineObjectElement" in element:
            object_id = element["inlineObjectElement"].get("inlineObjectId")
            if object_id:
                runs.append(ImageRef(inline_object_id=object_id))

    return Paragraph(
        style=(
            ParagraphStyle(
                named_style_type=style.get("namedStyleType"),
                alignment=style.get("alignment"),
            )
            if style is not None
            else None
        ),
        bullet=Bullet(nesting_level=bullet.get("nestingLevel")) if bullet is not None else None,
        runs=runs,
    )


def parse_table(table: Dict[str, Any]) -> Table:
    rows = []
    for row in table.get("tableRows") or []:
        cells = [
            TableCell(content=parse_blocks(cell.get("content")))
            for cell in row.get("tableCells") or []
        ]
        rows.append(TableRow(cells=cells))
    return Table(rows=rows)


def parse_text_style(style: Optional[Dict[str, Any]]) -> Optional[TextStyle]:
    if style is None:
        return None
    link = style.get("link") or {}
    font = style.get("weightedFontFamily") or {}
    return TextStyle(
        bold=style.get("bold"),
        italic=style.get("italic"),
        underline=style.get("underline"),
        strikethrough=style.get("strikethrough"),
        link_url=link.get("url"),
        font_family=font.get("fontFamily"),
    )


def parse_inline_images(inline_objects: Optional[Dict[str, Any]]) -> Dict[str, InlineImage]:
    """
    Parse the inlineObjects map.

    Every entry is kept, even one without image properties, since any known
    object id counts as an image while rendering.
    """
    images = {}
    for object_id, inline_object in (inline_objects or {}).items():
        properties = inline_object.get("inlineObjectProperties") or {}
        embedded = properties.get("embeddedObject") or {}
        image_properties = embedded.get("imageProperties") or {}
        size = embedded.get("size") or {}

        images[object_id] = InlineImage(
            object_id=object_id,
            content_uri=image_properties.get("contentUri") or None,
            content_type=IMAGE_CONTENT_TYPE,
            width=(size.get("width") or {}).get("magnitude"),
            height=(size.get("height") or {}).get("magnitude"),
        )
    return images
