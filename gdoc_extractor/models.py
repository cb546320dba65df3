"""
Core data models for the Google Docs extractor.

This module defines the Pydantic models for the source document tree that the
extractor walks, plus the report produced by the image export pass.
"""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

# Images are always stored and served as JPEG
IMAGE_CONTENT_TYPE = "image/jpeg"

# =============================================================================
# Inline runs
# =============================================================================


class TextStyle(BaseModel):
    """Character-level styling of a text run."""

    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    link_url: Optional[str] = None
    font_family: Optional[str] = None


class TextRun(BaseModel):
    """A span of text sharing one style."""

    kind: Literal["text"] = "text"
    content: str = ""
    style: Optional[TextStyle] = None


class ImageRef(BaseModel):
    """Placeholder for an inline image, resolved through Document.inline_images."""

    kind: Literal["image"] = "image"
    inline_object_id: str


InlineRun = Annotated[Union[TextRun, ImageRef], Field(discriminator="kind")]


# =============================================================================
# Blocks
# =============================================================================


class ParagraphStyle(BaseModel):
    """Paragraph-level style attributes."""

    named_style_type: Optional[str] = None
    alignment: Optional[str] = None


class Bullet(BaseModel):
    """List membership of a paragraph."""

    nesting_level: Optional[int] = None


class Paragraph(BaseModel):
    """A paragraph, heading or list item."""

    kind: Literal["paragraph"] = "paragraph"
    style: Optional[ParagraphStyle] = None
    bullet: Optional[Bullet] = None
    runs: List[InlineRun] = Field(default_factory=list)

    @property
    def named_style_type(self) -> Optional[str]:
        return self.style.named_style_type if self.style else None


class TableCell(BaseModel):
    """One table cell holding its own blocks."""

    content: List["Block"] = Field(default_factory=list)


class TableRow(BaseModel):
    """One table row."""

    cells: List[TableCell] = Field(default_factory=list)


class Table(BaseModel):
    """A table of rows and cells; cells may hold nested tables."""

    kind: Literal["table"] = "table"
    rows: List[TableRow] = Field(default_factory=list)


Block = Annotated[Union[Paragraph, Table], Field(discriminator="kind")]

TableCell.model_rebuild()
TableRow.model_rebuild()
Table.model_rebuild()


# =============================================================================
# Document
# =============================================================================


class InlineImage(BaseModel):
    """An image embedded in the document."""

    object_id: str
    content_uri: Optional[str] = Field(
        None, description="Short-lived signed URL for the image bytes"
    )
    content_type: str = IMAGE_CONTENT_TYPE
    width: Optional[float] = None
    height: Optional[float] = None


class Document(BaseModel):
    """A fully fetched source document."""

    document_id: str = ""
    title: Optional[str] = None
    blocks: List[Block] = Field(default_factory=list)
    inline_images: Dict[str, InlineImage] = Field(default_factory=dict)


# =============================================================================
# Export results
# =============================================================================


class ImageUploadResult(BaseModel):
    """Outcome of exporting one image."""

    sequence: int = Field(..., ge=1, description="1-based image number")
    object_id: str
    key: str = Field(..., description="Storage key the image was written to")
    uploaded: bool = False
    size_bytes: Optional[int] = None
    error: Optional[str] = None


class ExportReport(BaseModel):
    """Outcome of exporting all images of one document."""

    document_id: str
    bucket: str
    results: List[ImageUploadResult] = Field(default_factory=list)

    @property
    def uploaded(self) -> List[ImageUploadResult]:
        return [r for r in self.results if r.uploaded]

    @property
    def failed(self) -> List[ImageUploadResult]:
        return [r for r in self.results if not r.uploaded]
