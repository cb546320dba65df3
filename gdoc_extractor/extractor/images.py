"""
Image discovery and numbering.

Images are numbered from 1 in document order: paragraph runs first-to-last,
descending into table cells row by row. The render pass numbers images as it
visits them; the export pass collects them up front with `collect_images`.
"""

from dataclasses import dataclass
from typing import Iterator, List, Mapping, Sequence

from gdoc_extractor.models import (
    Block,
    ImageRef,
    InlineImage,
    Paragraph,
    Table,
    TextRun,
)


class ImageCounter:
    """Monotonic 1-based image counter owned by a single pass."""

    def __init__(self) -> None:
        self._value = 0

    @property
    def value(self) -> int:
        """Number of images counted so far."""
        return self._value

    def next(self) -> int:
        """Count one more image and return its sequence number."""
        self._value += 1
        return self._value


@dataclass(frozen=True)
class DiscoveredImage:
    """An image together with its position in document order."""

    sequence: int
    image: InlineImage


def iter_image_refs(blocks: Sequence[Block]) -> Iterator[ImageRef]:
    """Yield every image reference in depth-first document order."""
    for block in blocks:
        if isinstance(block, Paragraph):
            for run in block.runs:
                if isinstance(run, ImageRef):
                    yield run
                elif not isinstance(run, TextRun):
                    raise TypeError(f"Unexpected inline run: {type(run).__name__}")
        elif isinstance(block, Table):
            for row in block.rows:
                for cell in row.cells:
                    yield from iter_image_refs(cell.content)
        else:
            raise TypeError(f"Unexpected block: {type(block).__name__}")


def collect_images(
    blocks: Sequence[Block],
    inline_images: Mapping[str, InlineImage],
) -> List[DiscoveredImage]:
    """
    Number every resolvable image of the whole tree.

    No section is skipped here, so an image inside the Introduction block
    takes a number even though the render pass never visits it.
    """
    counter = ImageCounter()
    discovered = []
    for ref in iter_image_refs(blocks):
        image = inline_images.get(ref.inline_object_id)
        if image is None:
            continue
        discovered.append(DiscoveredImage(sequence=counter.next(), image=image))
    return discovered
