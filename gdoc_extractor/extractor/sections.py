"""
Top-level section handling.

Two sections of an article are treated specially:

* The "Introduction" heading and the paragraph right after it are pulled out
  of the body; that paragraph becomes the article summary.
* Every paragraph after the "References" heading is folded into a single
  plain-text paragraph appended at the end of the body.

Both rules apply to the top level of the document only.
"""

import re
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence

from gdoc_extractor.extractor.renderer import (
    Node,
    RenderContext,
    paragraph_text,
    raw_paragraph_text,
    render_paragraph,
    render_table,
)
from gdoc_extractor.models import Block, Paragraph, Table

SECTION_HEADING_STYLE = "HEADING_1"
INTRODUCTION_HEADING = "introduction"
REFERENCES_HEADING = "references"
REFERENCES_STYLE = "NORMAL_TEXT"

_LINE_BREAKS = re.compile(r"[\n\v]+")


@dataclass(frozen=True)
class Introduction:
    """Introduction text and the top-level indices it occupied."""

    text: Optional[str] = None
    indices: FrozenSet[int] = field(default_factory=frozenset)


def is_section_heading(block: Block, name: str) -> bool:
    """Whether a block is a top-level heading titled `name` (any case)."""
    if not isinstance(block, Paragraph):
        return False
    if block.named_style_type != SECTION_HEADING_STYLE:
        return False
    return paragraph_text(block).lower() == name


def find_introduction(blocks: Sequence[Block]) -> Introduction:
    """Locate the first Introduction heading and the paragraph following it."""
    for index, block in enumerate(blocks):
        if not is_section_heading(block, INTRODUCTION_HEADING):
            continue

        following = blocks[index + 1] if index + 1 < len(blocks) else None
        if isinstance(following, Paragraph):
            return Introduction(
                text=paragraph_text(following),
                indices=frozenset({index, index + 1}),
            )
        return Introduction(indices=frozenset({index}))

    return Introduction()


def merge_references(raw_text: str) -> str:
    """Collapse line-break runs to single newlines and trim."""
    return _LINE_BREAKS.sub("\n", raw_text).strip()


def references_node(merged_text: str) -> Node:
    return {
        "type": "paragraph",
        "styleType": REFERENCES_STYLE,
        "content": [{"type": "text", "value": merged_text}],
    }


def render_sections(
    blocks: Sequence[Block],
    context: RenderContext,
    skip_indices: FrozenSet[int] = frozenset(),
) -> List[Node]:
    """
    Render the top-level blocks of a document.

    Blocks at `skip_indices` are not visited at all, so images inside them are
    never counted. Once the References heading has been rendered, paragraphs
    are collected into one merged node instead of being rendered; tables
    after it are still rendered as usual.
    """
    nodes: List[Node] = []
    in_references = False
    reference_parts: List[str] = []

    for index, block in enumerate(blocks):
        if index in skip_indices:
            continue

        if isinstance(block, Paragraph):
            if in_references:
                reference_parts.append(raw_paragraph_text(block) + "\n")
                continue
            if is_section_heading(block, REFERENCES_HEADING):
                in_references = True
            node = render_paragraph(block, context)
            if node is not None:
                nodes.append(node)
        elif isinstance(block, Table):
            nodes.append(render_table(block, context))
        else:
            raise TypeError(f"Unexpected block: {type(block).__name__}")

    if reference_parts:
        nodes.append(references_node(merge_references("".join(reference_parts))))

    return nodes
