"""
Tests for paragraph and table rendering.
"""

import pytest

from gdoc_extractor.extractor.renderer import (
    RenderContext,
    paragraph_text,
    raw_paragraph_text,
    render_block,
    render_blocks,
    render_paragraph,
    render_table,
)
from gdoc_extractor.models import (
    Bullet,
    ImageRef,
    Paragraph,
    ParagraphStyle,
    TextRun,
)
from tests.builders import heading, image, image_para, para, styled_run, table


def make_context(*images):
    return RenderContext(
        document_id="doc123",
        topic_slug="heartdisease",
        inline_images={img.object_id: img for img in images},
    )


class TestParagraphText:
    """Test paragraph text helpers."""

    def test_flattens_line_breaks_and_trims(self):
        paragraph = para("  Intro", "duction\n")
        assert paragraph_text(paragraph) == "Introduction"

    def test_vertical_tab_becomes_space(self):
        assert paragraph_text(para("a\vb\n")) == "a b"

    def test_raw_text_is_untouched(self):
        paragraph = Paragraph(
            runs=[TextRun(content=" a\v"), ImageRef(inline_object_id="x"), TextRun(content="b\n")]
        )
        assert raw_paragraph_text(paragraph) == " a\vb\n"


class TestRenderParagraph:
    """Test paragraph rendering."""

    def test_plain_paragraph(self):
        node = render_paragraph(para("Hello\n"), make_context())

        assert node == {"type": "paragraph", "content": [{"type": "text", "value": "Hello\n"}]}

    def test_style_type_and_alignment(self):
        paragraph = Paragraph(
            style=ParagraphStyle(named_style_type="HEADING_2", alignment="CENTER"),
            runs=[TextRun(content="Title")],
        )

        node = render_paragraph(paragraph, make_context())

        assert list(node) == ["type", "styleType", "alignment", "content"]
        assert node["styleType"] == "HEADING_2"
        assert node["alignment"] == "CENTER"

    def test_list_item_nesting_level(self):
        node = render_paragraph(para("Item\n", bullet=Bullet(nesting_level=2)), make_context())

        assert node["type"] == "listItem"
        assert node["nestingLevel"] == 2

    def test_list_item_nesting_level_defaults_to_zero(self):
        node = render_paragraph(para("Item\n", bullet=Bullet()), make_context())

        assert node["type"] == "listItem"
        assert node["nestingLevel"] == 0

    def test_bare_newline_paragraph_is_dropped(self):
        assert render_paragraph(para("\n"), make_context()) is None

    def test_bare_newline_run_is_skipped(self):
        node = render_paragraph(para("Text", "\n"), make_context())
        assert node["content"] == [{"type": "text", "value": "Text"}]

    def test_style_attached_only_when_set(self):
        paragraph = Paragraph(
            runs=[styled_run("bold", bold=True), styled_run("plain", bold=False)]
        )

        node = render_paragraph(paragraph, make_context())

        assert node["content"][0] == {"type": "text", "value": "bold", "style": {"bold": True}}
        assert "style" not in node["content"][1]

    def test_first_image_becomes_cover(self):
        context = make_context(image("img1"))

        node = render_paragraph(image_para("img1"), context)

        assert node is None
        assert context.cover_image_url == "/api/images/heartdisease/doc123/image_001.jpg"

    def test_later_images_are_rendered(self):
        context = make_context(image("img1"), image("img2", width=640.0, height=480.0))

        node = render_paragraph(
            Paragraph(
                runs=[
                    ImageRef(inline_object_id="img1"),
                    TextRun(content="Caption"),
                    ImageRef(inline_object_id="img2"),
                ]
            ),
            context,
        )

        assert node["content"] == [
            {"type": "text", "value": "Caption"},
            {
                "type": "image",
                "objectId": "img2",
                "url": "/api/images/heartdisease/doc123/image_002.jpg",
                "width": 640.0,
                "height": 480.0,
            },
        ]

    def test_image_without_size(self):
        context = make_context(image("img1"), image("img2"))

        node = render_paragraph(image_para("img1", "img2"), context)

        assert node["content"] == [
            {
                "type": "image",
                "objectId": "img2",
                "url": "/api/images/heartdisease/doc123/image_002.jpg",
            }
        ]

    def test_unresolved_image_is_skipped_without_counting(self):
        context = make_context(image("img1"), image("img2"))

        node = render_paragraph(image_para("missing", "img1", "img2"), context)

        assert context.cover_image_url.endswith("image_001.jpg")
        assert [item["objectId"] for item in node["content"]] == ["img2"]
        assert context.counter.value == 2


class TestRenderTable:
    """Test table rendering."""

    def test_table_structure(self):
        tbl = table(
            [[para("a\n")], [para("b\n")]],
            [[para("c\n")], []],
        )

        node = render_table(tbl, make_context())

        assert node["type"] == "table"
        assert [row["type"] for row in node["rows"]] == ["tableRow", "tableRow"]
        first_row = node["rows"][0]["cells"]
        assert first_row[0] == {
            "type": "tableCell",
            "content": [{"type": "paragraph", "content": [{"type": "text", "value": "a\n"}]}],
        }
        assert node["rows"][1]["cells"][1] == {"type": "tableCell", "content": []}

    def test_images_numbered_row_major_through_nested_tables(self):
        context = make_context(image("img1"), image("img2"), image("img3"), image("img4"))
        tbl = table(
            [[image_para("img1")], [table([[image_para("img2")]])]],
            [[image_para("img3")], [image_para("img4")]],
        )

        node = render_table(tbl, context)

        nested = node["rows"][0]["cells"][1]["content"][0]
        assert nested["rows"][0]["cells"][0]["content"][0]["content"][0]["url"].endswith(
            "image_002.jpg"
        )
        assert node["rows"][1]["cells"][0]["content"][0]["content"][0]["url"].endswith(
            "image_003.jpg"
        )
        assert node["rows"][1]["cells"][1]["content"][0]["content"][0]["url"].endswith(
            "image_004.jpg"
        )
        assert node["rows"][0]["cells"][0]["content"] == []

    def test_cells_render_introduction_heading_normally(self):
        tbl = table([[heading("Introduction"), para("Not an intro\n")]])

        node = render_table(tbl, make_context())

        assert len(node["rows"][0]["cells"][0]["content"]) == 2


class TestRenderBlocks:
    """Test block dispatch."""

    def test_drops_empty_paragraphs(self):
        nodes = render_blocks([para("\n"), para("x"), table()], make_context())
        assert [n["type"] for n in nodes] == ["paragraph", "table"]

    def test_unknown_block_raises(self):
        with pytest.raises(TypeError, match="Unexpected block"):
            render_block(TextRun(content="x"), make_context())

    def test_unknown_run_raises(self):
        paragraph = Paragraph.model_construct(runs=[object()], style=None, bullet=None)
        with pytest.raises(TypeError, match="Unexpected inline run"):
            render_paragraph(paragraph, make_context())
