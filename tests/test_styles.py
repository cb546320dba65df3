"""
Tests for text style normalization.
"""

from gdoc_extractor.extractor.styles import normalize_text_style
from gdoc_extractor.models import TextStyle


class TestNormalizeTextStyle:
    """Test flattening of text styles."""

    def test_none_yields_empty_mapping(self):
        assert normalize_text_style(None) == {}

    def test_unset_style_yields_empty_mapping(self):
        assert normalize_text_style(TextStyle()) == {}

    def test_false_flags_are_omitted(self):
        style = TextStyle(bold=False, italic=False, underline=False, strikethrough=False)
        assert normalize_text_style(style) == {}

    def test_all_attributes(self):
        style = TextStyle(
            bold=True,
            italic=True,
            underline=True,
            strikethrough=True,
            link_url="https://example.com",
            font_family="Roboto",
        )

        assert normalize_text_style(style) == {
            "bold": True,
            "italic": True,
            "underline": True,
            "strikethrough": True,
            "linkUrl": "https://example.com",
            "fontFamily": "Roboto",
        }

    def test_empty_strings_are_omitted(self):
        style = TextStyle(italic=True, link_url="", font_family="")
        assert normalize_text_style(style) == {"italic": True}
