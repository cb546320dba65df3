"""Text style normalization."""

from typing import Any, Dict, Optional

from gdoc_extractor.models import TextStyle


def normalize_text_style(style: Optional[TextStyle]) -> Dict[str, Any]:
    """
    Flatten a text style into the attributes that are actually set.

    Flags are included only when true and strings only when non-empty, so an
    unstyled run yields an empty dict.
    """
    normalized: Dict[str, Any] = {}
    if style is None:
        return normalized

    if style.bold:
        normalized["bold"] = True
    if style.italic:
        normalized["italic"] = True
    if style.underline:
        normalized["underline"] = True
    if style.strikethrough:
        normalized["strikethrough"] = True
    if style.link_url:
        normalized["linkUrl"] = style.link_url
    if style.font_family:
        normalized["fontFamily"] = style.font_family

    return normalized
