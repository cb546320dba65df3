"""
Title, slug and image path derivation.

The JSON output and the storage upload pass must agree on image locations,
so both build their paths from the helpers in this module.
"""

import re
from typing import Optional

TITLE_SUFFIX = " - Completed"
SLUG_TITLE_SUFFIX = " - completed"
IMAGE_URL_PREFIX = "/api/images"

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]")


def normalize_title(title: Optional[str]) -> str:
    """Strip the trailing completion marker from a document title."""
    if not title:
        return ""
    if title.endswith(TITLE_SUFFIX):
        return title[: -len(TITLE_SUFFIX)]
    return title


def topic_slug(title: Optional[str]) -> str:
    """
    Derive the storage topic slug from a document title.

    "Heart Disease - Completed" -> "heartdisease"
    """
    if not title:
        return ""
    slug = title.lower()
    if slug.endswith(SLUG_TITLE_SUFFIX):
        slug = slug[: -len(SLUG_TITLE_SUFFIX)]
    return _NON_SLUG_CHARS.sub("", slug)


def image_filename(sequence: int) -> str:
    return f"image_{sequence:03d}.jpg"


def image_key(slug: str, document_id: str, sequence: int) -> str:
    """Storage key of the Nth image of a document."""
    return f"{slug}/{document_id}/{image_filename(sequence)}"


def image_url(slug: str, document_id: str, sequence: int) -> str:
    """URL under which the rendered JSON references the Nth image."""
    return f"{IMAGE_URL_PREFIX}/{image_key(slug, document_id, sequence)}"
