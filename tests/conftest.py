"""
Shared fixtures for the test suite.
"""

import pytest

from tests.builders import (
    MemoryBlobStore,
    MemoryImageFetcher,
    heading,
    image,
    image_para,
    make_document,
    para,
)


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def image_fetcher():
    return MemoryImageFetcher()


@pytest.fixture
def example_document():
    """Document with an introduction, images and a references section."""
    return make_document(
        blocks=[
            heading("Introduction"),
            para("Intro text\n"),
            image_para("img1"),
            para("Body\n"),
            image_para("img2"),
            heading("References"),
            para("https://a.com\n"),
            para("https://b.com\n"),
        ],
        images=[image("img1"), image("img2", width=640, height=480)],
    )
