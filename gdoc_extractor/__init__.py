"""Google Docs to article JSON extractor."""

__version__ = "0.1.0"
