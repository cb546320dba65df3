"""Image storage and download backends."""
