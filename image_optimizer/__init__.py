"""Batch image resizing, recompression and size reporting."""

__version__ = "1.0.0"
