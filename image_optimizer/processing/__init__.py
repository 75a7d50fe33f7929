"""Scan, filter, transform, recompress and summarize stages of the optimizer."""

from .file_stats import get_file_stats
from .file_discovery import scan_directory, filter_extensions
from .summary import summarize
from .dispatcher import dispatch
from .recompress import recompress

__all__ = [
    "get_file_stats",
    "scan_directory",
    "filter_extensions",
    "summarize",
    "dispatch",
    "recompress",
]
