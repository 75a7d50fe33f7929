import asyncio
import os
from pathlib import Path
from typing import Iterable, List

from image_optimizer.exceptions import EmptyDirectoryError, FileAccessError, NotADirectoryPathError
from image_optimizer.processing.file_stats import get_file_stats
from image_optimizer.logging_config import get_logger

log = get_logger(__name__)


async def scan_directory(folder_path: Path) -> List[str]:
    """
    List the entries of a directory (non-recursive, filesystem order).

    Raises:
        FileAccessError: the path is absent or unreadable
        NotADirectoryPathError: the path exists but is not a directory
    """
    folder_path = Path(folder_path)
    stats = await get_file_stats(folder_path)
    if not stats.is_directory:
        raise NotADirectoryPathError(f"The path parameter must be a directory: {folder_path}")

    try:
        entries = await asyncio.to_thread(os.listdir, folder_path)
    except OSError as e:
        raise FileAccessError(f"Failed to scan directory {folder_path}: {e}", path=folder_path) from e

    log.debug("directory_scanned", folder=str(folder_path), entries=len(entries))
    return entries


def get_extension(file_name: str) -> str:
    """Text after the last '.', or the whole name when there is none."""
    return file_name.rsplit(".", 1)[-1]


def filter_extensions(entries: List[str], allowed_extensions: Iterable[str]) -> List[str]:
    """
    Keep entries whose extension is allowed, preserving order.

    An empty input is an error; a non-empty input with no match is not, and
    yields an empty list.
    """
    if len(entries) == 0:
        raise EmptyDirectoryError("The path parameter is an empty directory")

    allowed = set(allowed_extensions)
    return [entry for entry in entries if get_extension(entry) in allowed]
