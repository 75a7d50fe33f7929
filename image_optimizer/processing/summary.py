import asyncio
import math
from pathlib import Path
from typing import Iterable

from image_optimizer.exceptions import NoMatchingFilesError
from image_optimizer.processing.file_discovery import filter_extensions, scan_directory
from image_optimizer.processing.file_stats import get_file_stats
from image_optimizer.schemas.files import Summary
from image_optimizer.logging_config import get_logger

log = get_logger(__name__)


def _to_kb(size: float) -> int:
    return math.ceil(size / 1000)


async def summarize(folder_path: Path, allowed_extensions: Iterable[str]) -> Summary:
    """
    Min/max/average size (KB, rounded up) and count of the matching files in a directory.

    Scan and filter errors propagate unchanged. Stats are fetched all at once.

    Raises:
        NoMatchingFilesError: entries exist but none has an allowed extension
    """
    folder_path = Path(folder_path)
    entries = await scan_directory(folder_path)
    files = filter_extensions(entries, allowed_extensions)
    if not files:
        raise NoMatchingFilesError(f"No files with an allowed extension in {folder_path}")

    stats = await asyncio.gather(*(get_file_stats(folder_path / name) for name in files))
    sizes = [s.size_bytes for s in stats]

    summary = Summary(
        min_kb=_to_kb(min(sizes)),
        max_kb=_to_kb(max(sizes)),
        avg_kb=_to_kb(sum(sizes) / len(sizes)),
        total_files=len(sizes),
    )
    log.info("directory_summarized", folder=str(folder_path), **summary.model_dump())
    return summary
