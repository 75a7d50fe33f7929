import asyncio
import os
import stat
from pathlib import Path

from image_optimizer.exceptions import FileAccessError
from image_optimizer.schemas.files import FileStats


async def get_file_stats(path: Path) -> FileStats:
    """Single stat call, no retry. OSError surfaces as FileAccessError."""
    try:
        st = await asyncio.to_thread(os.stat, path)
    except OSError as e:
        raise FileAccessError(f"Failed to stat {path}: {e}", path=Path(path)) from e
    return FileStats(size_bytes=st.st_size, is_directory=stat.S_ISDIR(st.st_mode))
