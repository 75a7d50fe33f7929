"""
Resize-or-copy stage.

Each file is stat'ed; files above the size threshold go through the resize
capability, the rest are copied verbatim. Work runs on a bounded pool: at most
`concurrency` files are between stat and write at any moment.
"""
import asyncio
import shutil
from pathlib import Path
from typing import Dict, List, Optional

from image_optimizer.config import get_settings
from image_optimizer.exceptions import FileAccessError, InvalidConfigError
from image_optimizer.imaging import resize_image
from image_optimizer.processing.file_stats import get_file_stats
from image_optimizer.schemas.files import ResizeParams, TransformAction, TransformResult
from image_optimizer.logging_config import get_logger

log = get_logger(__name__)


def resized_output_name(file_name: str, output_extension: str) -> str:
    """'photo.raw.JPG' -> 'photo.<output_extension>' (everything from the first dot is replaced)."""
    return f"{file_name.split('.', 1)[0]}.{output_extension}"


async def _copy_file(source: Path, target: Path) -> None:
    try:
        await asyncio.to_thread(shutil.copyfile, source, target)
    except OSError as e:
        raise FileAccessError(f"Failed to copy {source} to {target}: {e}", path=source) from e


def _claim(claimed: Dict[Path, str], output_path: Path, file_name: str) -> None:
    """Reserve output_path for file_name. No await between check and insert."""
    owner = claimed.get(output_path)
    if owner is not None:
        raise InvalidConfigError(
            f"{owner} and {file_name} would both be written to {output_path.name}"
        )
    claimed[output_path] = file_name


async def _resize_or_copy(
    file_name: str,
    input_dir: Path,
    output_dir: Path,
    output_extension: str,
    params: ResizeParams,
    threshold: int,
    claimed: Dict[Path, str],
) -> TransformResult:
    input_path = input_dir / file_name
    stats = await get_file_stats(input_path)

    if stats.size_bytes > threshold:
        output_path = output_dir / resized_output_name(file_name, output_extension)
        action = TransformAction.RESIZED
    else:
        # Copies keep the source name and extension, unlike resized output
        output_path = output_dir / file_name
        action = TransformAction.COPIED

    _claim(claimed, output_path, file_name)
    if action == TransformAction.RESIZED:
        await asyncio.to_thread(resize_image, input_path, output_path, params)
    else:
        await _copy_file(input_path, output_path)

    log.info("file_transformed", file=file_name, action=action.value, size_bytes=stats.size_bytes)
    return TransformResult(file=file_name, action=action, output_path=output_path)


async def dispatch(
    files: List[str],
    input_dir: Path,
    output_dir: Path,
    output_extension: str,
    params: ResizeParams,
    *,
    concurrency: Optional[int] = None,
    resize_threshold_bytes: Optional[int] = None,
) -> List[TransformResult]:
    """
    Resize or copy every file from input_dir into output_dir.

    Returns one TransformResult per file, in input order. The first failure
    (FileAccessError or TransformError) fails the whole call; tasks still in
    flight are left to finish and their outcomes are ignored. Two files
    resolving to the same output path raise InvalidConfigError.
    """
    settings = get_settings().dispatch
    concurrency = settings.concurrency if concurrency is None else concurrency
    threshold = settings.resize_threshold_bytes if resize_threshold_bytes is None else resize_threshold_bytes
    if concurrency < 1:
        raise InvalidConfigError(f"concurrency must be positive, got {concurrency}")

    input_dir = Path(input_dir)
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileAccessError(f"Failed to create output directory {output_dir}: {e}", path=output_dir) from e

    semaphore = asyncio.Semaphore(concurrency)
    claimed: Dict[Path, str] = {}

    async def worker(file_name: str) -> TransformResult:
        async with semaphore:
            return await _resize_or_copy(file_name, input_dir, output_dir, output_extension, params, threshold, claimed)

    log.info("dispatch_started", files=len(files), concurrency=concurrency, threshold=threshold)
    results = await asyncio.gather(*(worker(name) for name in files))

    resized = sum(1 for r in results if r.action == TransformAction.RESIZED)
    log.info("dispatch_complete", resized=resized, copied=len(results) - resized)
    return list(results)
