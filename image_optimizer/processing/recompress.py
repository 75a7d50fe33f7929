import asyncio
from pathlib import Path
from typing import List

from image_optimizer.config import get_settings
from image_optimizer.imaging import recompress_images
from image_optimizer.logging_config import get_logger

log = get_logger(__name__)


async def recompress(source_dir: Path, output_dir: Path) -> List[Path]:
    """
    Lossy recompression of the JPEGs directly under source_dir into output_dir.

    One opaque call with no retry; TransformError from the capability propagates as is.
    """
    settings = get_settings().recompress
    log.info("recompress_started", source=str(source_dir), output=str(output_dir), quality=settings.quality)

    written = await asyncio.to_thread(
        recompress_images,
        Path(source_dir),
        Path(output_dir),
        settings.pattern,
        settings.quality,
        settings.progressive,
    )

    log.info("recompress_complete", files=len(written))
    return written
