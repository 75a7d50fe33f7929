"""
Pillow adapters for the two image capabilities the pipeline delegates to:

- resize_image: resample one file to target dimensions
- recompress_images: lossy JPEG re-encode of every matching file in a directory

Both are blocking; callers run them in a worker thread.
"""

from pathlib import Path
from typing import List, Tuple

from PIL import Image

from image_optimizer.exceptions import TransformError
from image_optimizer.schemas.files import ResizeParams
from image_optimizer.logging_config import get_logger

log = get_logger(__name__)

# Modes JPEG can store directly
JPEG_MODES = ("RGB", "L", "CMYK")


def compute_target_size(width: int, height: int, params: ResizeParams) -> Tuple[int, int]:
    """
    Target resolution for an image of the given size.

    Both dimensions: fit inside the box keeping aspect ratio, or stretch
    exactly when params.ignore_aspect is set. One dimension: scale the
    other proportionally.
    """
    if not params.width and not params.height:
        raise TransformError("Resize requires a target width or height")

    if params.width and params.height:
        if params.ignore_aspect:
            return (params.width, params.height)
        scale = min(params.width / width, params.height / height)
    elif params.width:
        scale = params.width / width
    else:
        scale = params.height / height

    return (max(1, round(width * scale)), max(1, round(height * scale)))


def _output_format(path: Path) -> str:
    fmt = Image.registered_extensions().get(path.suffix.lower())
    if fmt is None:
        raise TransformError(f"Unsupported output extension: {path.suffix or path.name}")
    return fmt


def _prepare_for_format(img: Image.Image, fmt: str) -> Image.Image:
    if fmt == "JPEG" and img.mode not in JPEG_MODES:
        return img.convert("RGB")
    return img


def resize_image(input_path: Path, output_path: Path, params: ResizeParams) -> None:
    """Resize one image and write it to output_path in the format its extension names."""
    try:
        fmt = _output_format(Path(output_path))
        with Image.open(input_path) as img:
            target = compute_target_size(img.width, img.height, params)
            resized = img.resize(target, Image.Resampling.LANCZOS)

        resized = _prepare_for_format(resized, fmt)
        resized.save(output_path, format=fmt)
        log.debug("image_resized", input=str(input_path), output=str(output_path), size=target)

    except TransformError:
        raise
    except Exception as e:
        raise TransformError(f"Failed to resize {input_path}: {e}") from e


def recompress_images(
    source_dir: Path,
    output_dir: Path,
    pattern: str = "*.jpg",
    quality: int = 75,
    progressive: bool = True,
) -> List[Path]:
    """
    Re-encode every file matching pattern directly under source_dir as an
    optimized JPEG, written to output_dir under the same name.

    source_dir and output_dir may be the same directory.
    """
    source_dir = Path(source_dir)
    output_dir = Path(output_dir)
    written = []

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for source in sorted(p for p in source_dir.glob(pattern) if p.is_file()):
            # Fully decode before writing; the target may be the source itself
            with Image.open(source) as img:
                image = _prepare_for_format(img, "JPEG").copy()

            target = output_dir / source.name
            image.save(target, format="JPEG", quality=quality, optimize=True, progressive=progressive)
            written.append(target)

    except Exception as e:
        raise TransformError(f"Failed to recompress images in {source_dir}: {e}") from e

    return written
