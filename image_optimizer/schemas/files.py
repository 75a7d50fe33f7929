from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FileStats(BaseModel):
    size_bytes: int = Field(ge=0)
    is_directory: bool = False


class ResizeParams(BaseModel):
    """Target dimensions handed to every resize call of a run."""
    model_config = ConfigDict(frozen=True)

    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    ignore_aspect: bool = False  # Set by force-resize: stretch to exactly width x height


class Summary(BaseModel):
    """Size statistics over one directory's matching files, in KB (1000 bytes, rounded up)."""
    model_config = ConfigDict(frozen=True)

    min_kb: int
    max_kb: int
    avg_kb: int
    total_files: int


class TransformAction(str, Enum):
    RESIZED = "resized"
    COPIED = "copied"


class TransformResult(BaseModel):
    file: str
    action: TransformAction
    output_path: Path
