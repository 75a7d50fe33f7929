"""Schemas for a single optimizer run."""
from enum import Enum
from pathlib import Path
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from image_optimizer.exceptions import InvalidConfigError
from image_optimizer.schemas.files import ResizeParams, Summary, TransformResult

DEFAULT_ALLOWED_EXTENSIONS = frozenset({"jpg", "png"})


class PipelineStage(str, Enum):
    SCANNING = "scanning"
    FILTERING = "filtering"
    RESIZE_OR_COPY = "resize_or_copy"
    SKIP = "skip"
    RECOMPRESSING = "recompressing"
    SUMMARIZING = "summarizing"
    DONE = "done"


class PipelineConfig(BaseModel):
    """Options for one run. Use build_pipeline_config() to get InvalidConfigError on bad input."""
    model_config = ConfigDict(frozen=True)

    input_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    output_extension: str = "jpg"
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    allowed_extensions: FrozenSet[str] = DEFAULT_ALLOWED_EXTENSIONS
    force_resize: bool = False
    concurrency: Optional[int] = Field(default=None, gt=0)  # None: settings.dispatch.concurrency

    @field_validator("input_dir", "output_dir", mode="before")
    @classmethod
    def reject_blank_dir(cls, v, info):
        # "" would otherwise become Path("."), the current directory
        if v is None or (isinstance(v, str) and not v.strip()):
            kind = "input" if info.field_name == "input_dir" else "output"
            raise ValueError(f"{kind} directory is required")
        return v

    @field_validator("output_extension")
    @classmethod
    def strip_output_dot(cls, v: str) -> str:
        v = v.lstrip(".")
        if not v:
            raise ValueError("output extension must not be empty")
        return v

    @field_validator("allowed_extensions")
    @classmethod
    def strip_allowed_dots(cls, v):
        """Accept both 'jpg' and '.jpg'."""
        return frozenset(ext.lstrip(".") for ext in v if ext.lstrip("."))

    @model_validator(mode="after")
    def check_required(self):
        if not self.input_dir:
            raise ValueError("input directory is required")
        if not self.output_dir:
            raise ValueError("output directory is required")
        if self.force_resize:
            if not self.width:
                raise ValueError("output image width is required")
            if not self.height:
                raise ValueError("output image height is required")
        return self

    @property
    def resizes(self) -> bool:
        """Whether the resize-or-copy stage runs at all."""
        return bool(self.width or self.height)

    @property
    def resize_params(self) -> ResizeParams:
        return ResizeParams(width=self.width, height=self.height, ignore_aspect=self.force_resize)


def build_pipeline_config(**options) -> PipelineConfig:
    """
    Validate run options without touching the filesystem.

    Raises:
        InvalidConfigError: a directory is missing, a dimension is not positive,
            or force_resize is set without both width and height.
    """
    try:
        return PipelineConfig(**options)
    except ValidationError as e:
        messages = []
        for err in e.errors():
            msg = err["msg"].removeprefix("Value error, ")
            field = ".".join(str(part) for part in err["loc"])
            messages.append(f"{field}: {msg}" if field else msg)
        raise InvalidConfigError("; ".join(messages)) from e


class PipelineReport(BaseModel):
    input_summary: Summary
    output_summary: Summary
    resized: bool
    transforms: List[TransformResult] = Field(default_factory=list)
