"""
Pipeline orchestrator.

Runs one optimization pass over a directory:

    scan -> filter -> resize-or-copy (or skip) -> recompress -> summarize

Stages run strictly in order. The first error ends the run and is re-raised
unchanged; later stages never start.
"""
import asyncio
import uuid
from typing import List

from image_optimizer.processing.dispatcher import dispatch
from image_optimizer.processing.file_discovery import filter_extensions, scan_directory
from image_optimizer.processing.recompress import recompress
from image_optimizer.processing.summary import summarize
from image_optimizer.schemas.files import TransformResult
from image_optimizer.schemas.pipeline import PipelineConfig, PipelineReport, PipelineStage
from image_optimizer.logging_config import get_logger, bind_contextvars, clear_contextvars

log = get_logger(__name__)


class _StageTracker:
    def __init__(self):
        self.stage = PipelineStage.SCANNING

    def enter(self, stage: PipelineStage) -> None:
        self.stage = stage
        log.info("pipeline_stage", stage=stage.value)


async def run_pipeline(config: PipelineConfig) -> PipelineReport:
    """
    Execute one run for an already validated config.

    Returns the input and output directory summaries. When neither width nor
    height is configured, files are not transformed and recompression reads
    straight from the input directory.
    """
    run_id = str(uuid.uuid4())[:8]
    bind_contextvars(run_id=run_id)
    tracker = _StageTracker()

    try:
        log.info(
            "pipeline_started",
            input_dir=str(config.input_dir),
            output_dir=str(config.output_dir),
            width=config.width,
            height=config.height,
            force_resize=config.force_resize,
        )

        tracker.enter(PipelineStage.SCANNING)
        entries = await scan_directory(config.input_dir)

        tracker.enter(PipelineStage.FILTERING)
        files = filter_extensions(entries, config.allowed_extensions)

        transforms: List[TransformResult] = []
        if config.resizes:
            tracker.enter(PipelineStage.RESIZE_OR_COPY)
            transforms = await dispatch(
                files,
                config.input_dir,
                config.output_dir,
                config.output_extension,
                config.resize_params,
                concurrency=config.concurrency,
            )
            source_dir = config.output_dir
        else:
            tracker.enter(PipelineStage.SKIP)
            source_dir = config.input_dir

        tracker.enter(PipelineStage.RECOMPRESSING)
        await recompress(source_dir, config.output_dir)

        tracker.enter(PipelineStage.SUMMARIZING)
        input_summary, output_summary = await asyncio.gather(
            summarize(config.input_dir, config.allowed_extensions),
            summarize(config.output_dir, config.allowed_extensions),
        )

        tracker.enter(PipelineStage.DONE)
        return PipelineReport(
            input_summary=input_summary,
            output_summary=output_summary,
            resized=config.resizes,
            transforms=transforms,
        )

    except Exception as e:
        log.error("pipeline_failed", stage=tracker.stage.value, error=str(e), error_type=type(e).__name__)
        raise

    finally:
        clear_contextvars()
