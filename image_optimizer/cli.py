"""
Command-line entry point.

Usage:
    image-optimizer -i ./photos -o ./optimized -w 1200
    image-optimizer -i ./photos -o ./optimized -w 800 -H 600 -R
"""
import argparse
import asyncio
import sys
import time
from typing import List, Optional

from pydantic import ValidationError

from image_optimizer.config import Settings, get_settings
from image_optimizer.exceptions import InvalidConfigError, OptimizerException
from image_optimizer.pipeline import run_pipeline
from image_optimizer.schemas.pipeline import PipelineReport, build_pipeline_config
from image_optimizer.logging_config import configure_logging

REPORT_HEADERS = ["Files", "Max Size", "Min Size", "Avg Size"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-optimizer",
        description="Resize, recompress and report size statistics for a directory of images.",
    )
    parser.add_argument("-i", "--input", help="[MANDATORY] Path to the input directory")
    parser.add_argument("-o", "--output", help="[MANDATORY] Path to the output directory")
    parser.add_argument("-H", "--height", type=int, help="Height of the output image")
    parser.add_argument("-w", "--width", type=int, help="Width of the output image")
    parser.add_argument("-e", "--output-ext", default="jpg", help="Extension of resized images (default: jpg)")
    parser.add_argument(
        "-a", "--allowed-ext", default="jpg,png",
        help="Comma separated input extensions to process (default: jpg,png)",
    )
    parser.add_argument(
        "-R", "--force-resize", action="store_true",
        help="Force height and width regardless of the aspect ratio",
    )
    parser.add_argument("-c", "--concurrency", type=int, help="Files processed at once (default: 8)")
    return parser


def render_report(report: PipelineReport) -> str:
    """Plain-text table: input directory row first, then output directory."""
    rows = [REPORT_HEADERS]
    for summary in (report.input_summary, report.output_summary):
        rows.append([
            str(summary.total_files),
            f"{summary.max_kb} KB",
            f"{summary.min_kb} KB",
            f"{summary.avg_kb} KB",
        ])

    widths = [max(len(row[i]) for row in rows) for i in range(len(REPORT_HEADERS))]
    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(row: List[str]) -> str:
        return "|" + "|".join(f" {cell.ljust(w)} " for cell, w in zip(row, widths)) + "|"

    out = [border, line(rows[0]), border]
    out.extend(line(row) for row in rows[1:])
    out.append(border)
    return "\n".join(out)


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        raise InvalidConfigError(f"Invalid settings: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = _load_settings()
        configure_logging(
            log_level=settings.log_level,
            json_format=settings.json_logs,
            log_file=settings.log_file,
        )

        config = build_pipeline_config(
            input_dir=args.input,
            output_dir=args.output,
            output_extension=args.output_ext,
            width=args.width,
            height=args.height,
            allowed_extensions=frozenset(ext.strip() for ext in args.allowed_ext.split(",")),
            force_resize=args.force_resize,
            concurrency=args.concurrency,
        )

        started = time.perf_counter()
        report = asyncio.run(run_pipeline(config))
        elapsed = time.perf_counter() - started

    except OptimizerException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(render_report(report))
    print(f"Time Elapsed: {elapsed:.3f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
