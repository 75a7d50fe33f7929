"""
structlog on top of stdlib logging. Pipeline modules log snake_case events
with key/value fields, e.g. log.info("file_transformed", file="cat.jpg").
"""
import logging
import logging.handlers
import sys
import structlog
from typing import Optional


def configure_logging(
    log_level: str = "INFO",
    json_format: bool = True,
    log_file: Optional[str] = None,
    use_stderr: bool = True,
) -> None:
    """
    Route all records through one console handler (JSON or colored) and,
    when log_file is set, a midnight-rotated JSON file. Console output goes
    to stderr by default because stdout carries the report table.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
    ]

    if json_format:
        console_renderer = structlog.processors.JSONRenderer()
    else:
        console_renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    console_handler = logging.StreamHandler(sys.stderr if use_stderr else sys.stdout)
    console_handler.setFormatter(_formatter(shared_processors, console_renderer))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when="midnight",
            interval=1,
            backupCount=7
        )
        file_handler.setFormatter(_formatter(shared_processors, structlog.processors.JSONRenderer()))
        root_logger.addHandler(file_handler)


def _formatter(shared_processors, renderer) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Module-level logger: log = get_logger(__name__)."""
    return structlog.get_logger(name)


def bind_contextvars(**kwargs) -> None:
    """Attach fields such as run_id to every log line until cleared."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_contextvars() -> None:
    """Drop the fields bound for the finished run."""
    structlog.contextvars.clear_contextvars()
