"""Structured logging setup for page objects and the smoke runner."""
import logging
import sys
from pathlib import Path
from typing import Union

import structlog

ERROR_LOG = "error.log"
COMBINED_LOG = "combined.log"


def configure_logging(verbose: bool = False, log_dir: Union[str, Path] = "test-logs") -> None:
    """Configure structured logging.

    Records go to three sinks: ``<log_dir>/error.log`` (errors only) and
    ``<log_dir>/combined.log`` as timestamped JSON lines, plus a plain
    console line on stdout.

    Args:
        verbose: Enable debug level logging if True.
        log_dir: Directory for the JSON log files.
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    shared_processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )
    console_formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
    )

    error_handler = logging.FileHandler(log_dir / ERROR_LOG, encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(json_formatter)

    combined_handler = logging.FileHandler(log_dir / COMBINED_LOG, encoding="utf-8")
    combined_handler.setFormatter(json_formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)

    logging.basicConfig(
        level=log_level,
        handlers=[error_handler, combined_handler, console_handler],
        force=True,
    )
