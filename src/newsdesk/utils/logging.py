"""Structured logging for newsdesk runs.

Everything goes through the standard library root logger. structlog
builds the event dict and a ``ProcessorFormatter`` per handler renders
it, so records emitted by third-party libraries get the same fields.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import structlog

LOG_FILENAME = "newsdesk.log"
LOG_RETENTION_DAYS = 30

# Libraries whose own loggers are chattier than a pipeline run needs
LIBRARY_LEVELS: Dict[str, int] = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "openai": logging.INFO,
}


def _pre_chain() -> List[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _attach(
    root: logging.Logger, handler: logging.Handler, renderer: Any, pre_chain: List[Any]
) -> None:
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    root.addHandler(handler)


def _rotating_file(log_dir: Path) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    return TimedRotatingFileHandler(
        filename=log_dir / LOG_FILENAME,
        when="midnight",
        backupCount=LOG_RETENTION_DAYS,
        encoding="utf-8",
    )


def setup_logging(
    log_level: str = "INFO",
    log_format: Literal["json", "console"] = "json",
    log_dir: Optional[Path] = None,
) -> None:
    """Route structlog events to stdout and, optionally, a log file.

    Args:
        log_level: Root level name, e.g. "DEBUG" or "WARNING".
        log_format: "json" for one JSON object per line, "console" for
            coloured key=value output.
        log_dir: When set, events are also written as plain text to
            ``newsdesk.log`` there, rotated at midnight and kept 30 days.

    Calling it again replaces the handlers installed by the previous call.
    """
    pre_chain = _pre_chain()

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(log_level.upper())

    stdout_renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    _attach(root, logging.StreamHandler(sys.stdout), stdout_renderer, pre_chain)

    if log_dir:
        _attach(
            root,
            _rotating_file(Path(log_dir)),
            structlog.dev.ConsoleRenderer(colors=False),
            pre_chain,
        )

    for name, level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound to ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)
