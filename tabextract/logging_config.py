"""structlog configuration for tabextract."""

import logging
import sys

import structlog
from structlog.types import EventDict


def add_app_context(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application context to log events."""
    event_dict["app"] = "tabextract"
    return event_dict


def setup_logging(verbose: bool = False, log_format: str = "console", level: str = "INFO"):
    """Configure structured logging."""
    log_level = "DEBUG" if verbose else level.upper()

    processors = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            [structlog.processors.CallsiteParameter.FILENAME]
        ),
        add_app_context,
    ]

    if log_format == "json":
        # JSON output for parsing and storage
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Console output for human readability
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level, logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
