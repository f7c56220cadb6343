"""Structured Logging for Schema Rules

- Colored, human-readable dev output
- JSON structured production output
- A silent logger for hosts that do not supply one
"""
from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import EventDict, Processor

from schema_rules.core.config import get_settings


def _add_service_info(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that adds service metadata."""
    event_dict.setdefault("service", "schema-rules")
    return event_dict


def get_shared_processors() -> list[Processor]:
    """Processors used in both dev and prod configurations."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_service_info,
    ]


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure the logging system.
    
    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to LOG_LEVEL.
        json_logs: If True, output JSON format (for production). If False, colored console output.
            Defaults to LOG_JSON.
    """
    settings = get_settings()
    level = level or settings.LOG_LEVEL
    json_logs = settings.LOG_JSON if json_logs is None else json_logs
    log_level = getattr(logging, level.upper(), logging.INFO)
    
    shared_processors = get_shared_processors()
    
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
    
    # Formatter for stdlib logger (handles logs from the host schema generator)
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    
    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)
    


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.
    
    Args:
        name: Logger name (typically __name__ from the calling module)
    """
    return structlog.get_logger(name)


def null_logger() -> structlog.typing.FilteringBoundLogger:
    """Logger that drops every event."""
    return structlog.make_filtering_bound_logger(logging.CRITICAL)(structlog.ReturnLogger(), [], {})


class LoggerRegistry:
    """Registry of pre-configured loggers for different domains."""
    
    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}
    
    @classmethod
    def get(cls, name: str) -> structlog.stdlib.BoundLogger:
        """Get or create a logger for the given domain."""
        if name not in cls._loggers:
            cls._loggers[name] = get_logger(f"schema_rules.{name}")
        return cls._loggers[name]


def annotator_logger() -> structlog.stdlib.BoundLogger:
    """Logger for schema annotation events."""
    return LoggerRegistry.get("annotator")


def integration_logger() -> structlog.stdlib.BoundLogger:
    """Logger for schema-generator integration events."""
    return LoggerRegistry.get("integration")
