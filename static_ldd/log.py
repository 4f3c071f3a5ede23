"""Logging setup: structlog on top of stdlib logging, written to stderr."""

import logging
import logging.config
import os

import structlog


def setup_logging(level=None):
    """Configure structlog and stdlib logging.

    Environment variables:
        STATIC_LDD_LOG_LEVEL  - used when ``level`` is not given (default: WARNING)
        STATIC_LDD_LOG_FORMAT - console | json (default: console)
    """
    log_level = (level or os.environ.get("STATIC_LDD_LOG_LEVEL", "WARNING")).upper()
    log_format = os.environ.get("STATIC_LDD_LOG_FORMAT", "console").lower()

    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["default"], "level": "WARNING"},
            "loggers": {"static_ldd": {"level": log_level}},
        }
    )
