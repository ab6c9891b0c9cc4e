"""Logging setup — structlog for structured output, stdlib level alignment."""

import logging

import structlog

from src.config.settings import Environment, Settings

_LOG_NAME_TO_LEVEL: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(settings: Settings) -> structlog.stdlib.BoundLogger:
    """Configure structlog and the stdlib root logger from settings.

    Console rendering in dev, JSON lines elsewhere. Returns the root bound
    logger. This package exposes no entry point of its own: the hosting
    process calls this once at startup, before the first KdpClient is built.
    """
    level = _LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.ENVIRONMENT == Environment.DEV
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(level=level)
    logging.getLogger().setLevel(level)

    return structlog.get_logger()
