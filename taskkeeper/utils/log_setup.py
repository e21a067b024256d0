"""
Structured logging setup for TaskKeeper.

Copyright (c) 2025 TaskKeeper
"""

import logging
import sys
from typing import Optional

import structlog


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None, config=None) -> None:
    """
    Configure stdlib logging and structlog.

    Arguments left as None are taken from the logging section of the
    configuration (LOG_LEVEL, LOG_JSON).

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        json_logs: Render JSON lines instead of console output
        config: TaskKeeperConfig to read defaults from (defaults to get_config())
    """
    if level is None or json_logs is None:
        if config is None:
            from taskkeeper.config import get_config
            config = get_config()
        if level is None:
            level = config.logging.log_level
        if json_logs is None:
            json_logs = config.logging.json_logs

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
