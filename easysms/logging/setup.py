"""Structlog configuration and logger setup.

easysms is a library: importing it configures nothing. Applications that
want easysms' log pipeline call configure_logging() once at startup; others
keep their own structlog setup and pass a logger to SmsDispatcher.

Usage:
    from easysms import SmsDispatcher
    from easysms.logging import configure_logging

    logger = configure_logging(log_level="DEBUG")
    dispatcher = SmsDispatcher(settings, logger=logger)
"""

import inspect
import logging
import sys
from typing import Any, Callable, List, Optional

import structlog
from structlog.stdlib import BoundLogger

from easysms.logging.formatters import (
    mask_phone_numbers,
    redact_credentials,
    truncate_large_values,
)

Processor = Callable[..., Any]


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _silence() -> BoundLogger:
    structlog.configure(
        processors=[structlog.stdlib.add_log_level],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=logging.CRITICAL + 1, force=True)
    return structlog.stdlib.get_logger()


def build_processors(
    json_output: bool = False,
    extra_processors: Optional[List[Processor]] = None,
) -> List[Processor]:
    """Assemble the easysms processor chain.

    Redaction runs before any caller-supplied processor and before the
    renderer, so nothing downstream sees raw credentials or full numbers.
    """
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        redact_credentials(),
        mask_phone_numbers(),
        truncate_large_values(),
    ]
    processors.extend(extra_processors or [])
    processors.append(
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return processors


def configure_logging(
    log_level: Optional[str] = None,
    json_output: Optional[bool] = None,
    extra_processors: Optional[List[Processor]] = None,
) -> BoundLogger:
    """Configure structlog for an application embedding easysms.

    Args:
        log_level: Log level name. Defaults to SmsSettings.log_level.
        json_output: Render JSON instead of console output. Defaults to
            SmsSettings.log_json.
        extra_processors: Processors run after redaction, before rendering.

    Returns:
        Configured logger instance. Under pytest all output is suppressed.
    """
    if _is_test_environment():
        return _silence()

    if log_level is None or json_output is None:
        from easysms.configuration import get_settings

        settings = get_settings()
        log_level = log_level or settings.log_level
        json_output = settings.log_json if json_output is None else json_output

    structlog.configure(
        processors=build_processors(json_output, extra_processors),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper(), logging.INFO),
    )
    return structlog.stdlib.get_logger()


def get_module_logger() -> BoundLogger:
    """Get a logger bound with the calling module's name.

    Example:
        # In easysms/dispatcher.py
        logger = get_module_logger()
        # context: {"component": "dispatcher", "module_path": "easysms.dispatcher"}
    """
    logger = structlog.get_logger()

    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1], module_path=module.__name__
    )
