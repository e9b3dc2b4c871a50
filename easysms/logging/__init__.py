"""Structured logging for easysms using structlog.

Public API:
    - configure_logging(): Initialize logging for the embedding application
    - build_processors(): The processor chain, for hosts with their own setup
    - get_module_logger(): Get a logger for the calling module

Processors:
    - redact_credentials(): Hide secrets, including inside nested mappings
    - mask_phone_numbers(): Hide all but the last digits of recipients
    - truncate_large_values(): Limit string lengths
"""

from easysms.logging.setup import build_processors, configure_logging, get_module_logger
from easysms.logging.formatters import (
    CREDENTIAL_KEYS,
    PHONE_KEYS,
    mask_phone_numbers,
    redact_credentials,
    truncate_large_values,
)

__all__ = [
    "configure_logging",
    "build_processors",
    "get_module_logger",
    "redact_credentials",
    "mask_phone_numbers",
    "truncate_large_values",
    "CREDENTIAL_KEYS",
    "PHONE_KEYS",
]
