"""structlog processors that keep credentials and recipients out of logs.

Gateway configurations carry access key secrets and API tokens, request
headers carry signed Authorization values, and every send names a phone
number. The processors below are installed by configure_logging() and can
also be added to a host application's own structlog pipeline.

Usage:
    from easysms.logging.formatters import mask_phone_numbers, redact_credentials
"""

import re
from collections.abc import Mapping
from typing import Any

CREDENTIAL_KEYS = frozenset(
    {
        "secret",
        "token",
        "password",
        "api_key",
        "apikey",
        "access_key",
        "authorization",
        "signature",
        "credential",
        "private_key",
    }
)

PHONE_KEYS = frozenset({"to", "phone", "mobile", "phone_number", "number"})

_DIGIT = re.compile(r"\d")


def _is_credential(key: str, keys: frozenset) -> bool:
    key_lower = key.lower()
    return any(pattern in key_lower for pattern in keys)


def _redact(value: Any, keys: frozenset, mask_value: str) -> Any:
    if isinstance(value, Mapping):
        return {
            k: (
                mask_value
                if isinstance(k, str) and _is_credential(k, keys) and v is not None
                else _redact(v, keys, mask_value)
            )
            for k, v in value.items()
        }
    return value


def redact_credentials(
    mask_value: str = "***REDACTED***",
    extra_keys: frozenset[str] | None = None,
):
    """Create a processor that redacts credential values, nested ones included.

    A key is a credential when it contains one of CREDENTIAL_KEYS
    (case-insensitive). Nested mappings such as a gateway configuration or
    request headers are walked, so ``config={"access_key_secret": ...}`` is
    redacted too.

    Args:
        mask_value: Replacement for redacted values.
        extra_keys: Additional key fragments to treat as credentials.

    Returns:
        A structlog processor function.

    Example:
        configure_logging(
            extra_processors=[redact_credentials(extra_keys=frozenset({"sdk_app_id"}))]
        )
    """
    keys = CREDENTIAL_KEYS | (extra_keys or frozenset())

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        return _redact(event_dict, keys, mask_value)

    return processor


def mask_phone_numbers(visible_digits: int = 4):
    """Create a processor that hides all but the last digits of recipients.

    Applies to string values under PHONE_KEYS, so ``to="+8618888888888"``
    is logged as ``"+*********8888"``. Non-digit characters are kept.

    Args:
        visible_digits: Trailing digits left readable.
    """

    def mask(number: str) -> str:
        total = len(_DIGIT.findall(number))
        hidden = max(total - visible_digits, 0)
        out = []
        for char in number:
            if hidden and char.isdigit():
                out.append("*")
                hidden -= 1
            else:
                out.append(char)
        return "".join(out)

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key in PHONE_KEYS & event_dict.keys():
            value = event_dict[key]
            if isinstance(value, str):
                event_dict[key] = mask(value)
        return event_dict

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that truncates long strings.

    Some providers answer failures with whole HTML pages, which end up in
    ``error=`` fields.

    Args:
        max_length: Maximum string length before truncation.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    f"{value[:max_length]}...[{len(value) - max_length} more chars]"
                )
        return event_dict

    return processor
