"""easysms configuration settings."""

from functools import lru_cache
from typing import Any, Dict, List

from pydantic import Field, field_validator

from easysms.configuration.base import EasySmsBaseSettings


class SmsSettings(EasySmsBaseSettings):
    """Dispatch engine configuration.

    Environment Variables:
        EASYSMS_TIMEOUT: Default per-gateway HTTP timeout in seconds (default: 5.0)
        EASYSMS_DEFAULT_GATEWAYS: JSON list of gateway names tried by default
        EASYSMS_STRATEGY: Ordering strategy, 'order' or 'random' (default: order)
        EASYSMS_GATEWAYS: JSON object mapping gateway name to its configuration
        EASYSMS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        EASYSMS_LOG_JSON: Render logs as JSON instead of console output

    Example:
        ```python
        from easysms.configuration import SmsSettings

        settings = SmsSettings(
            default_gateways=["aliyun", "yunpian"],
            gateways={
                "aliyun": {
                    "access_key_id": "...",
                    "access_key_secret": "...",
                    "sign_name": "Acme",
                },
                "yunpian": {"api_key": "...", "timeout": 10},
            },
        )
        ```
    """

    timeout: float = Field(
        default=5.0,
        gt=0,
        description="Default HTTP timeout for gateway calls (seconds)",
    )
    default_gateways: List[str] = Field(
        default_factory=list,
        description="Gateway names attempted when a message names none",
    )
    strategy: str = Field(
        default="order",
        description="Gateway ordering strategy: 'order' or 'random'",
    )
    gateways: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description="Per-gateway configuration keyed by gateway name",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    @field_validator("strategy")
    @classmethod
    def validate_strategy(cls, v: str) -> str:
        """Only strategies shipped with easysms can be named in configuration."""
        from easysms.strategies import STRATEGIES

        v = v.lower()
        if v not in STRATEGIES:
            raise ValueError(
                f"Unknown strategy '{v}', expected one of: {sorted(STRATEGIES)}"
            )
        return v


@lru_cache
def get_settings() -> SmsSettings:
    """Get the environment-driven settings, created once per process."""
    return SmsSettings()
