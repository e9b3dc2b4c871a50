"""Configuration module - public API.

Centralized configuration for the dispatch engine using Pydantic
BaseSettings, plus the typed per-gateway configuration view handed to
gateway creators.

Exports:
    SmsSettings: Engine settings class (defaults, strategy, gateway configs)
    get_settings: Cached environment-driven SmsSettings instance
    GatewayConfig: Read-only typed view over one gateway's configuration

Example:
    ```python
    from easysms.configuration import get_settings

    settings = get_settings()

    timeout = settings.timeout
    aliyun_config = settings.gateways.get("aliyun", {})
    ```
"""

from easysms.configuration.gateway import GatewayConfig
from easysms.configuration.settings import SmsSettings, get_settings

__all__ = ["SmsSettings", "get_settings", "GatewayConfig"]
