"""Send SMS through interchangeable gateways with automatic fallback.

Usage:
    from easysms import (
        SmsDispatcher,
        SmsSettings,
        Message,
        PhoneNumber,
        AllGatewaysFailedError,
    )

    dispatcher = SmsDispatcher(
        SmsSettings(
            default_gateways=["yunpian", "errorlog"],
            gateways={"yunpian": {"api_key": "..."}, "errorlog": {}},
        )
    )

    results = dispatcher.send(
        PhoneNumber(number="18888888888", idd_code=86),
        Message(content="Your code is 1234"),
    )
    delivered = [r.gateway for r in results.values() if r.is_success]
"""

# Models
from easysms.models import (
    Message,
    MessageType,
    PhoneNumber,
    SendResult,
    SendStatus,
)

# Errors
from easysms.errors import (
    AllGatewaysFailedError,
    ConfigNotFoundError,
    CreatorNotFoundError,
    GatewayConstructionError,
    GatewayError,
    GatewayNotFoundError,
    GatewaySendError,
    HttpError,
    NoGatewayAvailableError,
    SmsError,
)

# Configuration
from easysms.configuration import GatewayConfig, SmsSettings, get_settings

# Strategies
from easysms.strategies import OrderStrategy, RandomStrategy, Strategy, get_strategy

# Gateways
from easysms.gateways import BaseGateway, Gateway

# Engine
from easysms.http import HttpClient
from easysms.registry import GatewayRegistry
from easysms.dispatcher import SmsDispatcher

__all__ = [
    # Models
    "Message",
    "MessageType",
    "PhoneNumber",
    "SendResult",
    "SendStatus",
    # Errors
    "SmsError",
    "GatewayError",
    "ConfigNotFoundError",
    "GatewayNotFoundError",
    "CreatorNotFoundError",
    "GatewayConstructionError",
    "GatewaySendError",
    "NoGatewayAvailableError",
    "AllGatewaysFailedError",
    "HttpError",
    # Configuration
    "SmsSettings",
    "GatewayConfig",
    "get_settings",
    # Strategies
    "Strategy",
    "OrderStrategy",
    "RandomStrategy",
    "get_strategy",
    # Gateways
    "Gateway",
    "BaseGateway",
    # Engine
    "HttpClient",
    "GatewayRegistry",
    "SmsDispatcher",
]
