"""Gateway abstract base class.

All gateway implementations (built-in adapters and custom gateways
registered by the host application) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Union

import structlog

from easysms.configuration import GatewayConfig
from easysms.http import DEFAULT_TIMEOUT, HttpClient
from easysms.models import Message, PhoneNumber


class Gateway(ABC):
    """Abstract base class for SMS gateways.

    Each gateway delivers messages through one provider's API. The
    dispatcher treats all gateways uniformly and may call ``send`` from
    several threads at once, so implementations must be safe for
    concurrent use.

    Example Implementation:
        class ConsoleGateway(Gateway):

            @property
            def name(self) -> str:
                return "console"

            def send(self, to: PhoneNumber, message: Message) -> Any:
                print(to, message.get_content(self.name))
                return {"status": "printed"}
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Gateway identifier used for routing and logging."""
        pass

    @abstractmethod
    def send(self, to: PhoneNumber, message: Message) -> Any:
        """Send one message to one recipient.

        Args:
            to: Recipient phone number.
            message: Message to deliver.

        Returns:
            Provider response, handed back to the caller unmodified.

        Raises:
            Exception: Any exception marks this attempt as failed and the
                dispatcher moves on to the next gateway.
        """
        pass


class BaseGateway(Gateway):
    """Shared plumbing for the built-in provider adapters.

    Subclasses set ``gateway_name``, list the configuration keys they cannot
    work without in ``required_config``, and implement ``send``.

    Args:
        config: Gateway configuration (a GatewayConfig or any mapping).
        http_client: Shared HttpClient; a private one is created if omitted.
        logger: Optional structlog logger.

    Raises:
        GatewayConstructionError: If a required configuration key is missing.
    """

    gateway_name: str = ""
    required_config: tuple = ()

    def __init__(
        self,
        config: Union[GatewayConfig, Mapping, None] = None,
        http_client: Optional[HttpClient] = None,
        logger: Optional[Any] = None,
    ):
        if not isinstance(config, GatewayConfig):
            config = GatewayConfig(self.gateway_name, config or {})
        config.require(*self.required_config)
        self.config = config
        self.http = http_client or HttpClient()
        self.logger = (logger or structlog.get_logger()).bind(gateway=self.name)

    @property
    def name(self) -> str:
        return self.gateway_name

    @property
    def timeout(self) -> float:
        return self.config.get_float("timeout", DEFAULT_TIMEOUT)

    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        return self.http.get(url, params=params, headers=headers, timeout=self.timeout)

    def post(
        self,
        url: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        return self.http.post(url, data=data, headers=headers, timeout=self.timeout)

    def post_json(
        self,
        url: str,
        payload: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        return self.http.post_json(
            url, payload=payload, headers=headers, timeout=self.timeout
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
