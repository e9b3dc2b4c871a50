"""SMS dispatcher with ordered gateway fallback.

Central delivery engine that:
- Builds gateways lazily from registered creators and caches one per name
- Orders candidate gateways with a pluggable Strategy
- Falls back to the next gateway until one succeeds
- Reports every attempt, successful or not, to the caller

Usage Example:
    from easysms import SmsDispatcher, SmsSettings, Message

    dispatcher = SmsDispatcher(
        SmsSettings(
            default_gateways=["aliyun", "errorlog"],
            gateways={
                "aliyun": {
                    "access_key_id": "...",
                    "access_key_secret": "...",
                    "sign_name": "Acme",
                },
                "errorlog": {"file": "/var/log/sms-fallback.log"},
            },
        )
    )

    try:
        results = dispatcher.send(
            "18888888888",
            Message(template="SMS_001", data={"code": "1234"}),
        )
    except AllGatewaysFailedError as e:
        for name, result in e.results.items():
            logger.warning("sms_attempt_failed", gateway=name, error=str(result.error))
"""

import functools
import threading
from typing import Any, Dict, List, Mapping, Optional, Union

from easysms.configuration import GatewayConfig, SmsSettings, get_settings
from easysms.errors import (
    AllGatewaysFailedError,
    ConfigNotFoundError,
    GatewayNotFoundError,
    NoGatewayAvailableError,
)
from easysms.gateways import BUILTIN_GATEWAYS, Gateway
from easysms.http import HttpClient
from easysms.logging import get_module_logger
from easysms.models import Message, PhoneNumber, SendResult
from easysms.registry import GatewayCreator, GatewayRegistry
from easysms.strategies import Strategy, get_strategy

module_logger = get_module_logger()


class SmsDispatcher:
    """Multi-gateway SMS dispatcher.

    Orchestrates message delivery across gateways with:
    - Candidate selection (message gateways, else configured defaults)
    - Strategy-defined attempt order, computed once per send
    - Sequential fallback that stops at the first success
    - Lazy, thread-safe gateway construction with one instance per name

    Cached gateways are read without locking. Building a gateway holds only
    that name's build lock, so a slow creator never delays other names and
    a creator may itself resolve or register other gateways. The cache lock
    is held just long enough to store an instance; a gateway is built at
    most once per name and every caller sees the same instance.

    Attributes:
        settings: SmsSettings the dispatcher was built from
        strategy: Active ordering Strategy
        registry: GatewayRegistry holding gateway creators
        http_client: HttpClient shared by the built-in gateways

    Example:
        dispatcher = SmsDispatcher(settings, strategy=RandomStrategy())
        dispatcher.register_gateway_creator("acme", AcmeGateway)
        results = dispatcher.send(PhoneNumber(number="5555551234", idd_code=1), message)
    """

    def __init__(
        self,
        settings: Optional[SmsSettings] = None,
        strategy: Optional[Strategy] = None,
        gateways: Optional[Mapping[str, Gateway]] = None,
        http_client: Optional[HttpClient] = None,
        logger: Optional[Any] = None,
    ):
        """Initialize the dispatcher.

        Args:
            settings: Engine settings. Defaults to the environment-driven
                settings from get_settings().
            strategy: Ordering strategy. Defaults to the one named in settings.
            gateways: Ready-made gateway instances to install in the cache.
            http_client: HttpClient shared by built-in gateways. A new one
                is created with the settings timeout if omitted.
            logger: Optional structlog logger used by the dispatcher and
                the built-in gateways.
        """
        self.settings = settings or get_settings()
        self.strategy = strategy or get_strategy(self.settings.strategy)
        self.logger = logger or module_logger
        self.http_client = http_client or HttpClient(
            timeout=self.settings.timeout, logger=self.logger
        )
        self.registry = GatewayRegistry(logger=self.logger)

        self._default_gateways: List[str] = list(self.settings.default_gateways)
        self._configs: Dict[str, Dict[str, Any]] = {
            name: dict(config) for name, config in self.settings.gateways.items()
        }
        self._gateways: Dict[str, Gateway] = {}
        self._build_locks: Dict[str, threading.RLock] = {}
        self._lock = threading.Lock()

        self._register_builtin_gateway_creators()
        for name, gateway in (gateways or {}).items():
            self.register_gateway(name, gateway)
        self._auto_register_gateways()

        self.logger.info(
            "initialized_sms_dispatcher",
            default_gateways=self._default_gateways,
            configured_gateways=sorted(self._configs),
            gateway_creators=self.registry.list_creators(),
            strategy=type(self.strategy).__name__,
        )

    @property
    def default_gateways(self) -> List[str]:
        return list(self._default_gateways)

    def register_gateway(self, name: str, gateway: Gateway) -> None:
        """Install a ready-made gateway under ``name``, bypassing the registry.

        Args:
            name: Gateway name used in candidate lists.
            gateway: Gateway instance.
        """
        with self._lock:
            self._gateways[name] = gateway
        self.logger.debug("gateway_registered", gateway=name)

    def register_gateway_creator(self, name: str, creator: GatewayCreator) -> None:
        """Register how to build the gateway called ``name``.

        Args:
            name: Gateway name used in candidate lists and configuration.
            creator: Callable taking a GatewayConfig and returning a Gateway.
                A Gateway subclass accepting the config as its first argument
                works as-is.
        """
        self.registry.register(name, creator)

    def gateway(self, name: str) -> Gateway:
        """Get the live gateway for ``name``, building and caching it on first use.

        Args:
            name: Gateway name.

        Returns:
            Cached Gateway instance for the name.

        Raises:
            ConfigNotFoundError: No configuration entry exists for the name.
            GatewayNotFoundError: No creator is registered for the name.
            Exception: Whatever the creator raised, unchanged.
        """
        gateway = self._gateways.get(name)
        if gateway is not None:
            return gateway

        if name not in self._configs:
            raise ConfigNotFoundError(name)
        if not self.registry.has_creator(name):
            raise GatewayNotFoundError(name)

        with self._build_lock(name):
            # Double-check: another thread may have built it while we waited
            gateway = self._gateways.get(name)
            if gateway is not None:
                return gateway

            self.logger.debug("creating_gateway", gateway=name)
            gateway = self.registry.create(name, self._gateway_config(name))
            with self._lock:
                # An instance installed by register_gateway() meanwhile wins
                return self._gateways.setdefault(name, gateway)

    def send(
        self, to: Union[PhoneNumber, str], message: Message
    ) -> Dict[str, SendResult]:
        """Send a message, falling back across gateways until one succeeds.

        Process:
        1. Use the message's gateways, else the configured defaults
        2. Order them with the active strategy
        3. For each gateway in order:
           a. Resolve it (cache or creator); record a failure if that fails
           b. Send through it; record a failure and move on if that fails
           c. Record the success and stop
        4. Raise AllGatewaysFailedError if nothing succeeded

        Args:
            to: Recipient PhoneNumber, or a bare number string
            message: Message to deliver

        Returns:
            Dict mapping each attempted gateway name to its SendResult,
            in attempt order

        Raises:
            NoGatewayAvailableError: No candidate gateway, nothing attempted.
            AllGatewaysFailedError: Every candidate failed. Carries the full
                results and the last failure.

        Example:
            results = dispatcher.send("18888888888", message)
            delivered_by = next(r.gateway for r in results.values() if r.is_success)
        """
        if isinstance(to, str):
            to = PhoneNumber(number=to)

        candidates = message.get_gateways() or self.default_gateways
        if not candidates:
            raise NoGatewayAvailableError()

        ordered = self.strategy.apply(candidates)
        self.logger.info("sending_message", to=str(to), gateways=ordered)

        results: Dict[str, SendResult] = {}
        last_error: Optional[BaseException] = None

        for name in ordered:
            try:
                gateway = self.gateway(name)
            except Exception as e:
                self.logger.error("gateway_unavailable", gateway=name, error=str(e))
                results[name] = SendResult.failure(name, e)
                last_error = e
                continue

            try:
                response = gateway.send(to, message)
            except Exception as e:
                self.logger.error("gateway_send_failed", gateway=name, error=str(e))
                results[name] = SendResult.failure(name, e)
                last_error = e
                continue

            results[name] = SendResult.success(name, response)
            self.logger.info("message_sent", gateway=name, attempts=len(results))
            return results

        self.logger.error(
            "all_gateways_failed",
            gateways=ordered,
            error=str(last_error),
        )
        raise AllGatewaysFailedError(results, last_error) from last_error

    def simple_send(
        self, phone: Union[PhoneNumber, str], data: Mapping[str, Any]
    ) -> Dict[str, SendResult]:
        """Send a message described by a plain mapping.

        Args:
            phone: Recipient PhoneNumber or bare number string
            data: Mapping with any of "content", "template", "data",
                "gateways" (see Message)

        Returns:
            Same as send()
        """
        fields = ("content", "template", "data", "gateways")
        message = Message(**{key: data[key] for key in fields if key in data})
        return self.send(phone, message)

    def available_gateways(self) -> List[str]:
        """Names of gateways that are cached or can be built from configuration."""
        with self._lock:
            names = set(self._gateways)
        names.update(name for name in self._configs if self.registry.has_creator(name))
        return sorted(names)

    def close(self) -> None:
        """Release the shared HTTP connection pool."""
        self.http_client.close()

    def _build_lock(self, name: str) -> threading.RLock:
        # Reentrant so a creator resolving its own name fails with
        # RecursionError instead of hanging.
        with self._lock:
            return self._build_locks.setdefault(name, threading.RLock())

    def _gateway_config(self, name: str) -> GatewayConfig:
        return GatewayConfig(
            name, self._configs[name], defaults={"timeout": self.settings.timeout}
        )

    def _register_builtin_gateway_creators(self) -> None:
        for name, gateway_class in BUILTIN_GATEWAYS.items():
            self.registry.register(
                name,
                functools.partial(
                    gateway_class, http_client=self.http_client, logger=self.logger
                ),
            )

    def _auto_register_gateways(self) -> None:
        """Eagerly build every configured gateway that has a creator.

        A gateway that fails to build is logged and left uncached; later
        sends retry it and report the failure per attempt.
        """
        for name in self._configs:
            if name in self._gateways or not self.registry.has_creator(name):
                continue
            try:
                self.gateway(name)
            except Exception as e:
                self.logger.error(
                    "gateway_auto_registration_failed", gateway=name, error=str(e)
                )
