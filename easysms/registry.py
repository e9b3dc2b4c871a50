"""Gateway creator registry.

Maps gateway names to creator callables and builds gateways on demand.
The registry never caches instances; caching belongs to SmsDispatcher.
"""

import threading
from typing import Any, Callable, Dict, List, Optional

import structlog

from easysms.configuration import GatewayConfig
from easysms.errors import CreatorNotFoundError
from easysms.gateways.base import Gateway

GatewayCreator = Callable[[GatewayConfig], Gateway]


class GatewayRegistry:
    """Thread-safe registry of gateway creators.

    Registration takes the registry lock. Lookups read the creators dict
    without locking so concurrent senders never wait on each other; a dict
    lookup is atomic and the dict is only ever mutated under the lock.

    Args:
        logger: Optional structlog logger, normally the owning dispatcher's.

    Attributes:
        _creators: Dict mapping gateway name to its creator.
        _lock: Threading lock serializing writers.
    """

    def __init__(self, logger: Optional[Any] = None):
        self._creators: Dict[str, GatewayCreator] = {}
        self._lock = threading.Lock()
        self.logger = logger or structlog.get_logger()

    def register(self, name: str, creator: GatewayCreator) -> None:
        """Register a creator, replacing any creator already under ``name``.

        Args:
            name: Gateway name.
            creator: Callable taking a GatewayConfig and returning a Gateway.
        """
        with self._lock:
            replaced = name in self._creators
            self._creators[name] = creator
        self.logger.debug(
            "gateway_creator_registered", gateway=name, replaced=replaced
        )

    def has_creator(self, name: str) -> bool:
        return name in self._creators

    def create(self, name: str, config: GatewayConfig) -> Gateway:
        """Build a new gateway with the creator registered under ``name``.

        Whatever the creator raises propagates unchanged. Every call invokes
        the creator again.

        Raises:
            CreatorNotFoundError: If no creator is registered under that name.
        """
        creator = self._creators.get(name)
        if creator is None:
            raise CreatorNotFoundError(name)
        return creator(config)

    def list_creators(self) -> List[str]:
        """Get the sorted names of all registered creators."""
        with self._lock:
            return sorted(self._creators)
