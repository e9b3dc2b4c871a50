"""Typed, read-only view over one gateway's configuration."""

from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional

from easysms.errors import GatewayConstructionError

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})


class GatewayConfig(Mapping):
    """Immutable configuration mapping for a single gateway.

    Behaves like a read-only dict so custom creators can treat it as plain
    configuration, and adds "get-or-default" accessors that coerce loosely
    typed values (strings from the environment, ints from JSON) to the type
    the gateway needs.

    Args:
        name: Gateway name the configuration belongs to.
        values: Configuration values for the gateway.
        defaults: Values used when a key is absent from ``values``.

    Example:
        config = GatewayConfig("yunpian", {"api_key": "k", "timeout": "10"})
        config.get_str("api_key")          # "k"
        config.get_float("timeout", 5.0)   # 10.0
        config.get_bool("debug", False)    # False
    """

    def __init__(
        self,
        name: str,
        values: Optional[Mapping] = None,
        defaults: Optional[Mapping] = None,
    ):
        self._name = name
        self._values: Dict[str, Any] = dict(defaults or {})
        self._values.update(values or {})

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"GatewayConfig(name={self._name!r}, keys={sorted(self._values)!r})"

    def get_str(self, key: str, default: str = "") -> str:
        value = self._values.get(key)
        if isinstance(value, str):
            return value
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        value = self._values.get(key)
        if isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return default
        return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        value = self._values.get(key)
        if isinstance(value, bool):
            return default
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                return default
        return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._values.get(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return value != 0
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        return default

    def require(self, *keys: str) -> None:
        """Ensure every key holds a non-empty value.

        Raises:
            GatewayConstructionError: Naming all missing keys.
        """
        missing = [key for key in keys if self._values.get(key) in (None, "")]
        if missing:
            raise GatewayConstructionError(
                self._name, f"missing required config: {', '.join(missing)}"
            )
