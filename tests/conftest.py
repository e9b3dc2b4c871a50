"""Shared fixtures for easysms tests."""

from typing import Any, Dict, List, Mapping, Optional
from unittest.mock import MagicMock

import pytest

from easysms.configuration import get_settings
from easysms.dispatcher import SmsDispatcher
from easysms.gateways.base import Gateway
from easysms.http import HttpClient
from easysms.logging import configure_logging
from easysms.strategies import Strategy
from tests.factories.sms import make_message, make_phone, make_settings


@pytest.fixture(autouse=True, scope="session")
def silence_logging():
    """Keep structlog output out of test runs."""
    configure_logging()


@pytest.fixture
def mock_logger():
    """MagicMock standing in for a structlog logger.

    bind() returns the same mock so calls made by bound loggers stay
    assertable on one object.
    """
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def mock_http_client():
    """HttpClient double; configure get/post/post_json/get_text per test."""
    client = MagicMock(spec=HttpClient)
    client.timeout = 5.0
    return client


@pytest.fixture
def phone():
    return make_phone()


@pytest.fixture
def message():
    return make_message()


@pytest.fixture
def dispatcher_factory(mock_logger, mock_http_client):
    """Factory for SmsDispatcher instances wired to test doubles.

    Returns:
        Factory taking default gateways, gateway configs, pre-built gateways
        and an optional strategy.

    Example:
        dispatcher = dispatcher_factory(
            default_gateways=["first", "second"],
            configs={"first": {}, "second": {}},
            gateways={"first": FakeGateway("first")},
        )
    """

    def _factory(
        default_gateways: Optional[List[str]] = None,
        configs: Optional[Dict[str, Dict[str, Any]]] = None,
        gateways: Optional[Mapping[str, Gateway]] = None,
        strategy: Optional[Strategy] = None,
        strategy_name: str = "order",
    ) -> SmsDispatcher:
        return SmsDispatcher(
            settings=make_settings(
                default_gateways=default_gateways,
                gateways=configs,
                strategy=strategy_name,
            ),
            strategy=strategy,
            gateways=gateways,
            http_client=mock_http_client,
            logger=mock_logger,
        )

    return _factory


@pytest.fixture
def clear_settings_cache():
    """Reset the cached environment settings around a test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
