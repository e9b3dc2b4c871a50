"""Unit tests for the Gateway interface and BaseGateway plumbing."""

import pytest

from easysms.configuration import GatewayConfig
from easysms.errors import GatewayConstructionError
from easysms.gateways import BUILTIN_GATEWAYS, BaseGateway, Gateway


class EchoGateway(BaseGateway):
    gateway_name = "echo"
    required_config = ("api_key",)

    def send(self, to, message):
        return self.post("https://echo.test/send", data={"to": to.number})


@pytest.mark.unit
class TestGatewayInterface:

    def test_cannot_instantiate_abstract_gateway(self):
        with pytest.raises(TypeError):
            Gateway()

    def test_builtin_gateways_registered_by_name(self):
        assert sorted(BUILTIN_GATEWAYS) == [
            "aliyun",
            "baidu",
            "chuanglan",
            "errorlog",
            "luosimao",
            "qcloud",
            "smsbao",
            "submail",
            "twilio",
            "ucloud",
            "yunpian",
        ]
        for name, gateway_class in BUILTIN_GATEWAYS.items():
            assert gateway_class.gateway_name == name


@pytest.mark.unit
class TestBaseGateway:

    def test_plain_mapping_is_wrapped(self, mock_http_client, mock_logger):
        gateway = EchoGateway(
            {"api_key": "k"}, http_client=mock_http_client, logger=mock_logger
        )

        assert isinstance(gateway.config, GatewayConfig)
        assert gateway.config.name == "echo"
        assert gateway.name == "echo"
        mock_logger.bind.assert_called_once_with(gateway="echo")

    def test_missing_required_config(self, mock_http_client):
        with pytest.raises(GatewayConstructionError, match="missing required config: api_key"):
            EchoGateway({}, http_client=mock_http_client)

    def test_timeout_defaults_and_overrides(self, mock_http_client):
        default = EchoGateway({"api_key": "k"}, http_client=mock_http_client)
        custom = EchoGateway(
            {"api_key": "k", "timeout": "12"}, http_client=mock_http_client
        )

        assert default.timeout == 5.0
        assert custom.timeout == 12.0

    def test_requests_carry_gateway_timeout(self, mock_http_client, phone, message):
        mock_http_client.post.return_value = {"ok": True}
        gateway = EchoGateway(
            GatewayConfig("echo", {"api_key": "k", "timeout": 3}),
            http_client=mock_http_client,
        )

        assert gateway.send(phone, message) == {"ok": True}
        mock_http_client.post.assert_called_once_with(
            "https://echo.test/send",
            data={"to": "18888888888"},
            headers=None,
            timeout=3.0,
        )

    def test_repr(self, mock_http_client):
        gateway = EchoGateway({"api_key": "k"}, http_client=mock_http_client)

        assert repr(gateway) == "EchoGateway(name='echo')"
