"""Yunpian gateway."""

from typing import Any, Dict

from easysms.errors import GatewaySendError
from easysms.gateways.base import BaseGateway
from easysms.models import Message, PhoneNumber

ENDPOINT_URL = "https://sms.yunpian.com"
ENDPOINT_PATH = "/v2/sms/single_send.json"


class YunpianGateway(BaseGateway):
    """Send text messages through Yunpian.

    Configuration:
        api_key: Yunpian API key (required)
        signature: Signature prepended to content when absent, e.g. "【Acme】"
        endpoint: API endpoint (default: https://sms.yunpian.com)
    """

    gateway_name = "yunpian"
    required_config = ("api_key",)

    def send(self, to: PhoneNumber, message: Message) -> Dict[str, Any]:
        content = message.get_content(self.name)
        if not content:
            raise GatewaySendError(self.name, "content is required")

        signature = self.config.get_str("signature")
        if signature and signature not in content:
            content = signature + content

        endpoint = self.config.get_str("endpoint", ENDPOINT_URL).rstrip("/")
        result = self.post(
            endpoint + ENDPOINT_PATH,
            data={
                "apikey": self.config.get_str("api_key"),
                "mobile": to.number
                if to.in_chinese_mainland
                else to.universal_number,
                "text": content,
            },
        )

        if result.get("code") != 0:
            raise GatewaySendError(
                self.name,
                result.get("msg", "unknown error"),
                response=result,
                code=result.get("code"),
            )

        return result
