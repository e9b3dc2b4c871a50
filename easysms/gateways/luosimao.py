"""Luosimao gateway."""

import base64
from typing import Any, Dict

from easysms.errors import GatewaySendError
from easysms.gateways.base import BaseGateway
from easysms.models import Message, PhoneNumber

ENDPOINT_URL = "https://sms-api.luosimao.com/v1/send.json"


class LuosimaoGateway(BaseGateway):
    """Send text messages through Luosimao.

    Configuration:
        api_key: Luosimao API key, without the "key-" prefix (required)
    """

    gateway_name = "luosimao"
    required_config = ("api_key",)

    def send(self, to: PhoneNumber, message: Message) -> Dict[str, Any]:
        credentials = f"api:key-{self.config.get_str('api_key')}"
        result = self.post(
            ENDPOINT_URL,
            data={
                "mobile": to.number,
                "message": message.get_content(self.name),
            },
            headers={
                "Authorization": "Basic "
                + base64.b64encode(credentials.encode("utf-8")).decode("utf-8"),
            },
        )

        if result.get("error", 0) != 0:
            raise GatewaySendError(
                self.name,
                result.get("msg", "unknown error"),
                response=result,
                code=result.get("error"),
            )

        return result
