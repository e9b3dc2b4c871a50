"""Chuanglan (253.com) gateway."""

from typing import Any, Dict

from easysms.errors import GatewaySendError
from easysms.gateways.base import BaseGateway
from easysms.models import Message, PhoneNumber

ENDPOINT_URL_TEMPLATE = "https://{channel}.253.com/msg/send/json"
INTERNATIONAL_URL = "http://intapi.253.com/send/json"
CHANNEL_VALIDATE_CODE = "smsbj1"
CHANNEL_PROMOTION_CODE = "smssh1"
MAINLAND_IDD_CODE = 86


class ChuanglanGateway(BaseGateway):
    """Send text messages through Chuanglan.

    Mainland numbers go through the configured channel. Numbers with any
    other country code go through the international API, using the
    international credentials when they are configured.

    Configuration:
        account: API account (required)
        password: API password (required)
        channel: "smsbj1" for verification codes (default) or "smssh1"
            for promotions; anything else falls back to "smsbj1"
        sign: Signature wrapped around promotion content, e.g. "【Acme】"
        unsubscribe: Opt-out text appended to signed promotion content
        intel_account: Account for international numbers
        intel_password: Password for international numbers
    """

    gateway_name = "chuanglan"
    required_config = ("account", "password")

    def send(self, to: PhoneNumber, message: Message) -> Dict[str, Any]:
        idd_code = to.idd_code or MAINLAND_IDD_CODE
        channel = self.channel(idd_code)

        params = {
            "account": self.config.get_str("account"),
            "password": self.config.get_str("password"),
            "phone": to.number,
            "msg": self.wrap_content(message.get_content(self.name), channel),
        }

        if channel == INTERNATIONAL_URL:
            endpoint = INTERNATIONAL_URL
            params["mobile"] = f"{idd_code}{to.number}"
            params["account"] = (
                self.config.get_str("intel_account") or params["account"]
            )
            params["password"] = (
                self.config.get_str("intel_password") or params["password"]
            )
        else:
            endpoint = ENDPOINT_URL_TEMPLATE.format(channel=channel)

        result = self.post_json(endpoint, payload=params)

        if str(result.get("code")) != "0":
            raise GatewaySendError(
                self.name,
                result.get("errorMsg", "unknown error"),
                response=result,
                code=result.get("code"),
            )

        return result

    def channel(self, idd_code: int) -> str:
        """Pick the send channel, or the international URL outside the mainland."""
        if idd_code != MAINLAND_IDD_CODE:
            return INTERNATIONAL_URL

        channel = self.config.get_str("channel", CHANNEL_VALIDATE_CODE)
        if channel not in (CHANNEL_VALIDATE_CODE, CHANNEL_PROMOTION_CODE):
            return CHANNEL_VALIDATE_CODE
        return channel

    def wrap_content(self, content: str, channel: str) -> str:
        if channel != CHANNEL_PROMOTION_CODE:
            return content

        sign = self.config.get_str("sign")
        if not sign:
            return content
        return sign + content + self.config.get_str("unsubscribe")
