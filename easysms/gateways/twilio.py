"""Twilio gateway."""

import base64
from typing import Any, Dict

from easysms.errors import GatewaySendError
from easysms.gateways.base import BaseGateway
from easysms.models import Message, PhoneNumber

ENDPOINT_URL = "https://api.twilio.com/2010-04-01/Accounts/{account_sid}/Messages.json"

ERROR_STATUSES = frozenset({"failed", "undelivered"})


class TwilioGateway(BaseGateway):
    """Send text messages through Twilio's Messages API.

    Configuration:
        account_sid: Twilio account SID (required)
        token: Twilio auth token (required)
        from: Sending phone number or messaging service ID (required)
    """

    gateway_name = "twilio"
    required_config = ("account_sid", "token", "from")

    def send(self, to: PhoneNumber, message: Message) -> Dict[str, Any]:
        account_sid = self.config.get_str("account_sid")
        credentials = f"{account_sid}:{self.config.get_str('token')}"
        headers = {
            "Authorization": "Basic "
            + base64.b64encode(credentials.encode("utf-8")).decode("utf-8"),
        }

        result = self.post(
            ENDPOINT_URL.format(account_sid=account_sid),
            data={
                "To": self.format_number(to),
                "From": self.config.get_str("from"),
                "Body": message.get_content(self.name),
            },
            headers=headers,
        )

        if self.is_error(result):
            raise GatewaySendError(
                self.name,
                result.get("message") or f"status {result.get('status')}",
                response=result,
                code=result.get("error_code") or result.get("code"),
            )

        return result

    @staticmethod
    def format_number(to: PhoneNumber) -> str:
        """E.164 number, assuming +86 when no dialing code was given."""
        if to.idd_code:
            return to.universal_number
        return f"+86{to.number}"

    @staticmethod
    def is_error(result: Dict[str, Any]) -> bool:
        if result.get("status") in ERROR_STATUSES:
            return True
        if result.get("error_code"):
            return True
        # REST errors come back as {"code": 21211, "message": ..., "status": 400}
        return isinstance(result.get("status"), int) and result["status"] >= 400
