"""SMSBao gateway. Answers with a bare status code instead of JSON."""

import hashlib
from typing import Any, Dict

from easysms.errors import GatewaySendError
from easysms.gateways.base import BaseGateway
from easysms.models import Message, PhoneNumber

ENDPOINT_URL = "http://api.smsbao.com/{action}"
SUCCESS_CODE = "0"

ERROR_STATUSES = {
    "-1": "missing parameters",
    "-2": "server does not support the request",
    "30": "wrong password",
    "40": "account does not exist",
    "41": "insufficient balance",
    "42": "account expired",
    "43": "IP address restricted",
    "50": "content contains sensitive words",
}


class SmsbaoGateway(BaseGateway):
    """Send text messages through SMSBao.

    Mainland numbers go through the "sms" action; anything else goes through
    "wsms" with the universal (+idd) number.

    Configuration:
        user: Account name (required)
        password: Account password, sent MD5 hashed (required)
    """

    gateway_name = "smsbao"
    required_config = ("user", "password")

    def send(self, to: PhoneNumber, message: Message) -> Dict[str, Any]:
        if to.in_chinese_mainland:
            action, number = "sms", to.number
        else:
            action, number = "wsms", to.universal_number

        password = self.config.get_str("password")
        status = self.http.get_text(
            ENDPOINT_URL.format(action=action),
            params={
                "u": self.config.get_str("user"),
                "p": hashlib.md5(password.encode("utf-8")).hexdigest(),
                "m": number,
                "c": message.get_content(self.name),
            },
            timeout=self.timeout,
        ).strip()

        result = {"status": status}
        if status != SUCCESS_CODE:
            raise GatewaySendError(
                self.name,
                ERROR_STATUSES.get(status, "unknown error"),
                response=result,
                code=status,
            )

        return result
