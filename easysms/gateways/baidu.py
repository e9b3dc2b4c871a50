"""Baidu Cloud SMS gateway."""

import hashlib
import hmac
from datetime import datetime, timezone
from typing import Any, Dict, Mapping
from urllib.parse import quote

from easysms.errors import GatewaySendError
from easysms.gateways.base import BaseGateway
from easysms.models import Message, PhoneNumber

ENDPOINT_HOST = "smsv3.bj.baidubce.com"
ENDPOINT_URI = "/api/v3/sendSms"
AUTH_VERSION = "bce-auth-v1"
EXPIRATION_IN_SECONDS = 1800
SUCCESS_CODE = "1000"

# Request fields that travel in the message data but are not template variables
TOP_LEVEL_FIELDS = ("custom", "userExtId")


def _hmac_sha256_hex(key: str, msg: str) -> str:
    return hmac.new(
        key.encode("utf-8"), msg.encode("utf-8"), hashlib.sha256
    ).hexdigest()


class BaiduGateway(BaseGateway):
    """Send template messages through Baidu Cloud SMS (BCE v1 signed).

    Configuration:
        ak: Access key (required)
        sk: Secret key (required)
        invoke_id: Signature ID ("signatureId") (required)
        domain: API host (default: smsv3.bj.baidubce.com)
    """

    gateway_name = "baidu"
    required_config = ("ak", "sk", "invoke_id")

    def send(self, to: PhoneNumber, message: Message) -> Dict[str, Any]:
        content_var = message.get_data(self.name)
        params: Dict[str, Any] = {
            "signatureId": self.config.get_str("invoke_id"),
            "mobile": to.number,
            "template": message.get_template(self.name),
        }
        for field in TOP_LEVEL_FIELDS:
            if field in content_var:
                params[field] = content_var.pop(field)
        params["contentVar"] = content_var

        host = self.config.get_str("domain", ENDPOINT_HOST)
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        sign_headers = {"host": host, "x-bce-date": timestamp}

        headers = {
            "Host": host,
            "x-bce-date": timestamp,
            "Authorization": self.generate_sign(sign_headers, timestamp),
        }

        result = self.post_json(
            f"http://{host}{ENDPOINT_URI}", payload=params, headers=headers
        )

        if str(result.get("code")) != SUCCESS_CODE:
            raise GatewaySendError(
                self.name,
                result.get("message", "unknown error"),
                response=result,
                code=result.get("code"),
            )

        return result

    def generate_sign(self, sign_headers: Mapping[str, str], timestamp: str) -> str:
        """Build the bce-auth-v1 Authorization header value."""
        auth_string = (
            f"{AUTH_VERSION}/{self.config.get_str('ak')}/{timestamp}/"
            f"{EXPIRATION_IN_SECONDS}"
        )
        signing_key = _hmac_sha256_hex(self.config.get_str("sk"), auth_string)

        canonical_request = "\n".join(
            [
                "POST",
                quote(ENDPOINT_URI, safe="/"),
                "",
                self.canonical_headers(sign_headers),
            ]
        )
        signature = _hmac_sha256_hex(signing_key, canonical_request)

        signed_headers = ";".join(sorted(name.lower() for name in sign_headers))
        return f"{auth_string}/{signed_headers}/{signature}"

    @staticmethod
    def canonical_headers(headers: Mapping[str, str]) -> str:
        lines = [
            f"{quote(name.strip().lower(), safe='')}:{quote(value.strip(), safe='')}"
            for name, value in headers.items()
        ]
        return "\n".join(sorted(lines))
