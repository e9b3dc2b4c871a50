"""Tencent Cloud SMS gateway.

API reference: https://cloud.tencent.com/document/api/382/55981
"""

import hashlib
import hmac
import json
import time
from datetime import datetime, timezone
from typing import Any, Dict
from urllib.parse import urlparse

from easysms.errors import GatewaySendError
from easysms.gateways.base import BaseGateway
from easysms.models import Message, PhoneNumber

ENDPOINT_URL = "https://sms.tencentcloudapi.com"
ENDPOINT_SERVICE = "sms"
ENDPOINT_METHOD = "SendSms"
ENDPOINT_VERSION = "2021-01-11"
ENDPOINT_REGION = "ap-guangzhou"
ALGORITHM = "TC3-HMAC-SHA256"
CONTENT_TYPE = "application/json; charset=utf-8"


def _hmac_sha256(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def _sha256_hex(msg: str) -> str:
    return hashlib.sha256(msg.encode("utf-8")).hexdigest()


class QcloudGateway(BaseGateway):
    """Send template messages through Tencent Cloud SMS (TC3 signed).

    A "sign_name" entry in the message data overrides the configured one
    and is not sent as a template parameter.

    Configuration:
        sdk_app_id: SMS application ID (required)
        secret_id: API secret ID (required)
        secret_key: API secret key (required)
        sign_name: Default SMS signature
        region: API region (default: ap-guangzhou)
        endpoint: API endpoint (default: https://sms.tencentcloudapi.com)
    """

    gateway_name = "qcloud"
    required_config = ("sdk_app_id", "secret_id", "secret_key")

    def send(self, to: PhoneNumber, message: Message) -> Dict[str, Any]:
        data = message.get_data(self.name)
        sign_name = data.pop("sign_name", None) or self.config.get_str("sign_name")

        params = {
            "PhoneNumberSet": [to.universal_number],
            "SmsSdkAppId": self.config.get_str("sdk_app_id"),
            "SignName": sign_name,
            "TemplateId": message.get_template(self.name),
            "TemplateParamSet": [str(value) for value in data.values()],
        }

        endpoint = self.config.get_str("endpoint", ENDPOINT_URL)
        host = urlparse(endpoint).netloc
        timestamp = int(time.time())

        headers = {
            "Authorization": self.generate_sign(json.dumps(params), host, timestamp),
            "Host": host,
            "Content-Type": CONTENT_TYPE,
            "X-TC-Action": ENDPOINT_METHOD,
            "X-TC-Region": self.config.get_str("region", ENDPOINT_REGION),
            "X-TC-Timestamp": str(timestamp),
            "X-TC-Version": ENDPOINT_VERSION,
        }

        result = self.post_json(endpoint, payload=params, headers=headers)

        response = result.get("Response") or {}
        error = response.get("Error")
        if error:
            raise GatewaySendError(
                self.name,
                error.get("Message", "unknown error"),
                response=result,
                code=error.get("Code"),
            )
        for status in response.get("SendStatusSet") or []:
            if status.get("Code") != "Ok":
                raise GatewaySendError(
                    self.name,
                    status.get("Message", "unknown error"),
                    response=result,
                    code=status.get("Code"),
                )

        return result

    def generate_sign(self, payload: str, host: str, timestamp: int) -> str:
        """Build the TC3-HMAC-SHA256 Authorization header value."""
        date = datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")
        scope = f"{date}/{ENDPOINT_SERVICE}/tc3_request"

        canonical_request = "\n".join(
            [
                "POST",
                "/",
                "",
                f"content-type:{CONTENT_TYPE}\nhost:{host}\n",
                "content-type;host",
                _sha256_hex(payload),
            ]
        )
        string_to_sign = "\n".join(
            [ALGORITHM, str(timestamp), scope, _sha256_hex(canonical_request)]
        )

        secret_key = self.config.get_str("secret_key")
        secret_date = _hmac_sha256(f"TC3{secret_key}".encode("utf-8"), date)
        secret_service = _hmac_sha256(secret_date, ENDPOINT_SERVICE)
        secret_signing = _hmac_sha256(secret_service, "tc3_request")
        signature = hmac.new(
            secret_signing, string_to_sign.encode("utf-8"), hashlib.sha256
        ).hexdigest()

        return (
            f"{ALGORITHM} Credential={self.config.get_str('secret_id')}/{scope}, "
            f"SignedHeaders=content-type;host, Signature={signature}"
        )
