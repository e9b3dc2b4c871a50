"""Aliyun (Alibaba Cloud) Dysms gateway.

API reference: https://help.aliyun.com/document_detail/101414.html
"""

import base64
import hashlib
import hmac
import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict
from urllib.parse import quote

from easysms.errors import GatewaySendError
from easysms.gateways.base import BaseGateway
from easysms.models import Message, PhoneNumber

ENDPOINT_URL = "http://dysmsapi.aliyuncs.com"
ENDPOINT_METHOD = "SendSms"
ENDPOINT_VERSION = "2017-05-25"
ENDPOINT_FORMAT = "JSON"
ENDPOINT_REGION_ID = "cn-hangzhou"
ENDPOINT_SIGNATURE_METHOD = "HMAC-SHA1"
ENDPOINT_SIGNATURE_VERSION = "1.0"


def percent_encode(value: str) -> str:
    """RFC 3986 encoding as required by Aliyun's RPC signature scheme."""
    return quote(value, safe="~")


class AliyunGateway(BaseGateway):
    """Send template messages through Aliyun Dysms.

    Configuration:
        access_key_id: RAM access key ID (required)
        access_key_secret: RAM access key secret (required)
        sign_name: Approved SMS signature (required)
        endpoint: API endpoint (default: http://dysmsapi.aliyuncs.com)
    """

    gateway_name = "aliyun"
    required_config = ("access_key_id", "access_key_secret", "sign_name")

    def send(self, to: PhoneNumber, message: Message) -> Dict[str, Any]:
        template_code = message.get_template(self.name)
        if not template_code:
            raise GatewaySendError(self.name, "template is required")

        params = {
            "AccessKeyId": self.config.get_str("access_key_id"),
            "Action": ENDPOINT_METHOD,
            "Format": ENDPOINT_FORMAT,
            "RegionId": ENDPOINT_REGION_ID,
            "SignatureMethod": ENDPOINT_SIGNATURE_METHOD,
            "SignatureVersion": ENDPOINT_SIGNATURE_VERSION,
            "SignatureNonce": uuid.uuid4().hex,
            "Timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "Version": ENDPOINT_VERSION,
            "PhoneNumbers": to.number,
            "SignName": self.config.get_str("sign_name"),
            "TemplateCode": template_code,
        }

        data = message.get_data(self.name)
        if data:
            params["TemplateParam"] = json.dumps(data, ensure_ascii=False)

        params["Signature"] = self.generate_sign(params)

        endpoint = self.config.get_str("endpoint", ENDPOINT_URL).rstrip("/")
        result = self.get(f"{endpoint}/", params=params)

        if result.get("Code") != "OK":
            raise GatewaySendError(
                self.name,
                result.get("Message", "unknown error"),
                response=result,
                code=result.get("Code"),
            )

        return result

    def generate_sign(self, params: Dict[str, str]) -> str:
        """HMAC-SHA1 signature over the canonicalized GET query."""
        canonical = "&".join(
            f"{percent_encode(key)}={percent_encode(params[key])}"
            for key in sorted(params)
        )
        string_to_sign = f"GET&{percent_encode('/')}&{percent_encode(canonical)}"
        key = f"{self.config.get_str('access_key_secret')}&".encode("utf-8")
        digest = hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha1).digest()
        return base64.b64encode(digest).decode("utf-8")
