"""UCloud USMS gateway."""

import hashlib
from typing import Any, Dict, Mapping

from easysms.errors import GatewaySendError
from easysms.gateways.base import BaseGateway
from easysms.models import Message, PhoneNumber

ENDPOINT_URL = "https://api.ucloud.cn"
ENDPOINT_ACTION = "SendUSMSMessage"
SUCCESS_CODE = 0


class UcloudGateway(BaseGateway):
    """Send template messages through UCloud USMS.

    Message data keys:
        code: Template parameters; a mapping, a list or a single value
        mobiles: Recipients overriding ``to``; a list or a single number
        sig_content: Signature overriding the configured one

    Configuration:
        public_key: API public key (required)
        private_key: API private key used to sign requests (required)
        sig_content: Default SMS signature
        project_id: UCloud project ID
    """

    gateway_name = "ucloud"
    required_config = ("public_key", "private_key")

    def send(self, to: PhoneNumber, message: Message) -> Dict[str, Any]:
        params = self.build_params(to, message)
        result = self.get(ENDPOINT_URL, params=params)

        if result.get("RetCode") != SUCCESS_CODE:
            raise GatewaySendError(
                self.name,
                result.get("Message", "unknown error"),
                response=result,
                code=result.get("RetCode"),
            )

        return result

    def build_params(self, to: PhoneNumber, message: Message) -> Dict[str, str]:
        data = message.get_data(self.name)
        params = {
            "Action": ENDPOINT_ACTION,
            "PublicKey": self.config.get_str("public_key"),
            "TemplateId": message.get_template(self.name),
        }

        sig_content = data.get("sig_content")
        if not isinstance(sig_content, str) or not sig_content:
            sig_content = self.config.get_str("sig_content")
        params["SigContent"] = sig_content

        code = data.get("code")
        if isinstance(code, Mapping):
            for key, value in code.items():
                params[f"TemplateParams.{key}"] = str(value)
        elif isinstance(code, (list, tuple)):
            for i, value in enumerate(code):
                params[f"TemplateParams.{i}"] = str(value)
        elif code is not None and str(code):
            params["TemplateParams.0"] = str(code)

        mobiles = data.get("mobiles")
        if isinstance(mobiles, (list, tuple)):
            for i, value in enumerate(mobiles):
                params[f"PhoneNumbers.{i}"] = str(value)
        elif mobiles is None:
            params["PhoneNumbers.0"] = str(to)
        elif str(mobiles):
            params["PhoneNumbers.0"] = str(mobiles)

        project_id = self.config.get_str("project_id")
        if project_id:
            params["ProjectId"] = project_id

        params["Signature"] = self.generate_sign(params)
        return params

    def generate_sign(self, params: Mapping[str, str]) -> str:
        """SHA1 of every key and value in key order, followed by the private key."""
        payload = "".join(key + params[key] for key in sorted(params))
        payload += self.config.get_str("private_key")
        return hashlib.sha1(payload.encode("utf-8")).hexdigest()
