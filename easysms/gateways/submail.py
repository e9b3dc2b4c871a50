"""Submail (mysubmail.com) gateway."""

import json
from typing import Any, Dict

from easysms.errors import GatewaySendError
from easysms.gateways.base import BaseGateway
from easysms.models import Message, PhoneNumber

ENDPOINT_TEMPLATE = "https://api.mysubmail.com/{function}.json"
SUCCESS_STATUS = "success"


class SubmailGateway(BaseGateway):
    """Send messages through Submail.

    Messages with content use the plain send API. Messages without content
    use the template ("xsend") API: the project is the message template,
    else the "project" entry of the data, else the configured project, and
    the whole data mapping is sent as template variables.

    Configuration:
        app_id: Application ID (required)
        app_key: Application key (required)
        project: Default template project
    """

    gateway_name = "submail"
    required_config = ("app_id", "app_key")

    def send(self, to: PhoneNumber, message: Message) -> Dict[str, Any]:
        params = {
            "appid": self.config.get_str("app_id"),
            "signature": self.config.get_str("app_key"),
            "to": to.universal_number,
        }

        content = message.get_content(self.name)
        if content:
            function = "sms/send" if to.in_chinese_mainland else "internationalsms/send"
            params["content"] = content
        else:
            function = (
                "message/xsend" if to.in_chinese_mainland else "internationalsms/xsend"
            )
            data = message.get_data(self.name)
            params["project"] = (
                message.get_template(self.name)
                or data.get("project")
                or self.config.get_str("project")
            )
            params["vars"] = json.dumps(data)

        result = self.post(ENDPOINT_TEMPLATE.format(function=function), data=params)

        if result.get("status") != SUCCESS_STATUS:
            raise GatewaySendError(
                self.name,
                result.get("msg", "unknown error"),
                response=result,
                code=result.get("code"),
            )

        return result
