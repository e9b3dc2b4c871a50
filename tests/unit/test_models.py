"""Unit tests for SMS models."""

import pytest
from pydantic import ValidationError

from easysms.errors import GatewaySendError
from easysms.models import (
    Message,
    MessageType,
    PhoneNumber,
    SendResult,
    SendStatus,
)


@pytest.mark.unit
class TestPhoneNumber:

    def test_without_idd_code(self):
        phone = PhoneNumber(number="18888888888")

        assert phone.idd_code == 0
        assert phone.universal_number == "18888888888"
        assert phone.zero_prefixed_number == "18888888888"
        assert phone.in_chinese_mainland

    def test_with_idd_code(self):
        phone = PhoneNumber(number="18888888888", idd_code=86)

        assert phone.universal_number == "+8618888888888"
        assert phone.zero_prefixed_number == "008618888888888"
        assert str(phone) == "+8618888888888"
        assert phone.in_chinese_mainland

    def test_foreign_number(self):
        phone = PhoneNumber(number="5555551234", idd_code=1)

        assert phone.universal_number == "+15555551234"
        assert not phone.in_chinese_mainland

    def test_number_is_stripped(self):
        assert PhoneNumber(number="  18888888888 ").number == "18888888888"

    def test_blank_number_rejected(self):
        with pytest.raises(ValidationError, match="Phone number cannot be empty"):
            PhoneNumber(number="   ")

    def test_negative_idd_code_rejected(self):
        with pytest.raises(ValidationError):
            PhoneNumber(number="18888888888", idd_code=-1)


@pytest.mark.unit
class TestMessage:

    def test_defaults(self):
        message = Message()

        assert message.get_content() == ""
        assert message.get_template() == ""
        assert message.get_data() == {}
        assert message.get_gateways() == []
        assert message.type == MessageType.TEXT

    def test_plain_values(self):
        message = Message(
            content="Your code is 1234",
            template="SMS_001",
            data={"code": "1234"},
            gateways=["aliyun"],
        )

        assert message.get_content("aliyun") == "Your code is 1234"
        assert message.get_template("yunpian") == "SMS_001"
        assert message.get_data() == {"code": "1234"}

    def test_callable_values_receive_gateway_name(self):
        templates = {"aliyun": "SMS_001", "qcloud": "1001"}
        message = Message(
            content=lambda gateway: f"code via {gateway}",
            template=lambda gateway: templates.get(gateway, ""),
            data=lambda gateway: {"gateway": gateway},
        )

        assert message.get_content("yunpian") == "code via yunpian"
        assert message.get_template("aliyun") == "SMS_001"
        assert message.get_template("qcloud") == "1001"
        assert message.get_template("twilio") == ""
        assert message.get_data("smsbao") == {"gateway": "smsbao"}

    def test_get_data_returns_copy(self):
        message = Message(data={"code": "1234"})

        data = message.get_data()
        data["code"] = "0000"

        assert message.get_data() == {"code": "1234"}

    def test_get_gateways_returns_copy(self):
        message = Message(gateways=["a", "b"])

        gateways = message.get_gateways()
        gateways.reverse()

        assert message.gateways == ["a", "b"]

    def test_voice_type(self):
        assert Message(type=MessageType.VOICE).type == MessageType.VOICE


@pytest.mark.unit
class TestSendResult:

    def test_success(self):
        result = SendResult.success("aliyun", {"Code": "OK"})

        assert result.status == SendStatus.SUCCESS
        assert result.is_success
        assert result.data == {"Code": "OK"}
        assert result.error is None

    def test_failure_keeps_exception(self):
        error = RuntimeError("boom")

        result = SendResult.failure("aliyun", error)

        assert result.status == SendStatus.FAILURE
        assert not result.is_success
        assert result.error is error
        assert result.data is None

    def test_failure_carries_provider_response(self):
        response = {"Code": "isv.BUSINESS_LIMIT_CONTROL"}
        error = GatewaySendError("aliyun", "rate limited", response=response)

        result = SendResult.failure("aliyun", error)

        assert result.data == response

    def test_status_values(self):
        assert SendStatus.SUCCESS.value == "success"
        assert SendStatus.FAILURE.value == "failure"
