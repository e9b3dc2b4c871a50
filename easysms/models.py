"""SMS dispatch core models.

Value objects handed to gateways (PhoneNumber, Message) and the per-gateway
outcome records returned by SmsDispatcher.send().

Uses Pydantic BaseModel for:
- Runtime input validation of phone numbers
- Type safety on message fields and results
- Consistent serialization of results for callers that log or persist them
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

ContentValue = Union[str, Callable[[str], str]]
DataValue = Union[Dict[str, Any], Callable[[str], Dict[str, Any]]]


class PhoneNumber(BaseModel):
    """Recipient phone number with an optional international dialing code.

    Attributes:
        number: Subscriber number without international prefix.
        idd_code: International dialing code (86, 1, 44...). 0 means unset.

    Example:
        phone = PhoneNumber(number="18888888888", idd_code=86)
        phone.universal_number      # "+8618888888888"
        phone.zero_prefixed_number  # "008618888888888"
    """

    number: str
    idd_code: int = Field(default=0, ge=0)

    @field_validator("number")
    @classmethod
    def validate_number(cls, v: str) -> str:
        """Ensure the number is not blank."""
        v = v.strip()
        if not v:
            raise ValueError("Phone number cannot be empty")
        return v

    @property
    def universal_number(self) -> str:
        """Number with "+" and dialing code, or the bare number if none."""
        if self.idd_code > 0:
            return f"+{self.idd_code}{self.number}"
        return self.number

    @property
    def zero_prefixed_number(self) -> str:
        """Number with "00" and dialing code, or the bare number if none."""
        if self.idd_code > 0:
            return f"00{self.idd_code}{self.number}"
        return self.number

    @property
    def in_chinese_mainland(self) -> bool:
        """True when the number belongs to the default region (unset or 86)."""
        return self.idd_code in (0, 86)

    def __str__(self) -> str:
        return self.universal_number


class MessageType(Enum):
    """Kind of message a gateway should deliver."""

    TEXT = "text"
    VOICE = "voice"


class Message(BaseModel):
    """Message to deliver through one of the candidate gateways.

    Content, template and data may be given as plain values or as callables
    receiving the gateway name, so one message can carry provider specific
    template IDs.

    Attributes:
        content: Message text, or callable(gateway_name) -> text.
        template: Template identifier, or callable(gateway_name) -> id.
        data: Template variables, or callable(gateway_name) -> mapping.
        gateways: Explicit gateway names to use instead of the defaults.
        type: MessageType (default: TEXT).

    Example:
        message = Message(
            content="Your code is 1234",
            template=lambda gateway: {"aliyun": "SMS_001"}.get(gateway, ""),
            data={"code": "1234"},
        )
    """

    content: ContentValue = ""
    template: ContentValue = ""
    data: DataValue = Field(default_factory=dict)
    gateways: List[str] = Field(default_factory=list)
    type: MessageType = MessageType.TEXT

    def get_content(self, gateway: Optional[str] = None) -> str:
        if callable(self.content):
            return self.content(gateway or "")
        return self.content

    def get_template(self, gateway: Optional[str] = None) -> str:
        if callable(self.template):
            return self.template(gateway or "")
        return self.template

    def get_data(self, gateway: Optional[str] = None) -> Dict[str, Any]:
        """Template variables for the gateway, as a fresh dict."""
        data = self.data(gateway or "") if callable(self.data) else self.data
        return dict(data or {})

    def get_gateways(self) -> List[str]:
        return list(self.gateways)


class SendStatus(Enum):
    """Outcome of one gateway attempt."""

    SUCCESS = "success"
    FAILURE = "failure"


class SendResult(BaseModel):
    """Result of one gateway attempt during a send call.

    Attributes:
        gateway: Gateway name attempted.
        status: SendStatus of the attempt.
        data: Provider response on success (or alongside a vendor rejection).
        error: Exception that made the attempt fail.

    Example:
        result = SendResult(
            gateway="aliyun",
            status=SendStatus.SUCCESS,
            data={"Code": "OK", "BizId": "9001"},
        )
    """

    gateway: str
    status: SendStatus
    data: Any = None
    error: Optional[BaseException] = None

    @property
    def is_success(self) -> bool:
        """Check if the attempt delivered the message."""
        return self.status == SendStatus.SUCCESS

    @classmethod
    def success(cls, gateway: str, data: Any = None) -> "SendResult":
        return cls(gateway=gateway, status=SendStatus.SUCCESS, data=data)

    @classmethod
    def failure(cls, gateway: str, error: BaseException) -> "SendResult":
        return cls(
            gateway=gateway,
            status=SendStatus.FAILURE,
            data=getattr(error, "response", None),
            error=error,
        )

    model_config = {"arbitrary_types_allowed": True}
