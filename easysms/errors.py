"""Errors raised by the SMS dispatch engine and its gateways."""

from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from easysms.models import SendResult


class SmsError(Exception):
    """Base class for every error raised by easysms."""


class GatewayError(SmsError):
    """An operation on a named gateway failed.

    Attributes:
        gateway_name: Gateway the operation targeted.
        operation: Operation that failed ("lookup", "creation", "send").
        cause: Underlying reason, as a message or an exception.
    """

    def __init__(self, gateway_name: str, operation: str, cause: Any):
        self.gateway_name = gateway_name
        self.operation = operation
        self.cause = cause
        super().__init__(f"gateway {gateway_name} {operation} failed: {cause}")


class ConfigNotFoundError(GatewayError):
    """No configuration entry exists for the gateway name."""

    def __init__(self, gateway_name: str):
        super().__init__(gateway_name, "lookup", "config not found")


class GatewayNotFoundError(GatewayError):
    """The gateway is configured but nothing knows how to build it."""

    def __init__(self, gateway_name: str):
        super().__init__(gateway_name, "lookup", "gateway not found")


class CreatorNotFoundError(GatewayError):
    """The registry has no creator registered under the gateway name."""

    def __init__(self, gateway_name: str):
        super().__init__(gateway_name, "creation", "creator not found")


class GatewayConstructionError(GatewayError):
    """A creator refused to build its gateway, usually missing credentials."""

    def __init__(self, gateway_name: str, cause: Any):
        super().__init__(gateway_name, "creation", cause)


class GatewaySendError(GatewayError):
    """A gateway's provider rejected the message.

    Attributes:
        response: Parsed provider response, when one was received.
        code: Provider error code, when the provider reported one.
    """

    def __init__(
        self,
        gateway_name: str,
        cause: Any,
        response: Any = None,
        code: Optional[Any] = None,
    ):
        super().__init__(gateway_name, "send", cause)
        self.response = response
        self.code = code


class NoGatewayAvailableError(SmsError):
    """Neither the message nor the configuration names a gateway to try."""

    def __init__(self, message: str = "no gateway available"):
        super().__init__(message)


class AllGatewaysFailedError(SmsError):
    """Every candidate gateway failed for one send call.

    Only the last failure is surfaced as ``last_error`` (and chained as the
    exception cause); every attempt stays available in ``results``.
    """

    def __init__(
        self,
        results: Dict[str, "SendResult"],
        last_error: Optional[BaseException] = None,
    ):
        self.results = results
        self.last_error = last_error
        super().__init__(f"all gateways failed: {last_error}")


class HttpError(SmsError):
    """The HTTP collaborator could not complete a request or parse its body."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
