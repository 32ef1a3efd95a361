"""Package specific exception hierarchy.

Every exception carries a ``code`` naming the client-facing error kind so that
whatever RPC layer sits on top can map it without inspecting messages.
"""

from __future__ import annotations


class ProcedureError(Exception):
    """Base exception for llm_procedures package."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(ProcedureError):
    """Raised when procedure input fails schema validation."""

    code = "BAD_REQUEST"


class ConfigurationError(ProcedureError):
    """Raised when no API key is available from the caller or the defaults."""


class BadUpstreamRequest(ProcedureError):
    """The provider rejected the request (non-2xx status)."""

    code = "BAD_REQUEST"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FunctionArgumentsDecodeError(BadUpstreamRequest):
    """The model emitted function-call arguments that are not a JSON object."""

    def __init__(self, arguments: str) -> None:
        super().__init__("[OpenAI Issue] Issue with the function call, arguments are not valid JSON")
        self.arguments = arguments


class UpstreamContractViolation(ProcedureError):
    """The provider response does not have the shape this layer relies on."""


class TransportDecodeError(ProcedureError):
    """The provider answered with a success status but an undecodable body."""


class UpstreamTransportError(ProcedureError):
    """The request never got an HTTP response (connect, read or protocol failure)."""


class UpstreamTimeout(ProcedureError):
    """The provider did not answer within the configured timeout."""

    code = "TIMEOUT"


class ClientDisconnected(ProcedureError):
    """The connection was reset while a request was in flight."""

    code = "CLIENT_CLOSED_REQUEST"

    def __init__(self, message: str = "Connection reset by the client.") -> None:
        super().__init__(message)
