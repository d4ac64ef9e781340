"""Error Bounded Context.

The normalized error taxonomy shared by both dialects, the CommandResult
container, and the pure translations from dialect error codes.
"""
from .value_objects import (
    ClientError, CommandResult, ErrorKind,
    TransportError, UnexpectedResponseFormatError,
    UnexpectedStatusCodeError, WebDriverError,
    WebDriverErrorReason, WebDriverClientException,
)
from .translation import (
    JWP_STATUS_REASONS, reason_from_jwp_status, reason_from_w3c_code,
)

__all__ = [
    "ClientError", "CommandResult", "ErrorKind",
    "TransportError", "UnexpectedResponseFormatError",
    "UnexpectedStatusCodeError", "WebDriverError",
    "WebDriverErrorReason", "WebDriverClientException",
    "JWP_STATUS_REASONS", "reason_from_jwp_status", "reason_from_w3c_code",
]
