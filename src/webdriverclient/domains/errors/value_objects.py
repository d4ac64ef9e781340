"""Error Domain Value Objects.

The closed set of normalized failures every public operation can return,
plus the CommandResult container that carries either a value or one of
them. Errors are values: they are returned, not raised.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Generic, Optional, TypeVar, Union

from webdriverclient.domains.shared.kernel import Dialect, Element, Session

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    """Discriminator for the normalized error variants."""
    TRANSPORT = "transport_error"
    UNEXPECTED_RESPONSE_FORMAT = "unexpected_response_format"
    WEB_DRIVER = "web_driver_error"
    UNEXPECTED_STATUS_CODE = "unexpected_status_code"


class WebDriverErrorReason(str, enum.Enum):
    """Normalized reason codes, using the W3C error code vocabulary.

    JSON Wire Protocol status codes are mapped onto the same members so
    callers can compare reasons without knowing the dialect.
    """
    DETACHED_SHADOW_ROOT = "detached shadow root"
    ELEMENT_CLICK_INTERCEPTED = "element click intercepted"
    ELEMENT_NOT_INTERACTABLE = "element not interactable"
    ELEMENT_NOT_SELECTABLE = "element not selectable"
    IME_ENGINE_ACTIVATION_FAILED = "ime engine activation failed"
    IME_NOT_AVAILABLE = "ime not available"
    INSECURE_CERTIFICATE = "insecure certificate"
    INVALID_ARGUMENT = "invalid argument"
    INVALID_COOKIE_DOMAIN = "invalid cookie domain"
    INVALID_ELEMENT_COORDINATES = "invalid element coordinates"
    INVALID_ELEMENT_STATE = "invalid element state"
    INVALID_SELECTOR = "invalid selector"
    INVALID_SESSION_ID = "invalid session id"
    JAVASCRIPT_ERROR = "javascript error"
    MOVE_TARGET_OUT_OF_BOUNDS = "move target out of bounds"
    NO_SUCH_ALERT = "no such alert"
    NO_SUCH_COOKIE = "no such cookie"
    NO_SUCH_ELEMENT = "no such element"
    NO_SUCH_FRAME = "no such frame"
    NO_SUCH_SHADOW_ROOT = "no such shadow root"
    NO_SUCH_WINDOW = "no such window"
    SCRIPT_TIMEOUT = "script timeout"
    SESSION_NOT_CREATED = "session not created"
    STALE_ELEMENT_REFERENCE = "stale element reference"
    TIMEOUT = "timeout"
    UNABLE_TO_CAPTURE_SCREEN = "unable to capture screen"
    UNABLE_TO_SET_COOKIE = "unable to set cookie"
    UNEXPECTED_ALERT_OPEN = "unexpected alert open"
    UNKNOWN_COMMAND = "unknown command"
    UNKNOWN_ERROR = "unknown error"
    UNKNOWN_METHOD = "unknown method"
    UNSUPPORTED_OPERATION = "unsupported operation"


@dataclass(frozen=True)
class TransportError:
    """The HTTP exchange itself failed (connection refused, timeout, ...).

    Attributes:
        reason: Diagnostic text reported by the transport.
        exception_type: Class name of the underlying transport exception.
    """
    reason: str
    exception_type: Optional[str] = None

    kind: ClassVar[ErrorKind] = ErrorKind.TRANSPORT

    def __str__(self) -> str:
        return f"HTTP transport failed: {self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "reason": self.reason,
            "exception_type": self.exception_type,
        }


@dataclass(frozen=True)
class UnexpectedResponseFormatError:
    """The response body did not have the shape the dialect requires.

    Attributes:
        dialect: Dialect whose parser rejected the body.
        response_body: The original body, decoded JSON or raw text.
        reason: Extra context, e.g. a JSON decode error or HTTP status.
    """
    dialect: Dialect
    response_body: Any
    reason: Optional[str] = None

    kind: ClassVar[ErrorKind] = ErrorKind.UNEXPECTED_RESPONSE_FORMAT

    def __str__(self) -> str:
        text = f"Unexpected {self.dialect.value} response format: {self.response_body!r}"
        if self.reason:
            text += f" ({self.reason})"
        return text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "dialect": self.dialect.value,
            "response_body": self.response_body,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class WebDriverError:
    """The remote end reported a well-formed WebDriver error."""
    reason: WebDriverErrorReason
    message: str
    dialect: Dialect

    kind: ClassVar[ErrorKind] = ErrorKind.WEB_DRIVER

    def __str__(self) -> str:
        return f"WebDriver error ({self.reason.value}): {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "reason": self.reason.value,
            "message": self.message,
            "dialect": self.dialect.value,
        }


@dataclass(frozen=True)
class UnexpectedStatusCodeError:
    """Non-2xx status whose body is not a WebDriver error (end_session only)."""
    status_code: int
    response_body: Any
    dialect: Dialect

    kind: ClassVar[ErrorKind] = ErrorKind.UNEXPECTED_STATUS_CODE

    def __str__(self) -> str:
        return (
            f"Unexpected HTTP status {self.status_code} from {self.dialect.value} "
            f"remote end: {self.response_body!r}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "status_code": self.status_code,
            "response_body": self.response_body,
            "dialect": self.dialect.value,
        }


ClientError = Union[
    TransportError,
    UnexpectedResponseFormatError,
    WebDriverError,
    UnexpectedStatusCodeError,
]


class WebDriverClientException(Exception):
    """Raised by CommandResult.unwrap() to surface an error as an exception."""

    def __init__(self, error: ClientError) -> None:
        super().__init__(str(error))
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


@dataclass(frozen=True)
class CommandResult(Generic[T]):
    """Outcome of a single WebDriver command.

    Exactly one of ``value`` and ``error`` is meaningful; ``success`` tells
    which. Commands without a payload succeed with ``value=None``.
    """
    value: Optional[T] = None
    error: Optional[ClientError] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "CommandResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ClientError) -> "CommandResult[T]":
        return cls(error=error)

    @property
    def success(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise WebDriverClientException on failure."""
        if self.error is not None:
            raise WebDriverClientException(self.error)
        return self.value  # type: ignore[return-value]

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {"success": False, "error": self.error.to_dict()}
        return {"success": True, "value": _to_jsonable(self.value)}


def _to_jsonable(value: Any) -> Any:
    """Render domain values (and lists of them) as plain JSON data."""
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (Session, Element)):
        return value.id
    return value
