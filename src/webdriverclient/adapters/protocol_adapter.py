"""WebDriver Protocol Adapter - Anti-Corruption Layer.

This module defines the protocol (interface) shared by the per-dialect
adapters, and the base class that reduces one HTTP exchange to a
normalized CommandResult.

The Anti-Corruption Layer pattern ensures that:
1. Callers never see dialect-specific paths, payloads or error shapes
2. Dialect differences are encapsulated in concrete adapters
3. A new dialect needs one new adapter and one routing entry, nothing else
4. Testing can swap the transport for an in-memory double
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from types import ModuleType
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    List,
    Optional,
    Protocol,
    TypeVar,
    Union,
    runtime_checkable,
)
from urllib.parse import quote

from webdriverclient.domains.errors import (
    CommandResult,
    TransportError,
    UnexpectedResponseFormatError,
    UnexpectedStatusCodeError,
    WebDriverError,
)
from webdriverclient.domains.shared.kernel import (
    Dialect,
    Element,
    LocationStrategy,
    LogEntry,
    Session,
    Size,
)
from webdriverclient.models.config_models import Config
from webdriverclient.transport import HTTPResponse, HTTPTransport, Transport, TransportFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class WebDriverProtocolAdapter(Protocol):
    """Protocol defining the operations every dialect adapter provides.

    Every operation performs exactly one HTTP exchange and returns a
    CommandResult whose error, if any, is already normalized.
    """

    @property
    def dialect(self) -> Dialect:
        """Return the dialect tag this adapter speaks."""
        ...

    def start_session(self, payload: Dict[str, Any]) -> CommandResult[Session]:
        """Create a new session from a capabilities payload."""
        ...

    def fetch_sessions(self) -> CommandResult[List[Session]]:
        ...

    def end_session(self, session: Session) -> CommandResult[None]:
        ...

    def navigate_to(self, session: Session, url: str) -> CommandResult[None]:
        ...

    def fetch_current_url(self, session: Session) -> CommandResult[str]:
        ...

    def fetch_window_size(self, session: Session) -> CommandResult[Size]:
        ...

    def set_window_size(
        self,
        session: Session,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> CommandResult[None]:
        """Resize the current window; omitted dimensions use dialect defaults."""
        ...

    def fetch_log_types(self, session: Session) -> CommandResult[List[str]]:
        ...

    def fetch_logs(self, session: Session, log_type: str) -> CommandResult[List[LogEntry]]:
        ...

    def find_elements(
        self,
        session: Session,
        strategy: Union[LocationStrategy, str],
        selector: str,
    ) -> CommandResult[List[Element]]:
        ...

    def find_elements_from_element(
        self,
        session: Session,
        element: Element,
        strategy: Union[LocationStrategy, str],
        selector: str,
    ) -> CommandResult[List[Element]]:
        ...


class BaseProtocolAdapter(ABC):
    """Abstract base class providing the request/response reduction.

    Concrete adapters supply endpoint paths, payload shapes, a parser per
    operation and the recognition of their dialect's error objects. This
    class provides:
    - Argument validation shared by both dialects
    - The single-exchange reduction to CommandResult
    - Logging infrastructure
    """

    # Module holding this dialect's response parser functions
    _parsers: ClassVar[ModuleType]

    def __init__(self, config: Config, transport: Optional[Transport] = None):
        """Initialize the adapter.

        Args:
            config: Connection settings; sessions created here carry it.
            transport: Transport to use instead of an HTTPTransport built
                from ``config``.
        """
        self.config = config
        self._transport = transport or HTTPTransport(config.base_url, config.options)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def dialect(self) -> Dialect:
        pass

    @abstractmethod
    def _match_web_driver_error(self, response: HTTPResponse) -> Optional[WebDriverError]:
        """Return the normalized error if the response is a dialect error object."""
        pass

    # ------------------------------------------------------------------
    # Operations shared verbatim by both dialects
    # ------------------------------------------------------------------

    def end_session(self, session: Session) -> CommandResult[None]:
        return self._execute(
            "DELETE",
            self._session_path(session),
            parse=self._parse_nothing,
            strict_status=True,
        )

    def navigate_to(self, session: Session, url: str) -> CommandResult[None]:
        if not isinstance(url, str):
            raise TypeError(f"url must be a string, got {type(url).__name__}")
        return self._execute(
            "POST", self._session_path(session, "url"), {"url": url}, parse=self._parse_nothing
        )

    def fetch_log_types(self, session: Session) -> CommandResult[List[str]]:
        return self._execute(
            "GET", self._session_path(session, "log", "types"), parse=self._parsers.parse_log_types
        )

    def fetch_logs(self, session: Session, log_type: str) -> CommandResult[List[LogEntry]]:
        if not isinstance(log_type, str):
            raise TypeError(f"log_type must be a string, got {type(log_type).__name__}")
        return self._execute(
            "POST",
            self._session_path(session, "log"),
            {"type": log_type},
            parse=self._parsers.parse_log_entries,
        )

    def find_elements(
        self,
        session: Session,
        strategy: Union[LocationStrategy, str],
        selector: str,
    ) -> CommandResult[List[Element]]:
        payload = self._locator_payload(strategy, selector)
        return self._execute(
            "POST",
            self._session_path(session, "elements"),
            payload,
            parse=self._parsers.parse_elements,
        )

    def find_elements_from_element(
        self,
        session: Session,
        element: Element,
        strategy: Union[LocationStrategy, str],
        selector: str,
    ) -> CommandResult[List[Element]]:
        if not isinstance(element, Element):
            raise TypeError(f"element must be an Element, got {type(element).__name__}")
        payload = self._locator_payload(strategy, selector)
        return self._execute(
            "POST",
            self._session_path(session, "element", element.id, "elements"),
            payload,
            parse=self._parsers.parse_elements,
        )

    # ------------------------------------------------------------------
    # Reduction of one exchange to a CommandResult
    # ------------------------------------------------------------------

    def _execute(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        *,
        parse: Callable[[Any], CommandResult[T]],
        strict_status: bool = False,
    ) -> CommandResult[T]:
        """Send one request and normalize the outcome.

        Args:
            method: HTTP method.
            path: Path below the configured base URL.
            payload: JSON body, if any.
            parse: Parser applied to the body of a 2xx response.
            strict_status: Report non-2xx responses that are not WebDriver
                errors as UnexpectedStatusCodeError instead of a format error.

        Returns:
            CommandResult with the parsed value or a normalized error.
        """
        self._logger.debug(f"{self.dialect.value} {method} {path}")
        try:
            response = self._transport.request(method, path, payload)
        except TransportFailure as e:
            self._logger.warning(f"{method} {path} transport failure: {e.reason}")
            return CommandResult.failure(
                TransportError(reason=e.reason, exception_type=e.exception_type)
            )

        web_driver_error = self._match_web_driver_error(response)
        if web_driver_error is not None:
            self._logger.info(
                f"{method} {path} returned {web_driver_error.reason.value}: "
                f"{web_driver_error.message}"
            )
            return CommandResult.failure(web_driver_error)

        if not response.is_success:
            return self._unexpected_status(method, path, response, strict_status)

        if self._reports_failure(response.body):
            result: CommandResult[T] = CommandResult.failure(
                UnexpectedResponseFormatError(
                    dialect=self.dialect,
                    response_body=response.body,
                    reason="command failed without a recognisable error message",
                )
            )
        else:
            result = parse(response.body)
        if not result.success and response.decode_error:
            result = CommandResult.failure(
                UnexpectedResponseFormatError(
                    dialect=self.dialect,
                    response_body=response.body,
                    reason=response.decode_error,
                )
            )
        if not result.success:
            self._logger.warning(f"{method} {path} unexpected response format: {result.error}")
        return result

    def _unexpected_status(
        self,
        method: str,
        path: str,
        response: HTTPResponse,
        strict_status: bool,
    ) -> CommandResult[Any]:
        self._logger.warning(
            f"{method} {path} returned HTTP {response.status_code} without a WebDriver error body"
        )
        if strict_status:
            return CommandResult.failure(
                UnexpectedStatusCodeError(
                    status_code=response.status_code,
                    response_body=response.body,
                    dialect=self.dialect,
                )
            )
        return CommandResult.failure(
            UnexpectedResponseFormatError(
                dialect=self.dialect,
                response_body=response.body,
                reason=response.decode_error or f"unexpected HTTP status {response.status_code}",
            )
        )

    def _reports_failure(self, body: Any) -> bool:
        """True if a 2xx body still signals a failed command in-band."""
        return False

    def _parse_nothing(self, body: Any) -> CommandResult[None]:
        """Require a well-formed body but discard its payload."""
        result = self._parsers.parse_value(body)
        if not result.success:
            return result
        return CommandResult.ok(None)

    # ------------------------------------------------------------------
    # Request building helpers
    # ------------------------------------------------------------------

    def _session_path(self, session: Session, *segments: str) -> str:
        if not isinstance(session, Session):
            raise TypeError(f"session must be a Session, got {type(session).__name__}")
        parts = ["session", session.id, *segments]
        return "/" + "/".join(quote(part, safe="") for part in parts)

    @staticmethod
    def _locator_payload(strategy: Union[LocationStrategy, str], selector: str) -> Dict[str, str]:
        resolved = LocationStrategy.parse(strategy)
        if not isinstance(selector, str) or not selector:
            raise ValueError(f"selector must be a non-empty string, got {selector!r}")
        return {"using": resolved.value, "value": selector}

    @staticmethod
    def _validate_dimension(name: str, value: Optional[int]) -> None:
        if value is None:
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")
