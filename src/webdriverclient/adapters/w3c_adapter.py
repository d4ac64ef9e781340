"""W3C WebDriver adapter.

Speaks the standardized dialect: every response is wrapped as
``{"value": ...}``, window geometry is a single "rect", and failures are
reported with a non-2xx status and ``{"value": {"error", "message"}}``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from webdriverclient.domains.errors import (
    CommandResult,
    UnexpectedResponseFormatError,
    WebDriverError,
    reason_from_w3c_code,
)
from webdriverclient.domains.shared.kernel import Dialect, Rect, Session, Size
from webdriverclient.parsers import w3c_response_parser
from webdriverclient.transport import HTTPResponse

from .protocol_adapter import BaseProtocolAdapter


class W3CProtocolAdapter(BaseProtocolAdapter):
    """Adapter for remote ends implementing W3C WebDriver."""

    _parsers = w3c_response_parser

    @property
    def dialect(self) -> Dialect:
        return Dialect.W3C

    def start_session(self, payload: Dict[str, Any]) -> CommandResult[Session]:
        return self._execute(
            "POST",
            "/session",
            payload,
            parse=lambda body: w3c_response_parser.parse_session(body, self.config),
        )

    def fetch_sessions(self) -> CommandResult[List[Session]]:
        return self._execute(
            "GET",
            "/sessions",
            parse=lambda body: w3c_response_parser.parse_sessions(body, self.config),
        )

    def fetch_current_url(self, session: Session) -> CommandResult[str]:
        return self._execute(
            "GET", self._session_path(session, "url"), parse=w3c_response_parser.parse_url
        )

    def fetch_window_rect(self, session: Session) -> CommandResult[Rect]:
        return self._execute(
            "GET",
            self._session_path(session, "window", "rect"),
            parse=w3c_response_parser.parse_rect,
        )

    def set_window_rect(
        self,
        session: Session,
        x: Optional[int] = None,
        y: Optional[int] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> CommandResult[None]:
        """Move and/or resize the window; omitted values stay unchanged."""
        for name, value in (("x", x), ("y", y)):
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
        self._validate_dimension("width", width)
        self._validate_dimension("height", height)

        payload = {
            name: value
            for name, value in (("x", x), ("y", y), ("width", width), ("height", height))
            if value is not None
        }
        return self._execute(
            "POST",
            self._session_path(session, "window", "rect"),
            payload,
            parse=self._parse_nothing,
        )

    def fetch_window_size(self, session: Session) -> CommandResult[Size]:
        return self._execute(
            "GET",
            self._session_path(session, "window", "rect"),
            parse=self._parse_rect_size,
        )

    def set_window_size(
        self,
        session: Session,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> CommandResult[None]:
        return self.set_window_rect(session, width=width, height=height)

    def _parse_rect_size(self, body: Any) -> CommandResult[Size]:
        result = w3c_response_parser.parse_rect(body)
        if not result.success:
            return result  # type: ignore[return-value]
        try:
            return CommandResult.ok(result.value.size())
        except ValueError as e:
            return CommandResult.failure(
                UnexpectedResponseFormatError(
                    dialect=self.dialect, response_body=body, reason=str(e)
                )
            )

    def _match_web_driver_error(self, response: HTTPResponse) -> Optional[WebDriverError]:
        if response.is_success:
            return None
        parsed = w3c_response_parser.parse_web_driver_error(response.body)
        if parsed is None:
            return None
        code, message = parsed
        return WebDriverError(
            reason=reason_from_w3c_code(code),
            message=message,
            dialect=self.dialect,
        )
