"""Selenium JSON Wire Protocol adapter.

Speaks the legacy dialect: responses carry a numeric ``status`` that is
non-zero on failure (some servers still answer HTTP 200 then), window
size is a flat width/height pair, and element references use the
``"ELEMENT"`` key.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from webdriverclient.domains.errors import (
    CommandResult,
    UnexpectedResponseFormatError,
    WebDriverError,
    reason_from_jwp_status,
)
from webdriverclient.domains.shared.kernel import Dialect, Session, Size
from webdriverclient.models.config_models import DEFAULT_WINDOW_HEIGHT, DEFAULT_WINDOW_WIDTH
from webdriverclient.parsers import jwp_response_parser
from webdriverclient.transport import HTTPResponse

from .protocol_adapter import BaseProtocolAdapter


class JWPProtocolAdapter(BaseProtocolAdapter):
    """Adapter for remote ends implementing the JSON Wire Protocol."""

    _parsers = jwp_response_parser

    @property
    def dialect(self) -> Dialect:
        return Dialect.JWP

    def start_session(self, payload: Dict[str, Any]) -> CommandResult[Session]:
        return self._execute(
            "POST",
            "/session",
            payload,
            parse=lambda body: jwp_response_parser.parse_session(body, self.config),
        )

    def fetch_sessions(self) -> CommandResult[List[Session]]:
        return self._execute(
            "GET",
            "/sessions",
            parse=lambda body: jwp_response_parser.parse_sessions(body, self.config),
        )

    def fetch_current_url(self, session: Session) -> CommandResult[str]:
        return self._execute("GET", self._session_path(session, "url"), parse=self._parse_url)

    def fetch_window_size(self, session: Session) -> CommandResult[Size]:
        return self._execute(
            "GET",
            self._session_path(session, "window", "current", "size"),
            parse=jwp_response_parser.parse_size,
        )

    def set_window_size(
        self,
        session: Session,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> CommandResult[None]:
        """Resize the current window.

        The legacy endpoint needs both dimensions, so omitted ones fall back
        to DEFAULT_WINDOW_WIDTH x DEFAULT_WINDOW_HEIGHT.
        """
        self._validate_dimension("width", width)
        self._validate_dimension("height", height)
        payload = {
            "width": DEFAULT_WINDOW_WIDTH if width is None else width,
            "height": DEFAULT_WINDOW_HEIGHT if height is None else height,
        }
        return self._execute(
            "POST",
            self._session_path(session, "window", "current", "size"),
            payload,
            parse=self._parse_nothing,
        )

    def _parse_url(self, body: Any) -> CommandResult[str]:
        result = jwp_response_parser.parse_value(body)
        if result.success and not isinstance(result.value, str):
            return CommandResult.failure(
                UnexpectedResponseFormatError(dialect=self.dialect, response_body=body)
            )
        return result

    def _reports_failure(self, body: Any) -> bool:
        return jwp_response_parser.has_failure_status(body)

    def _match_web_driver_error(self, response: HTTPResponse) -> Optional[WebDriverError]:
        parsed = jwp_response_parser.parse_web_driver_error(response.body)
        if parsed is None:
            return None
        status, message = parsed
        return WebDriverError(
            reason=reason_from_jwp_status(status),
            message=message,
            dialect=self.dialect,
        )
