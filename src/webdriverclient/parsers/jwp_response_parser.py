"""Response parser for the Selenium JSON Wire Protocol dialect.

Legacy responses carry a top-level ``status`` (0 on success) and
``sessionId`` next to ``value``; the session list endpoint of some servers
answers with a bare array instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from webdriverclient.domains.errors import CommandResult
from webdriverclient.domains.shared.kernel import Dialect, Element, LogEntry, Session, Size

from . import common

if TYPE_CHECKING:
    from webdriverclient.models.config_models import Config

DIALECT = Dialect.JWP

ELEMENT_KEY = "ELEMENT"


def parse_value(response_body: Any) -> CommandResult[Any]:
    """Return the payload under ``"value"`` verbatim."""
    return common.parse_value(DIALECT, response_body)


def parse_size(response_body: Any) -> CommandResult[Size]:
    """Parse ``{"value": {"width": int, "height": int}}``."""
    value = common.get_value(response_body)
    if not (
        isinstance(value, dict)
        and common.is_non_negative_int(value.get("width"))
        and common.is_non_negative_int(value.get("height"))
    ):
        return common.format_error(DIALECT, response_body)
    return CommandResult.ok(Size(width=value["width"], height=value["height"]))


def parse_log_types(response_body: Any) -> CommandResult[List[str]]:
    return common.parse_string_list(DIALECT, response_body)


def parse_log_entries(response_body: Any) -> CommandResult[List[LogEntry]]:
    return common.parse_log_entries(DIALECT, response_body)


def parse_elements(response_body: Any) -> CommandResult[List[Element]]:
    return common.parse_elements(DIALECT, response_body, ELEMENT_KEY)


def parse_session(response_body: Any, config: "Config") -> CommandResult[Session]:
    """Parse ``{"sessionId": ..., "status": 0, "value": {capabilities}}``."""
    if not isinstance(response_body, dict) or not common.non_empty_str(
        response_body.get("sessionId")
    ):
        return common.format_error(DIALECT, response_body)
    return CommandResult.ok(Session(id=response_body["sessionId"], config=config))


def parse_sessions(response_body: Any, config: "Config") -> CommandResult[List[Session]]:
    """Parse a bare ``[{"id": ...}]`` or ``{"sessionId": .., "value": [...]}``."""
    if isinstance(response_body, list):
        items = response_body
    else:
        items = common.get_value(response_body)
    return common.parse_session_list(DIALECT, items, response_body, config)


def has_failure_status(response_body: Any) -> bool:
    """True if the body carries a non-zero integer ``status``."""
    if not isinstance(response_body, dict):
        return False
    status = response_body.get("status")
    return isinstance(status, int) and not isinstance(status, bool) and status != 0


def parse_web_driver_error(response_body: Any) -> Optional[Tuple[int, str]]:
    """Return ``(status, message)`` if the body reports a failed command.

    Recognised shapes: ``{"status": n, "value": {"message": text}}`` and
    ``{"status": n, "value": text}`` with a non-zero integer ``n``.
    """
    if not has_failure_status(response_body):
        return None
    status = response_body["status"]
    value = response_body.get("value")
    if isinstance(value, dict) and isinstance(value.get("message"), str):
        return status, value["message"]
    if isinstance(value, str):
        return status, value
    return None
