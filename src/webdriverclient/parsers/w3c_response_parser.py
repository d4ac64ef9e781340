"""Response parser for the W3C WebDriver dialect.

Every W3C response is wrapped as ``{"value": <payload>}``; errors arrive as
``{"value": {"error": <code>, "message": <text>, ...}}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from webdriverclient.domains.errors import CommandResult
from webdriverclient.domains.shared.kernel import Dialect, Element, LogEntry, Rect, Session

from . import common

if TYPE_CHECKING:
    from webdriverclient.models.config_models import Config

DIALECT = Dialect.W3C

# W3C web element reference key
ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"

_RECT_FIELDS = ("x", "y", "width", "height")


def parse_value(response_body: Any) -> CommandResult[Any]:
    """Return the payload under ``"value"`` verbatim."""
    return common.parse_value(DIALECT, response_body)


def parse_url(response_body: Any) -> CommandResult[str]:
    return common.parse_string(DIALECT, response_body)


def parse_rect(response_body: Any) -> CommandResult[Rect]:
    """Parse ``{"value": {"x", "y", "width", "height"}}``.

    Non-integral numbers are truncated; negative sizes are kept.
    """
    value = common.get_value(response_body)
    if not isinstance(value, dict) or not all(
        common.is_number(value.get(name)) for name in _RECT_FIELDS
    ):
        return common.format_error(DIALECT, response_body)
    try:
        fields = {name: int(value[name]) for name in _RECT_FIELDS}
    except (OverflowError, ValueError):
        # NaN/Infinity are accepted by the JSON decoder
        return common.format_error(DIALECT, response_body)
    return CommandResult.ok(Rect(**fields))


def parse_log_types(response_body: Any) -> CommandResult[List[str]]:
    return common.parse_string_list(DIALECT, response_body)


def parse_log_entries(response_body: Any) -> CommandResult[List[LogEntry]]:
    return common.parse_log_entries(DIALECT, response_body)


def parse_elements(response_body: Any) -> CommandResult[List[Element]]:
    return common.parse_elements(DIALECT, response_body, ELEMENT_KEY)


def parse_session(response_body: Any, config: "Config") -> CommandResult[Session]:
    """Parse a New Session response: ``{"value": {"sessionId", "capabilities"}}``."""
    value = common.get_value(response_body)
    if not isinstance(value, dict) or not common.non_empty_str(value.get("sessionId")):
        return common.format_error(DIALECT, response_body)
    return CommandResult.ok(Session(id=value["sessionId"], config=config))


def parse_sessions(response_body: Any, config: "Config") -> CommandResult[List[Session]]:
    """Parse ``{"value": [{"id": ..., "capabilities": ...}, ...]}``."""
    return common.parse_session_list(
        DIALECT, common.get_value(response_body), response_body, config
    )


def parse_web_driver_error(response_body: Any) -> Optional[Tuple[str, str]]:
    """Return ``(error code, message)`` if the body is a W3C error object."""
    value = common.get_value(response_body)
    if (
        isinstance(value, dict)
        and isinstance(value.get("error"), str)
        and isinstance(value.get("message"), str)
    ):
        return value["error"], value["message"]
    return None
