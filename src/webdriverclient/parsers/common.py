"""Shape checks shared by the JSON Wire Protocol and W3C response parsers.

Every function takes the full decoded response body and returns a
CommandResult. A body of the wrong shape is an expected failure mode of a
remote end, so it always yields UnexpectedResponseFormatError carrying the
original body; nothing here raises on bad input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

from webdriverclient.domains.errors import CommandResult, UnexpectedResponseFormatError
from webdriverclient.domains.shared.kernel import Dialect, Element, LogEntry, Session

if TYPE_CHECKING:
    from webdriverclient.models.config_models import Config

_MISSING = object()


def format_error(dialect: Dialect, body: Any, reason: Optional[str] = None) -> CommandResult[Any]:
    """Build the failed result for a body that did not match."""
    return CommandResult.failure(
        UnexpectedResponseFormatError(dialect=dialect, response_body=body, reason=reason)
    )


def is_number(value: Any) -> bool:
    """True for JSON numbers; bool is an int subclass but not a number here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def get_value(body: Any) -> Any:
    """Return ``body["value"]`` or the _MISSING sentinel."""
    if isinstance(body, dict):
        return body.get("value", _MISSING)
    return _MISSING


def parse_value(dialect: Dialect, body: Any) -> CommandResult[Any]:
    value = get_value(body)
    if value is _MISSING:
        return format_error(dialect, body)
    return CommandResult.ok(value)


def parse_string(dialect: Dialect, body: Any) -> CommandResult[str]:
    value = get_value(body)
    if not isinstance(value, str):
        return format_error(dialect, body)
    return CommandResult.ok(value)


def parse_string_list(dialect: Dialect, body: Any) -> CommandResult[List[str]]:
    value = get_value(body)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        return format_error(dialect, body)
    return CommandResult.ok(list(value))


def parse_log_entries(dialect: Dialect, body: Any) -> CommandResult[List[LogEntry]]:
    """Parse ``{"value": [{"level", "message", "timestamp"}, ...]}``.

    All-or-nothing: one malformed record fails the whole body.
    """
    value = get_value(body)
    if not isinstance(value, list):
        return format_error(dialect, body)

    entries: List[LogEntry] = []
    for record in value:
        if not (
            isinstance(record, dict)
            and isinstance(record.get("level"), str)
            and isinstance(record.get("message"), str)
            and is_number(record.get("timestamp"))
        ):
            return format_error(dialect, body)
        try:
            entry = LogEntry.from_epoch_millis(
                record["level"], record["message"], record["timestamp"]
            )
        except (OverflowError, ValueError):
            return format_error(dialect, body, reason="log timestamp out of range")
        entries.append(entry)
    return CommandResult.ok(entries)


def parse_elements(dialect: Dialect, body: Any, element_key: str) -> CommandResult[List[Element]]:
    """Parse a list of element references stored under ``element_key``."""
    value = get_value(body)
    if not isinstance(value, list):
        return format_error(dialect, body)

    elements: List[Element] = []
    for reference in value:
        if not isinstance(reference, dict) or not non_empty_str(reference.get(element_key)):
            return format_error(dialect, body)
        elements.append(Element(id=reference[element_key]))
    return CommandResult.ok(elements)


def parse_session_list(
    dialect: Dialect, items: Any, body: Any, config: "Config"
) -> CommandResult[List[Session]]:
    """Parse ``[{"id": ...}, ...]`` into sessions bound to ``config``.

    ``body`` is the full response, reported on failure.
    """
    if not isinstance(items, list):
        return format_error(dialect, body)
    sessions: List[Session] = []
    for item in items:
        if not isinstance(item, dict) or not non_empty_str(item.get("id")):
            return format_error(dialect, body)
        sessions.append(Session(id=item["id"], config=config))
    return CommandResult.ok(sessions)
