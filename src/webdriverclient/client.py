"""Protocol-agnostic WebDriver API.

Every function routes on the dialect tag of the Config (session creation)
or of the Session's Config (everything else) and returns the adapter's
CommandResult unchanged. No parsing or error translation happens here.

Usage:
    from webdriverclient import Config, start_session, fetch_current_url

    config = Config(base_url="http://127.0.0.1:4444", dialect="w3c")
    session = start_session({"capabilities": {}}, config).unwrap()
    url = fetch_current_url(session).unwrap()
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from webdriverclient.adapters import BaseProtocolAdapter, ProtocolAdapterFactory
from webdriverclient.domains.errors import CommandResult
from webdriverclient.domains.shared.kernel import (
    Element,
    LocationStrategy,
    LogEntry,
    Session,
    Size,
)
from webdriverclient.models.config_models import Config


def _adapter_for_config(config: Config) -> BaseProtocolAdapter:
    return ProtocolAdapterFactory.create(config)


def _adapter_for_session(session: Session) -> BaseProtocolAdapter:
    if not isinstance(session, Session):
        raise TypeError(f"session must be a Session, got {type(session).__name__}")
    return ProtocolAdapterFactory.create(session.config)


def start_session(payload: Dict[str, Any], config: Config) -> CommandResult[Session]:
    """Start a new session from a capabilities payload.

    The payload is sent as-is, so it must already have the shape the remote
    end expects (``desiredCapabilities`` for JSON Wire Protocol servers,
    ``capabilities`` for W3C ones).
    """
    if not isinstance(payload, dict):
        raise TypeError(f"payload must be a dict, got {type(payload).__name__}")
    return _adapter_for_config(config).start_session(payload)


def fetch_sessions(config: Config) -> CommandResult[List[Session]]:
    """Return the sessions currently active on the remote end."""
    return _adapter_for_config(config).fetch_sessions()


def end_session(session: Session) -> CommandResult[None]:
    return _adapter_for_session(session).end_session(session)


def navigate_to(session: Session, url: str) -> CommandResult[None]:
    """Navigate the browser to ``url``."""
    return _adapter_for_session(session).navigate_to(session, url)


def fetch_current_url(session: Session) -> CommandResult[str]:
    return _adapter_for_session(session).fetch_current_url(session)


def fetch_window_size(session: Session) -> CommandResult[Size]:
    return _adapter_for_session(session).fetch_window_size(session)


def set_window_size(
    session: Session,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> CommandResult[None]:
    """Resize the current window.

    Omitted dimensions are left unchanged by W3C remote ends; JSON Wire
    Protocol remote ends need both, so defaults are sent instead.
    """
    return _adapter_for_session(session).set_window_size(session, width=width, height=height)


def fetch_log_types(session: Session) -> CommandResult[List[str]]:
    return _adapter_for_session(session).fetch_log_types(session)


def fetch_logs(session: Session, log_type: str) -> CommandResult[List[LogEntry]]:
    """Fetch the log entries of ``log_type`` collected since the last call."""
    return _adapter_for_session(session).fetch_logs(session, log_type)


def find_elements(
    session: Session,
    strategy: Union[LocationStrategy, str],
    selector: str,
) -> CommandResult[List[Element]]:
    """Find all elements matching ``selector`` in the current browsing context."""
    return _adapter_for_session(session).find_elements(session, strategy, selector)


def find_elements_from_element(
    session: Session,
    element: Element,
    strategy: Union[LocationStrategy, str],
    selector: str,
) -> CommandResult[List[Element]]:
    """Find all descendants of ``element`` matching ``selector``."""
    return _adapter_for_session(session).find_elements_from_element(
        session, element, strategy, selector
    )
