"""WebDriver client speaking both the JSON Wire Protocol and W3C WebDriver."""

from webdriverclient.client import (
    end_session,
    fetch_current_url,
    fetch_log_types,
    fetch_logs,
    fetch_sessions,
    fetch_window_size,
    find_elements,
    find_elements_from_element,
    navigate_to,
    set_window_size,
    start_session,
)
from webdriverclient.domains.errors import (
    ClientError,
    CommandResult,
    ErrorKind,
    TransportError,
    UnexpectedResponseFormatError,
    UnexpectedStatusCodeError,
    WebDriverClientException,
    WebDriverError,
    WebDriverErrorReason,
)
from webdriverclient.domains.shared import (
    Dialect,
    Element,
    LocationStrategy,
    LogEntry,
    Rect,
    Session,
    Size,
)
from webdriverclient.models import Config, TransportOptions, load_config

__all__ = [
    # Operations
    "start_session",
    "fetch_sessions",
    "end_session",
    "navigate_to",
    "fetch_current_url",
    "fetch_window_size",
    "set_window_size",
    "fetch_log_types",
    "fetch_logs",
    "find_elements",
    "find_elements_from_element",
    # Configuration
    "Config",
    "TransportOptions",
    "load_config",
    # Domain values
    "Dialect",
    "Element",
    "LocationStrategy",
    "LogEntry",
    "Rect",
    "Session",
    "Size",
    # Results and errors
    "ClientError",
    "CommandResult",
    "ErrorKind",
    "TransportError",
    "UnexpectedResponseFormatError",
    "UnexpectedStatusCodeError",
    "WebDriverClientException",
    "WebDriverError",
    "WebDriverErrorReason",
]

__version__ = "0.1.0"
