"""WebDriverClientLibrary - WebDriver wire protocol keywords for Robot Framework.

Exposes every client operation as a keyword. Keywords return domain
values (Session, Element, Size, LogEntry, ...) and fail with
WebDriverClientException when the remote end or the transport reports an
error.
"""

import logging
from typing import Any, Dict, List, Optional

from robot.api import logger as rf_logger
from robot.api.deco import keyword, library

from webdriverclient import __version__, client
from webdriverclient.domains.shared.kernel import Element, LogEntry, Session, Size
from webdriverclient.models.config_models import load_config

logger = logging.getLogger(__name__)


@library(scope="GLOBAL", version=__version__, doc_format="ROBOT")
class WebDriverClientLibrary:
    """Low-level WebDriver keywords speaking W3C or JSON Wire Protocol.

    = Configuration =

    | *** Settings ***
    | Library    webdriverclient.lib.WebDriverClientLibrary
    | ...    remote_url=http://127.0.0.1:4444
    | ...    dialect=w3c

    When ``remote_url`` or ``dialect`` are omitted they are read from the
    ``WEBDRIVER_URL`` and ``WEBDRIVER_DIALECT`` environment variables.

    = Examples =

    | *** Test Cases ***
    | Open Example
    |     ${session}=    Start WebDriver Session    {"capabilities": {}}
    |     Navigate To    ${session}    https://example.com
    |     ${links}=    Find Elements    ${session}    css selector    a
    |     End WebDriver Session    ${session}
    """

    ROBOT_LIBRARY_SCOPE = "GLOBAL"

    def __init__(
        self,
        remote_url: Optional[str] = None,
        dialect: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize WebDriverClientLibrary.

        Args:
            remote_url: Base URL of the remote end.
            dialect: ``w3c`` (standard) or ``jwp`` (legacy).
            timeout: Request timeout in seconds.
        """
        self.config = load_config(base_url=remote_url, dialect=dialect, timeout=timeout)
        rf_logger.info(
            f"WebDriverClientLibrary using {self.config.base_url} ({self.config.dialect.value})"
        )

    @keyword("Start WebDriver Session")
    def start_webdriver_session(self, payload: Dict[str, Any]) -> Session:
        """Start a session; ``payload`` is sent to the remote end as-is."""
        session = client.start_session(payload, self.config).unwrap()
        rf_logger.info(f"Started WebDriver session {session.id}")
        return session

    @keyword("Get WebDriver Sessions")
    def get_webdriver_sessions(self) -> List[Session]:
        return client.fetch_sessions(self.config).unwrap()

    @keyword("End WebDriver Session")
    def end_webdriver_session(self, session: Session) -> None:
        client.end_session(session).unwrap()
        rf_logger.info(f"Ended WebDriver session {session.id}")

    @keyword("Navigate To")
    def navigate_to(self, session: Session, url: str) -> None:
        rf_logger.info(f"Navigating to {url}")
        client.navigate_to(session, url).unwrap()

    @keyword("Get Current Url")
    def get_current_url(self, session: Session) -> str:
        return client.fetch_current_url(session).unwrap()

    @keyword("Get Window Size")
    def get_window_size(self, session: Session) -> Size:
        return client.fetch_window_size(session).unwrap()

    @keyword("Set Window Size")
    def set_window_size(
        self,
        session: Session,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> None:
        client.set_window_size(session, width=width, height=height).unwrap()

    @keyword("Get Log Types")
    def get_log_types(self, session: Session) -> List[str]:
        return client.fetch_log_types(session).unwrap()

    @keyword("Get Logs")
    def get_logs(self, session: Session, log_type: str = "browser") -> List[LogEntry]:
        entries = client.fetch_logs(session, log_type).unwrap()
        for entry in entries:
            rf_logger.debug(f"[{entry.level}] {entry.timestamp.isoformat()} {entry.message}")
        return entries

    @keyword("Find Elements")
    def find_elements(self, session: Session, strategy: str, selector: str) -> List[Element]:
        """Find elements using ``css selector``, ``xpath``, ``link text``,
        ``partial link text`` or ``tag name``."""
        elements = client.find_elements(session, strategy, selector).unwrap()
        logger.debug("Found %d elements for %s=%s", len(elements), strategy, selector)
        return elements

    @keyword("Find Elements From Element")
    def find_elements_from_element(
        self,
        session: Session,
        element: Element,
        strategy: str,
        selector: str,
    ) -> List[Element]:
        return client.find_elements_from_element(session, element, strategy, selector).unwrap()
