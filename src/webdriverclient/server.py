"""MCP server exposing the WebDriver client operations as tools.

The server is stateless: every tool receives the remote end (base_url,
dialect) and, where needed, the session/element ids, rebuilds the value
objects and performs exactly one client call.
"""

import argparse
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from fastmcp import FastMCP

from webdriverclient import client
from webdriverclient.domains.errors import CommandResult
from webdriverclient.domains.shared.kernel import (
    DialectName,
    Element,
    LocationStrategyName,
    Session,
)
from webdriverclient.models.config_models import Config, load_config

logger = logging.getLogger(__name__)

_INSTRUCTIONS = (
    "Drive a remote WebDriver server (Selenium, chromedriver, geckodriver, ...). "
    "Call start_session first and pass the returned session id to the other tools. "
    "Pass the same base_url and dialect ('w3c' or 'jwp') to every call; when "
    "omitted they come from WEBDRIVER_URL and WEBDRIVER_DIALECT."
)


def _create_mcp_server() -> FastMCP:
    """Create the FastMCP server instance."""
    return FastMCP("WebDriver Client MCP Server", instructions=_INSTRUCTIONS)


mcp = _create_mcp_server()


def _make_config(base_url: Optional[str], dialect: Optional[str]) -> Config:
    return load_config(base_url=base_url, dialect=dialect)


def _make_session(session_id: str, base_url: Optional[str], dialect: Optional[str]) -> Session:
    return Session(id=session_id, config=_make_config(base_url, dialect))


async def _run(operation: Callable[[], CommandResult[Any]]) -> Dict[str, Any]:
    """Run one blocking client call off the event loop and render its result."""
    try:
        result = await asyncio.to_thread(operation)
    except (TypeError, ValueError) as e:
        logger.info(f"Rejected tool arguments: {e}")
        return {
            "success": False,
            "error": {"kind": "invalid_argument", "message": str(e)},
        }
    return result.to_dict()


@mcp.tool(
    name="start_session",
    description="Start a browser session. The payload is sent as-is: use "
    "{'capabilities': {...}} for W3C and {'desiredCapabilities': {...}} for JWP.",
)
async def start_session(
    payload: Dict[str, Any],
    base_url: Optional[str] = None,
    dialect: Optional[DialectName] = None,
) -> Dict[str, Any]:
    return await _run(lambda: client.start_session(payload, _make_config(base_url, dialect)))


@mcp.tool(name="fetch_sessions", description="List the sessions active on the remote end.")
async def fetch_sessions(
    base_url: Optional[str] = None,
    dialect: Optional[DialectName] = None,
) -> Dict[str, Any]:
    return await _run(lambda: client.fetch_sessions(_make_config(base_url, dialect)))


@mcp.tool(name="end_session", description="End a browser session.")
async def end_session(
    session_id: str,
    base_url: Optional[str] = None,
    dialect: Optional[DialectName] = None,
) -> Dict[str, Any]:
    return await _run(lambda: client.end_session(_make_session(session_id, base_url, dialect)))


@mcp.tool(name="navigate_to", description="Navigate the browser to a URL.")
async def navigate_to(
    session_id: str,
    url: str,
    base_url: Optional[str] = None,
    dialect: Optional[DialectName] = None,
) -> Dict[str, Any]:
    return await _run(
        lambda: client.navigate_to(_make_session(session_id, base_url, dialect), url)
    )


@mcp.tool(name="fetch_current_url", description="Return the URL of the current page.")
async def fetch_current_url(
    session_id: str,
    base_url: Optional[str] = None,
    dialect: Optional[DialectName] = None,
) -> Dict[str, Any]:
    return await _run(
        lambda: client.fetch_current_url(_make_session(session_id, base_url, dialect))
    )


@mcp.tool(name="fetch_window_size", description="Return the width and height of the window.")
async def fetch_window_size(
    session_id: str,
    base_url: Optional[str] = None,
    dialect: Optional[DialectName] = None,
) -> Dict[str, Any]:
    return await _run(
        lambda: client.fetch_window_size(_make_session(session_id, base_url, dialect))
    )


@mcp.tool(
    name="set_window_size",
    description="Resize the window. Omitted dimensions stay unchanged on W3C "
    "remote ends and fall back to 1024x768 on JWP ones.",
)
async def set_window_size(
    session_id: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
    base_url: Optional[str] = None,
    dialect: Optional[DialectName] = None,
) -> Dict[str, Any]:
    return await _run(
        lambda: client.set_window_size(
            _make_session(session_id, base_url, dialect), width=width, height=height
        )
    )


@mcp.tool(name="fetch_log_types", description="List the log types the remote end collects.")
async def fetch_log_types(
    session_id: str,
    base_url: Optional[str] = None,
    dialect: Optional[DialectName] = None,
) -> Dict[str, Any]:
    return await _run(
        lambda: client.fetch_log_types(_make_session(session_id, base_url, dialect))
    )


@mcp.tool(name="fetch_logs", description="Fetch log entries of one type, e.g. 'browser'.")
async def fetch_logs(
    session_id: str,
    log_type: str,
    base_url: Optional[str] = None,
    dialect: Optional[DialectName] = None,
) -> Dict[str, Any]:
    return await _run(
        lambda: client.fetch_logs(_make_session(session_id, base_url, dialect), log_type)
    )


@mcp.tool(name="find_elements", description="Find elements in the current page.")
async def find_elements(
    session_id: str,
    selector: str,
    strategy: LocationStrategyName = "css selector",
    base_url: Optional[str] = None,
    dialect: Optional[DialectName] = None,
) -> Dict[str, Any]:
    return await _run(
        lambda: client.find_elements(
            _make_session(session_id, base_url, dialect), strategy, selector
        )
    )


@mcp.tool(
    name="find_elements_from_element",
    description="Find elements below a previously found element.",
)
async def find_elements_from_element(
    session_id: str,
    element_id: str,
    selector: str,
    strategy: LocationStrategyName = "css selector",
    base_url: Optional[str] = None,
    dialect: Optional[DialectName] = None,
) -> Dict[str, Any]:
    return await _run(
        lambda: client.find_elements_from_element(
            _make_session(session_id, base_url, dialect),
            Element(id=element_id),
            strategy,
            selector,
        )
    )


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="WebDriver client MCP server entry point.")
    parser.add_argument(
        "--transport",
        dest="transport",
        choices=["stdio", "http", "sse"],
        help="Transport to use for the MCP server (default: stdio).",
    )
    parser.add_argument(
        "--host",
        dest="host",
        help="Host/interface for HTTP transport (default 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        dest="port",
        type=int,
        help="Port for HTTP transport (default 8000).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="INFO",
        help="Log level for the MCP server (e.g., INFO, DEBUG).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Start the WebDriver client MCP server."""

    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    run_kwargs: Dict[str, Any] = {}
    transport = args.transport or "stdio"
    run_kwargs["transport"] = transport

    # Only pass host/port when using HTTP/SSE transports
    if transport != "stdio":
        if args.host:
            run_kwargs["host"] = args.host
        if args.port:
            run_kwargs["port"] = args.port

    try:
        mcp.run(**run_kwargs)
    except KeyboardInterrupt:
        logger.info("WebDriver client MCP server interrupted by user")


if __name__ == "__main__":
    main()
