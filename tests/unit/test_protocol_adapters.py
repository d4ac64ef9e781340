"""Tests for the per-dialect protocol adapters and their factory."""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from webdriverclient import client
from webdriverclient.adapters import (
    BaseProtocolAdapter,
    JWPProtocolAdapter,
    ProtocolAdapterFactory,
    W3CProtocolAdapter,
    WebDriverProtocolAdapter,
)
from webdriverclient.domains.errors import (
    ErrorKind,
    TransportError,
    UnexpectedResponseFormatError,
    UnexpectedStatusCodeError,
    WebDriverError,
    WebDriverErrorReason,
)
from webdriverclient.domains.shared.kernel import Dialect, Element, Rect, Session, Size
from webdriverclient.models.config_models import Config
from webdriverclient.parsers import jwp_response_parser, w3c_response_parser
from webdriverclient.transport import HTTPResponse, TransportFailure

W3C_KEY = "element-6066-11e4-a52e-4f735466cecf"


class ScriptedTransport:
    """Transport double returning queued responses and recording requests."""

    def __init__(self, *responses):
        self.responses: List[Any] = list(responses)
        self.calls: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []

    def request(self, method, path, payload=None):
        self.calls.append((method, path, payload))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _ok(body, status=200):
    return HTTPResponse(status_code=status, body=body)


def _make_w3c(*responses):
    config = Config(base_url="http://localhost:4444", dialect="w3c")
    transport = ScriptedTransport(*responses)
    return W3CProtocolAdapter(config, transport=transport), transport, Session("s-1", config)


def _make_jwp(*responses):
    config = Config(base_url="http://localhost:4444", dialect="jwp")
    transport = ScriptedTransport(*responses)
    return JWPProtocolAdapter(config, transport=transport), transport, Session("s-1", config)


# ── Factory ──────────────────────────────────────────────────────────


class TestProtocolAdapterFactory:
    @pytest.mark.parametrize(
        "dialect, adapter_class",
        [("w3c", W3CProtocolAdapter), ("standard", W3CProtocolAdapter), ("jwp", JWPProtocolAdapter)],
    )
    def test_create_routes_on_dialect(self, dialect, adapter_class):
        adapter = ProtocolAdapterFactory.create(Config(base_url="http://x", dialect=dialect))
        assert type(adapter) is adapter_class
        assert isinstance(adapter, BaseProtocolAdapter)
        assert isinstance(adapter, WebDriverProtocolAdapter)

    def test_create_rejects_non_config(self):
        with pytest.raises(TypeError, match="Config"):
            ProtocolAdapterFactory.create({"base_url": "http://x"})

    def test_supported_dialects(self):
        assert set(ProtocolAdapterFactory.supported_dialects()) == {Dialect.JWP, Dialect.W3C}

    def test_adapter_class_rejects_unknown(self):
        with pytest.raises(ValueError):
            ProtocolAdapterFactory.adapter_class("bidi")

    def test_adapter_dialect_tags(self):
        assert ProtocolAdapterFactory.create(Config("http://x", "w3c")).dialect is Dialect.W3C
        assert ProtocolAdapterFactory.create(Config("http://x", "jwp")).dialect is Dialect.JWP

    def test_adapters_carry_their_dialect_parsers(self):
        assert W3CProtocolAdapter._parsers is w3c_response_parser
        assert JWPProtocolAdapter._parsers is jwp_response_parser


# ── W3C requests ─────────────────────────────────────────────────────


class TestW3CRequests:
    def test_start_session(self):
        adapter, transport, _ = _make_w3c(
            _ok({"value": {"sessionId": "new-1", "capabilities": {}}})
        )
        payload = {"capabilities": {"alwaysMatch": {"browserName": "firefox"}}}

        session = adapter.start_session(payload).unwrap()

        assert transport.calls == [("POST", "/session", payload)]
        assert session.id == "new-1"
        assert session.config is adapter.config

    def test_fetch_sessions(self):
        adapter, transport, _ = _make_w3c(_ok({"value": [{"id": "a"}, {"id": "b"}]}))
        assert [s.id for s in adapter.fetch_sessions().unwrap()] == ["a", "b"]
        assert transport.calls == [("GET", "/sessions", None)]

    def test_navigate_to(self):
        adapter, transport, session = _make_w3c(_ok({"value": None}))
        assert adapter.navigate_to(session, "https://example.com").unwrap() is None
        assert transport.calls == [("POST", "/session/s-1/url", {"url": "https://example.com"})]

    def test_fetch_current_url(self):
        adapter, transport, session = _make_w3c(_ok({"value": "https://example.com/"}))
        assert adapter.fetch_current_url(session).unwrap() == "https://example.com/"
        assert transport.calls == [("GET", "/session/s-1/url", None)]

    def test_fetch_window_size_reads_the_rect(self):
        adapter, transport, session = _make_w3c(
            _ok({"value": {"x": 4, "y": 4, "width": 1280, "height": 720}})
        )
        assert adapter.fetch_window_size(session).unwrap() == Size(width=1280, height=720)
        assert transport.calls == [("GET", "/session/s-1/window/rect", None)]

    def test_fetch_window_size_with_negative_rect_is_a_format_error(self):
        body = {"value": {"x": 0, "y": 0, "width": -1, "height": 720}}
        adapter, _, session = _make_w3c(_ok(body))

        result = adapter.fetch_window_size(session)

        assert isinstance(result.error, UnexpectedResponseFormatError)
        assert result.error.response_body == body

    def test_fetch_window_rect(self):
        adapter, _, session = _make_w3c(_ok({"value": {"x": 1, "y": 2, "width": 3, "height": 4}}))
        assert adapter.fetch_window_rect(session).unwrap() == Rect(1, 2, 3, 4)

    @pytest.mark.parametrize(
        "kwargs, payload",
        [
            ({"width": 800, "height": 600}, {"width": 800, "height": 600}),
            ({"width": 800}, {"width": 800}),
            ({}, {}),
        ],
    )
    def test_set_window_size_sends_only_given_dimensions(self, kwargs, payload):
        adapter, transport, session = _make_w3c(
            _ok({"value": {"x": 0, "y": 0, "width": 800, "height": 600}})
        )
        assert adapter.set_window_size(session, **kwargs).unwrap() is None
        assert transport.calls == [("POST", "/session/s-1/window/rect", payload)]

    def test_set_window_rect_moves_the_window(self):
        adapter, transport, session = _make_w3c(_ok({"value": {}}))
        adapter.set_window_rect(session, x=-10, y=20).unwrap()
        assert transport.calls[0][2] == {"x": -10, "y": 20}

    def test_logs(self):
        adapter, transport, session = _make_w3c(
            _ok({"value": ["browser"]}),
            _ok({"value": [{"level": "SEVERE", "message": "404", "timestamp": 1}]}),
        )
        assert adapter.fetch_log_types(session).unwrap() == ["browser"]
        [entry] = adapter.fetch_logs(session, "browser").unwrap()
        assert entry.level == "SEVERE"
        assert transport.calls == [
            ("GET", "/session/s-1/log/types", None),
            ("POST", "/session/s-1/log", {"type": "browser"}),
        ]

    def test_find_elements(self):
        adapter, transport, session = _make_w3c(_ok({"value": [{W3C_KEY: "e-1"}]}))
        assert adapter.find_elements(session, "css selector", "a.nav").unwrap() == [
            Element("e-1")
        ]
        assert transport.calls == [
            ("POST", "/session/s-1/elements", {"using": "css selector", "value": "a.nav"})
        ]

    def test_find_elements_from_element(self):
        adapter, transport, session = _make_w3c(_ok({"value": []}))
        result = adapter.find_elements_from_element(session, Element("e-1"), "XPATH", ".//li")
        assert result.unwrap() == []
        assert transport.calls == [
            ("POST", "/session/s-1/element/e-1/elements", {"using": "xpath", "value": ".//li"})
        ]

    def test_end_session(self):
        adapter, transport, session = _make_w3c(_ok({"value": None}))
        assert adapter.end_session(session).success
        assert transport.calls == [("DELETE", "/session/s-1", None)]

    def test_ids_are_escaped_in_paths(self):
        adapter, transport, _ = _make_w3c(_ok({"value": "x"}))
        adapter.fetch_current_url(Session("a/b c", adapter.config))
        assert transport.calls[0][1] == "/session/a%2Fb%20c/url"


# ── W3C responses ────────────────────────────────────────────────────


class TestW3CResponses:
    def test_error_object_on_error_status(self):
        adapter, _, session = _make_w3c(
            _ok({"value": {"error": "no such window", "message": "window closed"}}, status=404)
        )
        error = adapter.fetch_current_url(session).error

        assert error == WebDriverError(
            reason=WebDriverErrorReason.NO_SUCH_WINDOW,
            message="window closed",
            dialect=Dialect.W3C,
        )

    def test_unknown_error_code(self):
        adapter, _, session = _make_w3c(
            _ok({"value": {"error": "vendor oops", "message": "?"}}, status=500)
        )
        assert adapter.navigate_to(session, "x").error.reason is WebDriverErrorReason.UNKNOWN_ERROR

    def test_error_shaped_value_on_2xx_is_a_format_error_for_strings(self):
        body = {"value": {"error": "no such window", "message": "closed"}}
        adapter, _, session = _make_w3c(_ok(body))
        error = adapter.fetch_current_url(session).error
        assert isinstance(error, UnexpectedResponseFormatError)
        assert error.response_body == body

    def test_empty_object_for_current_url(self):
        adapter, _, session = _make_w3c(_ok({}))
        error = adapter.fetch_current_url(session).error
        assert isinstance(error, UnexpectedResponseFormatError)
        assert error.response_body == {}
        assert error.dialect is Dialect.W3C

    def test_non_2xx_without_error_object(self):
        response = HTTPResponse(
            status_code=502, body="Bad Gateway", decode_error="invalid JSON response: x"
        )
        adapter, _, session = _make_w3c(response)

        error = adapter.fetch_log_types(session).error

        assert isinstance(error, UnexpectedResponseFormatError)
        assert error.response_body == "Bad Gateway"
        assert error.reason == "invalid JSON response: x"

    def test_non_2xx_json_without_error_object(self):
        adapter, _, session = _make_w3c(_ok({"value": "nope"}, status=500))
        error = adapter.fetch_log_types(session).error
        assert isinstance(error, UnexpectedResponseFormatError)
        assert error.reason == "unexpected HTTP status 500"

    def test_undecodable_2xx_body_reports_the_decode_error(self):
        adapter, _, session = _make_w3c(
            HTTPResponse(status_code=200, body="<html>", decode_error="invalid JSON response: y")
        )
        error = adapter.fetch_current_url(session).error
        assert error.response_body == "<html>"
        assert error.reason == "invalid JSON response: y"

    def test_end_session_unexpected_status(self):
        adapter, _, session = _make_w3c(_ok({"oops": True}, status=500))
        error = adapter.end_session(session).error
        assert error == UnexpectedStatusCodeError(
            status_code=500, response_body={"oops": True}, dialect=Dialect.W3C
        )

    def test_end_session_web_driver_error(self):
        adapter, _, session = _make_w3c(
            _ok({"value": {"error": "invalid session id", "message": "gone"}}, status=404)
        )
        error = adapter.end_session(session).error
        assert error.kind is ErrorKind.WEB_DRIVER
        assert error.reason is WebDriverErrorReason.INVALID_SESSION_ID

    def test_transport_failure(self):
        adapter, _, session = _make_w3c(TransportFailure("Connection refused", "ConnectError"))
        assert adapter.fetch_window_size(session).error == TransportError(
            reason="Connection refused", exception_type="ConnectError"
        )


# ── JWP requests ─────────────────────────────────────────────────────


class TestJWPRequests:
    def test_start_session(self):
        adapter, transport, _ = _make_jwp(
            _ok({"sessionId": "legacy-1", "status": 0, "value": {"browserName": "chrome"}})
        )
        payload = {"desiredCapabilities": {"browserName": "chrome"}}
        assert adapter.start_session(payload).unwrap().id == "legacy-1"
        assert transport.calls == [("POST", "/session", payload)]

    def test_fetch_sessions_bare_array(self):
        adapter, _, _ = _make_jwp(_ok([{"id": "a", "capabilities": {}}]))
        assert [s.id for s in adapter.fetch_sessions().unwrap()] == ["a"]

    def test_fetch_window_size(self):
        adapter, transport, session = _make_jwp(
            _ok({"status": 0, "value": {"width": 1024, "height": 768}})
        )
        assert adapter.fetch_window_size(session).unwrap() == Size(1024, 768)
        assert transport.calls == [("GET", "/session/s-1/window/current/size", None)]

    @pytest.mark.parametrize(
        "kwargs, payload",
        [
            ({}, {"width": 1024, "height": 768}),
            ({"width": 1920}, {"width": 1920, "height": 768}),
            ({"width": 640, "height": 480}, {"width": 640, "height": 480}),
        ],
    )
    def test_set_window_size_defaults(self, kwargs, payload):
        adapter, transport, session = _make_jwp(_ok({"status": 0, "value": None}))
        assert adapter.set_window_size(session, **kwargs).unwrap() is None
        assert transport.calls == [("POST", "/session/s-1/window/current/size", payload)]

    def test_find_elements(self):
        adapter, transport, session = _make_jwp(_ok({"status": 0, "value": [{"ELEMENT": "0"}]}))
        assert adapter.find_elements(session, "link_text", "Home").unwrap() == [Element("0")]
        assert transport.calls[0][2] == {"using": "link text", "value": "Home"}

    def test_fetch_current_url(self):
        adapter, _, session = _make_jwp(_ok({"status": 0, "value": "about:blank"}))
        assert adapter.fetch_current_url(session).unwrap() == "about:blank"

    def test_fetch_current_url_non_string(self):
        body = {"status": 0, "value": None}
        adapter, _, session = _make_jwp(_ok(body))
        error = adapter.fetch_current_url(session).error
        assert isinstance(error, UnexpectedResponseFormatError)
        assert error.response_body == body


# ── JWP responses ────────────────────────────────────────────────────


class TestJWPResponses:
    @pytest.mark.parametrize("http_status", [200, 500])
    def test_failure_status_is_a_web_driver_error_at_any_http_status(self, http_status):
        adapter, _, session = _make_jwp(
            _ok({"status": 7, "value": {"message": "Unable to locate element"}}, status=http_status)
        )
        error = adapter.find_elements(session, "css selector", "#x").error
        assert error == WebDriverError(
            reason=WebDriverErrorReason.NO_SUCH_ELEMENT,
            message="Unable to locate element",
            dialect=Dialect.JWP,
        )

    def test_failure_status_without_message(self):
        body = {"status": 13, "value": None}
        adapter, _, session = _make_jwp(_ok(body))
        error = adapter.navigate_to(session, "https://example.com").error
        assert isinstance(error, UnexpectedResponseFormatError)
        assert error.response_body == body
        assert error.dialect is Dialect.JWP

    def test_end_session_unexpected_status(self):
        adapter, _, session = _make_jwp(_ok("", status=404))
        assert adapter.end_session(session).error.kind is ErrorKind.UNEXPECTED_STATUS_CODE

    def test_transport_failure(self):
        adapter, _, session = _make_jwp(TransportFailure("timed out", "ReadTimeout"))
        error = adapter.fetch_logs(session, "browser").error
        assert isinstance(error, TransportError)
        assert error.exception_type == "ReadTimeout"


# ── Malformed bodies ─────────────────────────────────────────────────


DEEPLY_NESTED = "[" * 100000 + "]" * 100000


class TestMalformedBodies:
    @pytest.mark.parametrize("session_fixture", ["w3c_session", "jwp_session"])
    def test_deeply_nested_json_is_a_format_error(self, request, remote, session_fixture):
        session = request.getfixturevalue(session_fixture)
        remote.respond_text(DEEPLY_NESTED)

        result = client.fetch_current_url(session)

        assert isinstance(result.error, UnexpectedResponseFormatError)
        assert result.error.reason.startswith("invalid JSON response")
        assert result.error.response_body == DEEPLY_NESTED

    def test_truncated_json_is_a_format_error(self, remote, w3c_session):
        remote.respond_text("{\"value\": ")

        result = client.fetch_window_size(w3c_session)

        assert isinstance(result.error, UnexpectedResponseFormatError)
        assert result.error.reason.startswith("invalid JSON response")


# ── Caller misuse ────────────────────────────────────────────────────


@pytest.mark.parametrize("make", [_make_w3c, _make_jwp], ids=["w3c", "jwp"])
class TestCallerMisuse:
    def test_unsupported_strategy(self, make):
        adapter, transport, session = make()
        with pytest.raises(ValueError, match="location strategy"):
            adapter.find_elements(session, "id", "main")
        assert transport.calls == []

    def test_empty_selector(self, make):
        adapter, transport, session = make()
        with pytest.raises(ValueError, match="selector"):
            adapter.find_elements_from_element(session, Element("e"), "xpath", "")
        assert transport.calls == []

    def test_element_must_be_an_element(self, make):
        adapter, transport, session = make()
        with pytest.raises(TypeError):
            adapter.find_elements_from_element(session, "e-1", "xpath", "//a")
        assert transport.calls == []

    def test_session_must_be_a_session(self, make):
        adapter, transport, _ = make()
        with pytest.raises(TypeError):
            adapter.fetch_current_url("s-1")
        assert transport.calls == []

    def test_url_must_be_a_string(self, make):
        adapter, transport, session = make()
        with pytest.raises(TypeError):
            adapter.navigate_to(session, None)
        assert transport.calls == []

    @pytest.mark.parametrize(
        "kwargs, exc",
        [
            ({"width": -1}, ValueError),
            ({"height": -200}, ValueError),
            ({"width": "800"}, TypeError),
            ({"width": 800.0}, TypeError),
            ({"height": True}, TypeError),
        ],
    )
    def test_invalid_window_dimensions(self, make, kwargs, exc):
        adapter, transport, session = make()
        with pytest.raises(exc):
            adapter.set_window_size(session, **kwargs)
        assert transport.calls == []
