"""Test doubles shared by the unit, MCP and Robot Framework suites."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Optional

import httpx

from webdriverclient.models.config_models import Config

BASE_URL = "http://webdriver.test:4444"


@dataclass(frozen=True)
class RecordedRequest:
    method: str
    path: str
    payload: Any


class FakeRemoteEnd:
    """In-memory remote end served through httpx.MockTransport.

    Responses are queued with ``respond``/``respond_text``/``refuse`` and
    consumed in order; the last one is repeated once the queue runs dry.
    """

    def __init__(self) -> None:
        self.requests: List[RecordedRequest] = []
        self._responses: List[Any] = []

    def respond(self, body: Any = None, status: int = 200) -> "FakeRemoteEnd":
        self._responses.append(("json", status, body))
        return self

    def respond_text(self, text: str, status: int = 200) -> "FakeRemoteEnd":
        self._responses.append(("text", status, text))
        return self

    def refuse(self) -> "FakeRemoteEnd":
        self._responses.append(("refuse", None, None))
        return self

    @property
    def last_request(self) -> Optional[RecordedRequest]:
        return self.requests[-1] if self.requests else None

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content) if request.content else None
        self.requests.append(
            RecordedRequest(request.method, request.url.raw_path.decode("ascii"), payload)
        )
        if not self._responses:
            raise AssertionError(f"No response queued for {request.method} {request.url}")
        if len(self._responses) > 1:
            kind, status, body = self._responses.pop(0)
        else:
            kind, status, body = self._responses[0]
        if kind == "refuse":
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)
        if kind == "text":
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


def make_config(remote: FakeRemoteEnd, dialect: str) -> Config:
    """Config for ``dialect`` whose requests are answered by ``remote``."""
    return Config(base_url=BASE_URL, dialect=dialect).with_overrides(
        http_transport=remote.transport
    )
