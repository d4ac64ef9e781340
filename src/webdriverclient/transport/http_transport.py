"""HTTP transport used by the protocol adapters.

The adapters only depend on the Transport protocol: send one request,
get back a status code and a decoded-or-raw body, or a TransportFailure.
HTTPTransport is the default implementation on top of httpx.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import httpx

from webdriverclient.models.config_models import TransportOptions

logger = logging.getLogger(__name__)

USER_AGENT = "webdriverclient (python)"


@dataclass(frozen=True)
class HTTPResponse:
    """Status code and body of a completed exchange.

    ``body`` is the decoded JSON document, or the raw response text when
    decoding failed, in which case ``decode_error`` says why.
    """

    status_code: int
    body: Any
    decode_error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class TransportFailure(Exception):
    """The request never produced an HTTP response."""

    def __init__(self, reason: str, exception_type: Optional[str] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.exception_type = exception_type


@runtime_checkable
class Transport(Protocol):
    """Capability to perform a single JSON-over-HTTP exchange."""

    def request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> HTTPResponse:
        """Send the request and return the response.

        Raises:
            TransportFailure: On network or protocol level failure.
        """
        ...


class HTTPTransport:
    """httpx-backed transport bound to one remote end base URL.

    A fresh httpx.Client is used per exchange, so instances hold no
    connection state and can be shared between threads.
    """

    def __init__(self, base_url: str, options: Optional[TransportOptions] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.options = options or TransportOptions()

    def request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> HTTPResponse:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s payload=%r", method, url, payload)
        try:
            with self._client() as client:
                response = client.request(method, url, json=payload)
        except httpx.HTTPError as exc:
            logger.warning(f"{method} {url} failed: {exc}")
            raise TransportFailure(str(exc) or repr(exc), type(exc).__name__) from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return self._decode(response)

    def _client(self) -> httpx.Client:
        headers = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
            **self.options.headers,
        }
        client_kwargs: Dict[str, Any] = {
            "headers": headers,
            "timeout": self.options.timeout,
            "verify": self.options.verify,
        }
        if self.options.http_transport is not None:
            client_kwargs["transport"] = self.options.http_transport
        return httpx.Client(**client_kwargs)

    @staticmethod
    def _decode(response: httpx.Response) -> HTTPResponse:
        try:
            body = response.json()
        except (ValueError, RecursionError) as exc:
            return HTTPResponse(
                status_code=response.status_code,
                body=response.text,
                decode_error=f"invalid JSON response: {exc}",
            )
        return HTTPResponse(status_code=response.status_code, body=body)
