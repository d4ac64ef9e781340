"""Configuration data models."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Union

import httpx
from dotenv import load_dotenv

from webdriverclient.domains.shared.kernel import Dialect

DEFAULT_BASE_URL = "http://127.0.0.1:4444"
DEFAULT_DIALECT = Dialect.W3C
DEFAULT_TIMEOUT = 30.0  # seconds, handed to httpx unchanged

# JSON Wire Protocol has no "leave unchanged" value for window dimensions
DEFAULT_WINDOW_WIDTH = 1024
DEFAULT_WINDOW_HEIGHT = 768

_ENV_LOADED = False


@dataclass(frozen=True)
class TransportOptions:
    """Options passed through to the HTTP transport.

    None of these are interpreted by the client itself.
    """

    timeout: Optional[float] = DEFAULT_TIMEOUT
    headers: Dict[str, str] = field(default_factory=dict, hash=False)
    verify: bool = True
    # Replaces the network layer of httpx.Client (e.g. httpx.MockTransport)
    http_transport: Optional[httpx.BaseTransport] = field(
        default=None, compare=False, repr=False
    )


@dataclass(frozen=True)
class Config:
    """Connection settings for one remote end.

    The dialect tag is fixed at construction; every Session started with
    this Config is routed to the adapter for that dialect.
    """

    base_url: str
    dialect: Dialect = DEFAULT_DIALECT
    options: TransportOptions = field(default_factory=TransportOptions)

    def __post_init__(self) -> None:
        if not isinstance(self.base_url, str) or not self.base_url.strip():
            raise ValueError("base_url must be a non-empty string")
        base_url = self.base_url.strip().rstrip("/")
        if not base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        try:
            url = httpx.URL(base_url)
            port = url.port
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            raise ValueError(f"base_url is not a valid URL: {self.base_url!r} ({exc})") from exc
        if not url.host:
            raise ValueError(f"base_url has no host: {self.base_url!r}")
        if port is not None and not 0 < port < 65536:
            raise ValueError(f"base_url port out of range: {self.base_url!r}")
        object.__setattr__(self, "base_url", base_url)
        object.__setattr__(self, "dialect", Dialect.parse(self.dialect))

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "Config":
        """Create configuration from a dictionary.

        Recognised keys: ``base_url``, ``dialect``, ``timeout``, ``headers``
        and ``verify``. Unknown keys are ignored.
        """
        options = TransportOptions(
            timeout=config.get("timeout", DEFAULT_TIMEOUT),
            headers=dict(config.get("headers") or {}),
            verify=bool(config.get("verify", True)),
        )
        return cls(
            base_url=config.get("base_url", DEFAULT_BASE_URL),
            dialect=config.get("dialect", DEFAULT_DIALECT),
            options=options,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "base_url": self.base_url,
            "dialect": self.dialect.value,
            "timeout": self.options.timeout,
            "headers": dict(self.options.headers),
            "verify": self.options.verify,
        }

    def with_overrides(
        self,
        *,
        base_url: Optional[str] = None,
        dialect: Optional[Union[Dialect, str]] = None,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        http_transport: Optional[httpx.BaseTransport] = None,
    ) -> "Config":
        """Return a copy with the provided overrides applied."""

        options = self.options
        if timeout is not None:
            options = replace(options, timeout=timeout)
        if headers is not None:
            options = replace(options, headers=dict(headers))
        if http_transport is not None:
            options = replace(options, http_transport=http_transport)
        return Config(
            base_url=base_url or self.base_url,
            dialect=dialect if dialect is not None else self.dialect,
            options=options,
        )


def load_config(
    *,
    base_url: Optional[str] = None,
    dialect: Optional[Union[Dialect, str]] = None,
    timeout: Optional[float] = None,
) -> Config:
    """Load configuration from explicit arguments, the environment and defaults.

    Environment variables:
    - WEBDRIVER_URL: remote end base URL (default http://127.0.0.1:4444)
    - WEBDRIVER_DIALECT: "w3c"/"standard" or "jwp"/"legacy" (default w3c)
    - WEBDRIVER_TIMEOUT: request timeout in seconds (default 30)
    """

    _ensure_env_loaded()
    resolved_url = base_url or os.getenv("WEBDRIVER_URL", "").strip() or DEFAULT_BASE_URL
    resolved_dialect = dialect or os.getenv("WEBDRIVER_DIALECT", "").strip() or DEFAULT_DIALECT

    resolved_timeout: Optional[float] = timeout
    if resolved_timeout is None:
        raw_timeout = os.getenv("WEBDRIVER_TIMEOUT", "").strip()
        if raw_timeout:
            try:
                resolved_timeout = float(raw_timeout)
            except ValueError as exc:
                raise ValueError(
                    f"WEBDRIVER_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
                ) from exc
        else:
            resolved_timeout = DEFAULT_TIMEOUT

    return Config(
        base_url=resolved_url,
        dialect=resolved_dialect,
        options=TransportOptions(timeout=resolved_timeout),
    )


def _ensure_env_loaded() -> None:
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    load_dotenv(override=False)
    _ENV_LOADED = True
