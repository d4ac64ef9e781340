"""WebDriver Protocol Adapters - Anti-Corruption Layer.

This package provides adapters that abstract the differences between the
two WebDriver wire dialects (Selenium JSON Wire Protocol and W3C
WebDriver), so that the client API is identical whichever one a remote
end speaks.

Key Components:
    WebDriverProtocolAdapter: Protocol defining the adapter interface
    BaseProtocolAdapter: Shared request/response reduction
    JWPProtocolAdapter: Adapter for the legacy JSON Wire Protocol
    W3CProtocolAdapter: Adapter for W3C WebDriver
    ProtocolAdapterFactory: Dialect to adapter routing table

Usage:
    from webdriverclient.adapters import ProtocolAdapterFactory

    adapter = ProtocolAdapterFactory.create(config)
    result = adapter.find_elements(session, "css selector", "a.nav")
"""

from .protocol_adapter import (
    BaseProtocolAdapter,
    WebDriverProtocolAdapter,
)
from .jwp_adapter import JWPProtocolAdapter
from .w3c_adapter import W3CProtocolAdapter
from .adapter_factory import ProtocolAdapterFactory

__all__ = [
    "BaseProtocolAdapter",
    "WebDriverProtocolAdapter",
    "JWPProtocolAdapter",
    "W3CProtocolAdapter",
    "ProtocolAdapterFactory",
]
