"""Protocol Adapter Factory.

Maps each dialect tag onto the adapter that speaks it. The table is the
only place that knows which adapter class serves which dialect.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Type

from webdriverclient.domains.shared.kernel import Dialect
from webdriverclient.models.config_models import Config
from webdriverclient.transport import Transport

from .jwp_adapter import JWPProtocolAdapter
from .protocol_adapter import BaseProtocolAdapter
from .w3c_adapter import W3CProtocolAdapter

logger = logging.getLogger(__name__)


class ProtocolAdapterFactory:
    """Factory for creating protocol adapters.

    Usage:
        adapter = ProtocolAdapterFactory.create(config)
        result = adapter.fetch_current_url(session)
    """

    _adapters: Dict[Dialect, Type[BaseProtocolAdapter]] = {
        Dialect.JWP: JWPProtocolAdapter,
        Dialect.W3C: W3CProtocolAdapter,
    }

    @classmethod
    def adapter_class(cls, dialect: Dialect) -> Type[BaseProtocolAdapter]:
        """Return the adapter class registered for ``dialect``.

        Raises:
            ValueError: If no adapter serves the dialect.
        """
        try:
            return cls._adapters[Dialect.parse(dialect)]
        except KeyError:
            raise ValueError(f"No protocol adapter for dialect: {dialect!r}") from None

    @classmethod
    def create(cls, config: Config, transport: Optional[Transport] = None) -> BaseProtocolAdapter:
        """Create the adapter for ``config.dialect``.

        Args:
            config: Connection settings carrying the dialect tag.
            transport: Optional transport replacing the default HTTPTransport.

        Raises:
            TypeError: If ``config`` is not a Config.
        """
        if not isinstance(config, Config):
            raise TypeError(f"config must be a Config, got {type(config).__name__}")
        adapter_class = cls.adapter_class(config.dialect)
        logger.debug(f"Creating {adapter_class.__name__} for {config.base_url}")
        return adapter_class(config, transport=transport)

    @classmethod
    def supported_dialects(cls) -> list:
        return list(cls._adapters)
