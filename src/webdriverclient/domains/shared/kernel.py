"""Shared Kernel - Core value types shared by both wire dialects.

These types are the protocol-agnostic vocabulary of the client:
- Dialect and LocationStrategy tags
- Session, Element, Size, Rect and LogEntry value objects

Both the JSON Wire Protocol and the W3C adapters produce exactly these
types, so callers never see which dialect a server speaks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any, Literal, Union

from pydantic import BeforeValidator

if TYPE_CHECKING:
    from webdriverclient.models.config_models import Config

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Dialect(str, Enum):
    """Wire protocol spoken by a remote end."""

    JWP = "jwp"
    W3C = "w3c"

    @classmethod
    def parse(cls, value: Union["Dialect", str]) -> "Dialect":
        """Resolve a dialect tag from an enum member or a string alias.

        Raises:
            ValueError: If the value names no supported dialect.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            resolved = _DIALECT_ALIASES.get(value.strip().lower())
            if resolved is not None:
                return resolved
        raise ValueError(
            f"Unsupported dialect: {value!r}. "
            f"Expected one of {sorted(_DIALECT_ALIASES)}"
        )


_DIALECT_ALIASES = {
    "jwp": Dialect.JWP,
    "legacy": Dialect.JWP,
    "json_wire": Dialect.JWP,
    "w3c": Dialect.W3C,
    "standard": Dialect.W3C,
}


class LocationStrategy(str, Enum):
    """Element location strategies understood by both dialects."""

    CSS_SELECTOR = "css selector"
    XPATH = "xpath"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"
    TAG_NAME = "tag name"

    @classmethod
    def parse(cls, value: Union["LocationStrategy", str]) -> "LocationStrategy":
        """Resolve a strategy from the enum, its wire value or its name.

        ``"css selector"``, ``"css_selector"`` and ``"CSS_SELECTOR"`` all
        resolve to ``LocationStrategy.CSS_SELECTOR``.

        Raises:
            ValueError: If the strategy is not supported.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", " ")
            for strategy in cls:
                if strategy.value == normalized:
                    return strategy
        raise ValueError(
            f"Unsupported element location strategy: {value!r}. "
            f"Expected one of {[s.value for s in cls]}"
        )


@dataclass(frozen=True)
class Session:
    """A remote browser session, identified by its server-issued id.

    The owning Config is carried for the whole life of the session so that
    every later call is routed to the adapter for the right dialect.
    """

    id: str
    config: "Config"

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Session id must be a non-empty string, got {self.id!r}")

    @property
    def dialect(self) -> Dialect:
        return self.config.dialect

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class Element:
    """Server-side handle to a DOM node, scoped to the session that found it."""

    id: str

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Element id must be a non-empty string, got {self.id!r}")

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class Size:
    """Window dimensions in CSS pixels."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Size dimensions must be non-negative, got {self.width}x{self.height}"
            )

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class Rect:
    """Window geometry as reported by a W3C remote end.

    Values are kept exactly as parsed; checking that width and height are
    non-negative happens when projecting to a Size.
    """

    x: int
    y: int
    width: int
    height: int

    def size(self) -> Size:
        """Project the width/height of this rect onto a Size."""
        return Size(width=self.width, height=self.height)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class LogEntry:
    """A single browser/driver log record."""

    level: str
    message: str
    timestamp: datetime

    @classmethod
    def from_epoch_millis(cls, level: str, message: str, millis: Union[int, float]) -> "LogEntry":
        """Build an entry from a timestamp in epoch milliseconds.

        Raises:
            OverflowError: If the timestamp is outside the datetime range.
        """
        return cls(level=level, message=message, timestamp=EPOCH + timedelta(milliseconds=millis))

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }


# ============================================================
# Literal type aliases with BeforeValidator for case-insensitive
# normalization of tags received from outer surfaces.
# ============================================================


def _normalize_dialect(v: Any) -> Any:
    """Map dialect aliases onto their canonical tag."""
    if isinstance(v, str):
        resolved = _DIALECT_ALIASES.get(v.strip().lower())
        return resolved.value if resolved else v
    if isinstance(v, Dialect):
        return v.value
    return v


def _normalize_strategy(v: Any) -> Any:
    """Accept strategy names in either wire or identifier spelling."""
    if isinstance(v, LocationStrategy):
        return v.value
    return v.strip().lower().replace("_", " ") if isinstance(v, str) else v


DialectName = Annotated[
    Literal["jwp", "w3c"],
    BeforeValidator(_normalize_dialect),
]

LocationStrategyName = Annotated[
    Literal["css selector", "xpath", "link text", "partial link text", "tag name"],
    BeforeValidator(_normalize_strategy),
]
