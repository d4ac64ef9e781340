"""Shared kernel for the webdriver client."""

from .kernel import (
    Dialect,
    DialectName,
    Element,
    LocationStrategy,
    LocationStrategyName,
    LogEntry,
    Rect,
    Session,
    Size,
)

__all__ = [
    "Dialect",
    "DialectName",
    "Element",
    "LocationStrategy",
    "LocationStrategyName",
    "LogEntry",
    "Rect",
    "Session",
    "Size",
]
