"""Configuration models."""

from .config_models import Config, TransportOptions, load_config

__all__ = ["Config", "TransportOptions", "load_config"]
