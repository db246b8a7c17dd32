"""Configuration adapters."""

from reachable_from.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
