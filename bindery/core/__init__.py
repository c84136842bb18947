"""Core configuration and factory components."""

from bindery.core.config import Settings, get_settings
from bindery.core.factory import ComponentFactory, get_factory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
    "get_factory",
]
