"""
LOT 1: Core

Configuration du client d'authentification (YAML + validation pydantic).
"""

from .interfaces import IConfigLoader, FlowSettings, RouteSettings
from .config_loader import ConfigLoader, ConfigIntegrityError

__all__ = [
    # Interfaces
    "IConfigLoader",
    # Models
    "FlowSettings",
    "RouteSettings",
    # Implementations
    "ConfigLoader",
    # Exceptions
    "ConfigIntegrityError",
]
