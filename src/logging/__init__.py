"""
LOT 2: Logging

Logging structuré JSON des flux d'authentification:
- Champs obligatoires: timestamp, level, correlation_id, flow, message
- Timestamp ISO 8601 UTC
- Masquage des mots de passe, tokens et codes OTP
"""

from .interfaces import (
    # Enums
    LogLevel,
    # Dataclasses
    LogEntry,
    LogConfig,
    # Interfaces
    IStructuredLogger,
    ISensitiveMasker,
)
from .sensitive_masker import SensitiveMasker
from .structured_logger import (
    StructuredLogger,
    ContextualLogger,
    create_logger,
    # Exceptions
    MissingRequiredFieldError,
)

__all__ = [
    # Enums
    "LogLevel",
    # Dataclasses
    "LogEntry",
    "LogConfig",
    # Interfaces
    "IStructuredLogger",
    "ISensitiveMasker",
    # Implementations
    "SensitiveMasker",
    "StructuredLogger",
    "ContextualLogger",
    "create_logger",
    # Exceptions
    "MissingRequiredFieldError",
]
