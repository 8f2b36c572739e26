"""
LOT 4: Gateway

Passerelle réseau vers l'API d'authentification:
- Résultats typés Success / Failure (jamais d'exception non gérée)
- Taxonomie d'échecs: VALIDATION, NOT_FOUND, DOMAIN, SERVER, NETWORK,
  INVALID, EXPIRED, REJECTED
- Implémentation HTTP/JSON (aiohttp)
"""

from .interfaces import (
    # Enums
    FailureKind,
    # Data classes
    Success,
    Failure,
    OperationOutcome,
    AuthPayload,
    MessagePayload,
    RegistrationRequest,
    # Wire models
    UserModel,
    AuthResponseModel,
    MessageResponseModel,
    # Interfaces
    IAuthGateway,
)
from .http_gateway import (
    GatewayOperation,
    HttpAuthGateway,
    classify_failure,
    DEFAULT_FAILURE_MESSAGES,
    NETWORK_ERROR_MESSAGE,
    SERVER_ERROR_MESSAGE,
)

__all__ = [
    # Enums
    "FailureKind",
    "GatewayOperation",
    # Data classes
    "Success",
    "Failure",
    "OperationOutcome",
    "AuthPayload",
    "MessagePayload",
    "RegistrationRequest",
    # Wire models
    "UserModel",
    "AuthResponseModel",
    "MessageResponseModel",
    # Interfaces
    "IAuthGateway",
    # Implementations
    "HttpAuthGateway",
    "classify_failure",
    # Messages
    "DEFAULT_FAILURE_MESSAGES",
    "NETWORK_ERROR_MESSAGE",
    "SERVER_ERROR_MESSAGE",
]
