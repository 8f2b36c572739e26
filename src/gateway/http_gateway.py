"""
LOT 4: Gateway - HTTP Implementation

Passerelle d'authentification HTTP/JSON (aiohttp).

Classification des échecs:
    - Pas de réponse (timeout, coupure, abort) → NETWORK
    - 5xx → SERVER
    - 404 → NOT_FOUND
    - 400 sur verify-otp / reset-password → EXPIRED si le message parle
      d'expiration, INVALID sinon
    - Autres 4xx → DOMAIN avec message serveur
    - 2xx au corps inexploitable → SERVER
"""

import asyncio
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type

import aiohttp
from pydantic import BaseModel, ValidationError

from src.core.interfaces import FlowSettings
from src.logging import StructuredLogger

from .interfaces import (
    AuthPayload,
    AuthResponseModel,
    Failure,
    FailureKind,
    IAuthGateway,
    MessagePayload,
    MessageResponseModel,
    OperationOutcome,
    RegistrationRequest,
    Success,
)


class GatewayOperation(Enum):
    """Opérations exposées par l'API d'authentification."""

    LOGIN = "/auth/login"
    REQUEST_PASSWORD_RESET = "/auth/forgot-password"
    VERIFY_OTP = "/auth/verify-otp"
    RESEND_OTP = "/auth/resend-otp"
    REGISTER = "/auth/register"
    RESET_PASSWORD = "/auth/reset-password"


NETWORK_ERROR_MESSAGE = "Unable to reach the server. Please check your connection and try again."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."

# Message par défaut quand le serveur n'en fournit pas
DEFAULT_FAILURE_MESSAGES: Dict[GatewayOperation, str] = {
    GatewayOperation.LOGIN: "Invalid username or password",
    GatewayOperation.REQUEST_PASSWORD_RESET: "Failed to send reset code. Please try again.",
    GatewayOperation.VERIFY_OTP: "Invalid or expired OTP code. Please try again.",
    GatewayOperation.RESEND_OTP: "Failed to resend OTP. Please try again.",
    GatewayOperation.REGISTER: "Registration failed. Please try again.",
    GatewayOperation.RESET_PASSWORD: "Invalid or expired reset code",
}

NOT_FOUND_MESSAGES: Dict[GatewayOperation, str] = {
    GatewayOperation.REQUEST_PASSWORD_RESET: "Email not found",
    GatewayOperation.RESEND_OTP: "Email not found",
}

# Opérations dont le 400 porte sur un code (invalide ou expiré)
CODE_OPERATIONS = (GatewayOperation.VERIFY_OTP, GatewayOperation.RESET_PASSWORD)


def classify_failure(
    operation: GatewayOperation,
    status: Optional[int],
    server_message: Optional[str] = None,
) -> Failure:
    """
    Convertit un statut HTTP (ou son absence) en Failure typé.

    Args:
        operation: Opération appelée
        status: Code HTTP, None si la requête n'a pas abouti
        server_message: Champ `message` du corps d'erreur, s'il existe

    Returns:
        Failure avec kind et message prêt à afficher
    """
    message = (server_message or "").strip()

    if status is None:
        return Failure(FailureKind.NETWORK, NETWORK_ERROR_MESSAGE)

    if status >= 500:
        return Failure(FailureKind.SERVER, message or SERVER_ERROR_MESSAGE, status)

    if status == 404:
        default = NOT_FOUND_MESSAGES.get(operation, DEFAULT_FAILURE_MESSAGES[operation])
        return Failure(FailureKind.NOT_FOUND, message or default, status)

    if status == 400 and operation in CODE_OPERATIONS:
        kind = FailureKind.EXPIRED if "expire" in message.lower() else FailureKind.INVALID
        return Failure(kind, message or DEFAULT_FAILURE_MESSAGES[operation], status)

    if 400 <= status < 500:
        return Failure(FailureKind.DOMAIN, message or DEFAULT_FAILURE_MESSAGES[operation], status)

    # 1xx/3xx inattendus
    return Failure(FailureKind.SERVER, message or SERVER_ERROR_MESSAGE, status)


class HttpAuthGateway(IAuthGateway):
    """
    Passerelle HTTP vers l'API d'authentification.

    Une session aiohttp peut être injectée (partagée avec l'application);
    sinon une session éphémère est ouverte par requête.

    Example:
        async with HttpAuthGateway(FlowSettings()) as gateway:
            outcome = await gateway.login("admin", "admin123")
            if outcome.ok:
                token = outcome.payload.token
    """

    def __init__(
        self,
        settings: Optional[FlowSettings] = None,
        session: Optional[aiohttp.ClientSession] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self._settings = settings or FlowSettings()
        self._session = session
        self._owns_session = False
        self._logger = logger

    @property
    def base_url(self) -> str:
        return self._settings.api_base_url

    async def __aenter__(self) -> "HttpAuthGateway":
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout())
            self._owns_session = True
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Ferme la session si elle a été ouverte par la passerelle."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._owns_session = False

    async def login(self, username: str, password: str) -> OperationOutcome[AuthPayload]:
        return await self._call(
            GatewayOperation.LOGIN,
            {"username": username, "password": password},
            AuthResponseModel,
        )

    async def request_password_reset(self, email: str) -> OperationOutcome[MessagePayload]:
        return await self._call(
            GatewayOperation.REQUEST_PASSWORD_RESET,
            {"email": email},
            MessageResponseModel,
        )

    async def verify_otp(self, email: str, otp_code: str) -> OperationOutcome[AuthPayload]:
        return await self._call(
            GatewayOperation.VERIFY_OTP,
            {"email": email, "otpCode": otp_code},
            AuthResponseModel,
        )

    async def resend_otp(self, email: str) -> OperationOutcome[MessagePayload]:
        return await self._call(
            GatewayOperation.RESEND_OTP,
            {"email": email},
            MessageResponseModel,
        )

    async def register(self, request: RegistrationRequest) -> OperationOutcome[MessagePayload]:
        return await self._call(
            GatewayOperation.REGISTER,
            {
                "username": request.username,
                "email": request.email,
                "firstName": request.first_name,
                "lastName": request.last_name,
                "password": request.password,
            },
            MessageResponseModel,
        )

    async def reset_password(
        self, email: str, otp_code: str, new_password: str
    ) -> OperationOutcome[MessagePayload]:
        return await self._call(
            GatewayOperation.RESET_PASSWORD,
            {"email": email, "otpCode": otp_code, "newPassword": new_password},
            MessageResponseModel,
        )

    async def _call(
        self,
        operation: GatewayOperation,
        body: Dict[str, Any],
        model: Type[BaseModel],
    ) -> OperationOutcome:
        """
        Exécute la requête puis parse la réponse avec le modèle pydantic.

        Returns:
            Success(payload) ou Failure classifié
        """
        try:
            status, data = await self._post(operation.value, body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._log_warn("Gateway request did not complete", operation, error=type(e).__name__)
            return classify_failure(operation, None)

        if not 200 <= status < 300:
            server_message = data.get("message") if isinstance(data, dict) else None
            failure = classify_failure(operation, status, server_message if isinstance(server_message, str) else None)
            self._log_warn("Gateway request failed", operation, status=status, kind=failure.kind.value)
            return failure

        try:
            parsed = model.model_validate(data if isinstance(data, dict) else {})
        except ValidationError as e:
            self._log_warn("Gateway response unreadable", operation, status=status, errors=e.error_count())
            return Failure(FailureKind.SERVER, SERVER_ERROR_MESSAGE, status)

        return Success(parsed.to_payload())

    async def _post(self, path: str, body: Dict[str, Any]) -> Tuple[int, Any]:
        """
        POST JSON et retourne (status, corps décodé).

        Un corps non JSON est remplacé par None.

        Raises:
            aiohttp.ClientError: Erreur de transport
            asyncio.TimeoutError: Timeout dépassé
        """
        url = f"{self.base_url}{path}"

        if self._session is not None:
            return await self._send(self._session, url, body)

        async with aiohttp.ClientSession(timeout=self._timeout()) as session:
            return await self._send(session, url, body)

    async def _send(self, session: aiohttp.ClientSession, url: str, body: Dict[str, Any]) -> Tuple[int, Any]:
        async with session.post(url, json=body, timeout=self._timeout()) as resp:
            try:
                data = await resp.json(content_type=None)
            except ValueError:
                data = None
            return resp.status, data

    def _timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self._settings.request_timeout_seconds)

    def _log_warn(self, message: str, operation: GatewayOperation, **extra: Any) -> None:
        if self._logger is not None:
            self._logger.warn(message, flow="gateway", operation=operation.name.lower(), **extra)
