"""
LOT 5: Flow - Password Reset Requester

Étape "mot de passe oublié": envoi d'un code de réinitialisation puis
passage à l'étape suivante avec l'email en paramètre.
"""

from typing import Optional

from src.auth.validation_rules import is_valid_email
from src.core.interfaces import FlowSettings
from src.gateway.interfaces import Failure, IAuthGateway, MessagePayload, OperationOutcome, Success
from src.logging import LogLevel, StructuredLogger

from .base import FlowController
from .interfaces import INavigator

INVALID_EMAIL_MESSAGE = "Please enter a valid email address"
RESET_CODE_SENT_MESSAGE = "Reset code sent to your email. Redirecting..."


class PasswordResetRequester(FlowController):
    """
    Demande de réinitialisation.

    Aucun état n'est conservé entre deux demandes: des soumissions
    successives avec des emails différents sont indépendantes.

    Échecs possibles: VALIDATION (local), NOT_FOUND, DOMAIN, SERVER, NETWORK.
    """

    FLOW_NAME = "password_reset_request"

    def __init__(
        self,
        gateway: IAuthGateway,
        navigator: INavigator,
        next_route: Optional[str] = None,
        settings: Optional[FlowSettings] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        """
        Args:
            gateway: Passerelle d'authentification
            navigator: Navigation de l'hôte
            next_route: Étape suivante (défaut: routes.reset_password)
            settings: Configuration
            logger: Logger structuré
        """
        super().__init__(gateway, navigator, settings=settings, logger=logger)
        self._next_route = next_route or self._settings.routes.reset_password

    async def request_reset(self, email: str) -> OperationOutcome[MessagePayload]:
        """
        Demande l'envoi d'un code de réinitialisation.

        Returns:
            Success(MessagePayload) puis navigation vers l'étape suivante
            avec {"email": email}, ou Failure
        """
        operation = "request_password_reset"

        rejected = self._begin(operation)
        if rejected:
            return rejected

        try:
            email = email or ""
            if not is_valid_email(email):
                return self._validation_failure(INVALID_EMAIL_MESSAGE, operation)

            outcome = await self._call(operation, lambda: self._gateway.request_password_reset(email))

            late = self._discard_if_disposed(operation)
            if late:
                return late

            if isinstance(outcome, Failure):
                return self._fail(outcome, operation)

            self.success = outcome.payload.message or RESET_CODE_SENT_MESSAGE
            self._trace(LogLevel.INFO, "Reset code requested")
            self._navigate(self._next_route, {"email": email})
            return Success(outcome.payload)
        finally:
            self._end()
