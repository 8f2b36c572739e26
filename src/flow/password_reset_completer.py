"""
LOT 5: Flow - Password Reset Completer

Seconde étape de la réinitialisation: code reçu par email + nouveau mot de
passe. Liée à l'email transmis par l'étape "mot de passe oublié".
"""

from typing import Optional

from src.auth.validation_rules import (
    ValidationResult,
    sanitize_otp_input,
    validate_new_password,
    validate_otp_field,
)
from src.core.interfaces import FlowSettings
from src.gateway.interfaces import (
    Failure,
    FailureKind,
    IAuthGateway,
    MessagePayload,
    OperationOutcome,
    Success,
)
from src.logging import LogLevel, StructuredLogger

from .base import FlowController
from .interfaces import INavigator, OtpChallenge

RESET_SUCCESS_MESSAGE = "Password reset successful! Redirecting to login..."
CODE_RESENT_MESSAGE = "New reset code sent to your email"


class PasswordResetCompleter(FlowController):
    """
    Saisie du code de réinitialisation et du nouveau mot de passe.

    Règles locales (VALIDATION, aucun appel réseau):
        - code de 6 chiffres
        - mot de passe de 6 caractères minimum
        - confirmation identique

    Succès → navigation vers l'écran de connexion (aucune session ouverte).
    """

    FLOW_NAME = "password_reset"

    def __init__(
        self,
        email: str,
        gateway: IAuthGateway,
        navigator: INavigator,
        settings: Optional[FlowSettings] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        """
        Raises:
            ValueError: Si email vide
        """
        self._challenge = OtpChallenge(email)
        super().__init__(gateway, navigator, settings=settings, logger=logger)
        self.last_validation: Optional[ValidationResult] = None

    @property
    def email(self) -> str:
        return self._challenge.email

    async def submit_reset(
        self,
        otp_code: str,
        password: str,
        confirm_password: str,
    ) -> OperationOutcome[MessagePayload]:
        """
        Réinitialise le mot de passe.

        Returns:
            Success(MessagePayload) puis navigation vers /login, ou Failure
            (VALIDATION, INVALID, EXPIRED, SERVER, NETWORK)
        """
        operation = "reset_password"

        rejected = self._begin(operation)
        if rejected:
            return rejected

        try:
            code = sanitize_otp_input(otp_code)
            validation = validate_otp_field(otp_code)
            validation.errors.extend(validate_new_password(password, confirm_password).errors)
            self.last_validation = validation
            if not validation.valid:
                return self._validation_failure(validation.first_message(), operation)

            outcome = await self._call(
                operation, lambda: self._gateway.reset_password(self.email, code, password)
            )

            late = self._discard_if_disposed(operation)
            if late:
                return late

            if isinstance(outcome, Failure):
                return self._fail(outcome, operation)

            self.success = RESET_SUCCESS_MESSAGE
            self._trace(LogLevel.INFO, "Password reset completed")
            self._navigate(self._settings.routes.login)
            return Success(outcome.payload)
        finally:
            self._end()

    async def resend_code(self) -> OperationOutcome[MessagePayload]:
        """Redemande un code de réinitialisation pour le même email."""
        operation = "resend_reset_code"

        rejected = self._begin(operation)
        if rejected:
            return rejected

        try:
            outcome = await self._call(
                operation, lambda: self._gateway.request_password_reset(self.email)
            )

            late = self._discard_if_disposed(operation)
            if late:
                return late

            if isinstance(outcome, Failure):
                return self._fail(outcome, operation)

            self.success = outcome.payload.message or CODE_RESENT_MESSAGE
            return Success(outcome.payload)
        finally:
            self._end()


def enter_reset_step(
    email: Optional[str],
    gateway: IAuthGateway,
    navigator: INavigator,
    settings: Optional[FlowSettings] = None,
    logger: Optional[StructuredLogger] = None,
) -> Optional[PasswordResetCompleter]:
    """
    Point d'entrée de l'étape de réinitialisation.

    Sans email, retour à l'étape "mot de passe oublié".
    """
    settings = settings or FlowSettings()

    if not email or not email.strip():
        navigator.navigate(settings.routes.forgot_password)
        return None

    return PasswordResetCompleter(email.strip(), gateway, navigator, settings=settings, logger=logger)
