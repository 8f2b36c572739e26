"""
LOT 5: Flow - Registration Controller

Création de compte; l'email est ensuite vérifié par l'étape OTP.
"""

from typing import Optional

from src.auth.validation_rules import (
    ValidationResult,
    is_valid_email,
    validate_new_password,
    validate_required,
)
from src.core.interfaces import FlowSettings
from src.gateway.interfaces import (
    Failure,
    IAuthGateway,
    MessagePayload,
    OperationOutcome,
    RegistrationRequest,
    Success,
)
from src.logging import LogLevel, StructuredLogger

from .base import FlowController
from .interfaces import INavigator

REGISTRATION_SUCCESS_MESSAGE = "Registration successful. Please check your email for the verification code."


class RegistrationController(FlowController):
    """
    Inscription puis passage à la vérification OTP avec l'email en état.

    Un conflit (409, ex: "Username already exists") remonte en DOMAIN avec
    le message serveur.
    """

    FLOW_NAME = "registration"

    def __init__(
        self,
        gateway: IAuthGateway,
        navigator: INavigator,
        settings: Optional[FlowSettings] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        super().__init__(gateway, navigator, settings=settings, logger=logger)
        self.last_validation: Optional[ValidationResult] = None

    def validate(
        self,
        username: str,
        email: str,
        first_name: str,
        last_name: str,
        password: str,
        confirm_password: str,
    ) -> ValidationResult:
        """Toutes les erreurs du formulaire (pas fail-fast)."""
        result = validate_required({
            "username": username,
            "email": email,
            "firstName": first_name,
            "lastName": last_name,
        })
        if email and not is_valid_email(email):
            result.add("email", "email", "Please enter a valid email address")
        result.errors.extend(validate_new_password(password, confirm_password).errors)
        return result

    async def submit_registration(
        self,
        username: str,
        email: str,
        first_name: str,
        last_name: str,
        password: str,
        confirm_password: str,
    ) -> OperationOutcome[MessagePayload]:
        """
        Crée le compte.

        Returns:
            Success(MessagePayload) puis navigation vers l'étape OTP avec
            {"email": ...}, ou Failure
        """
        operation = "register"

        rejected = self._begin(operation)
        if rejected:
            return rejected

        try:
            validation = self.validate(username, email, first_name, last_name, password, confirm_password)
            self.last_validation = validation
            if not validation.valid:
                return self._validation_failure(validation.first_message(), operation)

            request = RegistrationRequest(
                username=username.strip(),
                email=email.strip(),
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                password=password,
            )
            self._trace(LogLevel.INFO, "Registration attempt", username=request.username)
            outcome = await self._call(operation, lambda: self._gateway.register(request))

            late = self._discard_if_disposed(operation)
            if late:
                return late

            if isinstance(outcome, Failure):
                return self._fail(outcome, operation)

            verified_email = outcome.payload.email or request.email
            self.success = outcome.payload.message or REGISTRATION_SUCCESS_MESSAGE
            self._navigate(self._settings.routes.verify_otp, {"email": verified_email})
            return Success(outcome.payload)
        finally:
            self._end()
