"""
LOT 5: Flow - Credential Login Controller

Connexion par identifiant / mot de passe, puis redirection selon le rôle.
"""

from typing import Optional

from src.auth.interfaces import Session
from src.auth.session_redirector import SessionRedirector
from src.auth.session_store import SessionStore
from src.auth.validation_rules import validate_required
from src.core.interfaces import FlowSettings
from src.gateway.interfaces import AuthPayload, Failure, IAuthGateway, OperationOutcome, Success
from src.logging import LogLevel, StructuredLogger

from .base import FlowController
from .interfaces import INavigator


class CredentialLoginController(FlowController):
    """
    Orchestration de la connexion.

    Comportement:
        - Champs vides → Failure VALIDATION "required", aucun appel réseau
        - Succès → session écrite, navigation vers la route du rôle
        - Échec → message serveur exposé tel quel, session intacte,
          nouvelle tentative possible immédiatement
        - Un seul login en vol; un second appel est ignoré (REJECTED)

    Example:
        controller = CredentialLoginController(gateway, store, navigator)
        outcome = await controller.submit_login("admin", "admin123")
    """

    FLOW_NAME = "login"

    def __init__(
        self,
        gateway: IAuthGateway,
        session_store: SessionStore,
        navigator: INavigator,
        redirector: Optional[SessionRedirector] = None,
        settings: Optional[FlowSettings] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        super().__init__(gateway, navigator, settings=settings, logger=logger)
        self._store = session_store
        self._redirector = redirector or self._build_redirector()

    async def submit_login(self, username: str, password: str) -> OperationOutcome[Session]:
        """
        Soumet les identifiants.

        Args:
            username: Identifiant
            password: Mot de passe (jamais journalisé)

        Returns:
            Success(Session) ou Failure
        """
        operation = "login"

        rejected = self._begin(operation)
        if rejected:
            return rejected

        try:
            # Identifiant blanc = vide; le mot de passe est envoyé tel quel s'il est non vide
            check = validate_required({"username": username})
            if not check.valid or not password:
                return self._validation_failure("required", operation)

            self._trace(LogLevel.INFO, "Login attempt", username=username)
            outcome = await self._call(operation, lambda: self._gateway.login(username, password))

            late = self._discard_if_disposed(operation)
            if late:
                return late

            if isinstance(outcome, Failure):
                return self._fail(outcome, operation)

            return self._establish(outcome.payload)
        finally:
            self._end()

    def logout(self) -> None:
        """Supprime la session courante et retourne à l'écran de connexion."""
        was_authenticated = self._store.is_authenticated
        self._store.clear()
        self.clear_messages()
        self._trace(LogLevel.INFO, "Logout", had_session=was_authenticated)
        self._navigate(self._settings.routes.login)

    def _establish(self, payload: AuthPayload) -> Success[Session]:
        session = self._store.open(payload.token, payload.identity)
        destination = self._redirector.destination_for(payload.identity.role)
        self._trace(LogLevel.INFO, "Login succeeded", role=payload.identity.role.value)
        self._navigate(destination)
        return Success(session)
