"""
LOT 5: Flow - Base Controller

Socle commun des contrôleurs de flux:
- Une seule requête réseau en vol par instance
- Résultats tardifs ignorés après dispose()
- Messages d'erreur / de succès prêts à afficher
- Logging structuré par flux
"""

from typing import Any, Awaitable, Callable, Dict, Optional

from src.auth.session_redirector import SessionRedirector
from src.core.interfaces import FlowSettings
from src.gateway.interfaces import Failure, FailureKind, IAuthGateway, OperationOutcome
from src.logging import ContextualLogger, LogLevel, StructuredLogger

from .interfaces import INavigator, Navigation

REQUEST_IN_FLIGHT_MESSAGE = "A request is already in progress"
DISPOSED_MESSAGE = "This step is no longer active"
UNEXPECTED_ERROR_MESSAGE = "Unexpected error. Please try again."


class FlowController:
    """
    Contrôleur de flux de base.

    Les sous-classes appellent _begin() avant toute requête, _call() pour
    l'appel passerelle, et _end() dans un finally.
    """

    FLOW_NAME: str = "flow"

    def __init__(
        self,
        gateway: IAuthGateway,
        navigator: INavigator,
        settings: Optional[FlowSettings] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        """
        Args:
            gateway: Passerelle d'authentification
            navigator: Capacité de navigation de l'hôte
            settings: Configuration (routes, cooldown); défauts si absent
            logger: Logger structuré; aucun log si absent
        """
        self._gateway = gateway
        self._navigator = navigator
        self._settings = settings or FlowSettings()
        self._log: Optional[ContextualLogger] = (
            logger.with_context(flow=self.FLOW_NAME) if logger is not None else None
        )
        self._in_flight = False
        self._disposed = False
        self.error: Optional[str] = None
        self.success: Optional[str] = None

    @property
    def settings(self) -> FlowSettings:
        return self._settings

    @property
    def is_busy(self) -> bool:
        """True pendant une requête (bouton de soumission désactivé)."""
        return self._in_flight

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """
        Détruit le contrôleur (l'hôte quitte l'écran).

        Toute réponse arrivant ensuite est ignorée: pas d'écriture de
        session, pas de navigation.
        """
        if self._disposed:
            return
        self._disposed = True
        self._trace(LogLevel.DEBUG, "Controller disposed", pending_request=self._in_flight)

    def clear_messages(self) -> None:
        self.error = None
        self.success = None

    def _build_redirector(self) -> SessionRedirector:
        routes = self._settings.routes
        return SessionRedirector(admin_route=routes.admin, default_route=routes.default)

    def _begin(self, operation: str) -> Optional[Failure]:
        """
        Réserve le créneau de requête.

        Returns:
            Failure REJECTED si disposé ou requête déjà en vol, None sinon
        """
        if self._disposed:
            self._trace(LogLevel.WARN, "Call on disposed controller ignored", operation=operation)
            return Failure(FailureKind.REJECTED, DISPOSED_MESSAGE)
        if self._in_flight:
            self._trace(LogLevel.DEBUG, "Concurrent call ignored", operation=operation)
            return Failure(FailureKind.REJECTED, REQUEST_IN_FLIGHT_MESSAGE)

        self._in_flight = True
        self.clear_messages()
        return None

    def _end(self) -> None:
        self._in_flight = False

    async def _call(
        self,
        operation: str,
        call: Callable[[], Awaitable[OperationOutcome]],
    ) -> OperationOutcome:
        """
        Exécute l'appel passerelle.

        Une exception levée par une passerelle non conforme est convertie
        en Failure SERVER et journalisée.
        """
        self._trace(LogLevel.INFO, "Gateway call started", operation=operation)
        try:
            return await call()
        except Exception as e:
            self._trace(LogLevel.ERROR, "Gateway raised instead of returning a Failure",
                        operation=operation, error=type(e).__name__)
            return Failure(FailureKind.SERVER, UNEXPECTED_ERROR_MESSAGE)

    def _discard_if_disposed(self, operation: str) -> Optional[Failure]:
        """À appeler après chaque await: un résultat tardif ne doit rien modifier."""
        if not self._disposed:
            return None
        self._trace(LogLevel.WARN, "Late outcome discarded after dispose", operation=operation)
        return Failure(FailureKind.REJECTED, DISPOSED_MESSAGE)

    def _fail(self, failure: Failure, operation: str) -> Failure:
        """Expose l'échec à l'affichage et le journalise."""
        self.error = failure.message
        level = LogLevel.INFO if failure.kind is FailureKind.VALIDATION else LogLevel.WARN
        self._trace(level, "Operation failed", operation=operation, kind=failure.kind.value,
                    status=failure.status)
        return failure

    def _validation_failure(self, message: str, operation: str) -> Failure:
        return self._fail(Failure(FailureKind.VALIDATION, message), operation)

    def _navigate(self, route: str, params: Optional[Dict[str, str]] = None) -> Optional[Navigation]:
        if self._disposed:
            return None
        navigation = self._navigator.navigate(route, params)
        self._trace(LogLevel.INFO, "Navigation", route=route)
        return navigation

    def _trace(self, level: LogLevel, message: str, **extra: Any) -> None:
        if self._log is not None:
            self._log.log(level, message, **extra)
