"""
LOT 5: Flow - Composition

Assemble configuration, logger, passerelle, session et navigation, et
fabrique les contrôleurs de chaque écran.
"""

from typing import Callable, Optional

from src.auth.session_redirector import SessionRedirector
from src.auth.session_store import SessionStore
from src.core.config_loader import ConfigLoader
from src.core.interfaces import FlowSettings
from src.gateway.http_gateway import HttpAuthGateway
from src.gateway.interfaces import IAuthGateway
from src.logging import StructuredLogger, create_logger

from .interfaces import INavigator
from .login_controller import CredentialLoginController
from .navigation import InMemoryNavigator
from .otp_verification_controller import OtpVerificationController, enter_otp_step
from .password_reset_completer import PasswordResetCompleter, enter_reset_step
from .password_reset_requester import PasswordResetRequester
from .registration_controller import RegistrationController


class AuthFlow:
    """
    Point d'entrée du client d'authentification.

    Un seul SessionStore est partagé par tous les contrôleurs créés ici; il
    est passé par référence, jamais lu depuis une variable globale.

    Example:
        flow = await AuthFlow.from_config("default")
        login = flow.login()
        await login.submit_login("admin", "admin123")
        flow.session_store.is_admin()
    """

    def __init__(
        self,
        settings: Optional[FlowSettings] = None,
        gateway: Optional[IAuthGateway] = None,
        navigator: Optional[INavigator] = None,
        session_store: Optional[SessionStore] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.settings = settings or FlowSettings()
        self.logger = logger or create_logger(min_level=self.settings.log_level)
        self.gateway = gateway or HttpAuthGateway(self.settings, logger=self.logger)
        self.navigator = navigator or InMemoryNavigator()
        self.session_store = session_store or SessionStore()
        self.redirector = SessionRedirector(
            admin_route=self.settings.routes.admin,
            default_route=self.settings.routes.default,
        )

    @classmethod
    async def from_config(
        cls,
        name: str = "default",
        configs_path: str = "fixtures/configs",
        output_handler: Optional[Callable[[str], None]] = None,
        **kwargs,
    ) -> "AuthFlow":
        """
        Construit le flux depuis un fichier YAML.

        Raises:
            ConfigIntegrityError: Configuration absente ou invalide
        """
        settings = await ConfigLoader(configs_path).load(name)
        logger = kwargs.pop("logger", None) or create_logger(
            min_level=settings.log_level, output_handler=output_handler
        )
        return cls(settings=settings, logger=logger, **kwargs)

    def login(self) -> CredentialLoginController:
        return CredentialLoginController(
            self.gateway,
            self.session_store,
            self.navigator,
            redirector=self.redirector,
            settings=self.settings,
            logger=self.logger,
        )

    def forgot_password(self, next_route: Optional[str] = None) -> PasswordResetRequester:
        return PasswordResetRequester(
            self.gateway, self.navigator, next_route=next_route, settings=self.settings, logger=self.logger
        )

    def verify_otp(self, email: Optional[str], auto_tick: bool = True) -> Optional[OtpVerificationController]:
        """None (et redirection vers l'inscription) si email absent."""
        return enter_otp_step(
            email,
            self.gateway,
            self.session_store,
            self.navigator,
            settings=self.settings,
            logger=self.logger,
            redirector=self.redirector,
            auto_tick=auto_tick,
        )

    def reset_password(self, email: Optional[str]) -> Optional[PasswordResetCompleter]:
        """None (et retour à "mot de passe oublié") si email absent."""
        return enter_reset_step(email, self.gateway, self.navigator, settings=self.settings, logger=self.logger)

    def register(self) -> RegistrationController:
        return RegistrationController(self.gateway, self.navigator, settings=self.settings, logger=self.logger)

    def logout(self) -> None:
        self.login().logout()
