"""
LOT 5: Flow - OTP Verification Controller

Vérification de l'email par code à usage unique, avec renvoi soumis à un
cooldown.

États:
    NOT_VERIFIED --submit--> VERIFYING --succès--> VERIFIED (terminal)
                                       --échec---> NOT_VERIFIED
Axe orthogonal: minuteur de renvoi IDLE / COUNTING.
"""

from typing import Optional

from src.auth.interfaces import Session
from src.auth.session_redirector import SessionRedirector
from src.auth.session_store import SessionStore
from src.auth.validation_rules import OTP_LENGTH, is_complete_otp, sanitize_otp_input
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
from .interfaces import CooldownState, INavigator, OtpChallenge, VerificationState
from .resend_cooldown_timer import CooldownTicker, ResendCooldownTimer

INCOMPLETE_CODE_MESSAGE = f"Please enter the {OTP_LENGTH}-digit code"
VERIFIED_MESSAGE = "Email verified successfully! Redirecting..."
RESEND_SUCCESS_MESSAGE = "A new OTP code has been sent to your email."
COOLDOWN_ACTIVE_MESSAGE = "Please wait before requesting a new code"
ALREADY_VERIFIED_MESSAGE = "Email is already verified"


class OtpVerificationController(FlowController):
    """
    Contrôleur de l'étape OTP, lié à un seul email pour toute sa durée de vie.

    Garanties:
        - Le code saisi est nettoyé à chaque frappe (on_input) et à la soumission
        - Un code incomplet échoue localement (VALIDATION), sans appel réseau
        - Un second submit pendant VERIFYING est ignoré
        - Vérification et renvoi partagent un seul créneau de requête
        - resend() est sans effet tant que le minuteur décompte
        - Un renvoi échoué ne démarre pas le cooldown
        - dispose() annule le minuteur et ignore les réponses tardives

    Example:
        controller = enter_otp_step(email, gateway, store, navigator)
        if controller:
            controller.on_input("12 34-56")
            await controller.submit_code()
    """

    FLOW_NAME = "otp_verification"

    def __init__(
        self,
        email: str,
        gateway: IAuthGateway,
        session_store: SessionStore,
        navigator: INavigator,
        redirector: Optional[SessionRedirector] = None,
        timer: Optional[ResendCooldownTimer] = None,
        settings: Optional[FlowSettings] = None,
        logger: Optional[StructuredLogger] = None,
        auto_tick: bool = False,
        tick_interval_seconds: float = 1.0,
    ) -> None:
        """
        Args:
            email: Email lié à l'étape (obligatoire, non vide)
            gateway: Passerelle d'authentification
            session_store: Stockage de la session courante
            navigator: Navigation de l'hôte
            redirector: Choix de la route après vérification
            timer: Minuteur de renvoi (nouveau minuteur si absent)
            settings: Configuration (durée du cooldown, routes)
            logger: Logger structuré
            auto_tick: Si True, une tâche asyncio décrémente le minuteur
                chaque seconde après un renvoi réussi; sinon l'hôte appelle
                timer.tick() lui-même
            tick_interval_seconds: Intervalle de la tâche auto_tick

        Raises:
            ValueError: Si email vide
        """
        self._challenge = OtpChallenge(email)
        super().__init__(gateway, navigator, settings=settings, logger=logger)
        self._store = session_store
        self._redirector = redirector or self._build_redirector()
        self._timer = timer or ResendCooldownTimer()
        self._ticker: Optional[CooldownTicker] = (
            CooldownTicker(self._timer, interval_seconds=tick_interval_seconds) if auto_tick else None
        )
        self._state = VerificationState.NOT_VERIFIED
        self.code = ""

    @property
    def email(self) -> str:
        return self._challenge.email

    @property
    def challenge(self) -> OtpChallenge:
        return self._challenge

    @property
    def state(self) -> VerificationState:
        return self._state

    @property
    def timer(self) -> ResendCooldownTimer:
        return self._timer

    @property
    def cooldown(self) -> CooldownState:
        return self._timer.state()

    @property
    def can_resend(self) -> bool:
        """État du bouton "renvoyer"."""
        return (
            not self._disposed
            and not self._in_flight
            and not self._timer.is_counting
            and self._state is not VerificationState.VERIFIED
        )

    @property
    def can_submit(self) -> bool:
        """État du bouton "vérifier"."""
        return (
            not self._disposed
            and self._state is VerificationState.NOT_VERIFIED
            and is_complete_otp(self.code)
        )

    def on_input(self, raw: Optional[str]) -> str:
        """
        Saisie d'un caractère / collage: la valeur du champ reste numérique
        et limitée à 6 chiffres.

        Returns:
            Valeur nettoyée du champ
        """
        self.code = sanitize_otp_input(raw)
        return self.code

    async def submit_code(self, raw_input: Optional[str] = None) -> OperationOutcome[Session]:
        """
        Vérifie le code saisi.

        Args:
            raw_input: Saisie brute; si None, la valeur courante du champ

        Returns:
            Success(Session) puis redirection par rôle, ou Failure
        """
        operation = "verify_otp"

        if self._state is VerificationState.VERIFYING:
            self._trace(LogLevel.DEBUG, "Concurrent verification ignored")
            return Failure(FailureKind.REJECTED, "Verification already in progress")
        if self._state is VerificationState.VERIFIED:
            return Failure(FailureKind.REJECTED, ALREADY_VERIFIED_MESSAGE)

        code = self.on_input(self.code if raw_input is None else raw_input)
        if not is_complete_otp(code):
            # Même règle que le formulaire: aucune requête, état inchangé
            if self._disposed:
                return Failure(FailureKind.REJECTED, "This step is no longer active")
            self.clear_messages()
            return self._validation_failure(INCOMPLETE_CODE_MESSAGE, operation)

        rejected = self._begin(operation)
        if rejected:
            return rejected

        self._state = VerificationState.VERIFYING
        # Le code n'est pas conservé après soumission
        self.code = ""
        try:
            outcome = await self._call(operation, lambda: self._gateway.verify_otp(self.email, code))

            late = self._discard_if_disposed(operation)
            if late:
                self._state = VerificationState.NOT_VERIFIED
                return late

            if isinstance(outcome, Failure):
                self._state = VerificationState.NOT_VERIFIED
                return self._fail(outcome, operation)

            self._state = VerificationState.VERIFIED
            self._stop_cooldown()
            session = self._store.open(outcome.payload.token, outcome.payload.identity)
            self.success = VERIFIED_MESSAGE
            self._trace(LogLevel.INFO, "Email verified", role=outcome.payload.identity.role.value)
            self._navigate(self._redirector.destination_for(outcome.payload.identity.role))
            return Success(session)
        finally:
            if self._state is VerificationState.VERIFYING:
                self._state = VerificationState.NOT_VERIFIED
            self._end()

    async def resend(self) -> OperationOutcome[MessagePayload]:
        """
        Demande un nouveau code.

        Sans effet (REJECTED, aucun appel réseau) si le minuteur décompte,
        si une requête (vérification ou renvoi) est déjà en vol, si l'étape
        est terminée ou disposée.
        """
        operation = "resend_otp"

        if self._disposed:
            return Failure(FailureKind.REJECTED, "This step is no longer active")
        if self._timer.is_counting:
            self._trace(LogLevel.DEBUG, "Resend ignored during cooldown",
                        remaining_seconds=self._timer.remaining_seconds)
            return Failure(FailureKind.REJECTED, COOLDOWN_ACTIVE_MESSAGE)
        if self._state is VerificationState.VERIFIED:
            return Failure(FailureKind.REJECTED, ALREADY_VERIFIED_MESSAGE)

        rejected = self._begin(operation)
        if rejected:
            return rejected

        try:
            outcome = await self._call(operation, lambda: self._gateway.resend_otp(self.email))

            late = self._discard_if_disposed(operation)
            if late:
                return late

            if isinstance(outcome, Failure):
                return self._fail(outcome, operation)

            if self._state is VerificationState.VERIFIED:
                return Failure(FailureKind.REJECTED, ALREADY_VERIFIED_MESSAGE)

            self._start_cooldown()
            self.success = outcome.payload.message or RESEND_SUCCESS_MESSAGE
            self._trace(LogLevel.INFO, "OTP resent", cooldown_seconds=self._settings.resend_cooldown_seconds)
            return Success(outcome.payload)
        finally:
            self._end()

    def dispose(self) -> None:
        """Annule le minuteur et ignore toute réponse à venir."""
        self._stop_cooldown()
        super().dispose()

    def _start_cooldown(self) -> None:
        self._timer.start(self._settings.resend_cooldown_seconds)
        if self._ticker is not None:
            self._ticker.start()

    def _stop_cooldown(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()
        self._timer.cancel()


def enter_otp_step(
    email: Optional[str],
    gateway: IAuthGateway,
    session_store: SessionStore,
    navigator: INavigator,
    settings: Optional[FlowSettings] = None,
    logger: Optional[StructuredLogger] = None,
    **kwargs,
) -> Optional[OtpVerificationController]:
    """
    Point d'entrée de l'étape OTP.

    Sans email (paramètre de requête absent ou vide), l'étape n'est pas
    ouverte: redirection vers l'inscription, quel que soit l'état réseau.

    Returns:
        Contrôleur lié à l'email, ou None après redirection
    """
    settings = settings or FlowSettings()

    if not email or not email.strip():
        navigator.navigate(settings.routes.registration)
        if logger is not None:
            logger.warn("OTP step entered without email, redirected to registration",
                        flow=OtpVerificationController.FLOW_NAME)
        return None

    return OtpVerificationController(
        email.strip(),
        gateway,
        session_store,
        navigator,
        settings=settings,
        logger=logger,
        **kwargs,
    )
