"""
LOT 5: Flow

Contrôleurs du parcours d'identification et de vérification:
- Connexion par identifiants et redirection par rôle
- Mot de passe oublié → code de réinitialisation
- Vérification OTP avec renvoi soumis à cooldown
- Inscription (→ vérification OTP)
- Une seule requête en vol par contrôleur, réponses tardives ignorées
  après dispose()
"""

from .interfaces import (
    # Enums
    VerificationState,
    CooldownPhase,
    # Data classes
    CooldownState,
    OtpChallenge,
    Navigation,
    # Interfaces
    INavigator,
    IResendCooldownTimer,
)
from .navigation import InMemoryNavigator
from .resend_cooldown_timer import (
    DEFAULT_RESEND_COOLDOWN_SECONDS,
    ResendCooldownTimer,
    CooldownTicker,
    CooldownError,
)
from .base import FlowController
from .login_controller import CredentialLoginController
from .password_reset_requester import PasswordResetRequester
from .otp_verification_controller import OtpVerificationController, enter_otp_step
from .password_reset_completer import PasswordResetCompleter, enter_reset_step
from .registration_controller import RegistrationController
from .auth_flow import AuthFlow

__all__ = [
    # Enums
    "VerificationState",
    "CooldownPhase",
    # Data classes
    "CooldownState",
    "OtpChallenge",
    "Navigation",
    # Interfaces
    "INavigator",
    "IResendCooldownTimer",
    # Implementations
    "InMemoryNavigator",
    "ResendCooldownTimer",
    "CooldownTicker",
    "FlowController",
    "CredentialLoginController",
    "PasswordResetRequester",
    "OtpVerificationController",
    "PasswordResetCompleter",
    "RegistrationController",
    "AuthFlow",
    # Entry points
    "enter_otp_step",
    "enter_reset_step",
    # Constants
    "DEFAULT_RESEND_COOLDOWN_SECONDS",
    # Exceptions
    "CooldownError",
]
