"""
LOT 3: Identity & Session

Identité, session courante, règles de validation et redirection par rôle.
"""

from .interfaces import ISessionStore, Role, Identity, Session, SessionListener
from .session_store import SessionStore
from .session_redirector import SessionRedirector, destination_for
from .validation_rules import (
    OTP_LENGTH,
    PASSWORD_MIN_LENGTH,
    FieldError,
    ValidationResult,
    is_valid_email,
    sanitize_otp_input,
    is_complete_otp,
    validate_password,
    passwords_match,
    validate_required,
    validate_otp_field,
    validate_new_password,
)

__all__ = [
    # Interfaces
    "ISessionStore",
    # Data classes
    "Role",
    "Identity",
    "Session",
    "SessionListener",
    "FieldError",
    "ValidationResult",
    # Implementations
    "SessionStore",
    "SessionRedirector",
    "destination_for",
    # Validation
    "OTP_LENGTH",
    "PASSWORD_MIN_LENGTH",
    "is_valid_email",
    "sanitize_otp_input",
    "is_complete_otp",
    "validate_password",
    "passwords_match",
    "validate_required",
    "validate_otp_field",
    "validate_new_password",
]
