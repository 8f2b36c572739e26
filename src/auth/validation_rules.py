"""
LOT 3: Validation Rules

Prédicats purs sur le format des champs de formulaire (email, OTP, mot de
passe). Aucun accès réseau ni session: chaque fonction termine de façon
synchrone.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

OTP_LENGTH: int = 6
PASSWORD_MIN_LENGTH: int = 6

_OTP_PATTERN = re.compile(r"[0-9]{6}")


@dataclass(frozen=True)
class FieldError:
    """Erreur de validation d'un champ."""

    field: str
    code: str  # required, email, minlength, pattern, mismatch
    message: str


@dataclass
class ValidationResult:
    """Résultat de validation d'un formulaire: TOUTES les erreurs (pas fail-fast)."""

    errors: List[FieldError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, code: str, message: str) -> None:
        self.errors.append(FieldError(field_name, code, message))

    def for_field(self, field_name: str) -> List[FieldError]:
        return [e for e in self.errors if e.field == field_name]

    def first_message(self) -> Optional[str]:
        return self.errors[0].message if self.errors else None


def is_valid_email(value: Optional[str]) -> bool:
    """
    Vérification conservatrice de la forme d'une adresse email.

    Règles: un seul '@', partie locale et domaine non vides, le domaine
    contient un point, aucun point consécutif, aucun espace, aucun label de
    domaine vide.
    """
    if not value or any(c.isspace() for c in value):
        return False
    if value.count("@") != 1:
        return False

    local, domain = value.split("@")
    if not local or not domain:
        return False
    if "." not in domain or ".." in value:
        return False
    if local.startswith(".") or local.endswith("."):
        return False

    return all(domain.split("."))


def sanitize_otp_input(raw: Optional[str]) -> str:
    """
    Supprime tout caractère non numérique puis tronque aux 6 premiers chiffres.

    Appliqué à chaque saisie, pas seulement à la soumission.
    """
    if not raw:
        return ""
    digits = "".join(c for c in raw if "0" <= c <= "9")
    return digits[:OTP_LENGTH]


def is_complete_otp(value: Optional[str]) -> bool:
    """True ssi exactement 6 caractères, tous des chiffres ASCII."""
    return bool(value) and _OTP_PATTERN.fullmatch(value) is not None


def validate_password(value: Optional[str]) -> Optional[FieldError]:
    """Mot de passe requis, 6 caractères minimum."""
    if not value:
        return FieldError("password", "required", "Password is required")
    if len(value) < PASSWORD_MIN_LENGTH:
        return FieldError(
            "password",
            "minlength",
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
        )
    return None


def passwords_match(password: Optional[str], confirm_password: Optional[str]) -> bool:
    return (password or "") == (confirm_password or "")


def validate_required(fields: Dict[str, Optional[str]]) -> ValidationResult:
    """Vérifie que chaque champ est renseigné (espaces seuls = vide)."""
    result = ValidationResult()
    for name, value in fields.items():
        if value is None or not str(value).strip():
            result.add(name, "required", "required")
    return result


def validate_otp_field(raw: Optional[str], field_name: str = "otpCode") -> ValidationResult:
    result = ValidationResult()
    code = sanitize_otp_input(raw)
    if not code:
        result.add(field_name, "required", "OTP code is required")
    elif not is_complete_otp(code):
        result.add(field_name, "pattern", f"OTP code must be {OTP_LENGTH} digits")
    return result


def validate_new_password(password: Optional[str], confirm_password: Optional[str]) -> ValidationResult:
    """Règles du couple mot de passe / confirmation."""
    result = ValidationResult()
    error = validate_password(password)
    if error:
        result.errors.append(error)
    if not confirm_password:
        result.add("confirmPassword", "required", "Please confirm your password")
    elif not passwords_match(password, confirm_password):
        result.add("confirmPassword", "mismatch", "Passwords do not match")
    return result
