"""
AUTHFLOW Client - LOT 1 Core Interfaces
Contrats et modèles de configuration du client d'authentification.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════════
# TYPES
# ══════════════════════════════════════════════════════════════════════════════


class RouteSettings(BaseModel):
    """Routes de navigation utilisées par les contrôleurs de flux."""

    login: str = "/login"
    admin: str = "/admin"
    default: str = "/events"
    registration: str = "/register"
    verify_otp: str = "/verify-otp"
    reset_password: str = "/reset-password"
    forgot_password: str = "/forgot-password"

    @field_validator("*")
    @classmethod
    def _must_be_absolute(cls, value: str) -> str:
        if not value or not value.startswith("/"):
            raise ValueError(f"route doit commencer par '/': {value!r}")
        return value


class FlowSettings(BaseModel):
    """
    Configuration du client d'authentification.

    Attributes:
        api_base_url: URL de base de l'API d'authentification
        request_timeout_seconds: Timeout total d'une requête HTTP
        resend_cooldown_seconds: Durée du cooldown après un renvoi d'OTP réussi
        otp_length: Longueur du code OTP (informatif, le format reste 6 chiffres)
        otp_expiry_seconds: Fenêtre d'expiration côté serveur (informatif)
        log_level: Niveau minimum des logs structurés
        routes: Routes de navigation
    """

    api_base_url: str = "http://localhost:8080/api"
    request_timeout_seconds: float = Field(default=30.0, gt=0, le=120)
    resend_cooldown_seconds: int = Field(default=60, gt=0)
    otp_length: int = Field(default=6, ge=6, le=6)
    otp_expiry_seconds: int = Field(default=600, gt=0)
    log_level: str = "INFO"
    routes: RouteSettings = Field(default_factory=RouteSettings)

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"api_base_url doit être une URL http(s): {value!r}")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARN", "ERROR", "CRITICAL"):
            raise ValueError(f"log_level inconnu: {value!r}")
        return level


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class IConfigLoader(ABC):
    """Charge la configuration du client depuis un fichier."""

    @abstractmethod
    async def load(self, name: str) -> FlowSettings:
        """
        Charge et valide une configuration nommée.

        Raises:
            ConfigIntegrityError: Fichier absent, YAML invalide ou valeurs hors limites
        """
        pass

    @abstractmethod
    def load_raw(self, name: str) -> dict[str, Any]:
        """Charge le contenu YAML brut (sans validation pydantic)."""
        pass
