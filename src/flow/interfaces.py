"""
LOT 5: Flow - Interfaces

Types et contrats des contrôleurs de flux d'authentification:
navigation injectée, état de vérification OTP, état du cooldown de renvoi.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional
from urllib.parse import urlencode


class VerificationState(Enum):
    """États du contrôleur de vérification OTP."""

    NOT_VERIFIED = "not_verified"
    VERIFYING = "verifying"  # Requête verify-otp en cours
    VERIFIED = "verified"  # Terminal: session établie


class CooldownPhase(Enum):
    """Phases du minuteur de renvoi."""

    IDLE = "idle"
    COUNTING = "counting"


@dataclass(frozen=True)
class CooldownState:
    """Instantané du minuteur: phase == COUNTING ssi remaining_seconds > 0."""

    phase: CooldownPhase
    remaining_seconds: int


@dataclass(frozen=True)
class OtpChallenge:
    """Email auquel l'étape OTP est liée. Le code n'est jamais conservé ici."""

    email: str

    def __post_init__(self):
        if not self.email or not self.email.strip():
            raise ValueError("OtpChallenge requires a non-empty email")


@dataclass(frozen=True)
class Navigation:
    """Destination de navigation avec son état (paramètres de requête)."""

    route: str
    params: Dict[str, str] = field(default_factory=dict)

    def to_url(self) -> str:
        """Ex: /verify-otp?email=user%40example.com"""
        if not self.params:
            return self.route
        return f"{self.route}?{urlencode(self.params)}"


class INavigator(ABC):
    """
    Capacité de navigation injectée dans les contrôleurs.

    L'hôte (routeur web, CLI, tests) décide comment réaliser la navigation.
    """

    @abstractmethod
    def navigate(self, route: str, params: Optional[Dict[str, str]] = None) -> Navigation:
        """
        Va vers une route avec un état optionnel.

        Args:
            route: Route cible
            params: État transmis (ex: {"email": ...})

        Returns:
            Navigation effectuée
        """
        pass


class IResendCooldownTimer(ABC):
    """Interface du minuteur de cooldown de renvoi OTP."""

    @property
    @abstractmethod
    def phase(self) -> CooldownPhase:
        pass

    @property
    @abstractmethod
    def remaining_seconds(self) -> int:
        pass

    @abstractmethod
    def start(self, duration_seconds: int) -> None:
        """Démarre le décompte. Légal uniquement depuis IDLE."""
        pass

    @abstractmethod
    def tick(self) -> None:
        """Une seconde écoulée."""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Force IDLE (hôte détruit)."""
        pass
