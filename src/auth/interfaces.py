"""
LOT 3: Interfaces Auth

Définit l'identité, la session et les contrats du stockage de session.
Toute implémentation DOIT respecter ces interfaces.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Union


class Role(Enum):
    """Rôles connus du client. La casse n'est pas significative sur le fil."""

    ADMIN = "ADMIN"
    USER = "USER"

    @classmethod
    def parse(cls, value: Union["Role", str, None]) -> "Role":
        """
        Normalise une valeur de rôle reçue du serveur.

        Toute valeur absente ou inconnue devient USER.

        Args:
            value: Rôle brut ("admin", "ADMIN", Role.USER, None...)

        Returns:
            Role normalisé
        """
        if isinstance(value, Role):
            return value
        if not value:
            return cls.USER
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return cls.USER


@dataclass(frozen=True)
class Identity:
    """
    Identité authentifiée, immuable une fois reçue.

    Attributes:
        id: Identifiant serveur de l'utilisateur
        username: Nom de connexion
        email: Adresse email
        first_name: Prénom
        last_name: Nom
        role: Rôle normalisé
    """

    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    role: Role = Role.USER

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Session:
    """
    Session authentifiée.

    Attributes:
        token: Token opaque émis par le serveur
        identity: Identité associée
        issued_at: Horodatage UTC de création côté client
    """

    token: str
    identity: Identity
    issued_at: datetime

    def __post_init__(self):
        if not self.token:
            raise ValueError("token must not be empty")
        if self.issued_at.tzinfo is None:
            raise ValueError("issued_at must be timezone-aware")


SessionListener = Callable[[Optional[Session]], None]


class ISessionStore(ABC):
    """
    Interface du détenteur de la session courante.

    Vide au démarrage, remplacée en bloc à chaque authentification réussie,
    vidée au logout.
    """

    @abstractmethod
    def current(self) -> Optional[Session]:
        """Retourne la session courante ou None."""
        pass

    @abstractmethod
    def replace(self, session: Session) -> None:
        """Remplace atomiquement la session courante."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Supprime la session courante (logout)."""
        pass

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        """True si une session est présente."""
        pass
