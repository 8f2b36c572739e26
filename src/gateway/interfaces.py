"""
LOT 4: Gateway - Interfaces

Contrat de la passerelle d'authentification et types de résultat.

Chaque opération réseau retourne un résultat typé Success ou Failure:
aucune exception ne traverse la frontière de la passerelle.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.auth.interfaces import Identity, Role

T = TypeVar("T")


class FailureKind(Enum):
    """Taxonomie des échecs remontés aux contrôleurs."""

    VALIDATION = "validation"  # Côté client, avant tout appel réseau
    NOT_FOUND = "not_found"  # Compte/ressource absent (404)
    DOMAIN = "domain"  # Règle métier, message serveur transmis tel quel
    SERVER = "server"  # 5xx ou réponse inexploitable
    NETWORK = "network"  # Requête jamais aboutie (timeout, coupure)
    INVALID = "invalid"  # Code OTP / reset erroné
    EXPIRED = "expired"  # Code OTP / reset expiré
    REJECTED = "rejected"  # Appel refusé localement (déjà en cours, cooldown, disposé)


@dataclass(frozen=True)
class Success(Generic[T]):
    """Résultat positif portant la charge utile de l'opération."""

    payload: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """
    Échec typé, prêt à afficher.

    Attributes:
        kind: Catégorie d'échec
        message: Message destiné à l'utilisateur
        status: Code HTTP si une réponse a été reçue
    """

    kind: FailureKind
    message: str
    status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


OperationOutcome = Union[Success[T], Failure]


@dataclass(frozen=True)
class AuthPayload:
    """Réponse d'authentification (login, verify-otp)."""

    token: str
    identity: Identity


@dataclass(frozen=True)
class MessagePayload:
    """Réponse à message (reset, resend, register)."""

    message: str
    email: Optional[str] = None


@dataclass(frozen=True)
class RegistrationRequest:
    """Données de création de compte."""

    username: str
    email: str
    first_name: str
    last_name: str
    password: str


# ══════════════════════════════════════════════════════════════════════════════
# MODÈLES FIL (JSON)
# ══════════════════════════════════════════════════════════════════════════════


class UserModel(BaseModel):
    """Objet `user` tel que renvoyé par l'API (clés camelCase)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    username: str
    email: str
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    role: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        if value is None or value == "":
            raise ValueError("id is required")
        return str(value)

    def to_identity(self) -> Identity:
        return Identity(
            id=self.id,
            username=self.username,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            role=Role.parse(self.role),
        )


class AuthResponseModel(BaseModel):
    """Corps `{token, user}`."""

    model_config = ConfigDict(extra="ignore")

    token: str = Field(min_length=1)
    user: UserModel

    def to_payload(self) -> AuthPayload:
        return AuthPayload(token=self.token, identity=self.user.to_identity())


class MessageResponseModel(BaseModel):
    """Corps `{message, email?}`."""

    model_config = ConfigDict(extra="ignore")

    message: str = ""
    email: Optional[str] = None

    def to_payload(self) -> MessagePayload:
        return MessagePayload(message=self.message, email=self.email)


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACE
# ══════════════════════════════════════════════════════════════════════════════


class IAuthGateway(ABC):
    """
    Interface passerelle d'authentification.

    Contrat: ne lève jamais d'exception pour un échec réseau ou serveur;
    retourne toujours Success ou Failure.
    """

    @abstractmethod
    async def login(self, username: str, password: str) -> OperationOutcome[AuthPayload]:
        """POST /auth/login"""
        pass

    @abstractmethod
    async def request_password_reset(self, email: str) -> OperationOutcome[MessagePayload]:
        """POST /auth/forgot-password"""
        pass

    @abstractmethod
    async def verify_otp(self, email: str, otp_code: str) -> OperationOutcome[AuthPayload]:
        """POST /auth/verify-otp"""
        pass

    @abstractmethod
    async def resend_otp(self, email: str) -> OperationOutcome[MessagePayload]:
        """POST /auth/resend-otp"""
        pass

    @abstractmethod
    async def register(self, request: RegistrationRequest) -> OperationOutcome[MessagePayload]:
        """POST /auth/register"""
        pass

    @abstractmethod
    async def reset_password(
        self, email: str, otp_code: str, new_password: str
    ) -> OperationOutcome[MessagePayload]:
        """POST /auth/reset-password"""
        pass
