"""
AUTHFLOW Client - Pytest Configuration
Fixtures partagées pour tous les tests.
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from src.auth import Identity, Role, SessionStore
from src.core import FlowSettings
from src.flow import InMemoryNavigator
from src.gateway import AuthPayload, IAuthGateway, MessagePayload, Success
from src.logging import LogConfig, LogLevel, StructuredLogger


@pytest.fixture
def fixtures_path() -> Path:
    """Chemin vers le dossier fixtures."""
    return Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def configs_path(fixtures_path: Path) -> str:
    return str(fixtures_path / "configs")


@pytest.fixture
def settings() -> FlowSettings:
    """Configuration par défaut (cooldown 60s, routes standard)."""
    return FlowSettings()


@pytest.fixture
def navigator() -> InMemoryNavigator:
    return InMemoryNavigator()


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def logger() -> StructuredLogger:
    """Logger capturant toutes les entrées (DEBUG inclus)."""
    return StructuredLogger("authflow-test", config=LogConfig(min_level=LogLevel.DEBUG))


@pytest.fixture
def admin_identity() -> Identity:
    return Identity(
        id="1",
        username="admin",
        email="admin@example.com",
        first_name="Admin",
        last_name="User",
        role=Role.ADMIN,
    )


@pytest.fixture
def user_identity() -> Identity:
    return Identity(
        id="123",
        username="testuser",
        email="testuser@example.com",
        first_name="Test",
        last_name="User",
        role=Role.USER,
    )


@pytest.fixture
def gateway(user_identity: Identity) -> AsyncMock:
    """Passerelle simulée: succès par défaut sur toutes les opérations."""
    mock = AsyncMock(spec=IAuthGateway)
    mock.login.return_value = Success(AuthPayload(token="mock-jwt-token", identity=user_identity))
    mock.verify_otp.return_value = Success(AuthPayload(token="mock-jwt-token", identity=user_identity))
    mock.request_password_reset.return_value = Success(MessagePayload(message="Reset code sent"))
    mock.resend_otp.return_value = Success(
        MessagePayload(message="A new verification code has been sent.", email=user_identity.email)
    )
    mock.register.return_value = Success(
        MessagePayload(message="Registration successful", email="newuser@example.com")
    )
    mock.reset_password.return_value = Success(MessagePayload(message="Password reset successful"))
    return mock
