"""
Test intégration LOT 1 + LOT 2 + LOT 3 + LOT 4 + LOT 5

Valide la chaîne complète, de la configuration YAML jusqu'aux requêtes
HTTP (session aiohttp simulée):
- Inscription → vérification OTP → session utilisateur
- Connexion admin → logout
- Mot de passe oublié → réinitialisation → connexion
"""

import json
from collections import defaultdict, deque
from typing import Any, Deque, Dict, List, Tuple

import pytest
import pytest_asyncio

from src.auth import Role
from src.core import ConfigIntegrityError, FlowSettings
from src.flow import AuthFlow, CooldownPhase, VerificationState
from src.gateway import FailureKind, HttpAuthGateway
from src.logging import create_logger


class ScriptedResponse:
    def __init__(self, status: int, body: Any) -> None:
        self.status = status
        self._body = body

    async def json(self, content_type: Any = None) -> Any:
        return self._body

    async def __aenter__(self) -> "ScriptedResponse":
        return self

    async def __aexit__(self, *exc_info: Any) -> bool:
        return False


class ScriptedSession:
    """Réponses préparées par chemin d'API, dans l'ordre d'appel."""

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url
        self._script: Dict[str, Deque[Tuple[int, Any]]] = defaultdict(deque)
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def expect(self, path: str, status: int, body: Any) -> None:
        self._script[path].append((status, body))

    def post(self, url: str, json: Any = None, timeout: Any = None) -> ScriptedResponse:
        path = url[len(self._base_url):]
        self.calls.append((path, json))
        status, body = self._script[path].popleft()
        return ScriptedResponse(status, body)

    def paths(self) -> List[str]:
        return [path for path, _ in self.calls]


def user_body(username: str, role: str) -> Dict[str, Any]:
    return {
        "token": f"jwt-{username}",
        "user": {
            "id": 1,
            "username": username,
            "email": f"{username}@example.com",
            "firstName": username.title(),
            "lastName": "Example",
            "role": role,
        },
    }


@pytest.fixture
def json_lines():
    return []


@pytest.fixture
def http():
    return ScriptedSession(FlowSettings().api_base_url)


@pytest_asyncio.fixture
async def flow(configs_path, http, json_lines):
    logger = create_logger(min_level="DEBUG", output_handler=json_lines.append)
    gateway = HttpAuthGateway(FlowSettings(), session=http, logger=logger)
    return await AuthFlow.from_config("default", configs_path=configs_path, logger=logger, gateway=gateway)


@pytest.mark.asyncio
async def test_registration_then_otp_verification(flow, http):
    """Inscription, renvoi avec cooldown, code expiré puis valide."""
    http.expect("/auth/register", 201, {"message": "Registration successful", "email": "newuser@example.com"})
    http.expect("/auth/resend-otp", 200, {"message": "A new verification code has been sent."})
    http.expect("/auth/verify-otp", 400, {"message": "OTP code has expired"})
    http.expect("/auth/verify-otp", 200, user_body("newuser", "USER"))

    registration = flow.register()
    await registration.submit_registration("newuser", "newuser@example.com", "New", "User", "secret1", "secret1")

    landing = flow.navigator.current
    assert landing.to_url() == "/verify-otp?email=newuser%40example.com"

    otp = flow.verify_otp(landing.params["email"], auto_tick=False)
    assert (await otp.resend()).ok
    assert otp.cooldown.phase is CooldownPhase.COUNTING
    assert (await otp.resend()).kind == FailureKind.REJECTED

    expired = await otp.submit_code("11 11 11")
    assert expired.kind == FailureKind.EXPIRED
    assert otp.state is VerificationState.NOT_VERIFIED

    verified = await otp.submit_code("123456")
    assert verified.ok
    assert flow.session_store.identity.username == "newuser"
    assert flow.navigator.current.route == "/events"
    assert otp.cooldown.phase is CooldownPhase.IDLE

    assert http.paths() == [
        "/auth/register",
        "/auth/resend-otp",
        "/auth/verify-otp",
        "/auth/verify-otp",
    ]
    assert http.calls[-1][1] == {"email": "newuser@example.com", "otpCode": "123456"}


@pytest.mark.asyncio
async def test_admin_login_and_logout(flow, http, json_lines):
    """Connexion admin → /admin, logout → /login, aucun secret dans les logs."""
    http.expect("/auth/login", 200, user_body("admin", "admin"))

    outcome = await flow.login().submit_login("admin", "admin123")

    assert outcome.ok
    assert flow.session_store.identity.role is Role.ADMIN
    assert flow.navigator.current.route == "/admin"

    flow.logout()

    assert not flow.session_store.is_authenticated
    assert flow.navigator.current.route == "/login"

    output = "\n".join(json_lines)
    assert "admin123" not in output
    assert "jwt-admin" not in output
    assert all(json.loads(line)["flow"] for line in json_lines)


@pytest.mark.asyncio
async def test_forgot_password_then_reset(flow, http):
    """Email inconnu, puis code envoyé, puis réinitialisation et connexion."""
    http.expect("/auth/forgot-password", 404, {"message": "Email not found"})
    http.expect("/auth/forgot-password", 200, {"message": "Reset code sent"})
    http.expect("/auth/reset-password", 200, {"message": "Password reset successful"})
    http.expect("/auth/login", 200, user_body("testuser", "USER"))

    requester = flow.forgot_password()
    missing = await requester.request_reset("notfound@example.com")
    assert missing.kind == FailureKind.NOT_FOUND
    assert flow.navigator.current is None

    await requester.request_reset("testuser@example.com")
    step = flow.navigator.current
    assert step.route == "/reset-password"

    completer = flow.reset_password(step.params["email"])
    assert (await completer.submit_reset("654321", "newpass1", "newpass1")).ok
    assert flow.navigator.current.route == "/login"
    assert http.calls[2][1] == {
        "email": "testuser@example.com",
        "otpCode": "654321",
        "newPassword": "newpass1",
    }

    assert (await flow.login().submit_login("testuser", "newpass1")).ok
    assert flow.navigator.current.route == "/events"


@pytest.mark.asyncio
async def test_otp_step_without_email(flow, http):
    """Sans email: redirection vers l'inscription, aucune requête."""
    assert flow.verify_otp(None) is None
    assert flow.navigator.current.route == "/register"
    assert http.calls == []


@pytest.mark.asyncio
async def test_staging_config(configs_path):
    """Routes et cooldown issus du YAML."""
    flow = await AuthFlow.from_config("staging", configs_path=configs_path)

    assert flow.redirector.destination_for("USER") == "/dashboard"
    assert flow.gateway.base_url == "https://staging.example.com/api"
    assert flow.settings.resend_cooldown_seconds == 30


@pytest.mark.asyncio
async def test_invalid_config_rejected(configs_path):
    with pytest.raises(ConfigIntegrityError):
        await AuthFlow.from_config("invalid_cooldown", configs_path=configs_path)
