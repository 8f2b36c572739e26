"""
Tests unitaires pour LOT 5: Flow - Registration Controller
"""

import pytest

from src.flow import RegistrationController
from src.gateway import Failure, FailureKind, MessagePayload, RegistrationRequest, Success

VALID_FORM = {
    "username": "newuser",
    "email": "newuser@example.com",
    "first_name": "New",
    "last_name": "User",
    "password": "secret1",
    "confirm_password": "secret1",
}


@pytest.fixture
def controller(gateway, navigator, logger):
    return RegistrationController(gateway, navigator, logger=logger)


class TestValidation:
    """Erreurs de formulaire (toutes)."""

    def test_valid_form(self, controller):
        assert controller.validate(**VALID_FORM).valid

    def test_all_errors_reported(self, controller):
        result = controller.validate("", "not-an-email", "", "User", "abc", "abd")

        codes = [(e.field, e.code) for e in result.errors]
        assert ("username", "required") in codes
        assert ("firstName", "required") in codes
        assert ("email", "email") in codes
        assert ("password", "minlength") in codes
        assert ("confirmPassword", "mismatch") in codes

    def test_missing_email_only_required(self, controller):
        result = controller.validate("u", "", "F", "L", "secret1", "secret1")

        assert [(e.field, e.code) for e in result.errors] == [("email", "required")]


class TestSubmitRegistration:
    """Création de compte."""

    @pytest.mark.asyncio
    async def test_success_goes_to_otp_step(self, controller, gateway, navigator):
        outcome = await controller.submit_registration(**VALID_FORM)

        assert outcome.ok
        gateway.register.assert_awaited_once_with(
            RegistrationRequest("newuser", "newuser@example.com", "New", "User", "secret1")
        )
        assert navigator.current.route == "/verify-otp"
        assert navigator.current.params == {"email": "newuser@example.com"}
        assert controller.success == "Registration successful"

    @pytest.mark.asyncio
    async def test_fields_trimmed(self, controller, gateway):
        form = dict(VALID_FORM, username="  newuser ", first_name=" New ")

        await controller.submit_registration(**form)

        request = gateway.register.await_args.args[0]
        assert request.username == "newuser"
        assert request.first_name == "New"

    @pytest.mark.asyncio
    async def test_email_from_request_when_absent_in_response(self, controller, gateway, navigator):
        gateway.register.return_value = Success(MessagePayload(message=""))

        await controller.submit_registration(**VALID_FORM)

        assert navigator.current.params == {"email": "newuser@example.com"}
        assert controller.success.startswith("Registration successful.")

    @pytest.mark.asyncio
    async def test_conflict_surfaced(self, controller, gateway, navigator):
        gateway.register.return_value = Failure(FailureKind.DOMAIN, "Username already exists", 409)

        outcome = await controller.submit_registration(**VALID_FORM)

        assert outcome.kind == FailureKind.DOMAIN
        assert controller.error == "Username already exists"
        assert navigator.current is None

    @pytest.mark.asyncio
    async def test_invalid_form_no_network(self, controller, gateway):
        outcome = await controller.submit_registration(**dict(VALID_FORM, confirm_password="other1"))

        assert outcome.kind == FailureKind.VALIDATION
        assert outcome.message == "Passwords do not match"
        gateway.register.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_password_not_logged(self, controller, logger):
        await controller.submit_registration(**VALID_FORM)

        assert "secret1" not in "".join(e.to_json() for e in logger.get_entries())
