"""
Tests unitaires pour LOT 3: Validation Rules

Prédicats purs de forme: email, code OTP, mot de passe.
"""

import pytest

from src.auth import (
    OTP_LENGTH,
    PASSWORD_MIN_LENGTH,
    is_complete_otp,
    is_valid_email,
    passwords_match,
    sanitize_otp_input,
    validate_new_password,
    validate_otp_field,
    validate_password,
    validate_required,
)


class TestEmailShape:
    """Vérification conservatrice de la forme email."""

    @pytest.mark.parametrize(
        "value",
        ["user@example.com", "first.last@mail.example.org", "a+tag@b.co"],
    )
    def test_valid_addresses(self, value):
        assert is_valid_email(value)

    @pytest.mark.parametrize(
        "value",
        [
            "",
            None,
            "plainaddress",
            "a@@b.co",
            "a@b@c.co",
            "@example.com",
            "user@",
            "user@localhost",
            "user@exa..mple.com",
            "first..last@example.com",
            ".user@example.com",
            "user.@example.com",
            "user@.example.com",
            "user@example.com.",
            "us er@example.com",
            "user@example.com ",
        ],
    )
    def test_invalid_addresses(self, value):
        assert not is_valid_email(value)


class TestOtpSanitizing:
    """Nettoyage de la saisie OTP à chaque frappe."""

    def test_non_digits_removed(self):
        assert sanitize_otp_input("12a3-45") == "12345"

    def test_truncated_to_six(self):
        assert sanitize_otp_input("12345678") == "123456"

    def test_empty_input(self):
        assert sanitize_otp_input("") == ""
        assert sanitize_otp_input(None) == ""

    def test_only_letters(self):
        assert sanitize_otp_input("abcdef") == ""

    def test_non_ascii_digits_removed(self):
        assert sanitize_otp_input("١٢٣456") == "456"

    def test_sanitize_is_idempotent(self):
        once = sanitize_otp_input(" 98 76 54 32 ")
        assert sanitize_otp_input(once) == once == "987654"


class TestOtpCompleteness:
    """Un code est complet ssi 6 chiffres exactement."""

    def test_six_digits_complete(self):
        assert is_complete_otp("123456")

    @pytest.mark.parametrize("value", ["", None, "12345", "1234567", "12345a", "123456\n"])
    def test_incomplete(self, value):
        assert not is_complete_otp(value)

    def test_otp_length_constant(self):
        assert OTP_LENGTH == 6


class TestPasswordRules:
    """Mot de passe: requis, 6 caractères minimum, confirmation égale."""

    def test_required(self):
        error = validate_password("")
        assert error.code == "required"
        assert error.field == "password"

    def test_too_short(self):
        error = validate_password("12345")
        assert error.code == "minlength"
        assert str(PASSWORD_MIN_LENGTH) in error.message

    def test_minimum_length_accepted(self):
        assert validate_password("123456") is None

    def test_passwords_match(self):
        assert passwords_match("secret1", "secret1")
        assert not passwords_match("secret1", "secret2")
        assert passwords_match(None, "")

    def test_new_password_all_errors_reported(self):
        result = validate_new_password("123", "")

        assert not result.valid
        assert [e.field for e in result.errors] == ["password", "confirmPassword"]
        assert result.for_field("confirmPassword")[0].code == "required"

    def test_new_password_mismatch(self):
        result = validate_new_password("secret1", "secret2")

        assert result.first_message() == "Passwords do not match"
        assert result.errors[0].code == "mismatch"

    def test_new_password_valid(self):
        result = validate_new_password("secret1", "secret1")

        assert result.valid
        assert result.first_message() is None


class TestRequiredFields:
    """Champs obligatoires de formulaire."""

    def test_blank_values_missing(self):
        result = validate_required({"username": "  ", "password": None, "email": "a@b.co"})

        assert [e.field for e in result.errors] == ["username", "password"]
        assert all(e.code == "required" for e in result.errors)

    def test_all_present(self):
        assert validate_required({"username": "u"}).valid


class TestOtpField:
    """Champ otpCode du formulaire de réinitialisation."""

    def test_missing(self):
        result = validate_otp_field("")
        assert result.errors[0].code == "required"
        assert result.errors[0].field == "otpCode"

    def test_partial(self):
        result = validate_otp_field("12-34")
        assert result.first_message() == "OTP code must be 6 digits"

    def test_sanitized_then_accepted(self):
        assert validate_otp_field(" 123 456 ").valid
