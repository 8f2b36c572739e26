"""
Tests unitaires pour LOT 5: Flow - Navigation
"""

import pytest

from src.flow import InMemoryNavigator, INavigator, Navigation, OtpChallenge


class TestNavigation:
    """Destination et état transmis."""

    def test_url_with_email(self):
        navigation = Navigation("/verify-otp", {"email": "user@example.com"})

        assert navigation.to_url() == "/verify-otp?email=user%40example.com"

    def test_url_without_params(self):
        assert Navigation("/events").to_url() == "/events"


class TestInMemoryNavigator:
    """Historique des navigations."""

    def test_records_history(self):
        navigator = InMemoryNavigator()

        navigator.navigate("/login")
        navigator.navigate("/events")

        assert [n.route for n in navigator.history] == ["/login", "/events"]
        assert navigator.current == Navigation("/events")
        assert isinstance(navigator, INavigator)

    def test_empty_history(self):
        navigator = InMemoryNavigator()

        assert navigator.current is None
        assert navigator.history == []

    def test_params_copied(self):
        navigator = InMemoryNavigator()
        params = {"email": "a@b.co"}

        navigator.navigate("/reset-password", params)
        params["email"] = "changed@b.co"

        assert navigator.current.params == {"email": "a@b.co"}

    def test_callback(self):
        seen = []
        navigator = InMemoryNavigator(on_navigate=seen.append)

        navigator.navigate("/admin")

        assert seen == [Navigation("/admin")]

    def test_empty_route_rejected(self):
        with pytest.raises(ValueError):
            InMemoryNavigator().navigate("")


class TestOtpChallenge:
    """Email lié à l'étape OTP."""

    @pytest.mark.parametrize("email", ["", "   "])
    def test_blank_email_rejected(self, email):
        with pytest.raises(ValueError):
            OtpChallenge(email)

    def test_email_kept(self):
        assert OtpChallenge("a@b.co").email == "a@b.co"
