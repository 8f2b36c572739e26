"""
Tests unitaires pour ConfigLoader et FlowSettings.
"""

import pytest
from pydantic import ValidationError

from src.core import ConfigIntegrityError, ConfigLoader, FlowSettings, RouteSettings


class TestFlowSettingsDefaults:
    """Valeurs par défaut utilisables sans fichier."""

    def test_default_cooldown_is_60_seconds(self):
        assert FlowSettings().resend_cooldown_seconds == 60

    def test_default_routes(self):
        routes = FlowSettings().routes
        assert routes.admin == "/admin"
        assert routes.default == "/events"
        assert routes.registration == "/register"
        assert routes.verify_otp == "/verify-otp"
        assert routes.login == "/login"

    def test_base_url_trailing_slash_removed(self):
        settings = FlowSettings(api_base_url="http://api.local/api/")
        assert settings.api_base_url == "http://api.local/api"

    def test_non_http_base_url_rejected(self):
        with pytest.raises(ValidationError):
            FlowSettings(api_base_url="ftp://api.local")

    def test_zero_cooldown_rejected(self):
        with pytest.raises(ValidationError):
            FlowSettings(resend_cooldown_seconds=0)

    def test_log_level_normalized(self):
        assert FlowSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            FlowSettings(log_level="verbose")

    def test_relative_route_rejected(self):
        with pytest.raises(ValidationError):
            RouteSettings(admin="admin")


class TestConfigLoader:
    """Tests pour ConfigLoader."""

    @pytest.mark.asyncio
    async def test_load_default_config(self, configs_path):
        """Le chargement de la config par défaut doit réussir."""
        settings = await ConfigLoader(configs_path).load("default")

        assert isinstance(settings, FlowSettings)
        assert settings.api_base_url == "http://localhost:8080/api"
        assert settings.resend_cooldown_seconds == 60
        assert settings.routes.admin == "/admin"

    @pytest.mark.asyncio
    async def test_load_overrides(self, configs_path):
        """Les valeurs du fichier remplacent les défauts, le reste est conservé."""
        settings = await ConfigLoader(configs_path).load("staging")

        assert settings.api_base_url == "https://staging.example.com/api"
        assert settings.resend_cooldown_seconds == 30
        assert settings.log_level == "DEBUG"
        assert settings.routes.default == "/dashboard"
        assert settings.routes.admin == "/admin"

    @pytest.mark.asyncio
    async def test_load_nonexistent_raises(self, configs_path):
        with pytest.raises(ConfigIntegrityError) as exc_info:
            await ConfigLoader(configs_path).load("nonexistent")

        assert "Configuration non trouvée" in str(exc_info.value)
        assert "nonexistent" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_invalid_values_raise_integrity_error(self, configs_path):
        with pytest.raises(ConfigIntegrityError) as exc_info:
            await ConfigLoader(configs_path).load("invalid_cooldown")

        assert "invalid_cooldown" in str(exc_info.value)

    def test_non_mapping_root_raises(self, configs_path):
        with pytest.raises(ConfigIntegrityError, match="objet YAML"):
            ConfigLoader(configs_path).load_raw("not_a_mapping")

    def test_yaml_syntax_error_raises(self, tmp_path):
        (tmp_path / "broken.yaml").write_text("routes: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigIntegrityError, match="parsing YAML"):
            ConfigLoader(str(tmp_path)).load_raw("broken")

    @pytest.mark.asyncio
    async def test_empty_file_gives_defaults(self, tmp_path):
        (tmp_path / "empty.yaml").write_text("", encoding="utf-8")

        settings = await ConfigLoader(str(tmp_path)).load("empty")

        assert settings == FlowSettings()
