"""
AUTHFLOW Client - Config Loader Implementation
Charge la configuration depuis fichiers YAML et la valide.
"""

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from .interfaces import FlowSettings, IConfigLoader


class ConfigIntegrityError(Exception):
    """Erreur d'intégrité de configuration."""

    pass


class ConfigLoader(IConfigLoader):
    """Chargement des configurations depuis fichiers YAML."""

    def __init__(self, configs_path: str = "fixtures/configs"):
        self.configs_path = Path(configs_path)

    async def load(self, name: str) -> FlowSettings:
        """
        Charge la config nommée et la valide.

        Args:
            name: Nom du fichier (sans extension .yaml)

        Returns:
            FlowSettings validés

        Raises:
            ConfigIntegrityError: Si fichier inexistant ou structure invalide
        """
        raw = self.load_raw(name)

        try:
            return FlowSettings.model_validate(raw)
        except ValidationError as e:
            raise ConfigIntegrityError(f"Configuration invalide ({name}): {e}")

    def load_raw(self, name: str) -> Dict[str, Any]:
        """
        Charge le YAML brut.

        Raises:
            ConfigIntegrityError: Si fichier inexistant ou non parsable
        """
        config_file = self.configs_path / f"{name}.yaml"

        if not config_file.exists():
            raise ConfigIntegrityError(f"Configuration non trouvée: {name}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigIntegrityError(f"Erreur de parsing YAML: {e}")
        except OSError as e:
            raise ConfigIntegrityError(f"Erreur de lecture fichier: {e}")

        # Fichier vide -> valeurs par défaut
        if config is None:
            return {}

        if not isinstance(config, dict):
            raise ConfigIntegrityError("Configuration doit être un objet YAML")

        return config
