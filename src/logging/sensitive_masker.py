"""
LOT 2: Logging - Sensitive Masker

Masquage automatique des mots de passe, tokens et codes OTP.
"""

from typing import Any, Dict, List, Optional

from .interfaces import ISensitiveMasker


class SensitiveMasker(ISensitiveMasker):
    """
    Masquage récursif des secrets dans les données de log.

    Example:
        masker = SensitiveMasker()
        safe_data = masker.mask({"password": "secret123", "username": "admin"})
        # {"password": "***MASKED***", "username": "admin"}
    """

    def __init__(self, additional_patterns: Optional[List[str]] = None) -> None:
        """
        Args:
            additional_patterns: Patterns supplémentaires à masquer
        """
        self._patterns: List[str] = [p.lower() for p in self.SENSITIVE_PATTERNS]
        for pattern in additional_patterns or []:
            if pattern and pattern.lower() not in self._patterns:
                self._patterns.append(pattern.lower())

    @property
    def patterns(self) -> List[str]:
        """Retourne les patterns sensibles configurés."""
        return list(self._patterns)

    def mask(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Masque récursivement les données sensibles.

        Comportement:
            - Clés contenant un pattern sensible → valeur masquée
            - Valeurs dict → récursion
            - Valeurs list → masque chaque élément
        """
        if not isinstance(data, dict):
            return data

        result: Dict[str, Any] = {}

        for key, value in data.items():
            if self.is_sensitive_key(key):
                result[key] = self.MASK_VALUE
            elif isinstance(value, dict):
                result[key] = self.mask(value)
            elif isinstance(value, list):
                result[key] = self._mask_list(value)
            else:
                result[key] = value

        return result

    def _mask_list(self, items: List[Any]) -> List[Any]:
        result = []
        for item in items:
            if isinstance(item, dict):
                result.append(self.mask(item))
            elif isinstance(item, list):
                result.append(self._mask_list(item))
            else:
                result.append(item)
        return result

    def is_sensitive_key(self, key: str) -> bool:
        """Vérification insensible à la casse."""
        if not key:
            return False

        key_lower = key.lower()
        return any(pattern in key_lower for pattern in self._patterns)

    def add_pattern(self, pattern: str) -> None:
        """
        Ajoute pattern sensible personnalisé.

        Raises:
            ValueError: Si pattern vide
        """
        if not pattern or not pattern.strip():
            raise ValueError("Pattern cannot be empty")

        pattern_lower = pattern.lower().strip()
        if pattern_lower not in self._patterns:
            self._patterns.append(pattern_lower)
