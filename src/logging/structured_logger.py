"""
LOT 2: Logging - Structured Logger

Logger JSON structuré utilisé par les contrôleurs de flux.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from .interfaces import (
    IStructuredLogger,
    ISensitiveMasker,
    LogConfig,
    LogEntry,
    LogLevel,
)
from .sensitive_masker import SensitiveMasker


class MissingRequiredFieldError(Exception):
    """Champ obligatoire manquant dans une entrée de log."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Required field missing: {field_name}")


class StructuredLogger(IStructuredLogger):
    """
    Logger JSON structuré avec champs obligatoires.

    Les entrées sont capturées en mémoire et, si un output_handler est
    fourni, émises en JSON une ligne par entrée.

    Example:
        logger = StructuredLogger("authflow", output_handler=print)
        logger.set_default_flow("login")
        logger.info("Login attempt", username="admin")
    """

    def __init__(
        self,
        name: str,
        config: Optional[LogConfig] = None,
        masker: Optional[ISensitiveMasker] = None,
        output_handler: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Args:
            name: Nom du logger (identifiant service/module)
            config: Configuration optionnelle
            masker: Masker pour données sensibles
            output_handler: Handler pour la sortie JSON (stderr, fichier, tests)

        Raises:
            ValueError: Si name vide
        """
        if not name or not name.strip():
            raise ValueError("Logger name cannot be empty")

        self._name = name.strip()
        self._config = config or LogConfig()
        self._masker = masker or SensitiveMasker()
        self._output_handler = output_handler
        self._entries: List[LogEntry] = []
        self._default_flow: Optional[str] = self._config.default_flow
        self._default_correlation_id: Optional[str] = self._config.default_correlation_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> LogConfig:
        return self._config

    def set_default_flow(self, flow: str) -> None:
        """Définit le nom de flux par défaut."""
        self._default_flow = flow

    def set_default_correlation(self, correlation_id: str) -> None:
        """Définit correlation_id par défaut."""
        self._default_correlation_id = correlation_id

    def log(
        self,
        level: LogLevel,
        message: str,
        correlation_id: Optional[str] = None,
        flow: Optional[str] = None,
        **extra: Any,
    ) -> Optional[LogEntry]:
        """
        Crée une entrée de log structurée.

        Processus:
            1. Vérifie niveau >= min_level
            2. Résout correlation_id (généré si absent) et flow
            3. Masque données sensibles dans extra
            4. Capture l'entrée et l'émet en JSON

        Raises:
            MissingRequiredFieldError: Si flow ou message manquant
        """
        if not self._should_log(level):
            return None

        resolved_correlation = correlation_id or self._default_correlation_id
        if not resolved_correlation:
            resolved_correlation = str(uuid.uuid4())

        resolved_flow = flow or self._default_flow
        if not resolved_flow:
            raise MissingRequiredFieldError("flow")

        if not message:
            raise MissingRequiredFieldError("message")

        masked_extra = {}
        if extra and self._config.include_extra:
            if self._config.mask_sensitive:
                masked_extra = self._masker.mask(dict(extra))
            else:
                masked_extra = dict(extra)

        entry = LogEntry(
            timestamp=self._generate_timestamp(),
            level=level,
            correlation_id=resolved_correlation,
            flow=resolved_flow,
            message=message,
            extra=masked_extra,
            logger_name=self._name,
        )

        self._entries.append(entry)

        if self._output_handler:
            self._output_handler(entry.to_json())

        return entry

    def _generate_timestamp(self) -> str:
        """Format: 2024-12-04T14:30:00.123Z"""
        now = datetime.now(timezone.utc)
        return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

    def _should_log(self, level: LogLevel) -> bool:
        return LogLevel.get_priority(level) >= LogLevel.get_priority(
            self._config.min_level
        )

    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.INFO, message, **extra)

    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.WARN, message, **extra)

    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.ERROR, message, **extra)

    def critical(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.CRITICAL, message, **extra)

    def get_entries(self) -> List[LogEntry]:
        """
        Retourne les entrées de log capturées.

        Utile pour tests et débogage.
        """
        return list(self._entries)

    def clear_entries(self) -> None:
        self._entries.clear()

    def get_entries_by_flow(self, flow: str) -> List[LogEntry]:
        """Filtre les entrées par nom de flux."""
        return [e for e in self._entries if e.flow == flow]

    def with_context(
        self,
        flow: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> "ContextualLogger":
        """
        Crée un logger avec contexte pré-défini.

        Args:
            flow: Nom du flux pour ce contexte
            correlation_id: ID corrélation pour ce contexte (généré si absent)

        Returns:
            ContextualLogger avec contexte fixé
        """
        return ContextualLogger(
            self,
            flow=flow or self._default_flow,
            correlation_id=correlation_id or self._default_correlation_id or str(uuid.uuid4()),
        )


class ContextualLogger:
    """
    Logger avec contexte pré-défini.

    Chaque contrôleur de flux en détient un: le correlation_id relie toutes
    les tentatives d'une même instance.
    """

    def __init__(
        self,
        logger: StructuredLogger,
        flow: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self._logger = logger
        self._flow = flow
        self._correlation_id = correlation_id

    @property
    def correlation_id(self) -> Optional[str]:
        return self._correlation_id

    @property
    def flow(self) -> Optional[str]:
        return self._flow

    def log(self, level: LogLevel, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log avec contexte."""
        return self._logger.log(
            level,
            message,
            correlation_id=self._correlation_id,
            flow=self._flow,
            **extra,
        )

    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.INFO, message, **extra)

    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.WARN, message, **extra)

    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.ERROR, message, **extra)


def create_logger(
    name: str = "authflow",
    min_level: str = "INFO",
    output_handler: Optional[Callable[[str], None]] = None,
) -> StructuredLogger:
    """
    Construit le logger du client à partir du niveau configuré.

    Args:
        name: Nom du logger
        min_level: Nom du niveau minimum (FlowSettings.log_level)
        output_handler: Sortie JSON optionnelle
    """
    config = LogConfig(min_level=LogLevel.from_name(min_level))
    return StructuredLogger(name, config=config, output_handler=output_handler)
