"""
LOT 5: Flow - Resend Cooldown Timer

Minuteur de cooldown du renvoi de code OTP, découplé du réseau.

Le minuteur est une machine à états pure pilotée par tick(); la source de
ticks est externe: CooldownTicker (horloge asyncio) en production, appels
manuels en test.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from .interfaces import CooldownPhase, CooldownState, IResendCooldownTimer

DEFAULT_RESEND_COOLDOWN_SECONDS: int = 60


class CooldownError(Exception):
    """Transition illégale du minuteur."""

    def __init__(self, message: str, remaining_seconds: int = 0) -> None:
        self.remaining_seconds = remaining_seconds
        super().__init__(message)


class ResendCooldownTimer(IResendCooldownTimer):
    """
    Décompte en secondes.

    Transitions:
        IDLE --start(n)--> COUNTING(n)
        COUNTING(n) --tick--> COUNTING(n-1) ou IDLE si n-1 == 0
        * --cancel--> IDLE(0)

    remaining_seconds n'est jamais négatif et ne croît jamais pendant
    COUNTING.
    """

    def __init__(self, on_change: Optional[Callable[[CooldownState], None]] = None) -> None:
        """
        Args:
            on_change: Callback appelé après chaque transition (affichage du bouton)
        """
        self._phase = CooldownPhase.IDLE
        self._remaining = 0
        self._on_change = on_change

    @property
    def phase(self) -> CooldownPhase:
        return self._phase

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def is_counting(self) -> bool:
        return self._phase is CooldownPhase.COUNTING

    def state(self) -> CooldownState:
        return CooldownState(phase=self._phase, remaining_seconds=self._remaining)

    def start(self, duration_seconds: int = DEFAULT_RESEND_COOLDOWN_SECONDS) -> None:
        """
        Démarre le décompte.

        Raises:
            CooldownError: Si un décompte est déjà en cours
            ValueError: Si la durée n'est pas un entier positif
        """
        if self._phase is CooldownPhase.COUNTING:
            raise CooldownError(
                f"Cooldown already running ({self._remaining}s remaining)",
                remaining_seconds=self._remaining,
            )
        if isinstance(duration_seconds, bool) or not isinstance(duration_seconds, int) or duration_seconds <= 0:
            raise ValueError(f"duration_seconds must be a positive integer, got {duration_seconds!r}")

        self._phase = CooldownPhase.COUNTING
        self._remaining = duration_seconds
        self._notify()

    def tick(self) -> None:
        """Sans effet en IDLE."""
        if self._phase is not CooldownPhase.COUNTING:
            return

        self._remaining = max(0, self._remaining - 1)
        if self._remaining == 0:
            self._phase = CooldownPhase.IDLE
        self._notify()

    def cancel(self) -> None:
        if self._phase is CooldownPhase.IDLE and self._remaining == 0:
            return
        self._phase = CooldownPhase.IDLE
        self._remaining = 0
        self._notify()

    def _notify(self) -> None:
        if self._on_change:
            self._on_change(self.state())


class CooldownTicker:
    """
    Tâche asyncio qui appelle timer.tick() une fois par intervalle tant que
    le minuteur est en COUNTING.

    Indépendante des requêtes réseau: une requête lente ne suspend pas le
    décompte.

    Example:
        ticker = CooldownTicker(timer)
        timer.start(60)
        ticker.start()
        ...
        ticker.stop()
    """

    def __init__(
        self,
        timer: IResendCooldownTimer,
        interval_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Args:
            timer: Minuteur à piloter
            interval_seconds: Intervalle entre deux ticks
            sleep: Fonction d'attente (injectable pour les tests)
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self._timer = timer
        self._interval = interval_seconds
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None

    @property
    def timer(self) -> IResendCooldownTimer:
        return self._timer

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """
        Lance la tâche de décompte (idempotent si déjà lancée).

        Doit être appelé depuis une boucle asyncio en cours.
        """
        if self.is_running:
            return self._task

        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    def stop(self) -> None:
        """Annule la tâche; le minuteur n'est plus décrémenté."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        while self._timer.phase is CooldownPhase.COUNTING:
            await self._sleep(self._interval)
            self._timer.tick()
