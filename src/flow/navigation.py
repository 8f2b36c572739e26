"""
LOT 5: Flow - Navigation

Navigateur en mémoire: conserve l'historique des navigations demandées.
Utilisé par les hôtes sans routeur (CLI, tests, intégration).
"""

from typing import Callable, Dict, List, Optional

from .interfaces import INavigator, Navigation


class InMemoryNavigator(INavigator):
    """
    Navigateur qui enregistre chaque destination.

    Example:
        navigator = InMemoryNavigator()
        navigator.navigate("/verify-otp", {"email": "user@example.com"})
        navigator.current.to_url()  # "/verify-otp?email=user%40example.com"
    """

    def __init__(self, on_navigate: Optional[Callable[[Navigation], None]] = None) -> None:
        """
        Args:
            on_navigate: Callback optionnel appelé à chaque navigation
        """
        self._history: List[Navigation] = []
        self._on_navigate = on_navigate

    def navigate(self, route: str, params: Optional[Dict[str, str]] = None) -> Navigation:
        if not route:
            raise ValueError("route cannot be empty")

        navigation = Navigation(route=route, params=dict(params or {}))
        self._history.append(navigation)

        if self._on_navigate:
            self._on_navigate(navigation)

        return navigation

    @property
    def current(self) -> Optional[Navigation]:
        return self._history[-1] if self._history else None

    @property
    def history(self) -> List[Navigation]:
        return list(self._history)
