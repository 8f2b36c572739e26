"""
LOT 3: Session Redirector

Choix de la route d'atterrissage après authentification.
"""

from typing import Optional, Union

from .interfaces import Role

DEFAULT_ADMIN_ROUTE: str = "/admin"
DEFAULT_USER_ROUTE: str = "/events"


class SessionRedirector:
    """
    Fonction totale rôle → route.

    ADMIN va vers la route admin; tout autre valeur, y compris inconnue ou
    absente, va vers la route par défaut.
    """

    def __init__(
        self,
        admin_route: str = DEFAULT_ADMIN_ROUTE,
        default_route: str = DEFAULT_USER_ROUTE,
    ) -> None:
        self.admin_route = admin_route
        self.default_route = default_route

    def destination_for(self, role: Optional[Union[Role, str]]) -> str:
        if Role.parse(role) is Role.ADMIN:
            return self.admin_route
        return self.default_route


def destination_for(role: Optional[Union[Role, str]]) -> str:
    """Raccourci avec les routes par défaut."""
    return SessionRedirector().destination_for(role)
