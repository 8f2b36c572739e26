"""
LOT 3: Session Store Implementation

Détenteur de la session courante du client.

Note:
    Stockage en mémoire uniquement: la session vit le temps du processus.
"""

from datetime import datetime, timezone
from typing import List, Optional, Union

from .interfaces import ISessionStore, Identity, Role, Session, SessionListener


class SessionStore(ISessionStore):
    """
    Session courante, remplacée en bloc.

    Aucun champ n'est modifié en place: une nouvelle authentification
    remplace la valeur entière, un lecteur ne voit jamais une session
    partiellement écrite.

    Example:
        store = SessionStore()
        store.open(token, identity)
        if store.is_admin():
            ...
        store.clear()
    """

    def __init__(self) -> None:
        self._session: Optional[Session] = None
        self._listeners: List[SessionListener] = []

    def current(self) -> Optional[Session]:
        return self._session

    def replace(self, session: Session) -> None:
        """
        Remplace la session courante.

        Raises:
            TypeError: Si la valeur n'est pas une Session
        """
        if not isinstance(session, Session):
            raise TypeError(f"Session attendue, reçu {type(session).__name__}")

        self._session = session
        self._notify()

    def open(self, token: str, identity: Identity, issued_at: Optional[datetime] = None) -> Session:
        """
        Crée une session et remplace la courante.

        Args:
            token: Token opaque
            identity: Identité authentifiée
            issued_at: Horodatage (now UTC par défaut)

        Returns:
            Session créée
        """
        session = Session(
            token=token,
            identity=identity,
            issued_at=issued_at or datetime.now(timezone.utc),
        )
        self.replace(session)
        return session

    def clear(self) -> None:
        if self._session is None:
            return
        self._session = None
        self._notify()

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def identity(self) -> Optional[Identity]:
        return self._session.identity if self._session else None

    @property
    def token(self) -> Optional[str]:
        return self._session.token if self._session else None

    def has_role(self, role: Union[Role, str]) -> bool:
        """Comparaison insensible à la casse, False si aucune session."""
        if self._session is None:
            return False
        return self._session.identity.role == Role.parse(role)

    def is_admin(self) -> bool:
        return self.has_role(Role.ADMIN)

    def subscribe(self, listener: SessionListener) -> None:
        """Enregistre un callback appelé après chaque changement de session."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: SessionListener) -> bool:
        try:
            self._listeners.remove(listener)
            return True
        except ValueError:
            return False

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._session)
