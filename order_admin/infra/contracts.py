from __future__ import annotations
from typing import List, Optional, Protocol


class Navigator(Protocol):
    def redirect_to_login(self, message: str) -> None:
        """
        Contrat minimal pour quitter l'écran vers la page de login.
        """
        ...


class Notifier(Protocol):
    def alert(self, message: str) -> None:
        """
        Contrat minimal pour une notification bloquante (type alert).
        """
        ...


class ScreenSignals:
    """Navigator + Notifier qui mémorisent les signaux pour la réponse HTTP."""

    def __init__(self) -> None:
        self.redirect_message: Optional[str] = None
        self.alerts: List[str] = []

    @property
    def redirected(self) -> bool:
        return self.redirect_message is not None

    def redirect_to_login(self, message: str) -> None:
        self.redirect_message = message

    def alert(self, message: str) -> None:
        self.alerts.append(message)
