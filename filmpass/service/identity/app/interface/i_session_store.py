"""
Session Store Interface

Holds the current authenticated identity, or nothing for guests. The booking flow
only reads it, at the moment it needs it; only the auth flow writes it.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from filmpass.service.identity.domain.identity_entity import Identity


class ISessionStore(ABC):
    @abstractmethod
    def get_identity(self) -> Optional[Identity]:
        """Current identity, or None when browsing as a guest"""
        pass

    @abstractmethod
    def save(self, *, token: str, user: dict[str, Any]) -> Identity:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    def get_token(self) -> Optional[str]:
        identity = self.get_identity()
        return identity.token if identity else None
