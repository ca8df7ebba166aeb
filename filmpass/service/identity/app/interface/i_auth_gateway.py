from abc import ABC, abstractmethod
from typing import Any


class IAuthGateway(ABC):
    """Backend auth endpoints. Login and register both answer with {token, user}."""

    @abstractmethod
    async def login(self, *, email: str, password: str) -> dict[str, Any]:
        pass

    @abstractmethod
    async def register(self, *, name: str, email: str, password: str) -> dict[str, Any]:
        pass

    @abstractmethod
    async def fetch_me(self) -> dict[str, Any]:
        """Profile of the user owning the current bearer credential"""
        pass
