from typing import Any, Optional

from opentelemetry import trace

from filmpass.platform.exception.exceptions import AuthError, MalformedResponseError, ValidationError
from filmpass.platform.logging.loguru_io import Logger
from filmpass.service.identity.app.interface.i_auth_gateway import IAuthGateway
from filmpass.service.identity.app.interface.i_session_store import ISessionStore
from filmpass.service.identity.domain.identity_entity import Identity


class AuthUseCase:
    """
    Login / register / logout

    The only writer of the session store. The booking flow reads the store at submit
    time, so a logout between seat selection and submit turns the attempt into a
    guest booking rather than reusing a stale credential.
    """

    def __init__(self, *, auth_gateway: IAuthGateway, session_store: ISessionStore) -> None:
        self.auth_gateway = auth_gateway
        self.session_store = session_store
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def login(self, *, email: str, password: str) -> Identity:
        if not email or not password:
            raise ValidationError('Email and password are required')
        with self.tracer.start_as_current_span('use_case.login'):
            response = await self.auth_gateway.login(email=email, password=password)
            return self._store(response)

    @Logger.io
    async def register(self, *, name: str, email: str, password: str) -> Identity:
        if not email or not password:
            raise ValidationError('Email and password are required')
        with self.tracer.start_as_current_span('use_case.register'):
            response = await self.auth_gateway.register(name=name, email=email, password=password)
            return self._store(response)

    @Logger.io
    def logout(self) -> None:
        self.session_store.clear()

    @Logger.io
    async def refresh_identity(self) -> Optional[Identity]:
        """Re-validate the stored credential with the backend; drop it if rejected."""
        identity = self.session_store.get_identity()
        if identity is None:
            return None
        try:
            user = await self.auth_gateway.fetch_me()
        except AuthError:
            Logger.base.info('[AUTH] Stored credential rejected, clearing session')
            self.session_store.clear()
            return None
        return self.session_store.save(token=identity.token, user=user)

    def _store(self, response: dict[str, Any]) -> Identity:
        token = response.get('token')
        user = response.get('user')
        if not token or not isinstance(user, dict):
            raise MalformedResponseError('Auth response is missing token or user')
        identity = self.session_store.save(token=token, user=user)
        Logger.base.info(f'[AUTH] Signed in as {identity.email}')
        return identity
