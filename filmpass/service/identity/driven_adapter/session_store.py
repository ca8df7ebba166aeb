"""
Session store implementations

FileSessionStore persists the same two entries the web client kept in browser
storage (`filmpass_token`, `filmpass_user`) as one orjson document, so a CLI or
kiosk process keeps its login across restarts.
"""

from pathlib import Path
from typing import Any, Optional

import orjson

from filmpass.platform.exception.exceptions import MalformedResponseError
from filmpass.platform.logging.loguru_io import Logger
from filmpass.service.identity.app.interface.i_session_store import ISessionStore
from filmpass.service.identity.domain.identity_entity import Identity


TOKEN_KEY = 'filmpass_token'
USER_KEY = 'filmpass_user'


class InMemorySessionStore(ISessionStore):
    def __init__(self, identity: Optional[Identity] = None) -> None:
        self._identity = identity

    def get_identity(self) -> Optional[Identity]:
        return self._identity

    def save(self, *, token: str, user: dict[str, Any]) -> Identity:
        self._identity = Identity.from_user_payload(token=token, user=user)
        return self._identity

    def clear(self) -> None:
        self._identity = None


class FileSessionStore(ISessionStore):
    def __init__(self, *, path: str | Path) -> None:
        self._path = Path(path)

    def get_identity(self) -> Optional[Identity]:
        # Re-read on every call: another process may have logged in or out
        if not self._path.exists():
            return None
        try:
            document = orjson.loads(self._path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as e:
            Logger.base.warning(f'[SESSION] Ignoring unreadable session file {self._path}: {e}')
            return None

        if not isinstance(document, dict):
            return None
        token = document.get(TOKEN_KEY)
        user = document.get(USER_KEY)
        if not token or not isinstance(user, dict):
            return None
        try:
            return Identity.from_user_payload(token=token, user=user)
        except MalformedResponseError:
            Logger.base.warning(f'[SESSION] Ignoring incomplete session in {self._path}')
            return None

    @Logger.io
    def save(self, *, token: str, user: dict[str, Any]) -> Identity:
        identity = Identity.from_user_payload(token=token, user=user)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + '.tmp')
        tmp_path.write_bytes(
            orjson.dumps({TOKEN_KEY: token, USER_KEY: identity.to_user_payload()})
        )
        tmp_path.replace(self._path)
        return identity

    @Logger.io
    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
