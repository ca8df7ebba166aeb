from typing import Any, Optional

import attrs

from filmpass.platform.exception.exceptions import MalformedResponseError


@attrs.define(frozen=True)
class Identity:
    """An authenticated user plus the bearer credential that proves it."""

    user_id: int | str
    email: str
    token: str = attrs.field(repr=False)
    name: Optional[str] = None
    role: str = 'customer'

    @classmethod
    def from_user_payload(cls, *, token: str, user: dict[str, Any]) -> 'Identity':
        try:
            return cls(
                user_id=user['id'],
                email=user['email'],
                token=token,
                name=user.get('name'),
                role=user.get('role') or 'customer',
            )
        except (KeyError, TypeError):
            raise MalformedResponseError('User profile is missing id or email')

    def to_user_payload(self) -> dict[str, Any]:
        return {'id': self.user_id, 'email': self.email, 'name': self.name, 'role': self.role}
