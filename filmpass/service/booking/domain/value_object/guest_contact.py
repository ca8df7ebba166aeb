from typing import Optional

import attrs

from filmpass.platform.exception.exceptions import ValidationError


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


@attrs.define(frozen=True)
class GuestContact:
    """Contact details for a booking made without an account. Email is mandatory at submit time."""

    email: Optional[str] = attrs.field(default=None, converter=_clean)
    name: Optional[str] = attrs.field(default=None, converter=_clean)

    def require_email(self) -> str:
        """The email to book with. Raises ValidationError when missing or malformed."""
        if not self.email:
            raise ValidationError('Email is required for guest bookings')
        if '@' not in self.email:
            raise ValidationError('Enter a valid email address')
        return self.email
