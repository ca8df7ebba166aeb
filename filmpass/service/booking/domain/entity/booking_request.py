from typing import Any, Optional

import attrs

from filmpass.platform.exception.exceptions import ValidationError
from filmpass.service.shared_kernel.domain.enum import TicketType


@attrs.define(frozen=True)
class BookingRequest:
    """
    What the client asks the backend to book.

    Either explicit seat ids (seat-map flow) or a bare seat count (legacy quick-book
    flow). Identity travels either as the bearer credential or as guest contact fields.
    """

    showtime_id: int
    ticket_type: TicketType
    idempotency_key: str
    seat_ids: tuple[int, ...] = ()
    seat_count: Optional[int] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    credential: Optional[str] = attrs.field(default=None, repr=False)

    def __attrs_post_init__(self) -> None:
        if self.seat_ids and self.seat_count is not None:
            raise ValidationError('Provide either seat ids or a seat count, not both')
        if not self.seat_ids and not self.seat_count:
            raise ValidationError('Select at least one seat')

    @property
    def is_guest(self) -> bool:
        return self.credential is None

    @property
    def quantity(self) -> int:
        return len(self.seat_ids) if self.seat_ids else int(self.seat_count or 0)

    @property
    def fingerprint(self) -> tuple[Any, ...]:
        """Everything that makes two requests the same booking, minus the idempotency key."""
        return (
            self.showtime_id,
            self.seat_ids,
            self.seat_count,
            self.ticket_type,
            self.user_email,
            self.credential,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            'showtimeId': self.showtime_id,
            'seats': list(self.seat_ids) if self.seat_ids else self.seat_count,
            'ticketType': self.ticket_type.value,
        }
        if self.user_email:
            payload['userEmail'] = self.user_email
        if self.user_name:
            payload['userName'] = self.user_name
        return payload
