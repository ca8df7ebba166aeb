from decimal import Decimal
from typing import Optional

import attrs

from filmpass.service.booking.domain.value_object.money import format_amount
from filmpass.service.shared_kernel.domain.enum import BookingStatus


@attrs.define(frozen=True)
class BookingResult:
    """
    Server-confirmed booking.

    total_amount is the backend's figure in major units; any client-side total is advisory.
    The detail fields are only filled by payment verification.
    """

    booking_id: str
    total_amount: Decimal
    status: BookingStatus
    movie_title: Optional[str] = None
    showtime: Optional[str] = None
    theater_name: Optional[str] = None
    seats: Optional[int | list[int]] = None

    @property
    def display_total(self) -> str:
        return format_amount(self.total_amount)

    @property
    def is_confirmed(self) -> bool:
        return self.status == BookingStatus.CONFIRMED
