"""Immutable view of the seat selection state machine, handed to listeners after each transition."""

from decimal import Decimal
from typing import Optional

import attrs

from filmpass.platform.exception.exceptions import CustomBaseError
from filmpass.service.booking.domain.entity.booking_result import BookingResult
from filmpass.service.booking.domain.entity.payment_session import PaymentSession
from filmpass.service.booking.domain.enum.selection_state import SelectionState
from filmpass.service.booking.domain.value_object.money import format_amount
from filmpass.service.booking.domain.value_object.seat_map import SeatMap
from filmpass.service.shared_kernel.domain.enum import TicketType


@attrs.define(frozen=True)
class SelectionSnapshot:
    state: SelectionState
    showtime_id: Optional[int]
    seat_map: Optional[SeatMap]
    selected_seat_ids: frozenset[int]
    ticket_type: TicketType
    error: Optional[CustomBaseError] = None
    result: Optional[BookingResult] = None
    payment_session: Optional[PaymentSession] = None
    advisory_total: Optional[Decimal] = None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None

    @property
    def display_advisory_total(self) -> Optional[str]:
        if self.advisory_total is None:
            return None
        return format_amount(self.advisory_total)
