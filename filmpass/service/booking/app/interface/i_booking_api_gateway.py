"""
Booking API Gateway Interface

Outbound calls the booking flow makes to the REST backend. Implementations return
canonical domain objects and raise the CustomBaseError taxonomy:
NetworkError, NotFoundError, AuthError, SeatUnavailableError,
BookingRejectedError, MalformedResponseError.
"""

from abc import ABC, abstractmethod
from typing import Any

from filmpass.service.booking.domain.entity.booking_request import BookingRequest
from filmpass.service.booking.domain.entity.booking_result import BookingResult
from filmpass.service.booking.domain.value_object.seat_map import SeatMap


class IBookingApiGateway(ABC):
    @abstractmethod
    async def get_seats(self, *, showtime_id: int) -> SeatMap:
        pass

    @abstractmethod
    async def create_booking(self, *, request: BookingRequest) -> BookingResult:
        """
        Create a booking directly (no external payment step)

        Sends request.idempotency_key so the backend can drop duplicate submits.
        """
        pass

    @abstractmethod
    async def create_checkout_session(
        self, *, request: BookingRequest, amount_minor: int
    ) -> dict[str, Any]:
        """
        Create a payment session

        Returns:
            {'client_secret', 'publishable_key', 'session_id'}
        """
        pass

    @abstractmethod
    async def verify_payment(self, *, session_id: str) -> BookingResult:
        pass
