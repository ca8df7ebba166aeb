from typing import Any, Optional

from opentelemetry import trace
import uuid_utils

from filmpass.platform.exception.exceptions import BookingRejectedError, ValidationError
from filmpass.platform.logging.loguru_io import Logger
from filmpass.service.booking.app.command.checkout_payment_bridge import CheckoutPaymentBridge
from filmpass.service.booking.app.interface.i_booking_api_gateway import IBookingApiGateway
from filmpass.service.booking.domain.entity.booking_request import BookingRequest
from filmpass.service.booking.domain.entity.booking_result import BookingResult
from filmpass.service.booking.domain.entity.payment_session import PaymentSession
from filmpass.service.booking.domain.value_object.guest_contact import GuestContact
from filmpass.service.booking.domain.value_object.money import to_major_units
from filmpass.service.identity.app.interface.i_session_store import ISessionStore
from filmpass.service.shared_kernel.domain.enum import BookingStatus, TicketType


MAX_TICKETS_PER_BOOKING = 10


class CreateCountBookingUseCase:
    """
    Quick booking by ticket count

    For showtimes booked without a seat map: the backend assigns seats. Same identity
    rules as the seat-map flow (bearer credential, or guest with an email). The count
    is either booked directly or paid through the checkout session.
    """

    def __init__(
        self,
        *,
        booking_gateway: IBookingApiGateway,
        session_store: ISessionStore,
        payment_bridge: Optional[CheckoutPaymentBridge] = None,
    ) -> None:
        self.booking_gateway = booking_gateway
        self.session_store = session_store
        self.payment_bridge = payment_bridge
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(
        self,
        *,
        showtime_id: int,
        quantity: int,
        ticket_type: TicketType = TicketType.ADULT,
        guest: Optional[GuestContact] = None,
        idempotency_key: Optional[str] = None,
    ) -> BookingResult:
        request = self._build_request(
            showtime_id=showtime_id,
            quantity=quantity,
            ticket_type=ticket_type,
            guest=guest,
            idempotency_key=idempotency_key,
        )

        with self.tracer.start_as_current_span(
            'use_case.create_count_booking',
            attributes={'showtime.id': showtime_id, 'seat.count': quantity},
        ):
            result = await self.booking_gateway.create_booking(request=request)
            if result.status == BookingStatus.FAILED:
                raise BookingRejectedError(f'Booking {result.booking_id} was rejected')
            Logger.base.info(
                f'[BOOKING] Booking #{result.booking_id} confirmed. Total {result.display_total}'
            )
            return result

    @Logger.io
    async def proceed_to_payment(
        self,
        *,
        showtime_id: int,
        quantity: int,
        ticket_price: Any,
        ticket_type: TicketType = TicketType.ADULT,
        guest: Optional[GuestContact] = None,
        idempotency_key: Optional[str] = None,
    ) -> PaymentSession:
        """
        Pay for the tickets through the checkout session

        Amount is ticket price x quantity. The booking is confirmed later by
        CheckoutPaymentBridge.verify() after the redirect back.
        """
        if self.payment_bridge is None:
            raise ValidationError('Online payment is not available')
        if ticket_price is None:
            raise ValidationError('Ticket price is unknown for this showtime')

        request = self._build_request(
            showtime_id=showtime_id,
            quantity=quantity,
            ticket_type=ticket_type,
            guest=guest,
            idempotency_key=idempotency_key,
        )
        amount = to_major_units(ticket_price) * quantity

        with self.tracer.start_as_current_span(
            'use_case.create_count_booking.payment',
            attributes={'showtime.id': showtime_id, 'seat.count': quantity},
        ):
            return await self.payment_bridge.initiate(booking_request=request, amount=amount)

    def _build_request(
        self,
        *,
        showtime_id: int,
        quantity: int,
        ticket_type: TicketType,
        guest: Optional[GuestContact],
        idempotency_key: Optional[str],
    ) -> BookingRequest:
        if quantity < 1:
            raise ValidationError('Select at least one ticket')
        if quantity > MAX_TICKETS_PER_BOOKING:
            raise ValidationError(f'Maximum {MAX_TICKETS_PER_BOOKING} tickets per booking')

        identity = self.session_store.get_identity()
        if identity is None:
            contact = guest or GuestContact()
            user_email, user_name, credential = contact.require_email(), contact.name, None
        else:
            user_email, user_name, credential = identity.email, identity.name, identity.token

        return BookingRequest(
            showtime_id=showtime_id,
            ticket_type=TicketType(ticket_type),
            idempotency_key=idempotency_key or str(uuid_utils.uuid7()),
            seat_count=quantity,
            user_email=user_email,
            user_name=user_name,
            credential=credential,
        )
