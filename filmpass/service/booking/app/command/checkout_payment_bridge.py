from decimal import Decimal

import httpx
from opentelemetry import trace

from filmpass.platform.exception.exceptions import (
    CustomBaseError,
    PaymentDeclinedError,
    PaymentInitError,
    SeatUnavailableError,
    ValidationError,
    VerificationError,
)
from filmpass.platform.logging.loguru_io import Logger
from filmpass.service.booking.app.interface.i_booking_api_gateway import IBookingApiGateway
from filmpass.service.booking.domain.entity.booking_request import BookingRequest
from filmpass.service.booking.domain.entity.booking_result import BookingResult
from filmpass.service.booking.domain.entity.payment_session import PaymentSession
from filmpass.service.booking.domain.enum.payment_outcome import PaymentOutcome
from filmpass.service.booking.domain.value_object.money import to_minor_units
from filmpass.service.booking.domain.value_object.payment_return import PaymentReturn
from filmpass.service.shared_kernel.domain.enum import BookingStatus


SESSION_ID_PARAM = 'session_id'


class CheckoutPaymentBridge:
    """
    Hand a validated booking to the payment provider and reconcile on the way back

    Two phases, because the provider redirect is a full navigation and no in-memory
    state survives it:
    1. initiate(): create the payment session and a return URL that embeds session_id
    2. verify(): after the redirect back, session_id is the sole correlation key

    verify() relies on the backend being idempotent per session_id; it does not
    deduplicate on its own.
    """

    def __init__(
        self,
        *,
        booking_gateway: IBookingApiGateway,
        success_url: str,
        cancel_url: str,
    ) -> None:
        self.booking_gateway = booking_gateway
        self.success_url = success_url
        self.cancel_url = cancel_url
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def initiate(
        self, *, booking_request: BookingRequest, amount: Decimal | int | float | str
    ) -> PaymentSession:
        """
        Phase 1: create a payment session

        Args:
            booking_request: Locally validated request
            amount: Advisory total in major units (the backend recomputes it)

        Raises:
            PaymentInitError: session could not be created
            SeatUnavailableError: a seat was taken meanwhile (caller must reconcile)
        """
        amount_minor = to_minor_units(amount)
        if amount_minor <= 0:
            raise PaymentInitError('Payment amount must be positive')
        if not booking_request.user_email:
            raise PaymentInitError('An email address is required to pay')

        with self.tracer.start_as_current_span(
            'bridge.initiate_payment',
            attributes={
                'showtime.id': booking_request.showtime_id,
                'payment.amount_minor': amount_minor,
            },
        ):
            try:
                response = await self.booking_gateway.create_checkout_session(
                    request=booking_request, amount_minor=amount_minor
                )
            except SeatUnavailableError:
                raise
            except CustomBaseError as e:
                raise PaymentInitError(f'Failed to create checkout session: {e.message}') from e

            client_secret = response.get('client_secret')
            session_id = response.get('session_id')
            if not client_secret:
                raise PaymentInitError('Invalid response from payment server')
            if not session_id:
                raise PaymentInitError('Payment server did not return a session id')

            session = PaymentSession(
                client_secret=client_secret,
                session_id=session_id,
                amount_minor=amount_minor,
                return_url=self.build_return_url(session_id),
                publishable_key=response.get('publishable_key'),
            )
            Logger.base.info(
                f'[PAYMENT] Session {session_id} created for showtime '
                f'{booking_request.showtime_id} ({amount_minor} minor units)'
            )
            return session

    def build_return_url(self, session_id: str) -> str:
        return str(httpx.URL(self.success_url).copy_merge_params({SESSION_ID_PARAM: session_id}))

    @Logger.io
    async def verify(self, *, session_id: str) -> BookingResult:
        """
        Phase 2: confirm the booking after the redirect back

        Raises:
            ValidationError: no session id
            VerificationError: could not confirm (pending=True while still processing)
            PaymentDeclinedError: the provider declined the payment
        """
        if not session_id:
            raise ValidationError('Missing payment session id')

        with self.tracer.start_as_current_span(
            'bridge.verify_payment', attributes={'payment.session_id': session_id}
        ):
            try:
                result = await self.booking_gateway.verify_payment(session_id=session_id)
            except CustomBaseError as e:
                raise VerificationError(f"We couldn't confirm your payment: {e.message}") from e

            if result.status == BookingStatus.PENDING_PAYMENT:
                raise VerificationError(
                    "We couldn't confirm your payment yet. It is still being processed.",
                    pending=True,
                )
            if result.status == BookingStatus.FAILED:
                raise PaymentDeclinedError('Your payment was declined. No booking was made.')

            Logger.base.info(f'[PAYMENT] Session {session_id} confirmed booking {result.booking_id}')
            return result

    def parse_return(self, url: str) -> PaymentReturn:
        """Classify a redirect-back URL as success (with session id) or cancellation."""
        returned = httpx.URL(url)
        if returned.path == httpx.URL(self.cancel_url).path:
            return self.cancel()
        if returned.path == httpx.URL(self.success_url).path:
            session_id = returned.params.get(SESSION_ID_PARAM)
            if not session_id:
                raise ValidationError('Payment return URL has no session_id')
            return PaymentReturn(outcome=PaymentOutcome.SUCCESS, session_id=session_id)
        raise ValidationError(f'Not a payment return URL: {returned.path}')

    def cancel(self) -> PaymentReturn:
        """The user backed out at the provider: a normal outcome, not an error to retry."""
        Logger.base.info('[PAYMENT] User cancelled at the payment provider')
        return PaymentReturn.cancelled()
