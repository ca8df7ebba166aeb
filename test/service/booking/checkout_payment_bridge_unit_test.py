"""
Unit tests for CheckoutPaymentBridge

Phase 1 (initiate) creates the payment session and the return URL; phase 2
(verify) confirms the booking from session_id alone after the redirect.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from filmpass.platform.exception.exceptions import (
    NetworkError,
    NotFoundError,
    PaymentDeclinedError,
    PaymentInitError,
    SeatUnavailableError,
    ValidationError,
    VerificationError,
)
from filmpass.service.booking.app.command.checkout_payment_bridge import CheckoutPaymentBridge
from filmpass.service.booking.domain.entity.booking_request import BookingRequest
from filmpass.service.booking.domain.entity.booking_result import BookingResult
from filmpass.service.booking.domain.enum.payment_outcome import PaymentOutcome
from filmpass.service.booking.domain.value_object.payment_return import CANCELLED_MESSAGE
from filmpass.service.shared_kernel.domain.enum import BookingStatus, TicketType


SUCCESS_URL = 'http://app.test/payment/success'
CANCEL_URL = 'http://app.test/payment/cancel'


def verified(status: BookingStatus = BookingStatus.CONFIRMED) -> BookingResult:
    return BookingResult(
        booking_id='B-77',
        total_amount=Decimal('25.00'),
        status=status,
        movie_title='Metropolis',
        showtime='2025-01-10 19:30',
        theater_name='Odeon',
        seats=[1, 3],
    )


@pytest.fixture
def mock_gateway() -> AsyncMock:
    gateway = AsyncMock()
    gateway.create_checkout_session = AsyncMock(
        return_value={
            'client_secret': 'cs_secret',
            'publishable_key': 'pk_test',
            'session_id': 'cs_1',
        }
    )
    gateway.verify_payment = AsyncMock(return_value=verified())
    return gateway


@pytest.fixture
def bridge(mock_gateway: AsyncMock) -> CheckoutPaymentBridge:
    return CheckoutPaymentBridge(
        booking_gateway=mock_gateway, success_url=SUCCESS_URL, cancel_url=CANCEL_URL
    )


@pytest.fixture
def booking_request() -> BookingRequest:
    return BookingRequest(
        showtime_id=1,
        ticket_type=TicketType.ADULT,
        idempotency_key='key-1',
        seat_ids=(1, 3),
        user_email='guest@filmpass.test',
        user_name='Guest',
    )


@pytest.mark.unit
class TestInitiate:
    @pytest.mark.asyncio
    async def test_initiate__returns_session_with_return_url(
        self, bridge: CheckoutPaymentBridge, mock_gateway: AsyncMock, booking_request: BookingRequest
    ) -> None:
        """Test the return URL embeds session_id and the amount goes out in minor units"""
        # Act
        session = await bridge.initiate(booking_request=booking_request, amount=Decimal('25.00'))

        # Assert
        assert session.session_id == 'cs_1'
        assert session.client_secret == 'cs_secret'
        assert session.publishable_key == 'pk_test'
        assert session.amount_minor == 2500
        assert session.return_url == f'{SUCCESS_URL}?session_id=cs_1'
        mock_gateway.create_checkout_session.assert_awaited_once_with(
            request=booking_request, amount_minor=2500
        )

    @pytest.mark.asyncio
    async def test_initiate_non_positive_amount__no_network_call(
        self, bridge: CheckoutPaymentBridge, mock_gateway: AsyncMock, booking_request: BookingRequest
    ) -> None:
        """Test a zero amount is rejected before contacting the backend"""
        with pytest.raises(PaymentInitError):
            await bridge.initiate(booking_request=booking_request, amount=0)

        mock_gateway.create_checkout_session.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_initiate_missing_client_secret__raises_payment_init_error(
        self, bridge: CheckoutPaymentBridge, mock_gateway: AsyncMock, booking_request: BookingRequest
    ) -> None:
        """Test an incomplete session response is a payment init failure"""
        # Arrange
        mock_gateway.create_checkout_session.return_value = {
            'client_secret': None,
            'publishable_key': None,
            'session_id': 'cs_1',
        }

        # Act & Assert
        with pytest.raises(PaymentInitError) as exc_info:
            await bridge.initiate(booking_request=booking_request, amount='25.00')

        assert exc_info.value.message == 'Invalid response from payment server'

    @pytest.mark.asyncio
    async def test_initiate_backend_error__wrapped_as_payment_init_error(
        self, bridge: CheckoutPaymentBridge, mock_gateway: AsyncMock, booking_request: BookingRequest
    ) -> None:
        """Test transport failures surface as PaymentInitError"""
        # Arrange
        mock_gateway.create_checkout_session.side_effect = NetworkError('503 Service Unavailable')

        # Act & Assert
        with pytest.raises(PaymentInitError) as exc_info:
            await bridge.initiate(booking_request=booking_request, amount=Decimal('25'))

        assert '503 Service Unavailable' in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, NetworkError)

    @pytest.mark.asyncio
    async def test_initiate_seat_conflict__propagates_unwrapped(
        self, bridge: CheckoutPaymentBridge, mock_gateway: AsyncMock, booking_request: BookingRequest
    ) -> None:
        """Test a seat conflict stays a SeatUnavailableError so the caller reconciles"""
        # Arrange
        mock_gateway.create_checkout_session.side_effect = SeatUnavailableError('Seat A3 already booked')

        # Act & Assert
        with pytest.raises(SeatUnavailableError):
            await bridge.initiate(booking_request=booking_request, amount=Decimal('25'))


@pytest.mark.unit
class TestVerify:
    @pytest.mark.asyncio
    async def test_verify_twice__same_booking(
        self, bridge: CheckoutPaymentBridge, mock_gateway: AsyncMock
    ) -> None:
        """Test verifying the same session twice yields the same booking id"""
        # Act
        first = await bridge.verify(session_id='cs_1')
        second = await bridge.verify(session_id='cs_1')

        # Assert
        assert first.booking_id == second.booking_id == 'B-77'
        assert first.display_total == '€25.00'
        assert mock_gateway.verify_payment.await_count == 2

    @pytest.mark.asyncio
    async def test_verify_missing_session_id__raises_validation_error(
        self, bridge: CheckoutPaymentBridge, mock_gateway: AsyncMock
    ) -> None:
        """Test verification needs the session id from the return URL"""
        with pytest.raises(ValidationError):
            await bridge.verify(session_id='')

        mock_gateway.verify_payment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_verify_pending__raises_pending_verification_error(
        self, bridge: CheckoutPaymentBridge, mock_gateway: AsyncMock
    ) -> None:
        """Test a still-processing payment is distinguishable from a decline"""
        # Arrange
        mock_gateway.verify_payment.return_value = verified(BookingStatus.PENDING_PAYMENT)

        # Act & Assert
        with pytest.raises(VerificationError) as exc_info:
            await bridge.verify(session_id='cs_1')

        assert exc_info.value.pending is True

    @pytest.mark.asyncio
    async def test_verify_declined__raises_payment_declined(
        self, bridge: CheckoutPaymentBridge, mock_gateway: AsyncMock
    ) -> None:
        """Test a FAILED status is a decline"""
        # Arrange
        mock_gateway.verify_payment.return_value = verified(BookingStatus.FAILED)

        # Act & Assert
        with pytest.raises(PaymentDeclinedError):
            await bridge.verify(session_id='cs_1')

    @pytest.mark.asyncio
    async def test_verify_backend_error__wrapped_as_verification_error(
        self, bridge: CheckoutPaymentBridge, mock_gateway: AsyncMock
    ) -> None:
        """Test an unknown session surfaces as a non-pending verification failure"""
        # Arrange
        mock_gateway.verify_payment.side_effect = NotFoundError('Session not found')

        # Act & Assert
        with pytest.raises(VerificationError) as exc_info:
            await bridge.verify(session_id='cs_unknown')

        assert exc_info.value.pending is False
        assert 'Session not found' in exc_info.value.message


@pytest.mark.unit
class TestPaymentReturn:
    def test_parse_return_success__extracts_session_id(self, bridge: CheckoutPaymentBridge) -> None:
        """Test the success redirect carries the session id"""
        # Act
        returned = bridge.parse_return(f'{SUCCESS_URL}?session_id=cs_1')

        # Assert
        assert returned.outcome == PaymentOutcome.SUCCESS
        assert returned.session_id == 'cs_1'
        assert returned.needs_verification

    def test_parse_return_cancel__is_normal_outcome(self, bridge: CheckoutPaymentBridge) -> None:
        """Test a cancellation is a plain outcome with a message"""
        # Act
        returned = bridge.parse_return(CANCEL_URL)

        # Assert
        assert returned.outcome == PaymentOutcome.CANCELLED
        assert returned.message == CANCELLED_MESSAGE
        assert not returned.needs_verification

    def test_parse_return_success_without_session__raises_validation_error(
        self, bridge: CheckoutPaymentBridge
    ) -> None:
        with pytest.raises(ValidationError):
            bridge.parse_return(SUCCESS_URL)

    def test_build_return_url__keeps_existing_query(self) -> None:
        """Test session_id is merged into a success URL that already has parameters"""
        # Arrange
        bridge = CheckoutPaymentBridge(
            booking_gateway=AsyncMock(),
            success_url=f'{SUCCESS_URL}?lang=en',
            cancel_url=CANCEL_URL,
        )

        # Act
        url = bridge.build_return_url('cs_9')

        # Assert
        assert url == f'{SUCCESS_URL}?lang=en&session_id=cs_9'
