"""
Landing routes for the payment provider redirect

The provider sends the user back with nothing but `session_id` in the query
string; the booking is confirmed from that alone.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends
from opentelemetry import trace

from filmpass.platform.config.di import Container
from filmpass.platform.logging.loguru_io import Logger
from filmpass.service.booking.app.command.checkout_payment_bridge import CheckoutPaymentBridge
from filmpass.service.booking.driving_adapter.http_controller.schema.payment_return_schema import (
    PaymentCancelResponse,
    PaymentSuccessResponse,
)


SUCCESS_MESSAGE = 'Payment successful. Your booking is confirmed.'

router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('/success', response_model=PaymentSuccessResponse)
@Logger.io
@inject
async def payment_success(
    session_id: str = '',
    bridge: CheckoutPaymentBridge = Depends(Provide[Container.checkout_payment_bridge]),
) -> PaymentSuccessResponse:
    with tracer.start_as_current_span('controller.payment_success') as span:
        span.set_attribute('payment.session_id', session_id)
        # Missing session_id surfaces as ValidationError from the bridge
        result = await bridge.verify(session_id=session_id)
        return PaymentSuccessResponse(
            booking_id=result.booking_id,
            status=result.status.value,
            total_amount=str(result.total_amount),
            display_total=result.display_total,
            movie_title=result.movie_title,
            showtime=result.showtime,
            theater_name=result.theater_name,
            seats=result.seats,
            message=SUCCESS_MESSAGE,
        )


@router.get('/cancel', response_model=PaymentCancelResponse)
@Logger.io
@inject
async def payment_cancel(
    bridge: CheckoutPaymentBridge = Depends(Provide[Container.checkout_payment_bridge]),
) -> PaymentCancelResponse:
    outcome = bridge.cancel()
    return PaymentCancelResponse(message=outcome.message or '')
