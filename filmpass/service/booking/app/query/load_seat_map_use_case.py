from opentelemetry import trace

from filmpass.platform.logging.loguru_io import Logger
from filmpass.service.booking.app.interface.i_booking_api_gateway import IBookingApiGateway
from filmpass.service.booking.domain.value_object.seat_map import SeatMap


class LoadSeatMapUseCase:
    """
    Load the seat map of one showtime

    A plain read: no caching, every call goes to the backend so the result reflects
    current bookings.

    Raises:
        NetworkError: transport failure or 5xx
        NotFoundError: unknown showtime
    """

    def __init__(self, *, booking_gateway: IBookingApiGateway) -> None:
        self.booking_gateway = booking_gateway
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def load(self, *, showtime_id: int) -> SeatMap:
        with self.tracer.start_as_current_span(
            'use_case.load_seat_map', attributes={'showtime.id': showtime_id}
        ):
            seat_map = await self.booking_gateway.get_seats(showtime_id=showtime_id)
            Logger.base.info(
                f'[SEAT-MAP] showtime={showtime_id} seats={len(seat_map)} '
                f'booked={len(seat_map.booked_ids())}'
            )
            return seat_map
