"""
Backend response normalization

One parse function per endpoint. Each turns the backend's loosely shaped JSON
(camelCase or snake_case keys, price under several names, lists bare or wrapped)
into canonical domain objects, or raises MalformedResponseError.
"""

from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError as PydanticValidationError,
    field_validator,
)

from filmpass.platform.exception.exceptions import MalformedResponseError
from filmpass.service.booking.domain.entity.booking_result import BookingResult
from filmpass.service.booking.domain.entity.seat_entity import Seat
from filmpass.service.booking.domain.value_object.money import to_major_units
from filmpass.service.booking.domain.value_object.seat_map import SeatMap
from filmpass.service.catalog.domain.catalog_entity import Movie, MovieDetails, Showtime, Theater
from filmpass.service.shared_kernel.domain.enum import BookingStatus, SeatStatus


# Backend status spellings seen in the wild -> canonical status
_BOOKING_STATUS_ALIASES = {
    'PAID': BookingStatus.CONFIRMED,
    'COMPLETED': BookingStatus.CONFIRMED,
    'SUCCEEDED': BookingStatus.CONFIRMED,
    'PENDING': BookingStatus.PENDING_PAYMENT,
    'UNPAID': BookingStatus.PENDING_PAYMENT,
    'PROCESSING': BookingStatus.PENDING_PAYMENT,
    'CANCELLED': BookingStatus.FAILED,
    'DECLINED': BookingStatus.FAILED,
}


class _Payload(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)


class SeatPayload(_Payload):
    id: int
    row_label: str = Field(validation_alias=AliasChoices('row_label', 'rowLabel', 'row'))
    seat_number: int = Field(
        gt=0, validation_alias=AliasChoices('seat_number', 'seatNumber', 'number')
    )
    status: SeatStatus = SeatStatus.AVAILABLE

    @field_validator('row_label', mode='before')
    @classmethod
    def strip_row_label(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator('status', mode='before')
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v


class BookingResultPayload(_Payload):
    booking_id: str = Field(validation_alias=AliasChoices('bookingId', 'booking_id', 'id'))
    total: Any = Field(validation_alias=AliasChoices('total', 'totalAmount', 'total_amount'))
    status: BookingStatus = BookingStatus.CONFIRMED
    movie_title: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('movieTitle', 'movie_title')
    )
    showtime: Optional[str] = None
    theater_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('theaterName', 'theater_name')
    )
    seats: Optional[int | list[int]] = None

    @field_validator('booking_id', mode='before')
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v

    @field_validator('status', mode='before')
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        if v is None:
            return BookingStatus.CONFIRMED
        if isinstance(v, str):
            upper = v.strip().upper()
            return _BOOKING_STATUS_ALIASES.get(upper, upper)
        return v

    @field_validator('showtime', mode='before')
    @classmethod
    def stringify_showtime(cls, v: Any) -> Any:
        return None if v is None else str(v)


class CheckoutSessionPayload(_Payload):
    client_secret: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('clientSecret', 'client_secret')
    )
    publishable_key: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('publishableKey', 'publishable_key')
    )
    session_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('sessionId', 'session_id', 'id')
    )


class TheaterPayload(_Payload):
    id: int
    name: str
    location: Optional[str] = None


class MoviePayload(_Payload):
    id: int
    title: str
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(
        default=None, validation_alias=AliasChoices('duration_minutes', 'durationMinutes', 'duration')
    )


class ShowtimePayload(_Payload):
    id: int
    show_date: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('show_date', 'showDate', 'date')
    )
    start_time: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('start_time', 'startTime', 'time')
    )
    theater_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('theater_name', 'theaterName')
    )
    theater_location: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('theater_location', 'theaterLocation')
    )
    price: Any = Field(
        default=None,
        validation_alias=AliasChoices('price', 'ticket_price', 'price_per_ticket', 'ticketPrice'),
    )


def _validate(adapter_type: Any, data: Any, endpoint: str) -> Any:
    try:
        return TypeAdapter(adapter_type).validate_python(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = '.'.join(str(part) for part in first['loc'])
        raise MalformedResponseError(
            f'Unexpected {endpoint} response: {location} {first["msg"]} ({e.error_count()} errors)'
        )


def _unwrap_list(payload: Any, endpoint: str, *keys: str) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in (*keys, 'items', 'data', 'results'):
            value = payload.get(key)
            if isinstance(value, list):
                return value
            if isinstance(value, dict):
                # e.g. {"showtimes": {"items": [...]}}
                return _unwrap_list(value, endpoint)
    raise MalformedResponseError(f'Unexpected {endpoint} response: expected a list')


def parse_seat_map(showtime_id: int, payload: Any) -> SeatMap:
    seats = _validate(list[SeatPayload], _unwrap_list(payload, 'seats', 'seats'), 'seats')
    return SeatMap(
        showtime_id=showtime_id,
        seats=tuple(
            Seat(
                id=seat.id,
                row_label=seat.row_label,
                seat_number=seat.seat_number,
                status=seat.status,
            )
            for seat in seats
        ),
    )


def parse_booking_result(payload: Any, *, endpoint: str = 'booking') -> BookingResult:
    parsed: BookingResultPayload = _validate(BookingResultPayload, payload, endpoint)
    return BookingResult(
        booking_id=parsed.booking_id,
        total_amount=to_major_units(parsed.total),
        status=parsed.status,
        movie_title=parsed.movie_title,
        showtime=parsed.showtime,
        theater_name=parsed.theater_name,
        seats=parsed.seats,
    )


def parse_verification(payload: Any) -> BookingResult:
    return parse_booking_result(payload, endpoint='verify-payment')


def parse_checkout_session(payload: Any) -> dict[str, Any]:
    parsed: CheckoutSessionPayload = _validate(CheckoutSessionPayload, payload, 'checkout-session')
    return parsed.model_dump()


def parse_theaters(payload: Any) -> list[Theater]:
    theaters = _validate(list[TheaterPayload], _unwrap_list(payload, 'theaters', 'theaters'), 'theaters')
    return [Theater(id=t.id, name=t.name, location=t.location) for t in theaters]


def _to_movie(parsed: MoviePayload) -> Movie:
    return Movie(
        id=parsed.id,
        title=parsed.title,
        description=parsed.description,
        duration_minutes=parsed.duration_minutes,
    )


def parse_movies(payload: Any) -> list[Movie]:
    movies = _validate(list[MoviePayload], _unwrap_list(payload, 'movies', 'movies'), 'movies')
    return [_to_movie(movie) for movie in movies]


def parse_movie_details(payload: Any) -> MovieDetails:
    if not isinstance(payload, dict):
        raise MalformedResponseError('Unexpected movie response: expected an object')

    movie_data = payload.get('movie', payload)
    movie: MoviePayload = _validate(MoviePayload, movie_data, 'movie')

    raw_showtimes = payload.get('showtimes')
    if raw_showtimes is None and isinstance(movie_data, dict):
        raw_showtimes = movie_data.get('showtimes')
    showtime_items = [] if raw_showtimes is None else _unwrap_list(raw_showtimes, 'movie')
    showtimes: list[ShowtimePayload] = _validate(list[ShowtimePayload], showtime_items, 'movie')

    return MovieDetails(
        movie=_to_movie(movie),
        showtimes=tuple(
            Showtime(
                id=s.id,
                show_date=s.show_date,
                start_time=s.start_time,
                theater_name=s.theater_name,
                theater_location=s.theater_location,
                price=None if s.price is None else to_major_units(s.price),
            )
            for s in showtimes
        ),
    )
