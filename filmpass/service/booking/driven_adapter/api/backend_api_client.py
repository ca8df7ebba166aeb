"""
Backend REST API client

Single httpx.AsyncClient shared by the booking, catalog and auth contexts. Every
response goes through response_parser; every failure leaves here as one of the
CustomBaseError subclasses:

    transport failure / timeout / 5xx  -> NetworkError
    401 / 403                          -> AuthError
    404                                -> NotFoundError
    409 / 410, or "already booked"     -> SeatUnavailableError
    any other non-2xx                  -> BookingRejectedError
    unparseable 2xx body               -> MalformedResponseError

Error text is the JSON `error` field when the backend sends one, otherwise the
HTTP status line ("503 Service Unavailable").
"""

from typing import Any, Optional

import httpx
import orjson

from filmpass.platform.constant.route_constant import (
    AUTH_LOGIN,
    AUTH_ME,
    AUTH_REGISTER,
    BOOKING_CREATE,
    MOVIE_GET,
    MOVIE_LIST,
    PAYMENT_CHECKOUT_SESSION,
    PAYMENT_VERIFY,
    SHOWTIME_SEATS,
    THEATER_LIST,
)
from filmpass.platform.exception.exceptions import (
    AuthError,
    BookingRejectedError,
    CustomBaseError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    SeatUnavailableError,
)
from filmpass.platform.logging.loguru_io import Logger
from filmpass.service.booking.app.interface.i_booking_api_gateway import IBookingApiGateway
from filmpass.service.booking.domain.entity.booking_request import BookingRequest
from filmpass.service.booking.domain.entity.booking_result import BookingResult
from filmpass.service.booking.domain.value_object.seat_map import SeatMap
from filmpass.service.booking.driven_adapter.api.response_parser import (
    parse_booking_result,
    parse_checkout_session,
    parse_movie_details,
    parse_movies,
    parse_seat_map,
    parse_theaters,
    parse_verification,
)
from filmpass.service.catalog.app.interface.i_catalog_gateway import ICatalogGateway
from filmpass.service.catalog.domain.catalog_entity import Movie, MovieDetails, Theater
from filmpass.service.identity.app.interface.i_auth_gateway import IAuthGateway
from filmpass.service.identity.app.interface.i_session_store import ISessionStore


IDEMPOTENCY_HEADER = 'Idempotency-Key'
SEAT_CONFLICT_MARKERS = ('already booked', 'unavailable', 'not available', 'already taken')

# Sentinel: attach whatever token the session store holds at send time
_FROM_SESSION = object()


def map_error_response(response: httpx.Response) -> CustomBaseError:
    """Translate a non-2xx response into the error taxonomy."""
    status_code = response.status_code
    message = extract_error_message(response)

    if status_code >= 500:
        return NetworkError(message, status_code)
    if status_code in (401, 403):
        return AuthError(message, status_code)
    if status_code == 404:
        return NotFoundError(message)
    if status_code in (409, 410):
        return SeatUnavailableError(message)
    if any(marker in message.lower() for marker in SEAT_CONFLICT_MARKERS):
        return SeatUnavailableError(message)
    return BookingRejectedError(message, status_code)


def extract_error_message(response: httpx.Response) -> str:
    try:
        body = orjson.loads(response.content) if response.content else None
    except orjson.JSONDecodeError:
        body = None

    if isinstance(body, dict):
        for key in ('error', 'message'):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return f'{response.status_code} {response.reason_phrase}'.strip()


class BackendApiClient(IBookingApiGateway, ICatalogGateway, IAuthGateway):
    def __init__(
        self,
        *,
        base_url: str,
        session_store: ISessionStore,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.session_store = session_store
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={'Accept': 'application/json'},
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    # ------------------------------------------------------------------ booking

    @Logger.io
    async def get_seats(self, *, showtime_id: int) -> SeatMap:
        payload = await self._request('GET', SHOWTIME_SEATS.format(showtime_id=showtime_id))
        return parse_seat_map(showtime_id, payload)

    @Logger.io
    async def create_booking(self, *, request: BookingRequest) -> BookingResult:
        payload = await self._request(
            'POST',
            BOOKING_CREATE,
            json=request.to_payload(),
            idempotency_key=request.idempotency_key,
            token=request.credential,
        )
        return parse_booking_result(payload)

    @Logger.io
    async def create_checkout_session(
        self, *, request: BookingRequest, amount_minor: int
    ) -> dict[str, Any]:
        body = request.to_payload() | {'amount': amount_minor}
        payload = await self._request(
            'POST',
            PAYMENT_CHECKOUT_SESSION,
            json=body,
            idempotency_key=request.idempotency_key,
            token=request.credential,
        )
        return parse_checkout_session(payload)

    @Logger.io
    async def verify_payment(self, *, session_id: str) -> BookingResult:
        payload = await self._request('GET', PAYMENT_VERIFY, params={'session_id': session_id})
        return parse_verification(payload)

    # ------------------------------------------------------------------ catalog

    @Logger.io
    async def list_theaters(self) -> list[Theater]:
        return parse_theaters(await self._request('GET', THEATER_LIST))

    @Logger.io
    async def list_movies(self) -> list[Movie]:
        return parse_movies(await self._request('GET', MOVIE_LIST))

    @Logger.io
    async def get_movie_details(self, *, movie_id: int) -> MovieDetails:
        return parse_movie_details(await self._request('GET', MOVIE_GET.format(movie_id=movie_id)))

    # --------------------------------------------------------------------- auth

    @Logger.io
    async def login(self, *, email: str, password: str) -> dict[str, Any]:
        payload = await self._request(
            'POST', AUTH_LOGIN, json={'email': email, 'password': password}, token=None
        )
        return self._require_object(payload, 'login')

    @Logger.io
    async def register(self, *, name: str, email: str, password: str) -> dict[str, Any]:
        payload = await self._request(
            'POST',
            AUTH_REGISTER,
            json={'name': name, 'email': email, 'password': password},
            token=None,
        )
        return self._require_object(payload, 'register')

    @Logger.io
    async def fetch_me(self) -> dict[str, Any]:
        payload = self._require_object(await self._request('GET', AUTH_ME), 'me')
        user = payload.get('user', payload)
        return self._require_object(user, 'me')

    # ---------------------------------------------------------------- transport

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
        token: Any = _FROM_SESSION,
    ) -> Any:
        headers: dict[str, str] = {}
        bearer = self.session_store.get_token() if token is _FROM_SESSION else token
        if bearer:
            headers['Authorization'] = f'Bearer {bearer}'
        if idempotency_key:
            headers[IDEMPOTENCY_HEADER] = idempotency_key

        content: Optional[bytes] = None
        if json is not None:
            content = orjson.dumps(json)
            headers['Content-Type'] = 'application/json'

        try:
            response = await self.client.request(
                method, path, content=content, params=params, headers=headers
            )
        except httpx.TimeoutException as e:
            raise NetworkError(f'Request timed out: {method} {path}') from e
        except httpx.HTTPError as e:
            raise NetworkError(f'Network error: {e}') from e

        if not response.is_success:
            error = map_error_response(response)
            Logger.base.warning(
                f'[API] {method} {path} -> {response.status_code}: {error.message}'
            )
            raise error
        return self._decode(response, path)

    @staticmethod
    def _decode(response: httpx.Response, path: str) -> Any:
        if not response.content:
            raise MalformedResponseError(f'Empty response body from {path}')
        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise MalformedResponseError(f'Invalid JSON from {path}: {e}') from e

    @staticmethod
    def _require_object(payload: Any, endpoint: str) -> dict[str, Any]:
        if not isinstance(payload, dict):
            raise MalformedResponseError(f'Unexpected {endpoint} response: expected an object')
        return payload
