import asyncio
from collections.abc import Awaitable
from decimal import Decimal
from typing import Any, Callable, Optional, TypeVar

import attrs
from opentelemetry import trace
import uuid_utils

from filmpass.platform.exception.exceptions import (
    BookingRejectedError,
    CustomBaseError,
    NetworkError,
    ValidationError,
)
from filmpass.platform.logging.loguru_io import Logger
from filmpass.service.booking.app.command.checkout_payment_bridge import CheckoutPaymentBridge
from filmpass.service.booking.app.dto.selection_snapshot import SelectionSnapshot
from filmpass.service.booking.app.interface.i_booking_api_gateway import IBookingApiGateway
from filmpass.service.booking.app.query.load_seat_map_use_case import LoadSeatMapUseCase
from filmpass.service.booking.domain.entity.booking_request import BookingRequest
from filmpass.service.booking.domain.entity.booking_result import BookingResult
from filmpass.service.booking.domain.entity.payment_session import PaymentSession
from filmpass.service.booking.domain.entity.seat_entity import is_bookable
from filmpass.service.booking.domain.entity.selection_entity import Selection
from filmpass.service.booking.domain.enum.selection_state import SelectionState
from filmpass.service.booking.domain.value_object.guest_contact import GuestContact
from filmpass.service.booking.domain.value_object.money import to_major_units
from filmpass.service.booking.domain.value_object.seat_map import SeatMap
from filmpass.service.identity.app.interface.i_session_store import ISessionStore
from filmpass.service.shared_kernel.domain.enum import BookingStatus, TicketType


Listener = Callable[[SelectionSnapshot], None]
_T = TypeVar('_T')


class SeatSelectionStateMachine:
    """
    Lifecycle of one booking attempt

    IDLE -> LOADING_SEATS -> SELECTING -> SUBMITTING -> CONFIRMED | AWAITING_PAYMENT | FAILED

    Selection is optimistic, confirmation is the backend's. When an attempt fails the
    seat map is re-fetched and the selection loses every seat the fresh map reports
    as BOOKED, then the machine is back in SELECTING so the user can retry.

    Runs on a single event loop: each transition is applied between awaits. Responses
    are tagged with the generation (bumped on every showtime change) and the attempt
    number current when they were issued; a response whose tags no longer match is
    discarded instead of applied.
    """

    def __init__(
        self,
        *,
        seat_map_loader: LoadSeatMapUseCase,
        booking_gateway: IBookingApiGateway,
        session_store: ISessionStore,
        payment_bridge: Optional[CheckoutPaymentBridge] = None,
    ) -> None:
        self.seat_map_loader = seat_map_loader
        self.booking_gateway = booking_gateway
        self.session_store = session_store
        self.payment_bridge = payment_bridge
        self.tracer = trace.get_tracer(__name__)

        self._state = SelectionState.IDLE
        self._showtime_id: Optional[int] = None
        self._ticket_price: Optional[Decimal] = None
        self._seat_map: Optional[SeatMap] = None
        self._selection = Selection.empty(None)
        self._error: Optional[CustomBaseError] = None
        self._result: Optional[BookingResult] = None
        self._payment_session: Optional[PaymentSession] = None
        self._load_failed = False
        self._pending_load: Optional[asyncio.Future[Optional[SeatMap]]] = None
        self._generation = 0
        self._attempt = 0
        # (request fingerprint, idempotency key) of the last attempt lost to a NetworkError
        self._retry_key: Optional[tuple[tuple[Any, ...], str]] = None
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------ views

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def showtime_id(self) -> Optional[int]:
        return self._showtime_id

    @property
    def seat_map(self) -> Optional[SeatMap]:
        return self._seat_map

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def error(self) -> Optional[CustomBaseError]:
        return self._error

    @property
    def result(self) -> Optional[BookingResult]:
        return self._result

    @property
    def payment_session(self) -> Optional[PaymentSession]:
        return self._payment_session

    @property
    def advisory_total(self) -> Optional[Decimal]:
        """Display-only: ticket price x selected seats. The backend's total is authoritative."""
        if self._ticket_price is None:
            return None
        return self._ticket_price * len(self._selection)

    def snapshot(self) -> SelectionSnapshot:
        return SelectionSnapshot(
            state=self._state,
            showtime_id=self._showtime_id,
            seat_map=self._seat_map,
            selected_seat_ids=self._selection.selected_seat_ids,
            ticket_type=self._selection.ticket_type,
            error=self._error,
            result=self._result,
            payment_session=self._payment_session,
            advisory_total=self.advisory_total,
        )

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ------------------------------------------------------------ transitions

    @Logger.io
    async def choose_showtime(
        self, showtime_id: int, *, ticket_price: Any = None
    ) -> Optional[SeatMap]:
        """
        Switch to a showtime and load its seat map

        Choosing the showtime whose seat map is already loading joins that load.

        Returns:
            The loaded seat map, or None when the load failed (see `error`) or was
            superseded by a later showtime change.
        """
        if ticket_price is not None:
            self._ticket_price = to_major_units(ticket_price)

        if showtime_id == self._showtime_id and not self._load_failed:
            if self._state == SelectionState.LOADING_SEATS and self._pending_load is not None:
                return await asyncio.shield(self._pending_load)
            if self._state == SelectionState.SELECTING:
                return self._seat_map

        if ticket_price is None and showtime_id != self._showtime_id:
            self._ticket_price = None

        self._generation += 1
        generation = self._generation
        self._showtime_id = showtime_id
        self._selection = Selection.empty(showtime_id, self._selection.ticket_type)
        self._seat_map = None
        self._error = None
        self._result = None
        self._payment_session = None
        self._retry_key = None
        self._load_failed = False
        self._state = SelectionState.LOADING_SEATS
        self._notify()

        pending: asyncio.Future[Optional[SeatMap]] = asyncio.get_running_loop().create_future()
        self._pending_load = pending
        try:
            seat_map = await self._load_seat_map(showtime_id, generation)
        except BaseException:
            pending.cancel()
            raise
        else:
            pending.set_result(seat_map)
        finally:
            if self._pending_load is pending:
                self._pending_load = None
        return seat_map

    async def _load_seat_map(self, showtime_id: int, generation: int) -> Optional[SeatMap]:
        try:
            seat_map = await self.seat_map_loader.load(showtime_id=showtime_id)
        except CustomBaseError as e:
            if self._is_stale(generation):
                self._log_discard('seat map error', showtime_id)
                return None
            self._seat_map = SeatMap.empty(showtime_id)
            self._error = e
            self._load_failed = True
            self._state = SelectionState.SELECTING
            self._notify()
            return None

        if self._is_stale(generation):
            self._log_discard('seat map', showtime_id)
            return None

        self._seat_map = seat_map
        self._state = SelectionState.SELECTING
        self._notify()
        return seat_map

    @Logger.io
    def toggle_seat(self, seat_id: int) -> Selection:
        """Add or remove a seat. BOOKED seats are ignored."""
        seat_map = self._require_selecting('select seats')
        seat = seat_map.get(seat_id)
        if seat is None:
            raise ValidationError(f'Seat {seat_id} is not part of showtime {self._showtime_id}')
        if not is_bookable(seat):
            return self._selection

        self._selection = self._selection.toggled(seat_id)
        self._notify()
        return self._selection

    @Logger.io
    def set_ticket_type(self, ticket_type: TicketType) -> Selection:
        self._require_selecting('change the ticket type')
        self._selection = self._selection.with_ticket_type(TicketType(ticket_type))
        self._notify()
        return self._selection

    @Logger.io
    def reset(self) -> None:
        """Back to IDLE; anything still in flight is discarded on arrival."""
        self._generation += 1
        self._state = SelectionState.IDLE
        self._showtime_id = None
        self._ticket_price = None
        self._seat_map = None
        self._selection = Selection.empty(None, self._selection.ticket_type)
        self._error = None
        self._result = None
        self._payment_session = None
        self._retry_key = None
        self._load_failed = False
        self._notify()

    @Logger.io
    async def submit(self, guest: Optional[GuestContact] = None) -> Optional[BookingResult]:
        """
        Book the selected seats directly

        Returns:
            The confirmed booking, or None if the showtime changed while in flight.

        Raises:
            ValidationError: before any network call (empty selection, stale seat,
                guest without email, wrong state)
            SeatUnavailableError / NetworkError / AuthError / BookingRejectedError:
                after the seat map was refreshed and the selection pruned
        """
        request = self._prepare_request(guest)
        with self.tracer.start_as_current_span(
            'state_machine.submit',
            attributes={'showtime.id': request.showtime_id, 'seat.count': request.quantity},
        ):
            result = await self._run_attempt(request, self._create_booking)
            if result is None:
                return None

            self._result = result
            self._state = SelectionState.CONFIRMED
            self._notify()
            Logger.base.info(
                f'[BOOKING] Booking {result.booking_id} {result.status} for showtime '
                f'{request.showtime_id}, total {result.display_total}'
            )
            await self._refresh_after_booking(request.showtime_id, self._generation)
            return result

    @Logger.io
    async def proceed_to_payment(
        self, guest: Optional[GuestContact] = None
    ) -> Optional[PaymentSession]:
        """
        Route the selection through the payment provider

        On success the machine is AWAITING_PAYMENT and the caller redirects to the
        provider; the booking is confirmed later by CheckoutPaymentBridge.verify().
        """
        if self.payment_bridge is None:
            raise ValidationError('Online payment is not available')
        request = self._prepare_request(guest)
        amount = self.advisory_total
        if amount is None:
            raise ValidationError('Ticket price is unknown for this showtime')

        payment_bridge = self.payment_bridge
        with self.tracer.start_as_current_span(
            'state_machine.proceed_to_payment',
            attributes={'showtime.id': request.showtime_id, 'seat.count': request.quantity},
        ):
            session = await self._run_attempt(
                request,
                lambda booking_request: payment_bridge.initiate(
                    booking_request=booking_request, amount=amount
                ),
            )
            if session is None:
                return None

            self._payment_session = session
            self._state = SelectionState.AWAITING_PAYMENT
            self._notify()
            return session

    # ---------------------------------------------------------------- helpers

    def _require_selecting(self, action: str) -> SeatMap:
        if self._state != SelectionState.SELECTING or self._seat_map is None:
            raise ValidationError(f'Cannot {action} while {self._state.value}')
        return self._seat_map

    def _prepare_request(self, guest: Optional[GuestContact]) -> BookingRequest:
        seat_map = self._require_selecting('submit a booking')
        selection = self._selection
        if selection.is_empty:
            raise ValidationError('Select at least one seat')

        unavailable = []
        for seat_id in selection.sorted_ids():
            seat = seat_map.get(seat_id)
            if seat is None or not is_bookable(seat):
                unavailable.append(seat.label if seat else str(seat_id))
        if unavailable:
            raise ValidationError(f'Seats no longer available: {", ".join(unavailable)}')

        # Read identity now: it may have changed since the seat map was loaded
        identity = self.session_store.get_identity()
        if identity is None:
            contact = guest or GuestContact()
            user_email, user_name, credential = contact.require_email(), contact.name, None
        else:
            user_email, user_name, credential = identity.email, identity.name, identity.token

        request = BookingRequest(
            showtime_id=selection.showtime_id or seat_map.showtime_id,
            ticket_type=selection.ticket_type,
            idempotency_key='',
            seat_ids=selection.sorted_ids(),
            user_email=user_email,
            user_name=user_name,
            credential=credential,
        )
        return attrs.evolve(request, idempotency_key=self._idempotency_key_for(request))

    def _idempotency_key_for(self, request: BookingRequest) -> str:
        # Reuse the key only for an identical retry of an attempt lost to a NetworkError
        if self._retry_key and self._retry_key[0] == request.fingerprint:
            return self._retry_key[1]
        return str(uuid_utils.uuid7())

    async def _create_booking(self, request: BookingRequest) -> BookingResult:
        result = await self.booking_gateway.create_booking(request=request)
        if result.status == BookingStatus.FAILED:
            raise BookingRejectedError(f'Booking {result.booking_id} was rejected')
        return result

    async def _run_attempt(
        self,
        request: BookingRequest,
        call: Callable[[BookingRequest], Awaitable[_T]],
    ) -> Optional[_T]:
        self._attempt += 1
        attempt = self._attempt
        generation = self._generation
        self._state = SelectionState.SUBMITTING
        self._error = None
        self._notify()

        try:
            outcome = await call(request)
        except CustomBaseError as e:
            if self._is_stale(generation, attempt):
                self._log_discard(f'{type(e).__name__}', request.showtime_id)
                return None
            await self._fail_and_reconcile(e, request, generation)
            raise

        if self._is_stale(generation, attempt):
            self._log_discard('booking outcome', request.showtime_id)
            return None

        self._retry_key = None
        return outcome

    async def _fail_and_reconcile(
        self, error: CustomBaseError, request: BookingRequest, generation: int
    ) -> None:
        self._state = SelectionState.FAILED
        self._error = error
        self._retry_key = (
            (request.fingerprint, request.idempotency_key)
            if isinstance(error, NetworkError)
            else None
        )
        self._notify()

        try:
            refreshed = await self.seat_map_loader.load(showtime_id=request.showtime_id)
        except CustomBaseError as refresh_error:
            if self._is_stale(generation):
                return
            Logger.base.warning(
                f'[BOOKING] Seat map refresh after failed attempt failed: {refresh_error.message}'
            )
            self._state = SelectionState.SELECTING
            self._notify()
            return

        if self._is_stale(generation):
            return

        newly_booked = refreshed.booked_ids() & self._selection.selected_seat_ids
        if newly_booked:
            Logger.base.info(
                f'[BOOKING] Dropping seats booked meanwhile: {sorted(newly_booked)} '
                f'(showtime {request.showtime_id})'
            )
        self._seat_map = refreshed
        self._selection = self._selection.without(newly_booked)
        self._state = SelectionState.SELECTING
        self._notify()

    async def _refresh_after_booking(self, showtime_id: int, generation: int) -> None:
        # The booking stands even if the refresh fails; the old map is kept
        try:
            refreshed = await self.seat_map_loader.load(showtime_id=showtime_id)
        except CustomBaseError as refresh_error:
            if not self._is_stale(generation):
                Logger.base.warning(
                    f'[BOOKING] Seat map refresh after booking failed: {refresh_error.message}'
                )
            return

        if self._is_stale(generation):
            self._log_discard('seat map', showtime_id)
            return

        self._seat_map = refreshed
        self._notify()

    def _is_stale(self, generation: int, attempt: Optional[int] = None) -> bool:
        if generation != self._generation:
            return True
        return attempt is not None and attempt != self._attempt

    def _log_discard(self, what: str, showtime_id: Optional[int]) -> None:
        Logger.base.info(
            f'[BOOKING] Discarding late {what} for showtime {showtime_id} '
            f'(active showtime {self._showtime_id})'
        )
