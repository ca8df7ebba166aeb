"""
Seat Map Value Object

One showtime's seats and their booking status. Immutable: a refreshed seat map
replaces the old one wholesale, so a renderer never observes a partial update.
"""

from collections.abc import Iterable, Mapping
from typing import Optional

import attrs

from filmpass.platform.exception.exceptions import MalformedResponseError
from filmpass.service.booking.domain.entity.seat_entity import Seat, is_bookable
from filmpass.service.shared_kernel.domain.enum import SeatStatus


def _sorted_seats(seats: Iterable[Seat]) -> tuple[Seat, ...]:
    return tuple(sorted(seats, key=lambda seat: seat.sort_key))


@attrs.define(frozen=True)
class SeatMap:
    showtime_id: int
    seats: tuple[Seat, ...] = attrs.field(converter=_sorted_seats, factory=tuple)

    def __attrs_post_init__(self) -> None:
        seen_ids: set[int] = set()
        seen_positions: set[tuple[str, int]] = set()
        for seat in self.seats:
            if seat.id in seen_ids:
                raise MalformedResponseError(
                    f'Duplicate seat id {seat.id} in seat map for showtime {self.showtime_id}'
                )
            if seat.sort_key in seen_positions:
                raise MalformedResponseError(
                    f'Duplicate seat {seat.label} in seat map for showtime {self.showtime_id}'
                )
            seen_ids.add(seat.id)
            seen_positions.add(seat.sort_key)

    @classmethod
    def empty(cls, showtime_id: int) -> 'SeatMap':
        return cls(showtime_id=showtime_id, seats=())

    def __len__(self) -> int:
        return len(self.seats)

    def get(self, seat_id: int) -> Optional[Seat]:
        for seat in self.seats:
            if seat.id == seat_id:
                return seat
        return None

    def booked_ids(self) -> frozenset[int]:
        return frozenset(seat.id for seat in self.seats if seat.status == SeatStatus.BOOKED)

    def available_ids(self) -> frozenset[int]:
        return frozenset(seat.id for seat in self.seats if is_bookable(seat))

    def group_by_row(self) -> Mapping[str, tuple[Seat, ...]]:
        return group_by_row(self)


def group_by_row(seat_map: SeatMap) -> dict[str, tuple[Seat, ...]]:
    """
    Group seats by row label.

    Rows ascend lexicographically, seats within a row ascend by seat number, and the
    flattened output is exactly the input seats.
    """
    rows: dict[str, list[Seat]] = {}
    for seat in seat_map.seats:
        rows.setdefault(seat.row_label, []).append(seat)
    return {
        row_label: tuple(sorted(rows[row_label], key=lambda seat: seat.seat_number))
        for row_label in sorted(rows)
    }
