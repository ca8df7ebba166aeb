from collections.abc import Iterable

import attrs

from filmpass.service.shared_kernel.domain.enum import TicketType


@attrs.define(frozen=True)
class Selection:
    """
    A user's in-progress seat choice for one showtime.

    Set semantics: order of selection carries no meaning and duplicates cannot occur.
    """

    showtime_id: int | None
    selected_seat_ids: frozenset[int] = attrs.field(converter=frozenset, factory=frozenset)
    ticket_type: TicketType = TicketType.ADULT

    @classmethod
    def empty(cls, showtime_id: int | None, ticket_type: TicketType = TicketType.ADULT) -> 'Selection':
        return cls(showtime_id=showtime_id, ticket_type=ticket_type)

    @property
    def is_empty(self) -> bool:
        return not self.selected_seat_ids

    def __len__(self) -> int:
        return len(self.selected_seat_ids)

    def __contains__(self, seat_id: object) -> bool:
        return seat_id in self.selected_seat_ids

    def toggled(self, seat_id: int) -> 'Selection':
        return attrs.evolve(self, selected_seat_ids=self.selected_seat_ids ^ {seat_id})

    def without(self, seat_ids: Iterable[int]) -> 'Selection':
        return attrs.evolve(self, selected_seat_ids=self.selected_seat_ids - frozenset(seat_ids))

    def with_ticket_type(self, ticket_type: TicketType) -> 'Selection':
        return attrs.evolve(self, ticket_type=ticket_type)

    def sorted_ids(self) -> tuple[int, ...]:
        return tuple(sorted(self.selected_seat_ids))
