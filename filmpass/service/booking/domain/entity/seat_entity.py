import attrs

from filmpass.service.shared_kernel.domain.enum import SeatStatus


@attrs.define(frozen=True)
class Seat:
    id: int
    row_label: str
    seat_number: int
    status: SeatStatus = SeatStatus.AVAILABLE

    @property
    def label(self) -> str:
        return f'{self.row_label}{self.seat_number}'

    @property
    def sort_key(self) -> tuple[str, int]:
        return (self.row_label, self.seat_number)


def is_bookable(seat: Seat) -> bool:
    return seat.status == SeatStatus.AVAILABLE
