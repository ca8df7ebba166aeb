import pytest

from filmpass.platform.exception.exceptions import MalformedResponseError
from filmpass.service.booking.domain.entity.seat_entity import Seat
from filmpass.service.booking.domain.value_object.seat_map import SeatMap, group_by_row
from filmpass.service.shared_kernel.domain.enum import SeatStatus


@pytest.mark.unit
class TestGroupByRow:
    def test_group_by_row__rows_and_seats_ascending(self) -> None:
        """Test rows sort lexicographically and seats by number, whatever the input order"""
        # Arrange
        seat_map = SeatMap(
            showtime_id=1,
            seats=(
                Seat(id=10, row_label='B', seat_number=2),
                Seat(id=11, row_label='A', seat_number=10),
                Seat(id=12, row_label='A', seat_number=2),
                Seat(id=13, row_label='B', seat_number=1, status=SeatStatus.BOOKED),
            ),
        )

        # Act
        rows = group_by_row(seat_map)

        # Assert
        assert list(rows) == ['A', 'B']
        assert [seat.seat_number for seat in rows['A']] == [2, 10]
        assert [seat.seat_number for seat in rows['B']] == [1, 2]

    def test_group_by_row__exact_cover(self, seat_map_factory) -> None:
        """Test flattening the groups yields exactly the input seats"""
        # Arrange
        seat_map = seat_map_factory(1, booked={2})

        # Act
        flattened = [seat for row in seat_map.group_by_row().values() for seat in row]

        # Assert
        assert sorted(flattened, key=lambda s: s.id) == sorted(seat_map.seats, key=lambda s: s.id)
        assert len(flattened) == len(set(seat.id for seat in flattened))

    def test_group_by_row__empty(self) -> None:
        assert group_by_row(SeatMap.empty(1)) == {}


@pytest.mark.unit
class TestSeatMap:
    def test_booked_and_available_ids(self, seat_map_factory) -> None:
        seat_map = seat_map_factory(1, booked={2, 5})

        assert seat_map.booked_ids() == {2, 5}
        assert seat_map.available_ids() == {1, 3, 4}
        assert seat_map.get(4) is not None and seat_map.get(4).label == 'B1'
        assert seat_map.get(99) is None

    def test_duplicate_seat_id__raises_malformed(self) -> None:
        """Test seat ids must be unique within a showtime"""
        with pytest.raises(MalformedResponseError):
            SeatMap(
                showtime_id=1,
                seats=(
                    Seat(id=1, row_label='A', seat_number=1),
                    Seat(id=1, row_label='A', seat_number=2),
                ),
            )

    def test_duplicate_position__raises_malformed(self) -> None:
        """Test (row, number) must be unique within a showtime"""
        with pytest.raises(MalformedResponseError):
            SeatMap(
                showtime_id=1,
                seats=(
                    Seat(id=1, row_label='A', seat_number=1),
                    Seat(id=2, row_label='A', seat_number=1),
                ),
            )
