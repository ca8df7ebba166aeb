"""
Unit tests for backend response normalization

The backend is inconsistent about key casing, list wrapping and price field
names; every shape below is one the client has to accept.
"""

from decimal import Decimal

import pytest

from filmpass.platform.exception.exceptions import MalformedResponseError
from filmpass.service.booking.driven_adapter.api.response_parser import (
    parse_booking_result,
    parse_checkout_session,
    parse_movie_details,
    parse_movies,
    parse_seat_map,
    parse_theaters,
    parse_verification,
)
from filmpass.service.shared_kernel.domain.enum import BookingStatus, SeatStatus


@pytest.mark.unit
class TestParseSeatMap:
    def test_parse_seat_map__normalizes_status_and_order(self) -> None:
        """Test lowercase statuses are accepted and seats come back sorted"""
        # Arrange
        payload = [
            {'id': 2, 'row_label': 'A', 'seat_number': 2, 'status': 'booked'},
            {'id': 1, 'row_label': 'A', 'seat_number': 1, 'status': 'AVAILABLE'},
        ]

        # Act
        seat_map = parse_seat_map(7, payload)

        # Assert
        assert seat_map.showtime_id == 7
        assert [seat.id for seat in seat_map.seats] == [1, 2]
        assert seat_map.get(2).status == SeatStatus.BOOKED

    def test_parse_seat_map__wrapped_and_camel_case(self) -> None:
        """Test {"seats": [...]} with camelCase keys"""
        payload = {'seats': [{'id': 5, 'rowLabel': 'C', 'seatNumber': 4, 'status': 'AVAILABLE'}]}

        seat_map = parse_seat_map(1, payload)

        assert seat_map.get(5).label == 'C4'

    def test_parse_seat_map__missing_field_raises_malformed(self) -> None:
        with pytest.raises(MalformedResponseError) as exc_info:
            parse_seat_map(1, [{'id': 1, 'row_label': 'A'}])

        assert 'seat_number' in exc_info.value.message

    def test_parse_seat_map__unknown_status_raises_malformed(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_seat_map(1, [{'id': 1, 'row_label': 'A', 'seat_number': 1, 'status': 'HELD'}])

    def test_parse_seat_map__not_a_list_raises_malformed(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_seat_map(1, 'nope')


@pytest.mark.unit
class TestParseBooking:
    def test_parse_booking_result__minor_unit_total(self) -> None:
        """Test {bookingId,total,status} with a total in cents"""
        result = parse_booking_result({'bookingId': 4711, 'total': 1250, 'status': 'CONFIRMED'})

        assert result.booking_id == '4711'
        assert result.total_amount == Decimal('12.50')
        assert result.status == BookingStatus.CONFIRMED

    def test_parse_booking_result__status_defaults_to_confirmed(self) -> None:
        result = parse_booking_result({'bookingId': 'b-1', 'total': 12.5})

        assert result.status == BookingStatus.CONFIRMED
        assert result.display_total == '€12.50'

    def test_parse_booking_result__missing_total_raises_malformed(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_booking_result({'bookingId': 'b-1'})

    def test_parse_verification__details_and_status_alias(self) -> None:
        """Test the verification summary fields and a PAID status"""
        result = parse_verification(
            {
                'bookingId': 9,
                'movieTitle': 'Metropolis',
                'showtime': '2025-01-10 19:30',
                'theaterName': 'Odeon',
                'seats': [1, 3],
                'total': '25.00',
                'status': 'paid',
            }
        )

        assert result.status == BookingStatus.CONFIRMED
        assert result.movie_title == 'Metropolis'
        assert result.theater_name == 'Odeon'
        assert result.seats == [1, 3]
        assert result.total_amount == Decimal('25.00')

    def test_parse_verification__pending(self) -> None:
        result = parse_verification({'bookingId': 9, 'total': 2500, 'status': 'pending'})

        assert result.status == BookingStatus.PENDING_PAYMENT

    def test_parse_checkout_session__snake_case_keys(self) -> None:
        session = parse_checkout_session(
            {'clientSecret': 'cs_secret', 'publishableKey': 'pk', 'sessionId': 'cs_1'}
        )

        assert session == {
            'client_secret': 'cs_secret',
            'publishable_key': 'pk',
            'session_id': 'cs_1',
        }


@pytest.mark.unit
class TestParseCatalog:
    def test_parse_theaters(self) -> None:
        theaters = parse_theaters([{'id': 1, 'name': 'Odeon', 'location': 'Main St'}])

        assert theaters[0].name == 'Odeon'
        assert theaters[0].location == 'Main St'

    def test_parse_movies__wrapped_in_data(self) -> None:
        movies = parse_movies({'data': [{'id': 3, 'title': 'Metropolis', 'description': 'Silent'}]})

        assert [movie.title for movie in movies] == ['Metropolis']

    def test_parse_movie_details__price_aliases_and_wrapped_showtimes(self) -> None:
        """Test showtimes under items with price, ticket_price or price_per_ticket"""
        # Arrange
        payload = {
            'movie': {'id': 3, 'title': 'Metropolis'},
            'showtimes': {
                'items': [
                    {'id': 10, 'show_date': '2025-01-10', 'start_time': '19:30', 'price': 1250},
                    {'id': 11, 'show_date': '2025-01-11', 'ticket_price': 9.5},
                    {'id': 12, 'price_per_ticket': '8.00', 'theater_name': 'Odeon'},
                ]
            },
        }

        # Act
        details = parse_movie_details(payload)

        # Assert
        assert details.movie.title == 'Metropolis'
        assert [s.price for s in details.showtimes] == [
            Decimal('12.50'),
            Decimal('9.50'),
            Decimal('8.00'),
        ]
        assert details.find_showtime(10).starts_at == '2025-01-10 19:30'
        assert details.find_showtime(12).theater_name == 'Odeon'

    def test_parse_movie_details__showtimes_as_plain_list(self) -> None:
        details = parse_movie_details(
            {'movie': {'id': 3, 'title': 'Metropolis'}, 'showtimes': [{'id': 10}]}
        )

        assert details.showtimes[0].id == 10
        assert details.showtimes[0].price is None

    def test_parse_movie_details__no_showtimes(self) -> None:
        details = parse_movie_details({'movie': {'id': 3, 'title': 'Metropolis'}})

        assert details.showtimes == ()
