"""
Test Configuration and Fixtures

Environment variables are set before any filmpass module is imported: settings
are read once at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_dir = Path(__file__).parent

    test_log_dir = test_dir / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['API_BASE_URL'] = 'http://backend.test/api'
    os.environ['APP_BASE_URL'] = 'http://app.test'
    os.environ['CURRENCY_SYMBOL'] = '€'
    os.environ['MINOR_UNIT_THRESHOLD'] = '100'
    os.environ['SESSION_STATE_FILE'] = str(test_log_dir / 'session.json')
    os.environ.setdefault('DEBUG', 'false')


_early_setup_test_environment()


import pytest  # noqa: E402

from filmpass.service.booking.domain.entity.seat_entity import Seat  # noqa: E402
from filmpass.service.booking.domain.value_object.seat_map import SeatMap  # noqa: E402
from filmpass.service.identity.domain.identity_entity import Identity  # noqa: E402
from filmpass.service.shared_kernel.domain.enum import SeatStatus  # noqa: E402


def build_seat_map(showtime_id: int, *, booked: set[int] | frozenset[int] = frozenset()) -> SeatMap:
    """Rows A and B: A1-A3 are ids 1-3, B1-B2 are ids 4-5."""
    layout = [(1, 'A', 1), (2, 'A', 2), (3, 'A', 3), (4, 'B', 1), (5, 'B', 2)]
    return SeatMap(
        showtime_id=showtime_id,
        seats=tuple(
            Seat(
                id=seat_id,
                row_label=row,
                seat_number=number,
                status=SeatStatus.BOOKED if seat_id in booked else SeatStatus.AVAILABLE,
            )
            for seat_id, row, number in layout
        ),
    )


@pytest.fixture
def seat_map_factory():
    return build_seat_map


@pytest.fixture
def member_identity() -> Identity:
    return Identity(user_id=42, email='member@filmpass.test', token='member-token', name='Member')
