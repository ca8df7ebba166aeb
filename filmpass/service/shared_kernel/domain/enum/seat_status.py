"""Seat Status Enum"""

from enum import StrEnum


class SeatStatus(StrEnum):
    """Server-authoritative seat status. The client never sets BOOKED locally."""

    AVAILABLE = 'AVAILABLE'
    BOOKED = 'BOOKED'
