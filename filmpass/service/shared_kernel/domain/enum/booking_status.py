"""Booking Status Enum"""

from enum import StrEnum


class BookingStatus(StrEnum):
    CONFIRMED = 'CONFIRMED'
    PENDING_PAYMENT = 'PENDING_PAYMENT'
    FAILED = 'FAILED'
