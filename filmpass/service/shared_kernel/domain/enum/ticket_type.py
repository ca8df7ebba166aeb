"""Ticket Type Enum"""

from enum import StrEnum


class TicketType(StrEnum):
    """Applied uniformly to a whole selection, not per seat."""

    ADULT = 'ADULT'
    CHILD = 'CHILD'
