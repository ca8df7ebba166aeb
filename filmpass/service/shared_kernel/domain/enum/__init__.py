"""Shared Kernel Enums"""

from filmpass.service.shared_kernel.domain.enum.booking_status import BookingStatus
from filmpass.service.shared_kernel.domain.enum.seat_status import SeatStatus
from filmpass.service.shared_kernel.domain.enum.ticket_type import TicketType

__all__ = ['BookingStatus', 'SeatStatus', 'TicketType']
