from typing import List, Literal, Optional

from pydantic import BaseModel


class PaymentSuccessResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'booking_id': '4711',
                'status': 'CONFIRMED',
                'total_amount': '25.00',
                'display_total': '€25.00',
                'movie_title': 'Metropolis',
                'showtime': '2025-01-10 19:30',
                'theater_name': 'Odeon',
                'seats': [12, 13],
                'message': 'Payment successful. Your booking is confirmed.',
            }
        },
    }

    booking_id: str
    status: str
    total_amount: str
    display_total: str
    movie_title: Optional[str] = None
    showtime: Optional[str] = None
    theater_name: Optional[str] = None
    seats: Optional[int | List[int]] = None
    message: str


class PaymentCancelResponse(BaseModel):
    status: Literal['cancelled'] = 'cancelled'
    message: str
