from enum import StrEnum


class SelectionState(StrEnum):
    IDLE = 'idle'
    LOADING_SEATS = 'loading_seats'
    SELECTING = 'selecting'
    SUBMITTING = 'submitting'
    AWAITING_PAYMENT = 'awaiting_payment'
    CONFIRMED = 'confirmed'
    FAILED = 'failed'
