from enum import StrEnum


class PaymentOutcome(StrEnum):
    """Where the payment provider sent the user back to."""

    SUCCESS = 'success'
    CANCELLED = 'cancelled'
