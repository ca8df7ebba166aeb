from typing import Optional

import attrs

from filmpass.service.booking.domain.enum.payment_outcome import PaymentOutcome


CANCELLED_MESSAGE = 'Your payment has been cancelled. No charges were made to your account.'


@attrs.define(frozen=True)
class PaymentReturn:
    """What the redirect back from the payment provider carried."""

    outcome: PaymentOutcome
    session_id: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def cancelled(cls) -> 'PaymentReturn':
        return cls(outcome=PaymentOutcome.CANCELLED, message=CANCELLED_MESSAGE)

    @property
    def needs_verification(self) -> bool:
        return self.outcome == PaymentOutcome.SUCCESS
