class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(CustomBaseError):
    """Local pre-flight validation failure. Never reaches the network."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class AuthError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 401) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class SeatUnavailableError(CustomBaseError):
    """A seat was booked concurrently; the seat map must be refreshed before any retry."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class BookingRejectedError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 422) -> None:
        super().__init__(message, status_code)


class NetworkError(CustomBaseError):
    """Transport failure, timeout or 5xx. Retryable."""

    def __init__(self, message: str, status_code: int = 503) -> None:
        super().__init__(message, status_code)


class MalformedResponseError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 502)


class PaymentInitError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 502)


class VerificationError(CustomBaseError):
    """
    Payment could not be confirmed.

    Not a decline: `pending` is True when the backend reports the payment as still processing.
    """

    def __init__(self, message: str, *, pending: bool = False) -> None:
        self.pending = pending
        super().__init__(message, 502)


class PaymentDeclinedError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 402)
