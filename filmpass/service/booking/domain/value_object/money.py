"""
Money helpers

The backend does not say whether an amount is in minor units (cents) or major
units (euros). Integers above MINOR_UNIT_THRESHOLD are taken as minor units,
everything else as major units:

    1250  -> Decimal('12.50')
    12.5  -> Decimal('12.50')
    '12.50' -> Decimal('12.50')
    12    -> Decimal('12.00')

Amounts sent to the payment provider are integer minor units. Amounts shown to
the user are major units with two decimals.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from filmpass.platform.config.core_setting import settings
from filmpass.platform.exception.exceptions import MalformedResponseError


CENT = Decimal('0.01')
MINOR_UNITS_PER_MAJOR = 100


def _is_integral_literal(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, str):
        stripped = value.strip().lstrip('-+')
        return stripped.isdigit()
    return False


def to_major_units(value: Any, *, threshold: Optional[int] = None) -> Decimal:
    """Normalize a backend amount to major units (e.g. euros)."""
    if value is None or isinstance(value, bool):
        raise MalformedResponseError(f'Invalid amount: {value!r}')
    limit = settings.MINOR_UNIT_THRESHOLD if threshold is None else threshold
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise MalformedResponseError(f'Invalid amount: {value!r}')
    if not amount.is_finite():
        raise MalformedResponseError(f'Invalid amount: {value!r}')

    if _is_integral_literal(value) and amount > limit:
        amount = amount / MINOR_UNITS_PER_MAJOR
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(major_amount: Decimal | int | float | str) -> int:
    """Convert a major-unit amount to integer minor units for the payment provider."""
    try:
        amount = Decimal(str(major_amount))
    except InvalidOperation:
        raise MalformedResponseError(f'Invalid amount: {major_amount!r}')
    return int((amount * MINOR_UNITS_PER_MAJOR).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def format_amount(value: Any, *, symbol: Optional[str] = None) -> str:
    """Display form, e.g. '€12.50'. Accepts raw backend values."""
    amount = value if isinstance(value, Decimal) else to_major_units(value)
    currency = settings.CURRENCY_SYMBOL if symbol is None else symbol
    return f'{currency}{amount.quantize(CENT, rounding=ROUND_HALF_UP):.2f}'
