"""
Money handling for the ledger.

Every currency value is a ``Decimal`` quantized to paise (0.01) with
ROUND_HALF_UP. Operator-entered inputs never raise: anything that is not a
finite number becomes zero, and so does a negative amount or one beyond
``MAX_AMOUNT``. Derived amounts such as balances and net payables may
legitimately be negative and go through :func:`to_signed_money` instead.
"""

from __future__ import annotations

from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Annotated, Any, Iterable

from pydantic import BeforeValidator, PlainSerializer

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")
# Largest magnitude accepted from input; anything beyond is treated as garbage
MAX_AMOUNT = Decimal("1e20")
# Wide enough to quantize products and sums of in-range amounts
MONEY_CONTEXT = Context(prec=60)


def to_decimal(value: Any) -> Decimal:
    """Parse ``value`` as a finite Decimal, falling back to zero.

    Values larger in magnitude than ``MAX_AMOUNT`` also become zero.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO
    if not result.is_finite() or abs(result) > MAX_AMOUNT:
        return ZERO
    return result


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP, context=MONEY_CONTEXT)


def to_money(value: Any) -> Decimal:
    """Operator-entered amount: non-numeric or negative becomes 0.00."""
    amount = to_decimal(value)
    if amount < ZERO:
        return quantize(ZERO)
    return quantize(amount)


def to_signed_money(value: Any) -> Decimal:
    """Derived amount: keeps its sign, non-numeric becomes 0.00."""
    return quantize(to_decimal(value))


def to_quantity(value: Any) -> Decimal:
    """Non-negative quantity or rate, not rounded to the currency unit."""
    amount = to_decimal(value)
    return amount if amount > ZERO else ZERO


def to_count(value: Any) -> int:
    """Non-negative whole headcount."""
    return int(to_quantity(value).to_integral_value(rounding=ROUND_HALF_UP))


def to_percentage(value: Any) -> Decimal:
    """Completion percentage clamped into [0, 100]."""
    return min(to_quantity(value), HUNDRED)


def total(values: Iterable[Any]) -> Decimal:
    """Sum money values; empty input sums to 0.00."""
    return quantize(sum((to_decimal(v) for v in values), ZERO))


def _as_number(value: Decimal) -> float | int:
    # Backups are exchanged as plain JSON numbers
    if value == value.to_integral_value():
        return int(value)
    return float(value)


Money = Annotated[Decimal, BeforeValidator(to_money), PlainSerializer(_as_number, when_used="json")]
SignedMoney = Annotated[Decimal, BeforeValidator(to_signed_money), PlainSerializer(_as_number, when_used="json")]
Quantity = Annotated[Decimal, BeforeValidator(to_quantity), PlainSerializer(_as_number, when_used="json")]
Count = Annotated[int, BeforeValidator(to_count)]
Percentage = Annotated[Decimal, BeforeValidator(to_percentage), PlainSerializer(_as_number, when_used="json")]
