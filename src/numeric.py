"""
Fixed-point amounts.

Balances and amounts are Decimals with exactly FRACTIONAL_DIGITS fractional
digits, bounded to the range of a signed 128-bit count of 1/10000 units.
Arithmetic on them goes through the checked_* helpers, which return None
instead of a value that falls outside that range.
"""
from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Optional

FRACTIONAL_DIGITS = 4

# Wide enough that sums and products of in-range values are exact.
_CONTEXT = Context(prec=96, rounding=ROUND_HALF_EVEN, traps=[InvalidOperation])

QUANTUM = Decimal(1).scaleb(-FRACTIONAL_DIGITS, context=_CONTEXT)
MAX_AMOUNT = Decimal(2 ** 127 - 1).scaleb(-FRACTIONAL_DIGITS, context=_CONTEXT)
MIN_AMOUNT = Decimal(-(2 ** 127)).scaleb(-FRACTIONAL_DIGITS, context=_CONTEXT)
ZERO = Decimal("0").quantize(QUANTUM)


def in_range(value: Decimal) -> bool:
    return MIN_AMOUNT <= value <= MAX_AMOUNT


def _bounded(value: Decimal) -> Optional[Decimal]:
    return value if in_range(value) else None


def checked_add(a: Decimal, b: Decimal) -> Optional[Decimal]:
    return _bounded(_CONTEXT.add(a, b))


def checked_sub(a: Decimal, b: Decimal) -> Optional[Decimal]:
    return _bounded(_CONTEXT.subtract(a, b))


def checked_mul(a: Decimal, b) -> Optional[Decimal]:
    return _bounded(_CONTEXT.multiply(a, Decimal(b)))


def parse_amount(text: str) -> Decimal:
    """
    Parse a decimal string into a fixed-point amount.

    Rounds half-even to FRACTIONAL_DIGITS places.

    Raises:
        ValueError: text is not a finite number or is out of range
    """
    text = text.strip()
    # Decimal also accepts digit separators and non-ASCII digits
    if not text.isascii() or "_" in text:
        raise ValueError(f"not a decimal number: {text!r}")

    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"not a decimal number: {text!r}") from None

    if not value.is_finite():
        raise ValueError(f"amount must be finite: {text!r}")

    try:
        value = value.quantize(QUANTUM, context=_CONTEXT)
    except InvalidOperation:
        raise ValueError(f"amount out of range: {text!r}") from None

    if not in_range(value):
        raise ValueError(f"amount out of range: {text!r}")
    return value


def format_amount(value: Decimal) -> str:
    """Format with exactly FRACTIONAL_DIGITS places. Zero is never signed."""
    if value.is_zero():
        return f"{ZERO:f}"
    return f"{value.quantize(QUANTUM, context=_CONTEXT):f}"
