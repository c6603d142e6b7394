"""Decimal helpers for currency amounts."""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value if value is not None else "0"))


def quantize_money(value) -> Decimal:
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value, symbol: str = "") -> str:
    """Two fractional digits, optionally prefixed with a currency symbol."""
    return f"{symbol}{quantize_money(value):.2f}"


def to_json_number(value: Decimal) -> int | float:
    value = to_decimal(value)
    if value == value.to_integral_value():
        return int(value)
    return float(value)
