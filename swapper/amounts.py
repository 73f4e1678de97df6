"""Exact conversions between human-readable token amounts and base units.

All conversions go through Decimal with enough precision for uint256 values
(up to ~10^77); floats are never involved.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_FLOOR, Decimal

from swapper.errors import ConfigError
from swapper.models.types import UINT256_MAX

# 78 digits of precision covers uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)


def to_decimal(amount: str | int | Decimal) -> Decimal:
    """Read a human-readable amount as a finite, non-negative Decimal.

    Raises:
        ValueError: If the amount is not a number or is negative
    """
    try:
        value = Decimal(amount) if not isinstance(amount, Decimal) else amount
    except decimal.InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e

    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    if value < 0:
        raise ValueError(f"Amount cannot be negative: {amount}")
    return value


def parse_units(amount: str | int | Decimal, decimals: int) -> int:
    """Convert a human-readable amount into integer base units.

    Example: parse_units("1000", 18) == 1000 * 10**18

    Raises:
        ValueError: If the amount is not a number, is negative, carries more
            fractional digits than ``decimals`` or does not fit in a uint256
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    value = to_decimal(amount)
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        scaled = value.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"Amount {amount} has more than {decimals} decimal places")
        result = int(scaled)

    if result > UINT256_MAX:
        raise ValueError(f"Amount {amount} overflows uint256 at {decimals} decimals")
    return result


def parse_amount(amount: str | Decimal, decimals: int) -> int:
    """parse_units for user-supplied amounts.

    Raises:
        ConfigError: If the amount cannot be expressed in base units
    """
    try:
        return parse_units(amount, decimals)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def format_units(amount: int, decimals: int) -> Decimal:
    """Convert integer base units into a human-readable Decimal."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return Decimal(amount).scaleb(-decimals)


def apply_slippage(amount: int, slippage_percent: Decimal) -> int:
    """Minimum acceptable output for ``amount`` under a slippage tolerance.

    Rounds down, so the result never exceeds the tolerated amount.
    """
    if not 0 <= slippage_percent < 100:
        raise ValueError(f"Slippage must be in [0, 100), got {slippage_percent}")

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        factor = (Decimal(100) - slippage_percent) / Decimal(100)
        return int((Decimal(amount) * factor).to_integral_value(rounding=ROUND_FLOOR))


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "to_decimal",
    "parse_units",
    "parse_amount",
    "format_units",
    "apply_slippage",
]
