"""
Decimal formatting for SOL, token and USD amounts.

All arithmetic is Decimal with ROUND_HALF_UP; strings are fixed-point, never
scientific notation.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

LAMPORTS_PER_SOL_EXPONENT = 9


def lamports_to_sol(lamports: int) -> Decimal:
    return Decimal(lamports).scaleb(-LAMPORTS_PER_SOL_EXPONENT)


def raw_to_ui(raw: int, decimals: int) -> Decimal:
    """Raw integer token amount to UI units (raw / 10**decimals), exact."""
    return Decimal(raw).scaleb(-decimals)


def fixed(value: Decimal, places: int) -> str:
    """Fixed-point string with exactly `places` decimals."""
    with localcontext() as ctx:
        ctx.prec = 80
        quantum = Decimal(1).scaleb(-places)
        return format(value.quantize(quantum, rounding=ROUND_HALF_UP), "f")


def signed(value: Decimal, places: int, negative: bool) -> str:
    """abs(value) to `places` decimals with an explicit + or - prefix."""
    return f"{'-' if negative else '+'}{fixed(abs(value), places)}"


def usd(value: Decimal, places: int = 2) -> str:
    return f"${fixed(value, places)}"
