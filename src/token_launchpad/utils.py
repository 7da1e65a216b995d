"""
Display helpers shared by the flows and status messages.

Balances and fees travel through the system as integers in the smallest unit
of their currency; these helpers are the only place where they are turned into
human-readable strings.
"""

from decimal import Decimal, localcontext
from typing import Union


def format_units(value: Union[int, str, Decimal], decimals: int = 18) -> str:
    """
    Render a smallest-unit integer as a plain decimal string without trailing zeros.

    Args:
        value: Amount in smallest units (e.g. wei).
        decimals: Number of decimals of the currency.

    Returns:
        str: e.g. ``format_units(2 * 10**18) == "2"``, ``format_units(15 * 10**17) == "1.5"``.
    """
    if not isinstance(decimals, int) or decimals < 0:
        raise ValueError("decimals must be a non-negative int")

    with localcontext() as ctx:
        ctx.prec = 100
        amount = Decimal(str(value)).scaleb(-decimals)
        if amount == amount.to_integral_value():
            return str(amount.quantize(Decimal(1)))
        return format(amount.normalize(), "f")


def format_balance(value: Union[int, str, Decimal], decimals: int = 18, places: int = 4) -> str:
    """Fixed-point balance string as shown next to the wallet address (``"12.3457"``)."""
    with localcontext() as ctx:
        ctx.prec = 100
        amount = Decimal(str(value)).scaleb(-decimals)
        return f"{amount:.{places}f}"


def shorten_address(address: str) -> str:
    """``0x1234567890abcdef...`` -> ``0x1234...cdef``."""
    if not address or len(address) <= 10:
        return address or ""
    return f"{address[:6]}...{address[-4:]}"
