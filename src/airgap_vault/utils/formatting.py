"""
Utility Functions For Displaying Values
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Renders wei amounts in larger units. Only integer arithmetic is used: a float
cannot represent every wei amount exactly.
"""
from typing import SupportsInt

WEI_PER_ETHER_DECIMALS = 18
WEI_PER_GWEI_DECIMALS = 9


def format_scaled(value: SupportsInt, decimals: int, unit: str) -> str:
    """
    Render `value / 10**decimals` followed by `unit`.

    Trailing zeros of the fractional part are dropped, and so is the decimal
    point when nothing remains after it.

    Parameters
    ----------
    value :
        Non-negative integer amount in the smallest unit.
    decimals :
        Number of decimal places separating the smallest unit from `unit`.
    unit :
        Suffix appended after a single space.

    Returns
    -------
    formatted : `str`
        For example `"1.5 ETH"`.
    """
    amount = int(value)
    if amount < 0:
        raise ValueError(f"cannot format negative amount {amount}")

    whole, fraction = divmod(amount, 10**decimals)
    if fraction == 0:
        return f"{whole} {unit}"

    fraction_digits = str(fraction).rjust(decimals, "0").rstrip("0")
    return f"{whole}.{fraction_digits} {unit}"


def format_wei_to_ether(wei: SupportsInt) -> str:
    """
    Render a wei amount in ether, e.g. `"0.001 ETH"`.
    """
    return format_scaled(wei, WEI_PER_ETHER_DECIMALS, "ETH")


def format_gas_price(wei: SupportsInt) -> str:
    """
    Render a per-gas price given in wei as Gwei, e.g. `"0.5 Gwei"`.
    """
    return format_scaled(wei, WEI_PER_GWEI_DECIMALS, "Gwei")


def shorten_address(address: str) -> str:
    """
    Abbreviate an address for display, keeping the `0x` and first four digits
    and the last four digits.

    Parameters
    ----------
    address :
        Hex address text.

    Returns
    -------
    shortened : `str`
        For example `"0xd8dA...6045"`. Text shorter than ten characters is
        returned unchanged.
    """
    if len(address) < 10:
        return address
    return f"{address[:6]}...{address[-4:]}"
