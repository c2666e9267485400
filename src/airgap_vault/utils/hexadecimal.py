"""
Utility Functions For Hexadecimal Strings
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Conversions between the hex strings exchanged with the outside world and the
byte/integer types used internally.
"""
import string

from ethereum_types.bytes import Bytes, Bytes20

from ..crypto.hash import keccak256

HEX_PREFIX = "0x"

HEX_DIGITS = frozenset(string.hexdigits)


def has_hex_prefix(hex_string: str) -> bool:
    """
    Check if a hex string starts with hex prefix (0x).

    Parameters
    ----------
    hex_string :
        The hexadecimal string to be checked for presence of prefix.

    Returns
    -------
    has_prefix : `bool`
        Boolean indicating whether the hex string has 0x prefix.
    """
    return hex_string[:2].lower() == HEX_PREFIX


def is_hex_digits(hex_string: str) -> bool:
    """
    Whether every character of `hex_string` is a hex digit. Whitespace, signs
    and underscores are not.
    """
    return all(char in HEX_DIGITS for char in hex_string)


def remove_hex_prefix(hex_string: str) -> str:
    """
    Remove 0x prefix from a hex string if present. This function returns the
    passed hex string if it isn't prefixed with 0x.

    Parameters
    ----------
    hex_string :
        The hexadecimal string whose prefix is to be removed.

    Returns
    -------
    modified_hex_string : `str`
        The hexadecimal string with the 0x prefix removed if present.
    """
    if has_hex_prefix(hex_string):
        return hex_string[len(HEX_PREFIX) :]

    return hex_string


def hex_to_bytes(hex_string: str) -> Bytes:
    """
    Convert hex string to bytes.

    Raises `ValueError` for odd-length strings and non-hex characters.

    Parameters
    ----------
    hex_string :
        The hexadecimal string to be converted to bytes.

    Returns
    -------
    byte_stream : `bytes`
        Byte stream corresponding to the given hexadecimal string.
    """
    body = remove_hex_prefix(hex_string)
    if len(body) % 2 != 0:
        raise ValueError(
            f"hex string must have an even number of digits, got {len(body)}"
        )
    if not is_hex_digits(body):
        raise ValueError("hex string contains a non-hex character")
    return bytes.fromhex(body)


def hex_to_address(hex_string: str) -> Bytes20:
    """
    Convert a 40-digit hex string (any letter case) to an address.
    """
    return Bytes20(hex_to_bytes(hex_string))


def bytes_to_hex(byte_stream: Bytes, prefix: bool = True) -> str:
    """
    Lower-case hex rendering of `byte_stream`, with the 0x prefix unless
    `prefix` is false.
    """
    body = bytes(byte_stream).hex()
    return HEX_PREFIX + body if prefix else body


def to_checksum_address(address: Bytes20) -> str:
    """
    Mixed-case [EIP-55] rendering of an address.

    [EIP-55]: https://eips.ethereum.org/EIPS/eip-55
    """
    lower = bytes(address).hex()
    digest = keccak256(lower.encode("ascii")).hex()
    return HEX_PREFIX + "".join(
        char.upper() if int(nibble, 16) >= 8 else char
        for char, nibble in zip(lower, digest)
    )
