"""
Handling of private key material.

Keys are parsed into a `bytearray` so the caller can wipe them once signing is
done. Nothing in this module logs a key or includes one in an error message.
"""
from contextlib import contextmanager
from typing import Iterator

from .crypto.elliptic_curve import PRIVATE_KEY_LENGTH, validate_private_key
from .exceptions import InvalidPrivateKey
from .utils.hexadecimal import is_hex_digits, remove_hex_prefix


def wipe(buffer: bytearray) -> None:
    """
    Overwrite `buffer` with zeros in place.
    """
    buffer[:] = bytes(len(buffer))


def private_key_from_hex(hex_string: str) -> bytearray:
    """
    Parse a 64-digit hex private key, with or without the `0x` marker.

    Parameters
    ----------
    hex_string :
        Hex text of the key. Surrounding whitespace is ignored.

    Returns
    -------
    private_key : `bytearray`
        The 32 key bytes, in a mutable buffer the caller should `wipe`.
    """
    body = remove_hex_prefix(hex_string.strip())
    if len(body) != PRIVATE_KEY_LENGTH * 2:
        raise InvalidPrivateKey(
            f"private key must be {PRIVATE_KEY_LENGTH * 2} hex characters, "
            f"got {len(body)}"
        )

    if not is_hex_digits(body):
        raise InvalidPrivateKey("private key is not valid hex")

    private_key = bytearray.fromhex(body)

    try:
        validate_private_key(private_key)
    except InvalidPrivateKey:
        wipe(private_key)
        raise

    return private_key


@contextmanager
def unlocked_private_key(hex_string: str) -> Iterator[bytearray]:
    """
    Parse `hex_string` and lend out the key bytes for the duration of a
    `with` block, zeroing them on exit.
    """
    private_key = private_key_from_hex(hex_string)
    try:
        yield private_key
    finally:
        wipe(private_key)
