"""
Classification of scanned or pasted input.

Whatever reaches the vault from a QR code or a text field is expected to be
either a private key or an encoded transaction. The helpers below tell the two
apart and explain, in words meant for the user, what is wrong with input that
is neither.
"""
import hashlib
from enum import Enum
from typing import Optional

from .crypto.elliptic_curve import PRIVATE_KEY_LENGTH, SECP256K1N
from .exceptions import VaultException
from .transactions import decode_transaction_hex
from .utils.hexadecimal import is_hex_digits, remove_hex_prefix

URI_SCHEME = "ethereum:"

MINIMUM_TRANSACTION_HEX_LENGTH = 20
"""
Shortest hex text worth handing to the transaction decoder.
"""


class InputKind(Enum):
    """
    What a piece of input appears to be.
    """

    PRIVATE_KEY = "Private Key"
    TRANSACTION = "Transaction"
    UNKNOWN = "Unknown"


def _parse_hex(digits: str) -> int:
    """
    Parse hex digits strictly: no sign, no underscores, no whitespace.
    """
    if not digits or not is_hex_digits(digits):
        raise ValueError("not a hex string")
    return int(digits, 16)


def clean_input(raw: str) -> str:
    """
    Trim whitespace and an `ethereum:` URI scheme from `raw`.
    """
    cleaned = raw.strip()
    if cleaned.lower().startswith(URI_SCHEME):
        cleaned = cleaned[len(URI_SCHEME) :]
    return cleaned


def is_valid_private_key(data: str) -> bool:
    """
    Whether `data` is 64 hex digits (optionally `0x` prefixed) encoding a
    scalar in `[1, n)`.
    """
    digits = remove_hex_prefix(data)
    if len(digits) != PRIVATE_KEY_LENGTH * 2:
        return False
    try:
        scalar = _parse_hex(digits)
    except ValueError:
        return False
    return 0 < scalar < int(SECP256K1N)


def private_key_validation_info(data: str) -> str:
    """
    Explain whether `data` is a usable private key.

    Parameters
    ----------
    data :
        Candidate key as hex text.

    Returns
    -------
    message : `str`
        `"Valid private key format"` or a description of the problem. The key
        itself is never part of the message.
    """
    digits = remove_hex_prefix(data)
    if not digits:
        return "Empty data"
    if len(digits) != PRIVATE_KEY_LENGTH * 2:
        return (
            f"Invalid length: {len(digits)} characters "
            f"(expected {PRIVATE_KEY_LENGTH * 2})"
        )

    try:
        scalar = _parse_hex(digits)
    except ValueError:
        return "Invalid hexadecimal format"

    if scalar == 0:
        return "Invalid: private key cannot be zero"
    if scalar >= int(SECP256K1N):
        return "Invalid: private key exceeds secp256k1 curve order"
    return "Valid private key format"


def is_valid_transaction(data: str) -> bool:
    """
    Whether `data` decodes to a transaction.
    """
    try:
        decode_transaction_hex(data)
    except VaultException:
        return False
    return True


def transaction_validation_info(data: str) -> str:
    """
    Explain whether `data` is a decodable transaction.

    Parameters
    ----------
    data :
        Candidate transaction as hex text.

    Returns
    -------
    message : `str`
        `"Valid RLP transaction format"` or a description of the problem.
    """
    digits = remove_hex_prefix(data)
    if not digits:
        return "Empty data"
    if len(digits) % 2 != 0:
        return "Invalid: hex string must have even number of characters"
    if len(digits) < MINIMUM_TRANSACTION_HEX_LENGTH:
        return (
            f"Too short: minimum {MINIMUM_TRANSACTION_HEX_LENGTH} characters "
            "expected for transaction"
        )

    try:
        _parse_hex(digits)
    except ValueError:
        return "Invalid hexadecimal format"

    if is_valid_transaction(data):
        return "Valid RLP transaction format"
    return "Invalid RLP format: unable to decode transaction"


def classify_input(data: str) -> InputKind:
    """
    Decide whether `data` is a private key, a transaction, or neither. A
    string that qualifies as both is treated as a private key.
    """
    if is_valid_private_key(data):
        return InputKind.PRIVATE_KEY
    if is_valid_transaction(data):
        return InputKind.TRANSACTION
    return InputKind.UNKNOWN


def process_input(raw: str) -> Optional[str]:
    """
    Clean `raw` and return it if it is a private key or a transaction, or
    `None` otherwise.
    """
    cleaned = clean_input(raw)
    if classify_input(cleaned) is InputKind.UNKNOWN:
        return None
    return cleaned


def key_fingerprint(private_key_hex: str) -> str:
    """
    Short, non-reversible tag identifying a key on screen: the first eight
    hex digits of the SHA-256 hash of its hex text, upper cased.
    """
    digest = hashlib.sha256(private_key_hex.encode("utf-8")).hexdigest()
    return digest[:8].upper()
