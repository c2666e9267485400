"""
Error types raised by the vault.

Every public operation either returns a complete value or raises one of the
exceptions below. None of them is transient, so callers must not retry.
"""

from typing import Final, Optional


class VaultException(Exception):
    """
    Base class for all exceptions _expected_ to be thrown during normal
    operation.
    """

    raw_input: Optional[str] = None
    """
    The offending input, when it is safe to show it back to the user. Never
    set for errors concerning private keys.
    """


class MalformedRLP(VaultException):
    """
    Thrown when a byte stream is not structurally valid RLP: it is empty, or
    a declared length runs past the end of the input.
    """


class RLPEncodingError(VaultException):
    """
    Thrown when a value cannot be represented in RLP.
    """


class InvalidTransactionFormat(VaultException):
    """
    Thrown when the input is well-formed RLP (or not hex at all) but does not
    have the shape required by the transaction type it claims to be.
    """


class UnsupportedTransactionType(VaultException):
    """
    Unknown [EIP-2718] transaction type byte.

    [EIP-2718]: https://eips.ethereum.org/EIPS/eip-2718
    """

    transaction_type: Final[int]
    """
    The type byte of the transaction that caused the error.
    """

    def __init__(self, transaction_type: int):
        super().__init__(
            f"unsupported transaction type `0x{transaction_type:02x}`"
        )
        self.transaction_type = transaction_type


class InvalidPrivateKey(VaultException):
    """
    Thrown when a private key is not 32 bytes long or is not a valid
    secp256k1 scalar.
    """


class SigningFailure(VaultException):
    """
    Thrown when the underlying ECDSA primitive fails.
    """


class InvalidSignatureError(VaultException):
    """
    Thrown when a signed transaction carries a signature that cannot be
    recovered to a public key.
    """
