"""
Elliptic Curves
^^^^^^^^^^^^^^^

ECDSA over secp256k1, backed by libsecp256k1 through `coincurve`. Nonces are
derived deterministically (RFC 6979) and signatures are normalized to low `s`
by the library.
"""

from typing import Tuple

import coincurve
from ethereum_types.bytes import Bytes, Bytes20
from ethereum_types.numeric import U256

from ..exceptions import (
    InvalidPrivateKey,
    InvalidSignatureError,
    SigningFailure,
)
from .hash import Hash32, keccak256

SECP256K1N = U256(
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
)

PRIVATE_KEY_LENGTH = 32


def validate_private_key(private_key: Bytes) -> None:
    """
    Checks that `private_key` is a usable secp256k1 secret.

    The key must be exactly 32 bytes and, read as a big endian integer, lie
    in `[1, n)`. The error messages never include the key itself.

    Parameters
    ----------
    private_key :
        Candidate secret key.
    """
    if len(private_key) != PRIVATE_KEY_LENGTH:
        raise InvalidPrivateKey(
            f"private key must be {PRIVATE_KEY_LENGTH} bytes, "
            f"got {len(private_key)}"
        )

    scalar = int.from_bytes(private_key, "big")
    if scalar == 0:
        raise InvalidPrivateKey("private key cannot be zero")
    if scalar >= int(SECP256K1N):
        raise InvalidPrivateKey(
            "private key exceeds the secp256k1 curve order"
        )


def secp256k1_sign(
    msg_hash: Hash32, private_key: Bytes
) -> Tuple[U256, U256, int]:
    """
    Signs a 32-byte digest.

    The digest is handed to libsecp256k1 as-is (`hasher=None`); hashing the
    message is the caller's job.

    Parameters
    ----------
    msg_hash :
        Keccak-256 digest of the message being signed.
    private_key :
        32-byte secret key.

    Returns
    -------
    signature : `Tuple[U256, U256, int]`
        The `r` and `s` values and the recovery id (0 or 1).
    """
    validate_private_key(private_key)

    try:
        signer = coincurve.PrivateKey(bytes(private_key))
        signature = signer.sign_recoverable(bytes(msg_hash), hasher=None)
    except Exception as e:
        raise SigningFailure("secp256k1 signing failed") from e

    return (
        U256.from_be_bytes(signature[0:32]),
        U256.from_be_bytes(signature[32:64]),
        signature[64],
    )


def secp256k1_recover(
    r: U256, s: U256, recovery_id: int, msg_hash: Hash32
) -> Bytes:
    """
    Recovers the public key from a given signature.

    Parameters
    ----------
    r :
        The `r` component of the signature.
    s :
        The `s` component of the signature.
    recovery_id :
        Parity of the `y` coordinate of the ephemeral point, 0 or 1.
    msg_hash :
        Hash of the message being recovered.

    Returns
    -------
    public_key : `Bytes`
        Recovered public key, 64 bytes without the `0x04` prefix.
    """
    if recovery_id not in (0, 1):
        raise InvalidSignatureError(f"bad recovery id {recovery_id}")

    signature = r.to_be_bytes32() + s.to_be_bytes32() + bytes([recovery_id])

    try:
        public_key = coincurve.PublicKey.from_signature_and_message(
            signature, bytes(msg_hash), hasher=None
        )
    except ValueError as e:
        raise InvalidSignatureError("public key recovery failed") from e

    return public_key.format(compressed=False)[1:]


def private_key_to_public_key(private_key: Bytes) -> Bytes:
    """
    Derives the 64-byte uncompressed public key (without prefix).
    """
    validate_private_key(private_key)
    public_key = coincurve.PrivateKey(bytes(private_key)).public_key
    return public_key.format(compressed=False)[1:]


def public_key_to_address(public_key: Bytes) -> Bytes20:
    """
    Ethereum address of a 64-byte public key: the low 20 bytes of its
    Keccak-256 hash.
    """
    return Bytes20(keccak256(public_key)[12:32])
