"""
Signing
^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Produces signed transactions from an unsigned model and a private key, and
goes the other way: recovers the signer of an already signed transaction.

The pre-image of a signature is the unsigned encoding of the transaction (see
`encode_unsigned_transaction`). Its Keccak-256 digest is computed here and
handed to the ECDSA primitive unchanged.
"""
import asyncio
import logging
from dataclasses import replace
from typing import Tuple

from ethereum_types.bytes import Bytes
from ethereum_types.numeric import U256, Uint

from . import rlp
from .crypto.elliptic_curve import (
    SECP256K1N,
    private_key_to_public_key,
    public_key_to_address,
    secp256k1_recover,
    secp256k1_sign,
)
from .crypto.hash import Hash32, keccak256
from .exceptions import InvalidSignatureError
from .transactions import (
    Address,
    LegacyTransaction,
    Transaction,
    decode_transaction,
    encode_typed,
    encode_unsigned_transaction,
    unsigned_fields,
)
from .utils.hexadecimal import bytes_to_hex, to_checksum_address

logger = logging.getLogger(__name__)

LEGACY_FIELD_COUNT = 6
"""
Number of fields in a legacy transaction before its signature.
"""

DEFAULT_CHAIN_ID = Uint(1)
"""
Chain a legacy transaction without a chain id is signed for.
"""


def signing_hash(tx: Transaction) -> Hash32:
    """
    Compute the hash of a transaction that its signature commits to.

    For legacy transactions this is the [EIP-155] hash when `chain_id` is set
    and the original, pre-EIP-155 hash otherwise; the latter is only used to
    verify signatures made elsewhere. Typed transactions hash the type byte
    followed by their unsigned fields.

    [EIP-155]: https://eips.ethereum.org/EIPS/eip-155

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    hash : `Hash32`
        Hash of the transaction.
    """
    return keccak256(encode_unsigned_transaction(tx))


def _signature_v(tx: Transaction, recovery_id: int) -> Uint:
    if isinstance(tx, LegacyTransaction):
        chain_id = DEFAULT_CHAIN_ID if tx.chain_id is None else tx.chain_id
        return Uint(recovery_id + int(chain_id) * 2 + 35)
    return Uint(recovery_id)


def sign_transaction_bytes(tx: Transaction, private_key: Bytes) -> Bytes:
    """
    Sign `tx` and return the encoded, signed transaction.

    Legacy transactions get `v = recovery_id + chain_id * 2 + 35`. One
    without a chain id is signed for `DEFAULT_CHAIN_ID`, so every legacy
    signature is replay protected. Typed transactions carry the recovery id
    as `y_parity`. `r` and `s` are written as minimal big endian integers.

    Parameters
    ----------
    tx :
        Transaction to sign.
    private_key :
        32-byte secp256k1 secret key.

    Returns
    -------
    signed : `Bytes`
        The signed transaction, ready to broadcast.
    """
    if isinstance(tx, LegacyTransaction) and tx.chain_id is None:
        tx = replace(tx, chain_id=DEFAULT_CHAIN_ID)

    fields = unsigned_fields(tx)
    if isinstance(tx, LegacyTransaction):
        fields = fields[:LEGACY_FIELD_COUNT]

    r, s, recovery_id = secp256k1_sign(signing_hash(tx), private_key)
    signed = encode_typed(tx, fields + (_signature_v(tx, recovery_id), r, s))

    logger.debug(
        "signed %s transaction (%d bytes)",
        tx.transaction_type.name,
        len(signed),
    )
    return signed


def sign_transaction(tx: Transaction, private_key: Bytes) -> str:
    """
    Sign `tx` and return the signed transaction as `0x` prefixed hex.
    """
    return bytes_to_hex(sign_transaction_bytes(tx, private_key))


async def sign_transaction_async(tx: Transaction, private_key: Bytes) -> str:
    """
    Same as `sign_transaction`, run on a worker thread so that an event loop
    driving a user interface stays responsive.
    """
    return await asyncio.to_thread(sign_transaction, tx, private_key)


def private_key_to_address(private_key: Bytes) -> str:
    """
    [EIP-55] checksummed address controlled by `private_key`.

    [EIP-55]: https://eips.ethereum.org/EIPS/eip-55
    """
    public_key = private_key_to_public_key(private_key)
    return to_checksum_address(public_key_to_address(public_key))


def transaction_hash(signed: Bytes) -> Hash32:
    """
    Identifier of a signed transaction: the Keccak-256 hash of its encoding.
    """
    return keccak256(signed)


def decode_signature(signed: Bytes) -> Tuple[Uint, U256, U256]:
    """
    Extract the signature of an encoded, signed transaction.

    Parameters
    ----------
    signed :
        Signed transaction, legacy or typed.

    Returns
    -------
    signature : `Tuple[Uint, U256, U256]`
        `v` (or `y_parity` for typed transactions), `r` and `s`.
    """
    tx = decode_transaction(signed)
    if tx.is_legacy:
        fields = rlp.decode(signed)
        offset = LEGACY_FIELD_COUNT
    else:
        fields = rlp.decode(signed[1:])
        offset = len(unsigned_fields(tx))

    signature = fields[offset : offset + 3]
    if len(signature) != 3 or not all(
        isinstance(item, bytes) for item in signature
    ):
        raise InvalidSignatureError("transaction is not signed")

    v, r, s = signature
    if len(r) > 32 or len(s) > 32:
        raise InvalidSignatureError("signature component exceeds 32 bytes")

    return Uint.from_be_bytes(v), U256.from_be_bytes(r), U256.from_be_bytes(s)


def recover_sender(signed: Bytes) -> Address:
    """
    Extracts the sender address from a signed transaction.

    The signature and the signing hash of the transaction together determine
    the public key of the signer, and therefore its address.

    Parameters
    ----------
    signed :
        Signed transaction, legacy or typed.

    Returns
    -------
    sender : `Address`
        The address of the account that signed the transaction.
    """
    tx = decode_transaction(signed)
    v, r, s = decode_signature(signed)

    if U256(0) >= r or r >= SECP256K1N:
        raise InvalidSignatureError("bad r")
    if U256(0) >= s or s > SECP256K1N // U256(2):
        raise InvalidSignatureError("bad s")

    if isinstance(tx, LegacyTransaction):
        if tx.chain_id is None:
            if v != 27 and v != 28:
                raise InvalidSignatureError("bad v")
            recovery_id = int(v) - 27
        else:
            recovery_id = int(v) - 35 - int(tx.chain_id) * 2
    else:
        recovery_id = int(v)

    if recovery_id not in (0, 1):
        raise InvalidSignatureError("bad v")

    public_key = secp256k1_recover(r, s, recovery_id, signing_hash(tx))

    logger.debug(
        "recovered sender of %s transaction",
        tx.transaction_type.name,
    )
    return public_key_to_address(public_key)
