"""
Transactions
^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Transactions are the unit of work a wallet asks a signer to authorise. Three
layouts are understood: legacy transactions (optionally replay protected by
[EIP-155]), access list transactions ([EIP-2930]) and fee market transactions
([EIP-1559]). Typed transactions travel inside an [EIP-2718] envelope: a
single type byte followed by the RLP encoded fields.

[EIP-155]: https://eips.ethereum.org/EIPS/eip-155
[EIP-2718]: https://eips.ethereum.org/EIPS/eip-2718
[EIP-2930]: https://eips.ethereum.org/EIPS/eip-2930
[EIP-1559]: https://eips.ethereum.org/EIPS/eip-1559
"""
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Dict, Mapping, Optional, Tuple, Union

from ethereum_types.bytes import Bytes, Bytes0, Bytes20, Bytes32
from ethereum_types.frozen import slotted_freezable
from ethereum_types.numeric import Uint

from . import rlp
from .exceptions import (
    InvalidTransactionFormat,
    MalformedRLP,
    UnsupportedTransactionType,
    VaultException,
)
from .utils.hexadecimal import bytes_to_hex, hex_to_bytes

logger = logging.getLogger(__name__)

Address = Bytes20

ADDRESS_LENGTH = 20
STORAGE_KEY_LENGTH = 32

NETWORK_NAMES: Dict[int, str] = {
    1: "Ethereum Mainnet",
    3: "Ropsten Testnet",
    4: "Rinkeby Testnet",
    5: "Goerli Testnet",
    56: "BSC Mainnet",
    97: "BSC Testnet",
    137: "Polygon Mainnet",
    295: "Hedera Mainnet",
    296: "Hedera Testnet",
    297: "Hedera Previewnet",
    80001: "Polygon Mumbai",
    11155111: "Sepolia Testnet",
}
"""
Display names of the chains the vault knows about, keyed by chain id.
"""


class TransactionType(IntEnum):
    """
    [EIP-2718] type byte of each supported transaction layout. Legacy
    transactions carry no type byte and are assigned zero.

    [EIP-2718]: https://eips.ethereum.org/EIPS/eip-2718
    """

    LEGACY = 0
    ACCESS_LIST = 1
    FEE_MARKET = 2


def network_name(
    chain_id: Optional[Uint], extra: Optional[Mapping[int, str]] = None
) -> str:
    """
    Human readable name of the chain identified by `chain_id`.

    Parameters
    ----------
    chain_id :
        Chain id of the transaction, or `None` for a transaction without
        replay protection.
    extra :
        Additional names, consulted before the built-in table.

    Returns
    -------
    name : `str`
        The display name, or an "Unknown Network" placeholder.
    """
    if chain_id is None:
        return "Unknown Network (No Chain ID)"

    chain_id_int = int(chain_id)
    if extra is not None and chain_id_int in extra:
        return extra[chain_id_int]
    if chain_id_int in NETWORK_NAMES:
        return NETWORK_NAMES[chain_id_int]
    return f"Unknown Network ({chain_id_int})"


@slotted_freezable
@dataclass
class Access:
    """
    A mapping from account address to storage slots that are pre-warmed as
    part of a transaction.
    """

    account: Address
    slots: Tuple[Bytes32, ...]


class _TransactionProperties:
    """
    Read-only values derived from the fields every transaction layout has.
    """

    __slots__ = ()

    transaction_type: ClassVar[TransactionType]

    @property
    def is_legacy(self) -> bool:
        """
        Whether this transaction has no [EIP-2718] type byte.

        [EIP-2718]: https://eips.ethereum.org/EIPS/eip-2718
        """
        return self.transaction_type == TransactionType.LEGACY

    @property
    def is_contract_creation(self) -> bool:
        """
        Whether the transaction deploys a contract (empty recipient).
        """
        return len(self.to) == 0  # type: ignore[attr-defined]

    @property
    def has_data(self) -> bool:
        """
        Whether the transaction carries calldata.
        """
        return len(self.data) > 0  # type: ignore[attr-defined]

    @property
    def network_name(self) -> str:
        """
        Display name of the chain the transaction is bound to.
        """
        return network_name(self.chain_id)  # type: ignore[attr-defined]

    @property
    def estimated_fee(self) -> Uint:
        """
        Upper bound on the fee, in wei: the gas limit multiplied by the price
        the sender is willing to pay for each unit of gas.
        """
        if isinstance(self, FeeMarketTransaction):
            price = self.max_fee_per_gas
        else:
            price = self.gas_price  # type: ignore[attr-defined]
        return self.gas_limit * price  # type: ignore[attr-defined]

    @property
    def classification(self) -> str:
        """
        One-phrase summary of what the transaction does.
        """
        if self.is_contract_creation:
            return "Contract Creation"
        if self.has_data:
            return "Contract Interaction or Transfer with data"
        return "Transfer"


@slotted_freezable
@dataclass
class LegacyTransaction(_TransactionProperties):
    """
    Atomic operation performed on the block chain.

    A `chain_id` of `None` denotes a transaction predating [EIP-155], which is
    signed without replay protection.

    [EIP-155]: https://eips.ethereum.org/EIPS/eip-155
    """

    transaction_type = TransactionType.LEGACY

    nonce: Uint
    gas_price: Uint
    gas_limit: Uint
    to: Union[Bytes0, Address]
    value: Uint
    data: Bytes
    chain_id: Optional[Uint]


@slotted_freezable
@dataclass
class AccessListTransaction(_TransactionProperties):
    """
    The transaction type added in EIP-2930 to support access lists.
    """

    transaction_type = TransactionType.ACCESS_LIST

    chain_id: Uint
    nonce: Uint
    gas_price: Uint
    gas_limit: Uint
    to: Union[Bytes0, Address]
    value: Uint
    data: Bytes
    access_list: Tuple[Access, ...]


@slotted_freezable
@dataclass
class FeeMarketTransaction(_TransactionProperties):
    """
    The transaction type added in EIP-1559.
    """

    transaction_type = TransactionType.FEE_MARKET

    chain_id: Uint
    nonce: Uint
    max_priority_fee_per_gas: Uint
    max_fee_per_gas: Uint
    gas_limit: Uint
    to: Union[Bytes0, Address]
    value: Uint
    data: Bytes
    access_list: Tuple[Access, ...]


Transaction = Union[
    LegacyTransaction, AccessListTransaction, FeeMarketTransaction
]


#
# Decoding
#


def decode_transaction(raw: Bytes) -> Transaction:
    """
    Decode an unsigned or signed transaction from its wire form.

    A first byte of `0x7f` or below is an [EIP-2718] type byte; a first byte
    of `0xc0` or above starts a legacy RLP list. Signature fields, if present,
    are not part of the returned model.

    [EIP-2718]: https://eips.ethereum.org/EIPS/eip-2718

    Parameters
    ----------
    raw :
        Encoded transaction.

    Returns
    -------
    transaction : `Transaction`
        The decoded transaction.
    """
    if len(raw) == 0:
        raise MalformedRLP("Cannot decode empty transaction")

    first_byte = raw[0]
    if first_byte <= 0x7F:
        if first_byte == TransactionType.ACCESS_LIST:
            tx: Transaction = _decode_access_list_transaction(
                _decode_fields(raw[1:], 8)
            )
        elif first_byte == TransactionType.FEE_MARKET:
            tx = _decode_fee_market_transaction(_decode_fields(raw[1:], 9))
        else:
            raise UnsupportedTransactionType(first_byte)
    elif first_byte >= 0xC0:
        tx = _decode_legacy_transaction(_decode_fields(raw, 6))
    else:
        raise InvalidTransactionFormat(
            "transaction must be an RLP list or a typed envelope"
        )

    logger.debug(
        "decoded %s transaction from %d bytes",
        tx.transaction_type.name,
        len(raw),
    )
    return tx


def decode_transaction_hex(hex_string: str) -> Transaction:
    """
    Decode a transaction given as hex text, with or without the `0x` marker.

    Any `VaultException` raised carries `hex_string` in its `raw_input`
    attribute.
    """
    try:
        try:
            raw = hex_to_bytes(hex_string)
        except ValueError as e:
            raise InvalidTransactionFormat(
                f"transaction is not valid hex: {e}"
            ) from e
        return decode_transaction(raw)
    except VaultException as e:
        e.raw_input = hex_string
        raise


def _decode_fields(payload: Bytes, minimum: int) -> Tuple[rlp.Simple, ...]:
    decoded = rlp.decode(payload)
    if isinstance(decoded, bytes):
        raise InvalidTransactionFormat(
            "transaction fields must be an RLP list"
        )
    if len(decoded) < minimum:
        raise InvalidTransactionFormat(
            f"expected at least {minimum} transaction fields, "
            f"got {len(decoded)}"
        )
    return tuple(decoded)


def _decode_bytes(item: rlp.Simple, name: str) -> Bytes:
    if not isinstance(item, bytes):
        raise InvalidTransactionFormat(f"`{name}` must be a byte string")
    return item


def _decode_uint(item: rlp.Simple, name: str) -> Uint:
    return Uint.from_be_bytes(_decode_bytes(item, name))


def _decode_to(item: rlp.Simple) -> Union[Bytes0, Address]:
    to = _decode_bytes(item, "to")
    if len(to) == 0:
        return Bytes0(b"")
    if len(to) != ADDRESS_LENGTH:
        raise InvalidTransactionFormat(
            f"`to` must be empty or {ADDRESS_LENGTH} bytes, got {len(to)}"
        )
    return Address(to)


def _decode_access_list(item: rlp.Simple) -> Tuple[Access, ...]:
    """
    Entries that are not lists of at least two items, or that have an empty
    address, are skipped, as are empty storage keys.
    """
    if isinstance(item, bytes):
        raise InvalidTransactionFormat("`access_list` must be an RLP list")

    access_list = []
    for entry in item:
        if isinstance(entry, bytes) or len(entry) < 2:
            continue

        account = _decode_bytes(entry[0], "access_list.account")
        if len(account) == 0:
            continue
        if len(account) != ADDRESS_LENGTH:
            raise InvalidTransactionFormat(
                f"access list address must be {ADDRESS_LENGTH} bytes, "
                f"got {len(account)}"
            )

        raw_slots = entry[1]
        if isinstance(raw_slots, bytes):
            raise InvalidTransactionFormat(
                "access list storage keys must be an RLP list"
            )

        slots = []
        for raw_slot in raw_slots:
            slot = _decode_bytes(raw_slot, "access_list.storage_key")
            if len(slot) == 0:
                continue
            if len(slot) != STORAGE_KEY_LENGTH:
                raise InvalidTransactionFormat(
                    f"storage key must be {STORAGE_KEY_LENGTH} bytes, "
                    f"got {len(slot)}"
                )
            slots.append(Bytes32(slot))

        access_list.append(
            Access(account=Address(account), slots=tuple(slots))
        )

    return tuple(access_list)


def _decode_legacy_chain_id(
    fields: Tuple[rlp.Simple, ...]
) -> Optional[Uint]:
    """
    Unsigned [EIP-155] transactions carry the chain id in the `v` position
    followed by two empty entries. Signed ones encode it in `v` itself.

    [EIP-155]: https://eips.ethereum.org/EIPS/eip-155
    """
    if len(fields) < 9:
        return None

    v = _decode_uint(fields[6], "v")
    r = _decode_bytes(fields[7], "r")
    s = _decode_bytes(fields[8], "s")

    if len(r) == 0 and len(s) == 0:
        return v
    if int(v) >= 35:
        return Uint((int(v) - 35) // 2)
    return None


def _decode_legacy_transaction(
    fields: Tuple[rlp.Simple, ...]
) -> LegacyTransaction:
    return LegacyTransaction(
        nonce=_decode_uint(fields[0], "nonce"),
        gas_price=_decode_uint(fields[1], "gas_price"),
        gas_limit=_decode_uint(fields[2], "gas_limit"),
        to=_decode_to(fields[3]),
        value=_decode_uint(fields[4], "value"),
        data=_decode_bytes(fields[5], "data"),
        chain_id=_decode_legacy_chain_id(fields),
    )


def _decode_access_list_transaction(
    fields: Tuple[rlp.Simple, ...]
) -> AccessListTransaction:
    return AccessListTransaction(
        chain_id=_decode_uint(fields[0], "chain_id"),
        nonce=_decode_uint(fields[1], "nonce"),
        gas_price=_decode_uint(fields[2], "gas_price"),
        gas_limit=_decode_uint(fields[3], "gas_limit"),
        to=_decode_to(fields[4]),
        value=_decode_uint(fields[5], "value"),
        data=_decode_bytes(fields[6], "data"),
        access_list=_decode_access_list(fields[7]),
    )


def _decode_fee_market_transaction(
    fields: Tuple[rlp.Simple, ...]
) -> FeeMarketTransaction:
    return FeeMarketTransaction(
        chain_id=_decode_uint(fields[0], "chain_id"),
        nonce=_decode_uint(fields[1], "nonce"),
        max_priority_fee_per_gas=_decode_uint(
            fields[2], "max_priority_fee_per_gas"
        ),
        max_fee_per_gas=_decode_uint(fields[3], "max_fee_per_gas"),
        gas_limit=_decode_uint(fields[4], "gas_limit"),
        to=_decode_to(fields[5]),
        value=_decode_uint(fields[6], "value"),
        data=_decode_bytes(fields[7], "data"),
        access_list=_decode_access_list(fields[8]),
    )


#
# Encoding
#


def _encode_access_list(
    access_list: Tuple[Access, ...]
) -> Tuple[Tuple[Address, Tuple[Bytes32, ...]], ...]:
    return tuple((entry.account, entry.slots) for entry in access_list)


def unsigned_fields(tx: Transaction) -> Tuple[rlp.Extended, ...]:
    """
    The fields of `tx` in wire order, without a signature.

    Legacy transactions with a chain id end in `chain_id, 0, 0` as required
    by [EIP-155]; those without one have only six fields.

    [EIP-155]: https://eips.ethereum.org/EIPS/eip-155

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    fields : `Tuple[rlp.Extended, ...]`
        Values ready to be RLP encoded as a list.
    """
    if isinstance(tx, LegacyTransaction):
        fields: Tuple[rlp.Extended, ...] = (
            tx.nonce,
            tx.gas_price,
            tx.gas_limit,
            tx.to,
            tx.value,
            tx.data,
        )
        if tx.chain_id is not None:
            fields += (tx.chain_id, Uint(0), Uint(0))
        return fields
    elif isinstance(tx, AccessListTransaction):
        return (
            tx.chain_id,
            tx.nonce,
            tx.gas_price,
            tx.gas_limit,
            tx.to,
            tx.value,
            tx.data,
            _encode_access_list(tx.access_list),
        )
    elif isinstance(tx, FeeMarketTransaction):
        return (
            tx.chain_id,
            tx.nonce,
            tx.max_priority_fee_per_gas,
            tx.max_fee_per_gas,
            tx.gas_limit,
            tx.to,
            tx.value,
            tx.data,
            _encode_access_list(tx.access_list),
        )
    else:
        raise InvalidTransactionFormat(
            f"Unable to encode transaction of type {type(tx)}"
        )


def encode_typed(tx: Transaction, fields: Tuple[rlp.Extended, ...]) -> Bytes:
    """
    RLP encode `fields` and, for typed transactions, prepend the type byte.
    """
    encoded = rlp.encode(fields)
    if tx.is_legacy:
        return encoded
    return bytes([tx.transaction_type]) + encoded


def encode_unsigned_transaction(tx: Transaction) -> Bytes:
    """
    Encode `tx` without a signature. The result is also the pre-image hashed
    for signing.
    """
    return encode_typed(tx, unsigned_fields(tx))


def encode_transaction_hex(tx: Transaction) -> str:
    """
    `0x` prefixed hex of the unsigned encoding of `tx`.
    """
    return bytes_to_hex(encode_unsigned_transaction(tx))
