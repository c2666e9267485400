"""
.. _rlp:

Recursive Length Prefix (RLP) Encoding
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Defines the serialization and deserialization format used by Ethereum
transactions.

An RLP item is either a byte string or a list of items. Decoded items are
returned as `bytes` or `tuple`, so every consumer branches on
`isinstance(item, bytes)` and handles the other case as a list. The codec
assigns no meaning to the items: an integer, an address and calldata all
decode to plain `bytes`.
"""

from dataclasses import astuple, is_dataclass
from typing import Sequence, Tuple, TypeAlias, Union

from ethereum_types.bytes import Bytes
from ethereum_types.numeric import FixedUnsigned, Uint

from .crypto.hash import Hash32, keccak256
from .exceptions import MalformedRLP, RLPEncodingError

Simple: TypeAlias = Union[Sequence["Simple"], bytes]

Extended: TypeAlias = Union[
    Sequence["Extended"], bytearray, bytes, Uint, FixedUnsigned, int, str, bool
]

SHORT_LENGTH_LIMIT = 0x38
"""
Payloads shorter than this are prefixed by a single byte carrying the length.
"""


#
# RLP Encode
#


def encode(raw_data: Extended) -> Bytes:
    """
    Encodes `raw_data` into a sequence of bytes using RLP.

    Integers are written as their minimal big endian representation, so zero
    becomes the empty byte string.

    Parameters
    ----------
    raw_data :
        A `Bytes`, `Uint`, `int`, dataclass or sequence of RLP encodable
        objects.

    Returns
    -------
    encoded : `Bytes`
        The RLP encoded bytes representing `raw_data`.
    """
    if isinstance(raw_data, Sequence):
        if isinstance(raw_data, (bytearray, bytes)):
            return encode_bytes(bytes(raw_data))
        elif isinstance(raw_data, str):
            return encode_bytes(raw_data.encode())
        else:
            return encode_sequence(raw_data)
    elif isinstance(raw_data, (Uint, FixedUnsigned)):
        return encode_bytes(raw_data.to_be_bytes())
    elif isinstance(raw_data, bool):
        if raw_data:
            return encode_bytes(b"\x01")
        else:
            return encode_bytes(b"")
    elif isinstance(raw_data, int):
        if raw_data < 0:
            raise RLPEncodingError(
                f"cannot encode negative integer {raw_data}"
            )
        return encode_bytes(Uint(raw_data).to_be_bytes())
    elif is_dataclass(raw_data) and not isinstance(raw_data, type):
        return encode(astuple(raw_data))
    else:
        raise RLPEncodingError(
            "RLP Encoding of type {} is not supported".format(type(raw_data))
        )


def encode_bytes(raw_bytes: Bytes) -> Bytes:
    """
    Encodes `raw_bytes`, a sequence of bytes, using RLP.

    Parameters
    ----------
    raw_bytes :
        Bytes to encode with RLP.

    Returns
    -------
    encoded : `Bytes`
        The RLP encoded bytes representing `raw_bytes`.
    """
    len_raw_data = len(raw_bytes)

    if len_raw_data == 1 and raw_bytes[0] < 0x80:
        return bytes(raw_bytes)
    elif len_raw_data < SHORT_LENGTH_LIMIT:
        return bytes([0x80 + len_raw_data]) + raw_bytes
    else:
        # length of raw data represented as big endian bytes
        len_raw_data_as_be = Uint(len_raw_data).to_be_bytes()
        return (
            bytes([0xB7 + len(len_raw_data_as_be)])
            + len_raw_data_as_be
            + raw_bytes
        )


def encode_sequence(raw_sequence: Sequence[Extended]) -> Bytes:
    """
    Encodes a list of RLP encodable objects (`raw_sequence`) using RLP.

    Parameters
    ----------
    raw_sequence :
            Sequence of RLP encodable objects.

    Returns
    -------
    encoded : `Bytes`
        The RLP encoded bytes representing `raw_sequence`.
    """
    joined_encodings = b"".join(encode(item) for item in raw_sequence)
    len_joined_encodings = len(joined_encodings)

    if len_joined_encodings < SHORT_LENGTH_LIMIT:
        return bytes([0xC0 + len_joined_encodings]) + joined_encodings
    else:
        len_joined_encodings_as_be = Uint(len_joined_encodings).to_be_bytes()
        return (
            bytes([0xF7 + len(len_joined_encodings_as_be)])
            + len_joined_encodings_as_be
            + joined_encodings
        )


#
# RLP Decode
#


def decode(encoded_data: Bytes) -> Simple:
    """
    Decodes a single byte string or list from `encoded_data`.

    The whole input must be consumed by that one item; trailing bytes are
    rejected.

    Parameters
    ----------
    encoded_data :
        A sequence of bytes, in RLP form.

    Returns
    -------
    decoded_data : `Simple`
        `bytes` for a byte string, `tuple` for a list.
    """
    decoded, consumed = decode_item(encoded_data)
    if consumed != len(encoded_data):
        raise MalformedRLP(
            f"{len(encoded_data) - consumed} trailing byte(s) after RLP item"
        )
    return decoded


def decode_item(encoded_data: Bytes) -> Tuple[Simple, int]:
    """
    Decodes the first RLP item of `encoded_data`.

    Parameters
    ----------
    encoded_data :
        A sequence of bytes starting with an RLP item. Anything after the
        item is left untouched.

    Returns
    -------
    decoded_data : `Simple`
        The decoded item.
    consumed : `int`
        Number of bytes the item occupied in `encoded_data`.
    """
    if len(encoded_data) <= 0:
        raise MalformedRLP("Cannot decode empty bytestring")

    data = bytes(encoded_data)
    try:
        return _decode_at(data, 0, len(data))
    except RecursionError as e:
        raise MalformedRLP("RLP lists nested too deeply") from e


def decode_item_length(encoded_data: Bytes) -> int:
    """
    Find the length of the rlp encoding for the first object in
    `encoded_data`, including its prefix.

    Parameters
    ----------
    encoded_data :
        RLP encoded data, possibly followed by further items.

    Returns
    -------
    rlp_length : `int`
    """
    if len(encoded_data) <= 0:
        raise MalformedRLP("Cannot decode empty bytestring")

    data = bytes(encoded_data)
    _, payload_start, payload_length = _read_prefix(data, 0, len(data))
    return payload_start + payload_length


def _read_prefix(data: bytes, offset: int, end: int) -> Tuple[bool, int, int]:
    """
    Reads the prefix of the item at `offset`.

    Returns whether the item is a list, the absolute index at which its
    payload starts, and the payload length. Raises `MalformedRLP` if the
    declared length runs past `end`.
    """
    first_rlp_byte = data[offset]

    # This occurs only when the raw_data is a single byte whose value < 128
    if first_rlp_byte < 0x80:
        return False, offset, 1

    if first_rlp_byte <= 0xB7:
        is_list = False
        length_length = 0
        payload_length = first_rlp_byte - 0x80
    elif first_rlp_byte <= 0xBF:
        is_list = False
        length_length = first_rlp_byte - 0xB7
    elif first_rlp_byte <= 0xF7:
        is_list = True
        length_length = 0
        payload_length = first_rlp_byte - 0xC0
    else:
        is_list = True
        length_length = first_rlp_byte - 0xF7

    payload_start = offset + 1 + length_length
    if payload_start > end:
        raise MalformedRLP(
            f"length prefix at offset {offset} runs past end of input"
        )
    if length_length:
        payload_length = int.from_bytes(
            data[offset + 1 : payload_start], "big"
        )

    if payload_start + payload_length > end:
        raise MalformedRLP(
            f"item at offset {offset} declares {payload_length} byte(s) but "
            f"only {end - payload_start} remain"
        )

    return is_list, payload_start, payload_length


def _decode_at(data: bytes, offset: int, end: int) -> Tuple[Simple, int]:
    """
    Decodes the item at `offset`, which must fit before `end`, returning it
    and the number of bytes it occupies.
    """
    is_list, payload_start, payload_length = _read_prefix(data, offset, end)
    payload_end = payload_start + payload_length

    if not is_list:
        return data[payload_start:payload_end], payload_end - offset

    decoded_sequence = []
    item_start_idx = payload_start
    while item_start_idx < payload_end:
        item, consumed = _decode_at(data, item_start_idx, payload_end)
        decoded_sequence.append(item)
        item_start_idx += consumed

    return tuple(decoded_sequence), payload_end - offset


def rlp_hash(data: Extended) -> Hash32:
    """
    Obtain the keccak-256 hash of the rlp encoding of the passed in data.

    Parameters
    ----------
    data :
        The data for which we need the rlp hash.

    Returns
    -------
    hash : `Hash32`
        The rlp hash of the passed in data.
    """
    return keccak256(encode(data))
