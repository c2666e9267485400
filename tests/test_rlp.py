from typing import Sequence

import pytest
from ethereum_rlp import rlp as reference_rlp
from ethereum_types.numeric import U256, Uint

from airgap_vault import rlp
from airgap_vault.exceptions import MalformedRLP, RLPEncodingError

#
# Tests for RLP encode
#


@pytest.mark.parametrize(
    "raw_data, expected",
    [
        (b"", "80"),
        (b"\x00", "00"),
        (b"\x7f", "7f"),
        (b"\x80", "8180"),
        (b"cat", "83636174"),
        (b"a" * 55, "b7" + "61" * 55),
        (b"a" * 56, "b838" + "61" * 56),
        (b"a" * 1024, "b90400" + "61" * 1024),
    ],
)
def test_rlp_encode_bytes(raw_data: bytes, expected: str) -> None:
    assert rlp.encode(raw_data) == bytes.fromhex(expected)


@pytest.mark.parametrize(
    "raw_data, expected",
    [
        (0, "80"),
        (1, "01"),
        (127, "7f"),
        (128, "8180"),
        (256, "820100"),
        (Uint(0), "80"),
        (Uint(1024), "820400"),
        (U256(0xFFFFFF), "83ffffff"),
        (False, "80"),
        (True, "01"),
    ],
)
def test_rlp_encode_integers_minimally(
    raw_data: object, expected: str
) -> None:
    assert rlp.encode(raw_data) == bytes.fromhex(expected)  # type: ignore


def test_rlp_encode_never_pads_integers() -> None:
    assert rlp.encode(Uint(256)) != bytes.fromhex("83000100")
    assert rlp.encode(Uint(256))[1:] == b"\x01\x00"


def test_rlp_encode_string() -> None:
    assert rlp.encode("dog") == bytes.fromhex("83646f67")


@pytest.mark.parametrize(
    "raw_data, expected",
    [
        ([], "c0"),
        ([b"cat", b"dog"], "c88363617483646f67"),
        ((b"cat", Uint(0)), "c583636174" + "80"),
        ([[], [[]], [[], [[]]]], "c7c0c1c0c3c0c1c0"),
        ([b"a" * 60], "f83e" + "b83c" + "61" * 60),
    ],
)
def test_rlp_encode_sequence(raw_data: Sequence, expected: str) -> None:
    assert rlp.encode(raw_data) == bytes.fromhex(expected)


@pytest.mark.parametrize("raw_data", [-1, 1.5, None, {"a": 1}])
def test_rlp_encode_rejects_unsupported_values(raw_data: object) -> None:
    with pytest.raises(RLPEncodingError):
        rlp.encode(raw_data)  # type: ignore


def test_rlp_hash() -> None:
    assert rlp.rlp_hash(b"") == bytes.fromhex(
        "56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421"
    )


#
# Tests for RLP decode
#


@pytest.mark.parametrize(
    "encoded, expected",
    [
        ("80", b""),
        ("05", b"\x05"),
        ("8180", b"\x80"),
        ("83636174", b"cat"),
        ("b838" + "61" * 56, b"a" * 56),
        ("c0", ()),
        ("c88363617483646f67", (b"cat", b"dog")),
        ("c7c0c1c0c3c0c1c0", ((), ((),), ((), ((),)))),
    ],
)
def test_rlp_decode(encoded: str, expected: rlp.Simple) -> None:
    assert rlp.decode(bytes.fromhex(encoded)) == expected


def test_rlp_decode_distinguishes_empty_string_and_list() -> None:
    assert rlp.decode(b"\x80") == b""
    assert rlp.decode(b"\xc0") == ()
    assert isinstance(rlp.decode(b"\x80"), bytes)
    assert isinstance(rlp.decode(b"\xc0"), tuple)


def test_rlp_decode_item_reports_consumed_bytes() -> None:
    item, consumed = rlp.decode_item(bytes.fromhex("83636174") + b"\x01")
    assert item == b"cat"
    assert consumed == 4


def test_rlp_decode_item_length() -> None:
    assert rlp.decode_item_length(bytes.fromhex("c88363617483646f67")) == 9
    assert rlp.decode_item_length(bytes.fromhex("05ff")) == 1
    assert rlp.decode_item_length(bytes.fromhex("b838" + "61" * 56)) == 58


@pytest.mark.parametrize(
    "encoded",
    [
        "",
        # declared string length past the end
        "83ca",
        # length of length past the end
        "b8",
        "b901",
        # long form list with its payload missing
        "f838",
        # inner item runs past the end of its enclosing list
        "c3836361" + "74",
        # trailing bytes after a complete item
        "0102",
        "c0c0",
    ],
)
def test_rlp_decode_failure(encoded: str) -> None:
    with pytest.raises(MalformedRLP):
        rlp.decode(bytes.fromhex(encoded))


#
# Tests against the reference implementation
#


@pytest.mark.parametrize(
    "raw_data",
    [
        b"",
        b"\x01",
        Uint(0),
        Uint(2**64),
        [b"\x00" * 33, [Uint(7), []], b"x" * 300],
        [[b"a" * 55], [b"b" * 56], Uint(1)],
    ],
)
def test_rlp_matches_reference_implementation(raw_data: rlp.Extended) -> None:
    encoded = reference_rlp.encode(raw_data)
    assert rlp.encode(raw_data) == encoded
    assert reference_rlp.encode(rlp.decode(encoded)) == encoded
