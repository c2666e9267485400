import pytest
from ethereum_types.numeric import Uint

from airgap_vault.utils.formatting import (
    format_gas_price,
    format_scaled,
    format_wei_to_ether,
    shorten_address,
)


@pytest.mark.parametrize(
    "value, decimals, unit, expected",
    [
        (10**18, 18, "ETH", "1 ETH"),
        (1, 18, "ETH", "0.000000000000000001 ETH"),
        (0, 9, "Gwei", "0 Gwei"),
        (500000000, 9, "Gwei", "0.5 Gwei"),
        (12, 0, "wei", "12 wei"),
        (Uint(1500), 3, "X", "1.5 X"),
    ],
)
def test_format_scaled(
    value: int, decimals: int, unit: str, expected: str
) -> None:
    assert format_scaled(value, decimals, unit) == expected


def test_format_scaled_rejects_negative_values() -> None:
    with pytest.raises(ValueError):
        format_scaled(-1, 18, "ETH")


@pytest.mark.parametrize(
    "wei, expected",
    [
        (0, "0 ETH"),
        (1, "0.000000000000000001 ETH"),
        (100, "0.0000000000000001 ETH"),
        (1000, "0.000000000000001 ETH"),
        (10**9, "0.000000001 ETH"),
        (10**15, "0.001 ETH"),
        (10**18, "1 ETH"),
        (1500000000000000000, "1.5 ETH"),
        (12345678900000000000000, "12345.6789 ETH"),
        (1234567890123456789, "1.234567890123456789 ETH"),
    ],
)
def test_format_wei_to_ether(wei: int, expected: str) -> None:
    assert format_wei_to_ether(wei) == expected


def test_format_wei_to_ether_is_exact_beyond_float_precision() -> None:
    wei = 2**128 + 1
    whole, fraction = divmod(wei, 10**18)
    assert format_wei_to_ether(Uint(wei)) == (
        f"{whole}.{str(fraction).rjust(18, '0').rstrip('0')} ETH"
    )


@pytest.mark.parametrize(
    "wei, expected",
    [
        (0, "0 Gwei"),
        (1, "0.000000001 Gwei"),
        (2, "0.000000002 Gwei"),
        (100, "0.0000001 Gwei"),
        (1000, "0.000001 Gwei"),
        (10000, "0.00001 Gwei"),
        (500000000, "0.5 Gwei"),
        (10**9, "1 Gwei"),
        (12345678900, "12.3456789 Gwei"),
    ],
)
def test_format_gas_price(wei: int, expected: str) -> None:
    assert format_gas_price(wei) == expected


@pytest.mark.parametrize(
    "address, expected",
    [
        (
            "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045",
            "0xd8dA...6045",
        ),
        ("0x12345678", "0x1234...5678"),
        ("0x1234567", "0x1234567"),
        ("", ""),
    ],
)
def test_shorten_address(address: str, expected: str) -> None:
    assert shorten_address(address) == expected
