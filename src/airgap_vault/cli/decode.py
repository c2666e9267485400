"""
Create a decoder tool that shows what a transaction will do before it is
signed.
"""

import argparse
from typing import Any, Dict, TextIO

from ..config import VaultConfig
from ..transactions import (
    AccessListTransaction,
    FeeMarketTransaction,
    LegacyTransaction,
    Transaction,
    decode_transaction_hex,
)
from ..utils.formatting import (
    format_gas_price,
    format_wei_to_ether,
    shorten_address,
)
from ..utils.hexadecimal import bytes_to_hex, to_checksum_address
from .utils import get_stream_logger, strip_prefix_unless, write_json


def decode_arguments(subparsers: argparse._SubParsersAction) -> None:
    """
    Adds the arguments for the decode tool subparser.
    """
    decode_parser = subparsers.add_parser(
        "decode", help="Show the fields of an unsigned transaction."
    )
    decode_parser.add_argument(
        "transaction", type=str, help="Encoded transaction as hex."
    )


def transaction_to_json(
    tx: Transaction, config: VaultConfig
) -> Dict[str, Any]:
    """
    Fields and derived properties of `tx`, in a JSON friendly form.
    """
    def render(data: bytes) -> str:
        return strip_prefix_unless(config.hex_prefix, bytes_to_hex(data))

    to = None if tx.is_contract_creation else to_checksum_address(tx.to)

    result: Dict[str, Any] = {
        "type": int(tx.transaction_type),
        "classification": tx.classification,
        "chainId": None if tx.chain_id is None else int(tx.chain_id),
        "network": config.network_name(tx.chain_id),
        "nonce": int(tx.nonce),
        "to": to,
        "toFormatted": None if to is None else shorten_address(to),
        "value": int(tx.value),
        "valueFormatted": format_wei_to_ether(tx.value),
        "gasLimit": int(tx.gas_limit),
    }

    if isinstance(tx, (LegacyTransaction, AccessListTransaction)):
        result["gasPrice"] = int(tx.gas_price)
        result["gasPriceFormatted"] = format_gas_price(tx.gas_price)
    elif isinstance(tx, FeeMarketTransaction):
        result["maxPriorityFeePerGas"] = int(tx.max_priority_fee_per_gas)
        result["maxFeePerGas"] = int(tx.max_fee_per_gas)
        result["maxFeePerGasFormatted"] = format_gas_price(tx.max_fee_per_gas)

    result["data"] = render(tx.data)
    result["estimatedFee"] = int(tx.estimated_fee)
    result["estimatedFeeFormatted"] = format_wei_to_ether(tx.estimated_fee)

    if not isinstance(tx, LegacyTransaction):
        result["accessList"] = [
            {
                "address": to_checksum_address(entry.account),
                "storageKeys": [render(slot) for slot in entry.slots],
            }
            for entry in tx.access_list
        ]

    return result


class Decode:
    """
    Creates the decode tool.
    """

    def __init__(
        self,
        options: argparse.Namespace,
        config: VaultConfig,
        out_file: TextIO,
    ) -> None:
        """
        Initializes the decode tool.
        """
        self.options = options
        self.config = config
        self.out_file = out_file

        self.logger = get_stream_logger("airgap_vault", config.log_level)

    def run(self) -> int:
        """
        Runs the decode tool.
        """
        tx = decode_transaction_hex(self.options.transaction.strip())
        self.logger.info("Decoded a %s", tx.classification.lower())

        write_json(transaction_to_json(tx, self.config), self.out_file)
        return 0
