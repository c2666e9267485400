"""
Create the signing tools: one signs a transaction, the other shows the address
a key controls.
"""

import argparse
from typing import TextIO

from ..config import VaultConfig
from ..signing import (
    private_key_to_address,
    sign_transaction_bytes,
    transaction_hash,
)
from ..transactions import decode_transaction_hex
from ..utils.hexadecimal import bytes_to_hex
from .utils import (
    get_stream_logger,
    key_arguments,
    strip_prefix_unless,
    unlocked_key,
    write_json,
)


def sign_arguments(subparsers: argparse._SubParsersAction) -> None:
    """
    Adds the arguments for the sign tool subparser.
    """
    sign_parser = subparsers.add_parser(
        "sign", help="Sign an unsigned transaction."
    )
    sign_parser.add_argument(
        "transaction", type=str, help="Encoded unsigned transaction as hex."
    )
    key_arguments(sign_parser)


def address_arguments(subparsers: argparse._SubParsersAction) -> None:
    """
    Adds the arguments for the address tool subparser.
    """
    address_parser = subparsers.add_parser(
        "address", help="Show the address controlled by a private key."
    )
    key_arguments(address_parser)


class Sign:
    """
    Creates the sign tool.
    """

    def __init__(
        self,
        options: argparse.Namespace,
        config: VaultConfig,
        out_file: TextIO,
        in_file: TextIO,
    ) -> None:
        """
        Initializes the sign tool.
        """
        self.options = options
        self.config = config
        self.out_file = out_file
        self.in_file = in_file

        self.logger = get_stream_logger("airgap_vault", config.log_level)

    def run(self) -> int:
        """
        Runs the sign tool.
        """
        tx = decode_transaction_hex(self.options.transaction.strip())

        self.logger.info("Signing the transaction...")
        with unlocked_key(self.options, self.in_file) as private_key:
            signed = sign_transaction_bytes(tx, private_key)

        result = {
            "raw": strip_prefix_unless(
                self.config.hex_prefix, bytes_to_hex(signed)
            ),
            "hash": strip_prefix_unless(
                self.config.hex_prefix, bytes_to_hex(transaction_hash(signed))
            ),
        }
        write_json(result, self.out_file)
        return 0


class Address:
    """
    Creates the address tool.
    """

    def __init__(
        self,
        options: argparse.Namespace,
        config: VaultConfig,
        out_file: TextIO,
        in_file: TextIO,
    ) -> None:
        """
        Initializes the address tool.
        """
        self.options = options
        self.config = config
        self.out_file = out_file
        self.in_file = in_file

    def run(self) -> int:
        """
        Runs the address tool.
        """
        with unlocked_key(self.options, self.in_file) as private_key:
            address = private_key_to_address(private_key)

        write_json({"address": address}, self.out_file)
        return 0
