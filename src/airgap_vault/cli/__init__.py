"""
Defines the command line interface of the vault.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, Text, TextIO

from .. import __version__
from ..config import load_config
from ..exceptions import VaultException
from .classify import Classify, classify_arguments
from .decode import Decode, decode_arguments
from .sign import Address, Sign, address_arguments, sign_arguments
from .utils import FatalException

DESCRIPTION = """
Offline signer for Ethereum transactions.

You can use this to run the following tools:
    1. decode: Show what an unsigned transaction will do.
    2. sign: Sign an unsigned transaction with a private key.
    3. address: Show the address a private key controls.
    4. classify: Tell private keys and transactions apart.

Legacy (EIP-155), EIP-2930 and EIP-1559 transactions are supported.
"""


def create_parser() -> argparse.ArgumentParser:
    """
    Create a command-line argument parser for the vault.
    """
    new_parser = argparse.ArgumentParser(
        prog="airgap-vault",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    new_parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show the version of the tool.",
    )
    new_parser.add_argument(
        "--config",
        dest="config",
        type=Path,
        default=None,
        help="YAML configuration file.",
    )

    subparsers = new_parser.add_subparsers(dest="vault_tool")

    decode_arguments(subparsers)
    sign_arguments(subparsers)
    address_arguments(subparsers)
    classify_arguments(subparsers)

    return new_parser


def main(
    args: Optional[Sequence[Text]] = None,
    out_file: Optional[TextIO] = None,
    in_file: Optional[TextIO] = None,
) -> int:
    """Run the tools based on the given options."""
    parser = create_parser()

    options = parser.parse_args(args)

    if out_file is None:
        out_file = sys.stdout

    if in_file is None:
        in_file = sys.stdin

    try:
        config = load_config(options.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        if options.vault_tool == "decode":
            return Decode(options, config, out_file).run()
        elif options.vault_tool == "sign":
            return Sign(options, config, out_file, in_file).run()
        elif options.vault_tool == "address":
            return Address(options, config, out_file, in_file).run()
        elif options.vault_tool == "classify":
            return Classify(options, out_file).run()
        else:
            parser.print_help(file=out_file)
            return 0
    except VaultException as e:
        print(f"error: {e}", file=sys.stderr)
        if e.raw_input is not None:
            print(f"input: {e.raw_input}", file=sys.stderr)
        return 1
    except FatalException as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
