"""
Create a tool that tells private keys and transactions apart.
"""

import argparse
from typing import Any, Dict, TextIO

from ..inputs import (
    InputKind,
    classify_input,
    clean_input,
    key_fingerprint,
    private_key_validation_info,
    transaction_validation_info,
)
from ..utils.hexadecimal import remove_hex_prefix
from .utils import write_json


def classify_arguments(subparsers: argparse._SubParsersAction) -> None:
    """
    Adds the arguments for the classify tool subparser.
    """
    classify_parser = subparsers.add_parser(
        "classify",
        help="Report whether input is a private key or a transaction.",
    )
    classify_parser.add_argument(
        "data", type=str, help="Scanned or pasted text."
    )


class Classify:
    """
    Creates the classify tool.
    """

    def __init__(self, options: argparse.Namespace, out_file: TextIO) -> None:
        """
        Initializes the classify tool.
        """
        self.options = options
        self.out_file = out_file

    def run(self) -> int:
        """
        Runs the classify tool. Keys are only ever identified by their
        fingerprint.
        """
        data = clean_input(self.options.data)
        kind = classify_input(data)

        result: Dict[str, Any] = {"kind": kind.value}
        if kind is InputKind.PRIVATE_KEY:
            result["message"] = private_key_validation_info(data)
            result["fingerprint"] = key_fingerprint(data)
        elif kind is InputKind.UNKNOWN and len(remove_hex_prefix(data)) == 64:
            # Most likely a mistyped key.
            result["message"] = private_key_validation_info(data)
        else:
            result["message"] = transaction_validation_info(data)

        write_json(result, self.out_file)
        return 0
