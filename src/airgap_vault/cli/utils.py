"""
Utilities for the command line tools
"""

import argparse
import json
import logging
from typing import Any, Dict, TextIO

from ..keys import unlocked_private_key


class FatalException(Exception):
    """Exception that causes the tool to stop"""

    pass


def get_stream_logger(name: str, level: str = "WARNING") -> Any:
    """
    Get a logger that writes to stderr.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
    logger.setLevel(level=level)

    return logger


def key_arguments(parser: argparse.ArgumentParser) -> None:
    """
    Adds the mutually exclusive options naming where the private key comes
    from.
    """
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--key-file",
        dest="key_file",
        type=str,
        help="File holding the private key as hex.",
    )
    source.add_argument(
        "--key-stdin",
        dest="key_stdin",
        action="store_true",
        help="Read the private key as hex from the first line of stdin.",
    )


def read_key_hex(options: argparse.Namespace, in_file: TextIO) -> str:
    """
    Read the private key text named by `--key-file` or `--key-stdin`.
    """
    if options.key_stdin:
        return in_file.readline()

    try:
        with open(options.key_file, "r") as f:
            return f.readline()
    except OSError as e:
        raise FatalException(
            f"cannot read key file '{options.key_file}': {e.strerror}"
        ) from None


def unlocked_key(options: argparse.Namespace, in_file: TextIO) -> Any:
    """
    Context manager lending out the private key for one operation.
    """
    return unlocked_private_key(read_key_hex(options, in_file))


def strip_prefix_unless(hex_prefix: bool, hex_string: str) -> str:
    """
    Drop the `0x` of `hex_string` when `hex_prefix` is false.
    """
    if hex_prefix or not hex_string.startswith("0x"):
        return hex_string
    return hex_string[2:]


def write_json(result: Dict[str, Any], out_file: TextIO) -> None:
    """
    Writes `result` as indented JSON followed by a newline.
    """
    json.dump(result, out_file, indent=4)
    out_file.write("\n")
