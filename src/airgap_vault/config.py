"""
A module for loading the vault's configuration.

The configuration lives in an optional YAML file. Its location is taken from
the `AIRGAP_VAULT_CONFIG` environment variable, falling back to
`~/.airgap-vault.yaml`. Pydantic validates the contents.

Classes:
- VaultConfig: The validated configuration.

Functions:
- load_config: Reads a configuration file into a VaultConfig.
- default_config_path: Location of the configuration file when none is given.
"""

import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from ethereum_types.numeric import Uint
from pydantic import BaseModel, ValidationError, field_validator

from .transactions import network_name

CONFIG_ENV_VAR = "AIRGAP_VAULT_CONFIG"
DEFAULT_CONFIG_FILE = ".airgap-vault.yaml"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class VaultConfig(BaseModel):
    """
    Represents the vault configuration.

    Attributes:
    - log_level (str): Threshold of the command line logger.
    - networks (Dict[int, str]): Extra chain names, overriding the built-in
      ones for the same chain id.
    - hex_prefix (bool): Whether hex printed by the command line tool starts
      with `0x`.

    """

    log_level: str = "WARNING"
    networks: Dict[int, str] = {}
    hex_prefix: bool = True

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    def network_name(self, chain_id: Optional[Uint]) -> str:
        """
        Display name of `chain_id`, consulting `networks` first.
        """
        return network_name(chain_id, self.networks)


def default_config_path() -> Path:
    """
    Location named by `AIRGAP_VAULT_CONFIG`, or the file in the home
    directory.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.home() / DEFAULT_CONFIG_FILE


def load_config(path: Optional[Path] = None) -> VaultConfig:
    """
    Load and validate the configuration.

    An explicitly given `path` must exist. When `path` is `None` the default
    location is used, and a missing file there yields the defaults.
    """
    if path is None:
        path = default_config_path()
        if not path.exists():
            return VaultConfig()
    elif not path.exists():
        raise FileNotFoundError(
            f"The configuration file '{path}' does not exist."
        )

    with path.open("r") as file:
        try:
            config_data = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    if config_data is None:
        return VaultConfig()
    if not isinstance(config_data, dict):
        raise ValueError("Invalid configuration: expected a mapping")

    try:
        return VaultConfig(**config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
