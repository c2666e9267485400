from pathlib import Path

import pytest
from ethereum_types.numeric import Uint

from airgap_vault.config import VaultConfig, default_config_path, load_config


def test_defaults_when_no_file_exists(isolated_config: Path) -> None:
    assert not isolated_config.exists()

    config = load_config()

    assert config == VaultConfig()
    assert config.log_level == "WARNING"
    assert config.networks == {}
    assert config.hex_prefix


def test_default_config_path_follows_environment(
    isolated_config: Path,
) -> None:
    assert default_config_path() == isolated_config


def test_default_config_path_falls_back_to_home(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("AIRGAP_VAULT_CONFIG")
    assert default_config_path() == Path.home() / ".airgap-vault.yaml"


def test_load_config_from_environment(isolated_config: Path) -> None:
    isolated_config.write_text("log_level: debug\nhex_prefix: false\n")

    config = load_config()

    assert config.log_level == "DEBUG"
    assert not config.hex_prefix


def test_load_config_explicit_path(tmp_path: Path) -> None:
    path = tmp_path / "vault.yaml"
    path.write_text("networks:\n  31337: Local Devnet\n  1: Main\n")

    config = load_config(path)

    assert config.networks == {31337: "Local Devnet", 1: "Main"}
    assert config.network_name(Uint(31337)) == "Local Devnet"
    assert config.network_name(Uint(1)) == "Main"
    assert config.network_name(Uint(137)) == "Polygon Mainnet"
    assert config.network_name(None) == "Unknown Network (No Chain ID)"


def test_load_config_missing_explicit_path(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_load_config_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "vault.yaml"
    path.write_text("")

    assert load_config(path) == VaultConfig()


@pytest.mark.parametrize(
    "contents",
    [
        "log_level: LOUD\n",
        "hex_prefix: [1, 2]\n",
        "networks: 5\n",
        "- just\n- a list\n",
        "log_level: [unclosed\n",
    ],
)
def test_load_config_rejects_invalid_contents(
    tmp_path: Path, contents: str
) -> None:
    path = tmp_path / "vault.yaml"
    path.write_text(contents)

    with pytest.raises(ValueError):
        load_config(path)
