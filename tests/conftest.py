from pathlib import Path

import pytest

from airgap_vault.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Point the default configuration at a file that does not exist, so that a
    configuration in the home directory cannot leak into the tests.
    """
    config_path = tmp_path / "airgap-vault.yaml"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_path))
    return config_path
