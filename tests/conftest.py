"""Shared pytest fixtures for attio-cli tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from attio_cli.core.logger import LogConfig, UnifiedLogger

_ATTIO_ENV_VARS = (
    "ATTIO_API_KEY",
    "ATTIO_BASE_URL",
    "ATTIO_CONFIG_PATH",
    "ATTIO_TIMEOUT",
    "ATTIO_ENABLE_COMMANDS",
    "ATTIO_AUTO_JSON",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Clear ``ATTIO_*`` variables and point the config file into ``tmp_path``."""

    for name in _ATTIO_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_file = tmp_path / "attio" / "config.yaml"
    monkeypatch.setenv("ATTIO_CONFIG_PATH", str(config_file))
    return config_file


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    UnifiedLogger.configure(LogConfig())
    yield
    UnifiedLogger.reset()


@pytest.fixture
def config_file(isolated_env: Path) -> Path:
    return isolated_env

