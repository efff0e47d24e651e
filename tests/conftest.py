"""Shared pytest fixtures for delegate-matcher tests.

Every test starts from default configuration: matcher env vars are cleared,
the cached config is dropped, and the working directory holds no config file.
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from delegate_matcher.config import reset_config

MATCHER_ENV_VARS = (
    "DELEGATE_MATCHER_CONFIG_PATH",
    "DELEGATE_MATCHER_PASSTHROUGH",
    "DELEGATE_MATCHER_LOG_LEVEL",
)


# =============================================================================
# Configuration Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Run each test against default configuration."""
    for name in MATCHER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Return path for a config file in the test's working directory."""
    return tmp_path / "delegate-matcher.yaml"
