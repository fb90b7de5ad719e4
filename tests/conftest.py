"""Shared test configuration for attribute-resolver tests.

Keeps every test independent of a user-level config file and of
ATTRIBUTE_RESOLVER_* environment overrides.
"""

from collections.abc import Iterator
from pathlib import Path

import pytest

from attribute_resolver.config import CONFIG_ENV_VAR, STRICT_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Point HOME at an empty directory and clear resolver env vars."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(STRICT_ENV_VAR, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    yield
