"""Engine configuration for attribute resolution.

Configuration file location priority:
1. Explicit path passed to SettingsLoader
2. ATTRIBUTE_RESOLVER_CONFIG environment variable
3. Standard location: ~/.attribute-resolver/config.yml
4. Built-in defaults (if no config file found)

The ATTRIBUTE_RESOLVER_STRICT_VARIABLES environment variable overrides the
``strict_variables`` value from any file.

Example config file:
```yaml
strict_variables: true
member_cache_warn_size: 32
```
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ATTRIBUTE_RESOLVER_CONFIG"
STRICT_ENV_VAR = "ATTRIBUTE_RESOLVER_STRICT_VARIABLES"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class EngineSettings(BaseModel):
    """Validated engine settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    strict_variables: bool = Field(
        default=False,
        description="Raise on missing or null attribute access instead of producing None",
    )
    member_cache_warn_size: int = Field(
        default=64,
        ge=1,
        description=(
            "Log a warning once when a single expression's member cache grows past "
            "this many entries (entries are never evicted)"
        ),
    )


def default_config_path() -> Path:
    """Standard per-user config location."""
    return Path.home() / ".attribute-resolver" / "config.yml"


def _parse_bool(raw: str) -> bool | None:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


class SettingsLoader:
    """Loader for EngineSettings from YAML and environment.

    Usage:
        ```python
        loader = SettingsLoader()
        settings = loader.load()
        context = EvaluationContext.from_settings({"user": user}, settings)
        ```

    Settings are loaded once and cached on the loader.
    """

    def __init__(self, config_path: str | Path | None = None):
        """Initialize loader with optional explicit path.

        Args:
            config_path: Explicit path to config file (optional).
                If not provided, uses environment variable or standard location.
        """
        self._settings: EngineSettings | None = None
        self._explicit_path = Path(config_path) if config_path else None

    def _requested_path(self) -> tuple[Path, str] | None:
        """Config file named by the caller or the environment, with its origin."""
        if self._explicit_path:
            return self._explicit_path, "explicit path"
        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser(), CONFIG_ENV_VAR
        return None

    def get_config_path(self) -> Path | None:
        """Determine config file path using priority order.

        A requested file that is missing is reported and disables the standard
        location as well.

        Returns:
            Path to config file, or None if no file exists
        """
        requested = self._requested_path()
        if requested is None:
            standard_path = default_config_path()
            return standard_path if standard_path.is_file() else None

        path, origin = requested
        if path.is_file():
            return path
        logger.warning(f"Config file from {origin} does not exist: {path}")
        return None

    def load(self) -> EngineSettings:
        """Load and validate settings.

        Returns:
            Validated EngineSettings (defaults if no config file found)

        Raises:
            ValueError: If the config file is not valid YAML or fails validation
        """
        if self._settings is not None:
            return self._settings

        raw: dict = {}
        config_path = self.get_config_path()
        if config_path is None:
            logger.info("No attribute resolver config file found, using defaults")
        else:
            logger.info(f"Loading attribute resolver config from: {config_path}")
            try:
                with open(config_path, encoding="utf-8") as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Failed to load config from {config_path}: {e}") from e

            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                raise ValueError(
                    f"Failed to load config from {config_path}: "
                    "config file must contain a YAML dictionary"
                )
            raw = dict(loaded)

        env_strict = os.getenv(STRICT_ENV_VAR)
        if env_strict is not None:
            parsed = _parse_bool(env_strict)
            if parsed is None:
                logger.warning(f"Ignoring unrecognised {STRICT_ENV_VAR} value: {env_strict!r}")
            else:
                raw["strict_variables"] = parsed

        try:
            settings = EngineSettings(**raw)
        except ValueError as e:
            # pydantic.ValidationError is a ValueError subclass
            raise ValueError(f"Invalid attribute resolver config: {e}") from e

        logger.debug(
            f"Attribute resolver settings: strict_variables={settings.strict_variables}, "
            f"member_cache_warn_size={settings.member_cache_warn_size}"
        )
        self._settings = settings
        return settings


__all__ = [
    "CONFIG_ENV_VAR",
    "STRICT_ENV_VAR",
    "EngineSettings",
    "SettingsLoader",
    "default_config_path",
]
