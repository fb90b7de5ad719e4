"""Tests for EngineSettings loading from YAML and environment."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from attribute_resolver import EngineSettings, EvaluationContext, SettingsLoader
from attribute_resolver.config import CONFIG_ENV_VAR, STRICT_ENV_VAR, default_config_path


def write_config(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestEngineSettings:
    def test_defaults(self) -> None:
        settings = EngineSettings()
        assert settings.strict_variables is False
        assert settings.member_cache_warn_size == 64

    def test_is_frozen(self) -> None:
        settings = EngineSettings()
        with pytest.raises(ValidationError):
            settings.strict_variables = True

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            EngineSettings(strict=True)

    def test_warn_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            EngineSettings(member_cache_warn_size=0)


class TestSettingsLoader:
    def test_no_config_file_uses_defaults(self) -> None:
        loader = SettingsLoader()
        assert loader.get_config_path() is None
        assert loader.load() == EngineSettings()

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = write_config(
            tmp_path / "engine.yml", "strict_variables: true\nmember_cache_warn_size: 8\n"
        )
        settings = SettingsLoader(path).load()
        assert settings.strict_variables is True
        assert settings.member_cache_warn_size == 8

    def test_env_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = write_config(tmp_path / "env.yml", "strict_variables: true\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert SettingsLoader().get_config_path() == path
        assert SettingsLoader().load().strict_variables is True

    def test_standard_location(self, tmp_path: Path) -> None:
        path = write_config(
            tmp_path / "home" / ".attribute-resolver" / "config.yml",
            "member_cache_warn_size: 16\n",
        )
        loader = SettingsLoader()
        assert loader.get_config_path() == path
        assert loader.load().member_cache_warn_size == 16

    def test_explicit_path_wins_over_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        explicit = write_config(tmp_path / "explicit.yml", "member_cache_warn_size: 4\n")
        env = write_config(tmp_path / "env.yml", "member_cache_warn_size: 5\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env))
        assert SettingsLoader(explicit).load().member_cache_warn_size == 4

    def test_missing_explicit_path_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="attribute_resolver.config"):
            settings = SettingsLoader(tmp_path / "absent.yml").load()
        assert settings == EngineSettings()
        assert "does not exist" in caplog.text

    def test_missing_env_path_skips_standard_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        write_config(default_config_path(), "strict_variables: true\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.yml"))
        with caplog.at_level(logging.WARNING, logger="attribute_resolver.config"):
            loader = SettingsLoader()
            assert loader.get_config_path() is None
        assert CONFIG_ENV_VAR in caplog.text
        assert loader.load().strict_variables is False

    def test_directory_is_not_a_config_file(self, tmp_path: Path) -> None:
        assert SettingsLoader(tmp_path).get_config_path() is None

    def test_default_path_follows_home(self, tmp_path: Path) -> None:
        assert default_config_path() == tmp_path / "home" / ".attribute-resolver" / "config.yml"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "empty.yml", "")
        assert SettingsLoader(path).load() == EngineSettings()

    @pytest.mark.parametrize(
        "content",
        [
            "strict_variables: [unclosed\n",
            "- just\n- a list\n",
            "unknown_option: 1\n",
            "member_cache_warn_size: -3\n",
        ],
    )
    def test_invalid_config_raises_value_error(self, tmp_path: Path, content: str) -> None:
        path = write_config(tmp_path / "bad.yml", content)
        with pytest.raises(ValueError):
            SettingsLoader(path).load()

    def test_settings_are_cached(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "engine.yml", "strict_variables: true\n")
        loader = SettingsLoader(path)
        first = loader.load()
        path.write_text("strict_variables: false\n", encoding="utf-8")
        assert loader.load() is first


class TestStrictEnvOverride:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1", True), ("true", True), ("YES", True), ("off", False), ("0", False)],
    )
    def test_env_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool
    ) -> None:
        path = write_config(tmp_path / "engine.yml", f"strict_variables: {not expected}\n")
        monkeypatch.setenv(STRICT_ENV_VAR, raw)
        assert SettingsLoader(path).load().strict_variables is expected

    def test_unrecognised_value_is_ignored(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv(STRICT_ENV_VAR, "maybe")
        with caplog.at_level(logging.WARNING, logger="attribute_resolver.config"):
            settings = SettingsLoader().load()
        assert settings.strict_variables is False
        assert "maybe" in caplog.text


class TestContextFromSettings:
    def test_strictness_follows_settings(self) -> None:
        strict = EvaluationContext.from_settings({"a": 1}, EngineSettings(strict_variables=True))
        assert strict.is_strict_variables()
        assert strict.get_variable("a") == 1
        assert strict.has_variable("a")
        assert not strict.has_variable("b")

        lenient = EvaluationContext.from_settings({}, EngineSettings())
        assert not lenient.is_strict_variables()
        assert lenient.get_variable("missing") is None
