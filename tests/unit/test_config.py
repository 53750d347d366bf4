"""Tests for configuration management."""

from pathlib import Path

import pytest

from wpmaint.config import Config, ConfigError, MaintenanceSettings


class TestConfig:
    """Test settings resolution."""

    def test_defaults(self, installation):
        settings = Config(installation).load()

        assert settings.installation_dir == installation
        assert settings.default_duration == 600
        assert settings.sentinel_name == ".maintenance"
        assert settings.variable == "upgrading"
        assert settings.sentinel_path == installation / ".maintenance"

    def test_current_directory_fallback(self, installation, monkeypatch):
        monkeypatch.chdir(installation)

        assert Config().installation_dir == Path.cwd()

    def test_env_path(self, installation, monkeypatch):
        monkeypatch.setenv("WPMAINT_PATH", str(installation))

        assert Config().installation_dir == installation

    def test_explicit_path_beats_env(self, installation, tmp_path, monkeypatch):
        monkeypatch.setenv("WPMAINT_PATH", str(tmp_path))

        assert Config(installation).installation_dir == installation

    def test_config_file(self, installation):
        (installation / "wpmaint.toml").write_text(
            "[maintenance]\n"
            "default_duration = 900\n"
            'sentinel_name = ".maint"\n'
            'variable = "maintenance"\n'
        )

        settings = Config(installation).load()

        assert settings.default_duration == 900
        assert settings.sentinel_path == installation / ".maint"
        assert settings.variable == "maintenance"

    def test_explicit_config_file(self, installation, tmp_path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[maintenance]\ndefault_duration = 120\n")

        settings = Config(installation, config_file=config_file).load()

        assert settings.default_duration == 120

    def test_explicit_config_file_missing(self, installation, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config(installation, config_file=tmp_path / "nope.toml").load()

    def test_env_overrides(self, installation, monkeypatch):
        (installation / "wpmaint.toml").write_text(
            "[maintenance]\ndefault_duration = 900\n"
        )
        monkeypatch.setenv("WPMAINT_DEFAULT_DURATION", "30")
        monkeypatch.setenv("WPMAINT_SENTINEL_NAME", ".down")
        monkeypatch.setenv("WPMAINT_VARIABLE", "down")

        settings = Config(installation).load()

        assert settings.default_duration == 30
        assert settings.sentinel_name == ".down"
        assert settings.variable == "down"

    def test_malformed_toml(self, installation):
        (installation / "wpmaint.toml").write_text("[maintenance\n")

        with pytest.raises(ConfigError):
            Config(installation).load()

    def test_maintenance_not_a_table(self, installation):
        (installation / "wpmaint.toml").write_text("maintenance = 5\n")

        with pytest.raises(ConfigError) as exc_info:
            Config(installation).load()

        assert "must be a table" in str(exc_info.value)

    def test_unknown_setting(self, installation):
        (installation / "wpmaint.toml").write_text("[maintenance]\ncolour = 'red'\n")

        with pytest.raises(ConfigError):
            Config(installation).load()

    @pytest.mark.parametrize(
        "env,value",
        [
            ("WPMAINT_DEFAULT_DURATION", "0"),
            ("WPMAINT_DEFAULT_DURATION", "ten"),
            ("WPMAINT_SENTINEL_NAME", "../.maintenance"),
            ("WPMAINT_VARIABLE", "1bad"),
        ],
    )
    def test_invalid_values(self, installation, monkeypatch, env, value):
        monkeypatch.setenv(env, value)

        with pytest.raises(ConfigError):
            Config(installation).load()


def test_settings_reject_nested_sentinel(tmp_path):
    with pytest.raises(ValueError):
        MaintenanceSettings(installation_dir=tmp_path, sentinel_name="sub/.maintenance")
