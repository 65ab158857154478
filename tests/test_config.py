"""Tests for gateway_sim.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from gateway_sim.config import SimSettings, get_settings_file, load_settings


class TestGetSettingsFile:
    def test_gateway_sim_home_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GATEWAY_SIM_HOME", str(tmp_path))
        monkeypatch.setenv("XDG_CONFIG_HOME", "/elsewhere")
        assert get_settings_file() == tmp_path / "settings.yaml"

    def test_xdg_config_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("GATEWAY_SIM_HOME", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_settings_file() == tmp_path / "gateway-sim" / "settings.yaml"

    def test_default_home_config(self, monkeypatch):
        monkeypatch.delenv("GATEWAY_SIM_HOME", raising=False)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert get_settings_file() == Path.home() / ".config" / "gateway-sim" / "settings.yaml"


class TestLoadSettings:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GATEWAY_SIM_HOME", str(tmp_path / "home"))
        monkeypatch.delenv("GATEWAY_SIM_TIMEOUT", raising=False)

    def test_missing_file_gives_defaults(self):
        settings = load_settings()
        assert settings == SimSettings()
        assert settings.timeout is None
        assert settings.body_trim == 1000
        assert settings.value_trim == 300

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            """\
timeout: 2.5
body_trim: 50
value_trim: 20
hooks_file: /tmp/hooks.yaml
"""
        )
        settings = load_settings(path)
        assert settings.timeout == 2.5
        assert settings.body_trim == 50
        assert settings.value_trim == 20
        assert settings.hooks_file == Path("/tmp/hooks.yaml")

    def test_env_timeout_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text("timeout: 2.5\n")
        monkeypatch.setenv("GATEWAY_SIM_TIMEOUT", "7")
        assert load_settings(path).timeout == 7.0

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert load_settings(path) == SimSettings()

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="YAML dictionary"):
            load_settings(path)

    @pytest.mark.parametrize("content", ["body_trim: 0\n", "value_trim: -1\n", "timeout: 0\n"])
    def test_invalid_values_rejected(self, tmp_path, content):
        path = tmp_path / "settings.yaml"
        path.write_text(content)
        with pytest.raises(ValueError):
            load_settings(path)
