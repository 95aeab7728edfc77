# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from qubitverse.config import (
    Config,
    _parse_bool,
    get_config,
    load_config,
    reset_config,
    set_config,
)
from qubitverse.errors import ConfigError


class TestConfig:
    """Config validation."""

    def test_defaults(self):
        config = Config()
        assert config.transport == "process"
        assert config.simulator_command == ("qubitverse-simulator",)
        assert config.port == 5000
        assert config.cors_origins == ("http://localhost:5173",)
        assert config.strict_decode is False

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"transport": "carrier-pigeon"}, "transport must be one of"),
            ({"simulator_command": ()}, "must not be empty"),
            ({"timeout": 0}, "timeout must be positive"),
            ({"retry_attempts": -1}, "retry_attempts"),
            ({"port": 70000}, "port out of range"),
        ],
    )
    def test_invalid_values(self, kwargs, message):
        with pytest.raises(ConfigError, match=message):
            Config(**kwargs)

    def test_to_dict(self):
        data = Config().to_dict()
        assert data["transport"] == "process"
        assert set(data) >= {"simulator_url", "timeout", "cors_origins"}


class TestParseBool:
    """Boolean env parsing."""

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_true(self, value):
        assert _parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", "maybe"])
    def test_false(self, value):
        assert _parse_bool(value) is False

    def test_default(self):
        assert _parse_bool(None, default=True) is True
        assert _parse_bool("  ", default=True) is True


class TestLoadConfig:
    """Resolution from file and environment."""

    def test_env(self):
        config = load_config(
            env={
                "QUBITVERSE_TRANSPORT": "HTTP",
                "QUBITVERSE_SIMULATOR_URL": "http://sim:9000/encode",
                "QUBITVERSE_SIMULATOR_CMD": "./simulator --quiet",
                "QUBITVERSE_TIMEOUT": "2.5",
                "QUBITVERSE_RETRY_ATTEMPTS": "0",
                "QUBITVERSE_STRICT_DECODE": "yes",
                "QUBITVERSE_PORT": "8080",
                "QUBITVERSE_CORS_ORIGINS": "http://a.test, http://b.test",
            }
        )
        assert config.transport == "http"
        assert config.simulator_url == "http://sim:9000/encode"
        assert config.simulator_command == ("./simulator", "--quiet")
        assert config.timeout == 2.5
        assert config.retry_attempts == 0
        assert config.strict_decode is True
        assert config.port == 8080
        assert config.cors_origins == ("http://a.test", "http://b.test")

    def test_invalid_number(self):
        with pytest.raises(ConfigError, match="QUBITVERSE_TIMEOUT must be a float"):
            load_config(env={"QUBITVERSE_TIMEOUT": "soon"})

    def test_file(self, tmp_path: Path):
        path = tmp_path / "qubitverse.toml"
        path.write_text(
            '[qubitverse]\ntransport = "http"\ntimeout = 4\n'
            'simulator_command = ["sim", "-v"]\n',
            encoding="utf-8",
        )
        config = load_config(path, env={})
        assert config.transport == "http"
        assert config.timeout == 4
        assert config.simulator_command == ("sim", "-v")

    def test_env_overrides_file(self, tmp_path: Path):
        path = tmp_path / "qubitverse.toml"
        path.write_text('[qubitverse]\nport = 6000\n', encoding="utf-8")
        config = load_config(path, env={"QUBITVERSE_PORT": "7000"})
        assert config.port == 7000

    def test_file_from_env(self, tmp_path: Path):
        path = tmp_path / "qubitverse.toml"
        path.write_text('[qubitverse]\nsimulator_command = "bin/sim --fast"\n', encoding="utf-8")
        config = load_config(env={"QUBITVERSE_CONFIG": str(path)})
        assert config.simulator_command == ("bin/sim", "--fast")

    def test_unknown_keys_warn(self, tmp_path: Path, caplog):
        path = tmp_path / "qubitverse.toml"
        path.write_text('[qubitverse]\ncolour = "blue"\n', encoding="utf-8")
        assert load_config(path, env={}) == Config()
        assert "colour" in caplog.text

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "absent.toml", env={})

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "broken.toml"
        path.write_text("[qubitverse\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path, env={})


class TestGlobalConfig:
    """Process-wide cached instance."""

    def test_cached(self):
        assert get_config() is get_config()

    def test_set_and_reset(self, monkeypatch):
        custom = Config(port=1234)
        set_config(custom)
        assert get_config() is custom

        monkeypatch.setenv("QUBITVERSE_PORT", "4321")
        reset_config()
        assert get_config().port == 4321
