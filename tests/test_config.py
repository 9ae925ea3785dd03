"""Test S30Config and the YAML loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from lennox_s30 import ConfigLoadError, S30Config, load_config
from lennox_s30.const import DEFAULT_CLOUD_APP_ID, DEFAULT_POLL_INTERVAL


class TestS30Config:
    """Test config construction."""

    def test_defaults(self) -> None:
        config = S30Config(email="me@example.com", password="pw")

        assert config.app_id == DEFAULT_CLOUD_APP_ID
        assert config.poll_interval == DEFAULT_POLL_INTERVAL
        assert config.max_consecutive_errors == 5
        assert config.token_refresh_buffer == 300
        assert config.manual_schedule_base == 16

    def test_repr_hides_password(self) -> None:
        config = S30Config(email="me@example.com", password="s3cret")

        assert "s3cret" not in repr(config)
        assert "me@example.com" in repr(config)

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = S30Config.from_dict(
            {"email": "me@example.com", "password": "pw", "poll_interval": 2, "x": 1}
        )

        assert config.poll_interval == 2

    @pytest.mark.parametrize(
        "data", [{}, {"email": "me@example.com"}, {"password": "pw"}]
    )
    def test_from_dict_requires_credentials(self, data: dict) -> None:
        with pytest.raises(ConfigLoadError, match="email and password"):
            S30Config.from_dict(data)


class TestLoadConfig:
    """Test loading from YAML files."""

    def test_top_level(self, tmp_path: Path) -> None:
        path = tmp_path / "s30.yaml"
        path.write_text(
            "email: me@example.com\npassword: pw\nmessage_count: 20\n",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.email == "me@example.com"
        assert config.message_count == 20

    def test_s30_section(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "s30:\n  email: me@example.com\n  password: pw\n  fast_poll_interval: 0.5\n",
            encoding="utf-8",
        )

        config = load_config(str(path))

        assert config.fast_poll_interval == 0.5

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="File not found"):
            load_config(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="Expected a mapping"):
            load_config(path)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="email and password"):
            load_config(path)
