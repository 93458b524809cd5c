"""Tests for the orasid.config.settings module."""

from __future__ import annotations

import pytest
from box import Box

from orasid.config import ConfigError, FileSettings, OrasidSettings, UserSettings
from orasid.config.loader import load_config


class TestOrasidSettings:
    """Tests for OrasidSettings validation."""

    def test_defaults(self) -> None:
        """Defaults match the packaged settings file."""
        assert OrasidSettings() == OrasidSettings.from_config(load_config(search_paths=[]))

    def test_empty_user(self) -> None:
        """User names cannot be empty."""
        with pytest.raises(ConfigError, match=r"users\.grid"):
            OrasidSettings(users=UserSettings(grid=""))

    @pytest.mark.parametrize("runlevels", [(), (7,), (-1, 3)])
    def test_runlevels(self, runlevels: tuple[int, ...]) -> None:
        """Run levels must be a non-empty set of 0 to 6."""
        with pytest.raises(ConfigError):
            OrasidSettings(runlevels=runlevels)

    def test_relative_file(self) -> None:
        """System file paths must be absolute."""
        with pytest.raises(ConfigError, match=r"files\.hosts"):
            OrasidSettings(files=FileSettings(hosts="etc/hosts"))

    def test_password_entries(self) -> None:
        """The password file needs at least one entry."""
        with pytest.raises(ConfigError, match="entries"):
            OrasidSettings(password_entries=0)

    def test_logging_preset(self) -> None:
        """Only known presets are accepted."""
        with pytest.raises(ConfigError, match="logging preset"):
            OrasidSettings(logging_preset="loud")


class TestFromConfig:
    """Tests for OrasidSettings.from_config."""

    def test_values(self) -> None:
        """Every key is mapped."""
        settings = OrasidSettings.from_config(
            Box(
                {
                    "users": {"privileged": "admin", "oracle": "ora", "grid": "grd"},
                    "runlevels": ["3", 5],
                    "files": {"hosts": "/tmp/hosts"},
                    "password_file": {"password": "secret", "entries": "4"},
                    "listener": {"resource": "ora.LSNR1.lsnr"},
                    "logging": {"preset": "prod"},
                }
            )
        )
        assert settings.users == UserSettings("admin", "ora", "grd")
        assert settings.runlevels == (3, 5)
        assert settings.files.hosts == "/tmp/hosts"
        assert settings.files.oratab == "/etc/oratab"
        assert (settings.password, settings.password_entries) == ("secret", 4)
        assert settings.listener_resource == "ora.LSNR1.lsnr"
        assert settings.logging_preset == "prod"

    def test_missing_sections(self) -> None:
        """Missing sections fall back to defaults."""
        assert OrasidSettings.from_config({}) == OrasidSettings()

    def test_bad_number(self) -> None:
        """Non-numeric run levels are a configuration error."""
        with pytest.raises(ConfigError, match="Invalid numeric setting"):
            OrasidSettings.from_config({"runlevels": ["three"]})
