"""Tests for the orasid.environment module."""

from __future__ import annotations

import os

import pytest

from orasid.environment import OracleEnvironment


class TestAsEnv:
    """Tests for OracleEnvironment.as_env."""

    def test_copies_base(self) -> None:
        """The base mapping is copied, not mutated."""
        base = {"PATH": "/bin", "LANG": "C"}
        env = OracleEnvironment(oracle_home="/u01/db", base=base).as_env()
        assert env == {"PATH": "/bin", "LANG": "C", "ORACLE_HOME": "/u01/db"}
        assert base == {"PATH": "/bin", "LANG": "C"}

    def test_unset_values_left_alone(self) -> None:
        """None leaves the inherited variable untouched."""
        env = OracleEnvironment(base={"ORACLE_SID": "INHERITED"}).as_env()
        assert env["ORACLE_SID"] == "INHERITED"

    def test_extra_path_appended_once(self) -> None:
        """Home bin directories are appended to PATH without duplicates."""
        environment = OracleEnvironment(extra_path=("/u01/db/bin", "/bin"), base={"PATH": "/usr/bin:/bin"})
        assert environment.as_env()["PATH"] == os.pathsep.join(["/usr/bin", "/bin", "/u01/db/bin"])

    def test_defaults_to_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a base, os.environ at call time is used."""
        monkeypatch.setenv("ORASID_TEST_MARKER", "1")
        assert OracleEnvironment().as_env()["ORASID_TEST_MARKER"] == "1"

    def test_os_environ_never_mutated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Overrides never leak into os.environ."""
        monkeypatch.delenv("ORACLE_SID", raising=False)
        environment = OracleEnvironment(oracle_sid="ORCL")
        environment.as_env()
        with environment.scoped(oracle_sid="NEW"):
            environment.as_env()
        assert "ORACLE_SID" not in os.environ


class TestForHomes:
    """Tests for OracleEnvironment.for_homes."""

    def test_bin_directories(self) -> None:
        """Each non-empty home contributes its bin directory."""
        environment = OracleEnvironment.for_homes("/u01/db/", "", "/u01/grid")
        assert environment.extra_path == ("/u01/db/bin", "/u01/grid/bin")
        assert environment.oracle_home is None

    def test_ambient_home(self) -> None:
        """An ambient ORACLE_HOME can be set."""
        assert OracleEnvironment.for_homes("/u01/db", oracle_home="/u01/db").oracle_home == "/u01/db"


class TestScoped:
    """Tests for OracleEnvironment.scoped."""

    def test_applies_and_restores(self) -> None:
        """Overrides apply inside the block and are restored after it."""
        environment = OracleEnvironment(oracle_home="/u01/db", base={})
        with environment.scoped(oracle_home="/u01/grid", oracle_sid="+ASM") as scoped:
            assert scoped is environment
            assert environment.as_env() == {"ORACLE_HOME": "/u01/grid", "ORACLE_SID": "+ASM"}
        assert environment.oracle_home == "/u01/db"
        assert environment.oracle_sid is None

    def test_restores_on_exception(self) -> None:
        """Values are restored when the block raises."""
        environment = OracleEnvironment(oracle_sid="OLD")
        with pytest.raises(RuntimeError), environment.scoped(oracle_sid="NEW"):
            raise RuntimeError("step failed")
        assert environment.oracle_sid == "OLD"

    def test_nested(self) -> None:
        """Scopes nest and unwind in order."""
        environment = OracleEnvironment()
        with environment.scoped(oracle_home="/a"):
            with environment.scoped(oracle_home="/b", oracle_sid="X"):
                assert (environment.oracle_home, environment.oracle_sid) == ("/b", "X")
            assert (environment.oracle_home, environment.oracle_sid) == ("/a", None)
        assert environment.oracle_home is None

    def test_unknown_field(self) -> None:
        """Only ORACLE_HOME and ORACLE_SID can be scoped."""
        environment = OracleEnvironment()
        with pytest.raises(TypeError, match="extra_path"), environment.scoped(extra_path="/x"):
            pass
