"""Tests for the orasid.parsers module."""

from __future__ import annotations

import pytest

from orasid.parsers import (
    parse_dump_dests,
    parse_network_hostname,
    parse_oratab,
    parse_parameter_paths,
    parse_resource_names,
    parse_runlevel,
    spfile_missing,
)
from orasid.pipeline.exceptions import FatalStepError


class TestParseRunlevel:
    """Tests for parse_runlevel."""

    @pytest.mark.parametrize(
        ("output", "expected"),
        [("N 3\n", ("N", 3)), ("3 5", ("3", 5)), ("S 1\n\n", ("S", 1)), ("  N   2  ", ("N", 2))],
    )
    def test_valid(self, output: str, expected: tuple[str, int]) -> None:
        """Previous and current levels are returned."""
        assert parse_runlevel(output) == expected

    @pytest.mark.parametrize("output", ["unknown\n", "", "N\n", "N 3\nN 5\n", "N 9"])
    def test_invalid(self, output: str) -> None:
        """Anything but one '<prev> <level>' line is fatal."""
        with pytest.raises(FatalStepError, match="Couldn't parse runlevel"):
            parse_runlevel(output)


class TestSpfileMissing:
    """Tests for spfile_missing."""

    def test_no_spfile(self) -> None:
        """The marker means the instance runs from a pfile."""
        assert spfile_missing("No spfile\n\nPL/SQL procedure successfully completed.\n") is True

    def test_spfile_present(self) -> None:
        """A completed block without the marker means a pfile was written."""
        assert spfile_missing("\nPL/SQL procedure successfully completed.\n") is False

    def test_error_output(self) -> None:
        """Error banners are fatal."""
        with pytest.raises(FatalStepError) as exc_info:
            spfile_missing("ORA-01034: ORACLE not available\n")
        assert "ORA-01034" in exc_info.value.output


class TestParseResourceNames:
    """Tests for parse_resource_names."""

    def test_blocks(self) -> None:
        """Each NAME= line yields a resource."""
        output = (
            "NAME=ora.DATA.dg\nTYPE=ora.diskgroup.type\nTARGET=ONLINE\nSTATE=ONLINE\n\n"
            "NAME=ora.FRA.dg\nTYPE=ora.diskgroup.type\n"
        )
        assert parse_resource_names(output) == ["ora.DATA.dg", "ora.FRA.dg"]

    def test_empty(self) -> None:
        """No resources yields an empty list."""
        assert parse_resource_names("\n") == []

    def test_garbage(self) -> None:
        """Lines that are not KEY=VALUE are fatal."""
        with pytest.raises(FatalStepError):
            parse_resource_names("CRS-4000: Command Status failed\n")


class TestParseDumpDests:
    """Tests for parse_dump_dests."""

    def test_spfile_generated_pfile(self) -> None:
        """Prefixes and quotes are stripped, other parameters ignored."""
        text = (
            "NEW.__db_cache_size=100663296\n"
            "*.audit_file_dest='/u01/app/oracle/admin/NEW/adump'\n"
            "*.background_dump_dest='/u01/app/oracle/admin/NEW/bdump'\n"
            "*.core_dump_dest=\"/u01/app/oracle/admin/NEW/cdump\"\n"
            "user_dump_dest=/u01/app/oracle/admin/NEW/udump\n"
            "*.db_name='NEW'\n"
        )
        assert parse_dump_dests(text) == [
            "/u01/app/oracle/admin/NEW/adump",
            "/u01/app/oracle/admin/NEW/bdump",
            "/u01/app/oracle/admin/NEW/cdump",
            "/u01/app/oracle/admin/NEW/udump",
        ]

    def test_duplicates_removed(self) -> None:
        """Repeated destinations are returned once."""
        text = "*.core_dump_dest='/u01/x'\n*.user_dump_dest='/u01/x'\n"
        assert parse_dump_dests(text) == ["/u01/x"]

    def test_relative_path_fatal(self) -> None:
        """Destinations must be absolute."""
        with pytest.raises(FatalStepError, match="not an absolute path"):
            parse_dump_dests("*.audit_file_dest='?/rdbms/audit'\n")


class TestParseParameterPaths:
    """Tests for parse_parameter_paths."""

    def test_paths(self) -> None:
        """Absolute paths are returned once each, in order."""
        output = "/u01/admin/OLD/bdump\n\n/u01/admin/OLD/udump\n/u01/admin/OLD/bdump\n"
        assert parse_parameter_paths(output) == ["/u01/admin/OLD/bdump", "/u01/admin/OLD/udump"]

    def test_error_banner(self) -> None:
        """An ORA- error is fatal."""
        with pytest.raises(FatalStepError, match="log destinations"):
            parse_parameter_paths("ORA-01034: ORACLE not available\n")


class TestParseOratab:
    """Tests for parse_oratab."""

    TEXT = "# comment\n\n+ASM:/u01/asm:N\nORCL:/u01/db:Y\nORCLX:/u01/other:N\n"

    def test_found(self) -> None:
        """The home of the matching SID is returned."""
        assert parse_oratab(self.TEXT, "ORCL") == "/u01/db"
        assert parse_oratab(self.TEXT, "+ASM") == "/u01/asm"

    def test_missing(self) -> None:
        """An unknown SID is fatal."""
        with pytest.raises(FatalStepError, match="No database found"):
            parse_oratab(self.TEXT, "NOPE")

    def test_duplicate(self) -> None:
        """More than one entry is fatal."""
        with pytest.raises(FatalStepError, match="More than one"):
            parse_oratab("ORCL:/a:Y\nORCL:/b:N\n", "ORCL")


class TestParseNetworkHostname:
    """Tests for parse_network_hostname."""

    def test_found(self) -> None:
        """Quoted and unquoted values are returned."""
        assert parse_network_hostname('NETWORKING=yes\nHOSTNAME="db01"\n') == "db01"

    def test_missing(self) -> None:
        """No HOSTNAME line yields None."""
        assert parse_network_hostname("NETWORKING=yes\n") is None
