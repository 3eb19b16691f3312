"""Tests for vmrun reply parsers."""

import pytest

from vmrun_mcp.models import CommandResult, GuestProcess
from vmrun_mcp.services.invoke import VMRunError
from vmrun_mcp.services.parsers import (
    DIRECTORY_HEADER,
    SNAPSHOTS_HEADER,
    TOTAL_HEADER,
    clean_stdout,
    contains_marker,
    parse_list,
    parse_processes,
    parse_scalar,
)


class TestParseList:
    """Tests for header-delimited listings."""

    def test_entries_after_header(self) -> None:
        assert parse_list("Total 2:\nfoo\nbar\n", TOTAL_HEADER) == ["foo", "bar"]

    def test_header_without_entries(self) -> None:
        """A header followed by nothing yields an empty list."""
        assert parse_list("Total snapshots: 0\n", SNAPSHOTS_HEADER) == []

    def test_header_without_newline(self) -> None:
        assert parse_list("Total running VMs: 0", TOTAL_HEADER) == []

    def test_missing_header_uses_whole_output(self) -> None:
        assert parse_list("a.txt\nb.txt\n", DIRECTORY_HEADER) == ["a.txt", "b.txt"]

    def test_empty_output(self) -> None:
        assert parse_list("", TOTAL_HEADER) == []

    def test_windows_line_endings(self) -> None:
        stdout = "Total running VMs: 2\r\nC:\\vms\\a.vmx\r\nC:\\vms\\b.vmx\r\n"
        assert parse_list(stdout, TOTAL_HEADER) == ["C:\\vms\\a.vmx", "C:\\vms\\b.vmx"]

    def test_interior_blank_lines_are_kept(self) -> None:
        """Only a trailing blank artifact is ever dropped."""
        assert parse_list("Total 3:\nfoo\n\nbar\n", TOTAL_HEADER) == ["foo", "", "bar"]

    def test_text_before_header_is_ignored(self) -> None:
        stdout = "Warning: deprecated host type\nTotal snapshots: 1\nclean install\n"
        assert parse_list(stdout, SNAPSHOTS_HEADER) == ["clean install"]


class TestParseProcesses:
    """Tests for listProcessesInGuest parsing."""

    def test_parses_records(self) -> None:
        stdout = (
            "Process list: 2\n"
            "pid=1, owner=root, cmd=/sbin/init splash\n"
            "pid=742, owner=NT AUTHORITY\\SYSTEM, cmd=C:\\Windows\\svchost.exe -k, netsvcs\n"
        )

        assert parse_processes(stdout) == [
            GuestProcess(1, "root", "/sbin/init splash"),
            GuestProcess(742, "NT AUTHORITY\\SYSTEM", "C:\\Windows\\svchost.exe -k, netsvcs"),
        ]

    def test_skips_malformed_lines(self) -> None:
        """Lines not matching pid=N, owner=X, cmd=Y are dropped."""
        stdout = (
            "Process list: 3\n"
            "pid=abc, owner=root, cmd=bad\n"
            "garbage\n"
            "pid=5, owner=me, cmd=bash\n"
        )
        assert parse_processes(stdout) == [GuestProcess(5, "me", "bash")]

    def test_empty_list(self) -> None:
        assert parse_processes("Process list: 0\n") == []


class TestMarkers:
    """Tests for existence markers."""

    def test_marker_present(self) -> None:
        assert contains_marker("The file exists.\n", "file exists") is True

    def test_marker_absent(self) -> None:
        assert contains_marker("The file does not exist.\n", "file exists") is False

    def test_empty_stdout(self) -> None:
        assert contains_marker("", "directory exists") is False


class TestScalars:
    """Tests for single-value replies."""

    @pytest.mark.parametrize(
        ("stdout", "expected"),
        [
            ("abc\n", "abc"),
            ("abc\r\n", "abc"),
            ("abc\n\n", "abc\n"),
            ("abc", "abc"),
            ("abc  \n", "abc  "),
            ("", ""),
        ],
    )
    def test_clean_stdout_strips_one_line_break(self, stdout: str, expected: str) -> None:
        assert clean_stdout(stdout) == expected

    def test_parse_scalar_returns_cleaned_stdout(self) -> None:
        result = CommandResult(stdout="192.168.56.101\n", stderr="")
        assert parse_scalar(result) == "192.168.56.101"

    def test_parse_scalar_raises_on_stderr(self) -> None:
        """Any stderr after a zero exit is a failure."""
        result = CommandResult(stdout="", stderr="Error: The VMware Tools are not running\n")

        with pytest.raises(VMRunError) as exc_info:
            parse_scalar(result)

        assert exc_info.value.message == "Error: The VMware Tools are not running\n"
        assert exc_info.value.stderr == result.stderr
