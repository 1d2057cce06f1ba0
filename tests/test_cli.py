"""Essential CLI interface tests."""

from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from mkvcon.cli import cli
from mkvcon.config import MkvconConfig
from mkvcon.error_handling import ExternalToolError
from mkvcon.robot import Drive, aggregate, parse_robot_output
from mkvcon.services.executor import MakeMKVResult


@pytest.fixture
def cli_runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def default_config():
    """Keep user config files out of CLI tests."""
    with patch("mkvcon.cli.load_config", return_value=MkvconConfig()):
        yield


@pytest.fixture
def makemkv_installed():
    with patch("mkvcon.cli.check_dependencies", return_value=[]):
        yield


class TestCLIBasics:
    """Test essential CLI functionality."""

    def test_cli_entry_point(self, cli_runner):
        result = cli_runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "mkvcon" in result.output.lower()

    def test_config_show(self, cli_runner):
        result = cli_runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "makemkvcon" in result.output

    def test_config_init(self, cli_runner, tmp_path):
        path = tmp_path / "config.toml"

        result = cli_runner.invoke(cli, ["config", "init", "--path", str(path)])

        assert result.exit_code == 0
        assert path.exists()


class TestParseCommand:
    """Test parsing saved robot output."""

    def test_parse_file(self, cli_runner, tmp_path, sample_robot_output):
        capture = tmp_path / "scan.txt"
        capture.write_text(sample_robot_output)

        result = cli_runner.invoke(cli, ["parse", str(capture)])

        assert result.exit_code == 0
        assert "MY_DISC" in result.output
        assert "00800.mpls" in result.output
        assert "Title count reported by MakeMKV: 2" in result.output
        assert "Title 0 Stream 1" in result.output
        assert "Codec Short" in result.output
        assert "Mpeg4" in result.output

    def test_parse_stdin_with_messages(self, cli_runner, sample_robot_output):
        result = cli_runner.invoke(cli, ["parse", "--messages", "-"], input=sample_robot_output)

        assert result.exit_code == 0
        assert "Operation successfully completed" in result.output

    def test_parse_without_records(self, cli_runner):
        result = cli_runner.invoke(cli, ["parse", "-"], input="not robot output\n")

        assert result.exit_code == 1
        assert "No robot output records found" in result.output
        assert "Media Error" in result.output


class TestMakeMKVCommands:
    """Test commands that run makemkvcon."""

    def test_drives(self, cli_runner, makemkv_installed):
        drives = [Drive(0, True, True, 0, "BD-RE WH16NS60", "MY_DISC")]
        with patch(
            "mkvcon.cli.MakeMKVService.get_available_drives",
            new=AsyncMock(return_value=(None, drives)),
        ):
            result = cli_runner.invoke(cli, ["drives"])

        assert result.exit_code == 0
        assert "WH16NS60" in result.output

    def test_info(self, cli_runner, makemkv_installed, sample_robot_output):
        records = parse_robot_output(sample_robot_output)
        scan = (
            MakeMKVResult(exit_code=0, stdout=sample_robot_output, stderr="", records=records),
            aggregate(records),
        )
        with patch(
            "mkvcon.cli.MakeMKVService.get_structured_disc_info",
            new=AsyncMock(return_value=scan),
        ) as mock_scan:
            result = cli_runner.invoke(cli, ["info", "1"])

        assert result.exit_code == 0
        assert "2:15:30" in result.output
        mock_scan.assert_awaited_once_with(1)

    def test_info_tool_failure(self, cli_runner, makemkv_installed):
        with patch(
            "mkvcon.cli.MakeMKVService.get_structured_disc_info",
            new=AsyncMock(side_effect=ExternalToolError("MakeMKV", exit_code=1)),
        ):
            result = cli_runner.invoke(cli, ["info"])

        assert result.exit_code == 1
        assert "MakeMKV failed" in result.output

    def test_missing_makemkv(self, cli_runner):
        with patch("mkvcon.error_handling.shutil.which", return_value=None):
            result = cli_runner.invoke(cli, ["drives"])

        assert result.exit_code == 1
        assert "MakeMKV" in result.output

    def test_info_without_robot_output(self, cli_runner, makemkv_installed):
        scan = (MakeMKVResult(exit_code=0, stdout="", stderr="", records=None), None)
        with patch(
            "mkvcon.cli.MakeMKVService.get_structured_disc_info",
            new=AsyncMock(return_value=scan),
        ):
            result = cli_runner.invoke(cli, ["info"])

        assert result.exit_code == 1
        assert "Media Error" in result.output
        assert "no robot output" in result.output
