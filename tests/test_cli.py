# =============================================================================
# test_cli.py - mixcheck Command-Line Tests
# =============================================================================
# Tests for the check, fmt and opcodes subcommands via click's CliRunner.
# =============================================================================

import json

import pytest
from click.testing import CliRunner

from mixparse.cli.mixcheck import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def good_file(tmp_path):
    path = tmp_path / "good.mix"
    path.write_text("LDA 0100,1\nJLE 10,2\n\nOUT 1000,1(18)\nHALT\n")
    return path


@pytest.fixture
def bad_file(tmp_path):
    path = tmp_path / "bad.mix"
    path.write_text("LDA 4000,1\nNOP\nJX 10,1\n")
    return path


class TestGroup:
    """Top-level options."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Check MIX instruction source files" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "mixcheck" in result.output


class TestCheck:
    """mixcheck check."""

    def test_clean_file(self, runner, good_file):
        result = runner.invoke(main, ["check", str(good_file)])
        assert result.exit_code == 0
        assert "4 instructions OK" in result.output

    def test_errors_reported(self, runner, bad_file):
        result = runner.invoke(main, ["check", str(bad_file)])
        assert result.exit_code == 1
        assert "address 4000 is out of range" in result.output
        assert "unknown mnemonic 'JX'" in result.output
        assert "2 errors, 1 instructions OK" in result.output

    def test_json(self, runner, good_file):
        result = runner.invoke(main, ["check", "--json", str(good_file)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data) == 1
        assert [i["text"] for i in data[0]["instructions"]] == [
            "LDA 100,1", "JLE 10,2", "OUT 1000,1(18)", "HALT",
        ]

    def test_max_errors(self, runner, bad_file):
        result = runner.invoke(main, ["check", "--max-errors", "1", str(bad_file)])
        assert result.exit_code == 1
        assert "too many errors" in result.output
        assert "unknown mnemonic" not in result.output

    def test_max_errors_json(self, runner, bad_file):
        result = runner.invoke(
            main, ["check", "--json", "--max-errors", "1", str(bad_file)]
        )
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data[0]["truncated"] is True
        assert len(data[0]["errors"]) == 1

    def test_huge_number(self, runner, tmp_path):
        path = tmp_path / "huge.mix"
        path.write_text("LDA " + "9" * 5000 + ",1\nHALT\n")
        result = runner.invoke(main, ["check", str(path)])
        assert result.exit_code == 1
        assert "number too long" in result.output
        assert "1 errors, 1 instructions OK" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["check", str(tmp_path / "nope.mix")])
        assert result.exit_code == 2

    def test_undecodable_file(self, runner, tmp_path):
        path = tmp_path / "latin1.mix"
        path.write_bytes(b"LDA 1,1\n\xff\xfe\n")
        result = runner.invoke(main, ["check", str(path)])
        assert result.exit_code == 2
        assert "Error:" in result.output

    def test_requires_file(self, runner):
        result = runner.invoke(main, ["check"])
        assert result.exit_code == 2


class TestFmt:
    """mixcheck fmt."""

    def test_stdout(self, runner, good_file):
        result = runner.invoke(main, ["fmt", str(good_file)])
        assert result.exit_code == 0
        assert result.output == "LDA 100,1\nJLE 10,2\nOUT 1000,1(18)\nHALT\n"

    def test_output_file(self, runner, good_file, tmp_path):
        out = tmp_path / "out.mix"
        result = runner.invoke(main, ["fmt", str(good_file), "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_text() == "LDA 100,1\nJLE 10,2\nOUT 1000,1(18)\nHALT\n"

    def test_refuses_bad_input(self, runner, bad_file, tmp_path):
        out = tmp_path / "out.mix"
        result = runner.invoke(main, ["fmt", str(bad_file), "-o", str(out)])
        assert result.exit_code == 1
        assert not out.exists()


class TestOpcodes:
    """mixcheck opcodes."""

    def test_all(self, runner):
        result = runner.invoke(main, ["opcodes"])
        assert result.exit_code == 0
        assert "HALT" in result.output
        assert "JLE" in result.output

    def test_category_filter(self, runner):
        result = runner.invoke(main, ["opcodes", "--category", "only-name"])
        assert result.exit_code == 0
        names = [line.split()[0] for line in result.output.splitlines()[1:]]
        assert names == ["CHAR", "HALT", "NOP", "NUM"]

    def test_bad_category(self, runner):
        result = runner.invoke(main, ["opcodes", "--category", "bogus"])
        assert result.exit_code == 2
