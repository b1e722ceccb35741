"""Tests for the extract and config CLI commands."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from vault_tasks.cli.commands.extract import parse_line_range
from vault_tasks.cli.main import app as cli_app

runner = CliRunner()


@pytest.fixture
def note(tmp_path, config_dir):
    vault_dir = tmp_path / "Work"
    vault_dir.mkdir()
    path = vault_dir / "Today.md"
    path.write_text(
        "# Today\n- [ ] Buy milk #errand // tomorrow\n- [ ] Pay rent // 2025-03-01\n",
        encoding="utf-8",
    )
    return path


class TestExtractCommand:
    def test_dry_run_prints_urls(self, note):
        result = runner.invoke(cli_app, ["extract", str(note), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "omnifocus:///add?name=Buy%20milk&note=" in result.output
        assert "&due=tomorrow&context=errand" in result.output
        assert "Sent 2 task(s)" in result.output
        assert "[ ]" in note.read_text(encoding="utf-8")

    def test_launches_each_url(self, note):
        with patch("vault_tasks.host.typer.launch") as launch:
            result = runner.invoke(cli_app, ["extract", str(note)])

        assert result.exit_code == 0, result.output
        assert launch.call_count == 2

    def test_mark_complete(self, note):
        result = runner.invoke(cli_app, ["extract", str(note), "--dry-run", "--mark-complete"])

        assert result.exit_code == 0, result.output
        assert note.read_text(encoding="utf-8") == (
            "# Today\n- [x] Buy milk #errand // tomorrow\n- [x] Pay rent // 2025-03-01\n"
        )

    def test_line_range_selection(self, note):
        result = runner.invoke(
            cli_app, ["extract", str(note), "--dry-run", "--lines", "3", "--mark-complete"]
        )

        assert result.exit_code == 0, result.output
        assert "Sent 1 task(s)" in result.output
        assert "name=Pay%20rent" in result.output
        assert note.read_text(encoding="utf-8") == (
            "# Today\n- [ ] Buy milk #errand // tomorrow\n- [x] Pay rent // 2025-03-01\n"
        )

    def test_no_tasks(self, tmp_path, config_dir):
        path = tmp_path / "empty.md"
        path.write_text("nothing to do\n", encoding="utf-8")

        result = runner.invoke(cli_app, ["extract", str(path), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "No tasks found" in result.output

    def test_vault_option(self, note):
        result = runner.invoke(
            cli_app, ["extract", str(note), "--dry-run", "--vault", str(note.parent.parent)]
        )

        assert result.exit_code == 0, result.output
        assert "file%3DWork%252FToday.md" in result.output

    def test_bad_config_reported(self, note, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "config.json").write_text("{broken")

        result = runner.invoke(cli_app, ["extract", str(note), "--dry-run"])

        assert result.exit_code == 1
        assert "Invalid config file" in result.output

    def test_missing_file(self, tmp_path, config_dir):
        result = runner.invoke(cli_app, ["extract", str(tmp_path / "nope.md")])
        assert result.exit_code == 2


class TestParseLineRange:
    def test_range(self):
        assert parse_line_range("3-10") == (3, 10)

    def test_single_line(self):
        assert parse_line_range("4") == (4, 4)

    @pytest.mark.parametrize("value", ["a-b", "0-3", "5-2", ""])
    def test_invalid(self, value):
        with pytest.raises(Exception):
            parse_line_range(value)


class TestConfigCommand:
    def test_set_and_show(self, config_dir):
        result = runner.invoke(cli_app, ["config", "set", "recognition_mode", "line"])
        assert result.exit_code == 0, result.output
        assert "recognition_mode = line" in result.output

        result = runner.invoke(cli_app, ["config", "show"])
        assert result.exit_code == 0, result.output
        assert "recognition_mode" in result.output
        assert "line" in result.output

    def test_set_unknown(self, config_dir):
        result = runner.invoke(cli_app, ["config", "set", "colour", "blue"])
        assert result.exit_code == 1
        assert "Unknown setting" in result.output

    def test_clear_optional_value(self, config_dir):
        runner.invoke(cli_app, ["config", "set", "vault_name", "Work"])
        result = runner.invoke(cli_app, ["config", "set", "vault_name", "none"])
        assert result.exit_code == 0, result.output
        assert "vault_name = None" in result.output
