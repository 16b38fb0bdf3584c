"""Tests for CLI functionality."""
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from prsheriff.cli import main
from prsheriff.config import DEFAULT_CONFIG_FILENAME, Config


@pytest.fixture
def cli_runner():
    """Fixture for testing CLI commands."""
    return CliRunner()


def test_version(cli_runner):
    result = cli_runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "pr-sheriff" in result.output


def test_valid_title(cli_runner, tmp_path):
    result = cli_runner.invoke(main, ["-p", str(tmp_path), "feat: add login"])
    assert result.exit_code == 0
    assert "PR title passed validation" in result.output


def test_invalid_title_exits_nonzero(cli_runner, tmp_path):
    result = cli_runner.invoke(main, ["-p", str(tmp_path), "Feat: add login"])
    assert result.exit_code == 1
    assert "type must be lowercase" in result.output


def test_options_override_config(cli_runner, tmp_path):
    Config(types=["feat"], allow_breaking=True).save(tmp_path)

    result = cli_runner.invoke(
        main,
        ["-p", str(tmp_path), "--types", "feat,fix", "--no-allow-breaking", "fix!: drop api"],
    )
    assert result.exit_code == 1
    assert "breaking changes are not allowed" in result.output


def test_enforce_scopes_option(cli_runner, tmp_path):
    args = ["-p", str(tmp_path), "--scopes", "core", "--enforce-scopes", "feat(core,web): add"]
    result = cli_runner.invoke(main, args)
    assert result.exit_code == 1
    assert "invalid scope: web" in result.output


def test_skip_ci_title(cli_runner, tmp_path):
    result = cli_runner.invoke(main, ["-p", str(tmp_path), "whatever [skip-ci]"])
    assert result.exit_code == 0
    assert "PR title passed validation" in result.output


def test_title_from_event_payload(cli_runner, tmp_path, event_file, monkeypatch):
    output = tmp_path / "output"
    summary = tmp_path / "summary.md"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(summary))

    result = cli_runner.invoke(
        main, ["-p", str(tmp_path), "--event-path", str(event_file(title="fix(core): bug"))]
    )

    assert result.exit_code == 0
    assert output.read_text() == "valid=true\n"
    assert "Validation passed" in summary.read_text(encoding="utf-8")


def test_ignored_author(cli_runner, tmp_path, ignore_file):
    result = cli_runner.invoke(
        main,
        [
            "-p", str(tmp_path),
            "--author", "renovate-bot",
            "--ignore-authors", str(ignore_file),
            "NOT CONVENTIONAL",
        ],
    )
    assert result.exit_code == 0
    assert "is ignored" in result.output


def test_missing_ignore_file_aborts(cli_runner, tmp_path, monkeypatch):
    output = tmp_path / "output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))

    result = cli_runner.invoke(
        main,
        ["-p", str(tmp_path), "--author", "octocat", "--ignore-authors", str(tmp_path / "nope.txt"), "feat: x"],
    )

    assert result.exit_code == 1
    assert "Error: Ignore-authors file not found" in result.output
    assert output.read_text() == "valid=false\n"


def test_non_pull_request_event_aborts(cli_runner, tmp_path, event_file):
    result = cli_runner.invoke(
        main, ["-p", str(tmp_path), "--event-path", str(event_file(payload={"push": {}}))]
    )
    assert result.exit_code == 1
    assert "only supports pull_request events" in result.output


def test_log_file(cli_runner, tmp_path):
    with cli_runner.isolated_filesystem(temp_dir=tmp_path) as td:
        result = cli_runner.invoke(main, ["--log-file", "logs/sheriff.log", "feat: add"])
        assert result.exit_code == 0
        log_text = (Path(td) / "logs" / "sheriff.log").read_text()
        assert 'Passed: "feat: add"' in log_text


def test_config_list(cli_runner, tmp_path):
    result = cli_runner.invoke(main, ["-p", str(tmp_path), "--config-list", "--types", "feat,fix"])
    assert result.exit_code == 0
    assert "Using default values" in result.output
    assert "types" in result.output
    assert "fix" in result.output


def test_config_dir_flag_creates_config(cli_runner, tmp_path):
    """Test that --config-dir creates a config file if it doesn't exist."""
    with patch("pyperclip.copy") as mock_copy:
        result = cli_runner.invoke(main, ["-p", str(tmp_path), "--config-dir"])

    config_path = tmp_path / DEFAULT_CONFIG_FILENAME
    assert result.exit_code == 0
    assert config_path.exists()
    assert "Created new config file with default values" in result.output
    mock_copy.assert_called_once_with(str(config_path))
    assert Config.load(tmp_path) == Config()
