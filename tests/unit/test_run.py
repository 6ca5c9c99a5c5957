"""
Unit Tests for run.py Entry Script.

Tests individual functions with mocked dependencies.
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from run import main, validate_project_root


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


class TestValidateProjectRoot:
    """Tests for validate_project_root function."""

    def test_validate_project_root_succeeds_when_marker_exists(self, tmp_path):
        """Should return path when .project_root exists."""
        (tmp_path / ".project_root").touch()

        with patch("run.PROJECT_ROOT", tmp_path):
            assert validate_project_root() == tmp_path

    def test_validate_project_root_exits_when_marker_missing(self, tmp_path):
        """Should exit with error when .project_root is missing."""
        with patch("run.PROJECT_ROOT", tmp_path):
            with pytest.raises(SystemExit) as exc_info:
                validate_project_root()
            assert exc_info.value.code == 1


class TestMainCLI:
    """Tests for main CLI entry point."""

    def test_help_displays_usage(self, runner):
        """Should show usage for --help."""
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Notes Service Entry Point" in result.output
        assert "--action" in result.output
        assert "--user-id" in result.output

    def test_info_action_displays_app_info(self, runner):
        """Should show the application info."""
        result = runner.invoke(main, ["--action", "info"])

        assert result.exit_code == 0
        assert "Notes Service" in result.output
        assert "Available Actions:" in result.output

    def test_verbose_flag_sets_info_logging(self, runner):
        """Should set INFO logging for --verbose."""
        with patch("run.setup_logging") as mock_setup, patch("run.validate_project_root"):
            runner.invoke(main, ["--action", "info", "--verbose"])

        mock_setup.assert_called_once_with(level="INFO", format_type="console")

    def test_debug_flag_sets_debug_logging(self, runner):
        """Should set DEBUG logging for --debug."""
        with patch("run.setup_logging") as mock_setup, patch("run.validate_project_root"):
            runner.invoke(main, ["--action", "info", "--debug"])

        mock_setup.assert_called_once_with(level="DEBUG", format_type="console")

    def test_config_action_shows_all_sections(self, runner):
        """Should show every configuration section."""
        result = runner.invoke(main, ["--action", "config"])

        assert result.exit_code == 0
        for section in ("Application", "Database", "Logging", "Security"):
            assert f"{section} Settings" in result.output
        assert "max_limit: 100" in result.output

    def test_invalid_action_shows_error(self, runner):
        """Should reject an unknown action."""
        result = runner.invoke(main, ["--action", "invalid"])

        assert result.exit_code != 0
        assert "Invalid value" in result.output


class TestTokenAction:
    """Tests for the development token action."""

    def test_token_is_issued_for_user(self, runner):
        """Should print a token for the given user."""
        with patch("modules.backend.core.security.create_user_token", return_value="tok") as mock_create:
            result = runner.invoke(main, ["--action", "token", "--user-id", "5"])

        assert result.exit_code == 0
        assert "tok" in result.output
        mock_create.assert_called_once_with(5, expires_delta=None)

    def test_custom_lifetime_is_passed_through(self, runner):
        """Should pass --expires-minutes through as the lifetime."""
        with patch("modules.backend.core.security.create_user_token", return_value="tok") as mock_create:
            runner.invoke(
                main, ["--action", "token", "--user-id", "5", "--expires-minutes", "15"]
            )

        _, kwargs = mock_create.call_args
        assert kwargs["expires_delta"].total_seconds() == 15 * 60

    def test_missing_user_id_exits_with_usage_code(self, runner):
        """Should exit with code 2 without --user-id."""
        result = runner.invoke(main, ["--action", "token"])

        assert result.exit_code == 2

    def test_non_integer_user_id_rejected(self, runner):
        """Should reject a non-integer --user-id."""
        result = runner.invoke(main, ["--action", "token", "--user-id", "abc"])

        assert result.exit_code != 0


class TestServerAction:
    """Tests for the server action."""

    def test_server_uses_configured_host_and_port(self, runner):
        """Should start uvicorn on the configured host and port."""
        with patch("run.subprocess.run") as mock_run:
            result = runner.invoke(main, ["--action", "server"])

        assert result.exit_code == 0
        cmd = mock_run.call_args[0][0]
        assert "modules.backend.main:app" in cmd
        assert cmd[cmd.index("--port") + 1] == "8000"

    def test_server_flags_override_config(self, runner):
        """Should let --host and --port override the configuration."""
        with patch("run.subprocess.run") as mock_run:
            runner.invoke(
                main, ["--action", "server", "--host", "0.0.0.0", "--port", "9001", "--reload"]
            )

        cmd = mock_run.call_args[0][0]
        assert cmd[cmd.index("--host") + 1] == "0.0.0.0"
        assert cmd[cmd.index("--port") + 1] == "9001"
        assert "--reload" in cmd
