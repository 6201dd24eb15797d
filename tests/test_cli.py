"""
Tests for CLI commands.
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from reportobello.api.models import Template
from reportobello.cli import cli
from reportobello.config import ReportobelloConfig
from reportobello.exceptions import APIError

PDF_URL = "https://reportobello.com/r/abc.pdf"


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_config():
    """Create mock configuration."""
    with patch('reportobello.cli.get_config_manager') as mock:
        config_manager = MagicMock()
        config_manager.get.return_value = ReportobelloConfig(
            api_key="test-key",
            server_url="https://test.example.com",
            timeout=30,
        )
        config_manager.get_config_path.return_value = "/tmp/reportobello/config.json"
        mock.return_value = config_manager
        yield config_manager


@pytest.fixture
def mock_client():
    """Replace the API client used by commands with an async mock."""
    with patch('reportobello.commands.ReportobelloAPIClient') as mock_cls:
        instance = MagicMock()
        instance.__aenter__ = AsyncMock(return_value=instance)
        instance.__aexit__ = AsyncMock(return_value=False)
        instance.upload_template = AsyncMock(return_value=None)
        instance.get_template_versions = AsyncMock(return_value=[])
        instance.set_environment_variables = AsyncMock(return_value=None)
        instance.delete_environment_variables = AsyncMock(return_value=None)
        instance.run_report = AsyncMock(return_value=PDF_URL)
        mock_cls.return_value = instance
        yield instance


class TestCLI:
    """Tests for main CLI."""

    def test_version(self, runner):
        """Test version option."""
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert 'reportobello' in result.output.lower()

    def test_help(self, runner):
        """Test help output."""
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Reportobello CLI' in result.output


class TestConfigureCommand:
    """Tests for configure command."""

    def test_configure_show(self, runner, mock_config):
        """Test showing current configuration with the key masked."""
        result = runner.invoke(cli, ['configure', '--show'])
        assert result.exit_code == 0
        assert 'Configuration' in result.output
        assert 'https://test.example.com' in result.output
        assert 'test-key' not in result.output

    def test_configure_api_key(self, runner, mock_config):
        """Test setting the API key."""
        result = runner.invoke(cli, ['configure', '--api-key', 'rbo_new'])
        assert result.exit_code == 0
        mock_config.update.assert_called_once_with(api_key='rbo_new')

    def test_configure_invalid_server(self, runner, mock_config):
        """Test that a relative server URL is rejected."""
        result = runner.invoke(cli, ['configure', '--server', 'reportobello.com'])
        assert result.exit_code == 1
        mock_config.update.assert_not_called()

    def test_config_clear(self, runner, mock_config):
        """Test clearing configuration."""
        result = runner.invoke(cli, ['config-clear', '--yes'])
        assert result.exit_code == 0
        mock_config.clear.assert_called_once()


class TestNotConfigured:
    """Tests for commands without an API key."""

    def test_versions_not_configured(self, runner):
        """Test versions when not configured."""
        with patch('reportobello.cli.get_config_manager') as mock:
            config_manager = MagicMock()
            config_manager.get.return_value = ReportobelloConfig()
            mock.return_value = config_manager

            result = runner.invoke(cli, ['versions', 'invoice'])
            assert result.exit_code == 1
            assert 'not configured' in result.output.lower()


class TestUploadCommand:
    """Tests for upload command."""

    def test_upload(self, runner, mock_config, mock_client, tmp_path):
        """Test uploading a template file."""
        template_file = tmp_path / "invoice.typ"
        template_file.write_text("= Invoice\n", encoding="utf-8")

        result = runner.invoke(cli, ['upload', 'invoice', str(template_file)])

        assert result.exit_code == 0
        mock_client.upload_template.assert_awaited_once_with("invoice", "= Invoice\n", timeout=30)

    def test_upload_quiet(self, runner, mock_config, mock_client, tmp_path):
        """Test that --quiet on the command suppresses progress output."""
        template_file = tmp_path / "invoice.typ"
        template_file.write_text("= Invoice\n", encoding="utf-8")

        result = runner.invoke(cli, ['upload', 'invoice', str(template_file), '--quiet'])

        assert result.exit_code == 0
        assert 'Uploading' not in result.output
        mock_client.upload_template.assert_awaited_once()

    def test_upload_missing_file(self, runner, mock_config, mock_client, tmp_path):
        """Test upload with a file that does not exist."""
        result = runner.invoke(cli, ['upload', 'invoice', str(tmp_path / "nope.typ")])
        assert result.exit_code == 2
        mock_client.upload_template.assert_not_called()

    def test_upload_api_error(self, runner, mock_config, mock_client, tmp_path):
        """Test that the server's message is shown."""
        template_file = tmp_path / "invoice.typ"
        template_file.write_text("#broken(")
        mock_client.upload_template.side_effect = APIError("compile error on line 1", status_code=400)

        result = runner.invoke(cli, ['upload', 'invoice', str(template_file)])

        assert result.exit_code == 1
        assert 'compile error on line 1' in result.output

    def test_upload_not_utf8(self, runner, mock_config, mock_client, tmp_path):
        """Test a template file that is not UTF-8 text."""
        template_file = tmp_path / "invoice.typ"
        template_file.write_bytes(b"\xff\xfe bad")

        result = runner.invoke(cli, ['upload', 'invoice', str(template_file)])

        assert result.exit_code == 1
        assert 'not valid UTF-8' in result.output
        assert 'invoice.typ' in result.output
        mock_client.upload_template.assert_not_called()


class TestVersionsCommand:
    """Tests for versions command."""

    def test_versions_json(self, runner, mock_config, mock_client):
        """Test JSON output."""
        mock_client.get_template_versions.return_value = [
            Template(name="invoice", template_content="= v1", version=1),
        ]

        result = runner.invoke(cli, ['versions', 'invoice', '--format', 'json'])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == [{"name": "invoice", "version": 1, "template_content": "= v1"}]

    def test_versions_not_found(self, runner, mock_config, mock_client):
        """Test a missing template."""
        mock_client.get_template_versions.side_effect = APIError("template not found", status_code=404)

        result = runner.invoke(cli, ['versions', 'missing'])

        assert result.exit_code == 1
        assert 'template not found' in result.output


class TestEnvCommands:
    """Tests for env commands."""

    def test_env_set(self, runner, mock_config, mock_client):
        """Test setting variables from arguments."""
        result = runner.invoke(cli, ['env', 'set', 'A=1', 'B=2'])

        assert result.exit_code == 0
        mock_client.set_environment_variables.assert_awaited_once_with({"A": "1", "B": "2"}, timeout=30)

    def test_env_set_with_file(self, runner, mock_config, mock_client, tmp_path):
        """Test that arguments override the env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("A=from-file\nB=2\n")

        result = runner.invoke(cli, ['env', 'set', '--env-file', str(env_file), 'A=from-arg'])

        assert result.exit_code == 0
        mock_client.set_environment_variables.assert_awaited_once_with(
            {"A": "from-arg", "B": "2"}, timeout=30
        )

    def test_env_set_nothing(self, runner, mock_config, mock_client):
        """Test env set without variables."""
        result = runner.invoke(cli, ['env', 'set'])
        assert result.exit_code == 1
        mock_client.set_environment_variables.assert_not_called()

    def test_env_set_invalid(self, runner, mock_config, mock_client):
        """Test an assignment without '='."""
        result = runner.invoke(cli, ['env', 'set', 'A'])
        assert result.exit_code == 1

    def test_env_delete_with_confirmation(self, runner, mock_config, mock_client):
        """Test delete with confirmation."""
        result = runner.invoke(cli, ['env', 'delete', 'A', 'B,C'], input='y\n')

        assert result.exit_code == 0
        mock_client.delete_environment_variables.assert_awaited_once_with(["A", "B,C"], timeout=30)

    def test_env_delete_cancelled(self, runner, mock_config, mock_client):
        """Test delete cancellation."""
        result = runner.invoke(cli, ['env', 'delete', 'A'], input='n\n')

        assert result.exit_code == 0
        assert 'Cancelled' in result.output
        mock_client.delete_environment_variables.assert_not_called()


class TestBuildCommand:
    """Tests for build command."""

    def test_build_preview(self, runner, mock_config, mock_client):
        """Test a preview build with inline data."""
        result = runner.invoke(cli, ['build', 'foo', '-d', '{"x": 1}', '--preview'])

        assert result.exit_code == 0
        assert PDF_URL in result.output
        mock_client.run_report.assert_awaited_once_with("foo", {"x": 1}, True, timeout=30)

    def test_build_data_file(self, runner, mock_config, mock_client, tmp_path):
        """Test a build with a data file."""
        data_file = tmp_path / "data.json"
        data_file.write_text('{"total": 42}')

        result = runner.invoke(cli, ['build', 'invoice', '--data-file', str(data_file), '-f', 'json'])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"template": "invoice", "preview": False, "url": PDF_URL}
        mock_client.run_report.assert_awaited_once_with("invoice", {"total": 42}, False, timeout=30)

    def test_build_invalid_json(self, runner, mock_config, mock_client):
        """Test invalid inline data."""
        result = runner.invoke(cli, ['build', 'foo', '-d', '{nope'])
        assert result.exit_code == 1
        mock_client.run_report.assert_not_called()

    def test_build_and_download(self, runner, mock_config, mock_client):
        """Test handing the URL to the browser for download."""
        with patch('reportobello.commands.build.browser.download', return_value=True) as mock_download:
            result = runner.invoke(cli, ['build', 'foo', '--download', 'foo.pdf'])

        assert result.exit_code == 0
        mock_download.assert_called_once_with(PDF_URL, 'foo.pdf')

    def test_build_and_open(self, runner, mock_config, mock_client):
        """Test opening the report in a new tab."""
        with patch('reportobello.commands.build.browser.open_in_new_tab', return_value=True) as mock_open:
            result = runner.invoke(cli, ['build', 'foo', '--open'])

        assert result.exit_code == 0
        mock_open.assert_called_once_with(PDF_URL)
