"""Tests for config command."""

from task_registry.cli.main import cli
from task_registry.utils.config_manager import ConfigManager


class TestConfigCommand:
    """Test config command functionality."""

    def test_show_defaults(self, cli_runner, data_dir):
        """Test showing the default configuration."""
        result = cli_runner.invoke(cli, ['--data-dir', str(data_dir), 'config', 'show'])

        assert result.exit_code == 0
        assert "maxArchiveFiles" in result.output
        assert "tasks.json" in result.output

    def test_set_value(self, cli_runner, data_dir):
        """Test changing a setting."""
        result = cli_runner.invoke(cli, ['--data-dir', str(data_dir), 'config', 'set',
                                         'maxArchiveFiles', '25'])

        assert result.exit_code == 0
        assert ConfigManager(data_dir).load_config().max_archive_files == 25

    def test_set_unknown_value(self, cli_runner, data_dir):
        """Test that unknown settings are rejected."""
        result = cli_runner.invoke(cli, ['--data-dir', str(data_dir), 'config', 'set', 'nope', '1'])

        assert result.exit_code == 1
        assert "Unknown setting" in result.output
