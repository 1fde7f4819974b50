"""Unit tests for CLI helper functions."""

from pathlib import Path

import click
import pytest

from task_registry.cli.helpers import (
    format_task_table,
    get_data_dir,
    get_registry,
    print_table,
    resolve_task_id,
)
from task_registry.core.constants import DATA_DIR_NAME
from task_registry.models.task import Task, TaskStatus


class TestGetDataDir:
    """Test get_data_dir function."""

    def test_defaults_to_working_directory(self):
        """Test the fallback data directory."""
        assert get_data_dir() == Path.cwd() / DATA_DIR_NAME

    def test_uses_environment(self, monkeypatch, tmp_path):
        """Test that the environment variable is honoured."""
        monkeypatch.setenv("TASK_REGISTRY_DATA_DIR", str(tmp_path))

        assert get_data_dir() == tmp_path

    def test_context_takes_precedence(self, monkeypatch, tmp_path):
        """Test that --data-dir from the root command wins."""
        monkeypatch.setenv("TASK_REGISTRY_DATA_DIR", str(tmp_path / "env"))
        ctx = click.Context(click.Command("cli"), obj={"data_dir": str(tmp_path / "opt")})

        with ctx:
            assert get_data_dir() == tmp_path / "opt"


class TestGetRegistry:
    """Test get_registry function."""

    def test_corrupt_store_exits(self, monkeypatch, data_dir, capsys):
        """Test that an unreadable store exits with an error."""
        data_dir.mkdir(parents=True)
        (data_dir / "tasks.json").write_text("{bad")
        monkeypatch.setenv("TASK_REGISTRY_DATA_DIR", str(data_dir))

        with pytest.raises(SystemExit) as excinfo:
            get_registry()

        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestResolveTaskId:
    """Test resolve_task_id function."""

    def test_full_id(self, registry):
        """Test resolving a full ID."""
        task = registry.create_task("A", "a")

        assert resolve_task_id(registry, task.id).id == task.id

    def test_short_id(self, registry):
        """Test resolving a unique prefix."""
        task = registry.create_task("A", "a")

        assert resolve_task_id(registry, task.id[:6]).id == task.id

    def test_not_found_exits(self, registry, capsys):
        """Test that an unknown ID exits with status 1."""
        with pytest.raises(SystemExit) as excinfo:
            resolve_task_id(registry, "nonexistent")

        assert excinfo.value.code == 1
        assert "No task found" in capsys.readouterr().err

    def test_ambiguous_prefix_exits(self, registry, capsys):
        """Test that an empty prefix matching several tasks exits."""
        registry.create_task("A", "a")
        registry.create_task("B", "b")

        with pytest.raises(SystemExit) as excinfo:
            resolve_task_id(registry, "")

        assert excinfo.value.code == 1
        assert "Multiple tasks found" in capsys.readouterr().err

    def test_archive_lookup(self, registry):
        """Test that archived tasks resolve only when requested."""
        task = registry.create_task("A", "a")
        registry.set_status(task.id, TaskStatus.COMPLETED)
        registry.clear_all()

        assert resolve_task_id(registry, task.id, include_archive=True).name == "A"
        with pytest.raises(SystemExit):
            resolve_task_id(registry, task.id)


class TestFormatting:
    """Test table helpers."""

    def test_format_task_table(self):
        """Test that tasks render with short IDs and names."""
        task = Task(name="A" * 80, description="a", status=TaskStatus.IN_PROGRESS)

        table = format_task_table([task])

        assert task.id[:8] in table
        assert "IN PROGRESS" in table
        assert "A" * 47 + "..." in table

    def test_format_empty_table(self):
        """Test that an empty list still renders headers."""
        assert "STATUS" in format_task_table([])

    def test_print_table(self, capsys):
        """Test printing a simple table."""
        print_table(["KEY", "VALUE"], [["a", 1]])

        output = capsys.readouterr().out
        assert "KEY" in output
        assert "a" in output
