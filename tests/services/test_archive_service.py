"""Tests for ArchiveService."""
import json
import logging
from unittest.mock import patch

import pytest

from task_registry.core.lifecycle import LifecycleController
from task_registry.core.task_repository import TaskRepository
from task_registry.models.config import RegistryConfig
from task_registry.models.task import Task, TaskStatus
from task_registry.services.archive_service import ArchiveService


@pytest.fixture
def repository(store):
    return TaskRepository(store)


@pytest.fixture
def lifecycle(store):
    return LifecycleController(store)


@pytest.fixture
def archive(store, registry_config):
    return ArchiveService(store, registry_config)


def _write_snapshot(store, config, name, tasks):
    path = config.archive_dir / name
    store.write_snapshot(path, tasks)
    return path


class TestClearAll:
    """Test clearing the store."""

    def test_clear_empty_store(self, archive, registry_config):
        """Test that clearing an empty store is a no-op."""
        result = archive.clear_all()

        assert result.success
        assert result.message == "No tasks need to be cleared"
        assert result.backup_file is None
        assert not registry_config.archive_dir.exists()

    def test_clear_archives_completed(self, archive, repository, lifecycle, registry_config):
        """Test clearing one completed and two pending tasks."""
        done = repository.create("Done", "d")
        lifecycle.set_status(done.id, TaskStatus.COMPLETED)
        repository.create("Pending 1", "p")
        repository.create("Pending 2", "p")

        result = archive.clear_all()

        assert result.success
        assert result.message == (
            "All tasks cleared successfully, 3 tasks deleted, "
            "1 completed tasks backed up to memory directory"
        )
        assert result.backup_file.startswith("tasks_memory_")
        assert result.backup_file.endswith(".json")
        assert repository.get_all() == []

        snapshot = registry_config.archive_dir / result.backup_file
        data = json.loads(snapshot.read_text())
        assert [t["id"] for t in data["tasks"]] == [done.id]

    def test_clear_mixed_statuses(self, archive, repository, lifecycle, registry_config):
        """Test clearing one pending, one in-progress and one completed task."""
        repository.create("Pending", "p")
        working = repository.create("Working", "w")
        lifecycle.set_status(working.id, TaskStatus.IN_PROGRESS)
        done = repository.create("Done", "d")
        lifecycle.set_status(done.id, TaskStatus.COMPLETED)

        result = archive.clear_all()

        assert result.success
        assert result.message == (
            "All tasks cleared successfully, 3 tasks deleted, "
            "1 completed tasks backed up to memory directory"
        )
        assert repository.get_all() == []

        data = json.loads((registry_config.archive_dir / result.backup_file).read_text())
        assert [t["id"] for t in data["tasks"]] == [done.id]
        assert data["tasks"][0]["status"] == "Completed"

    def test_clear_without_completed_tasks(self, archive, repository, registry_config):
        """Test that no snapshot is written when nothing is completed."""
        repository.create("Pending", "p")

        result = archive.clear_all()

        assert result.backup_file is None
        assert repository.get_all() == []
        assert not registry_config.archive_dir.exists()

    def test_failed_clear_removes_snapshot(self, archive, store, repository, lifecycle,
                                           registry_config):
        """Test that a failed store write leaves no snapshot behind."""
        done = repository.create("Done", "d")
        lifecycle.set_status(done.id, TaskStatus.COMPLETED)
        repository.create("Pending", "p")

        with patch.object(store, "save", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                archive.clear_all()

        assert list(registry_config.archive_dir.glob("*.json")) == []
        assert len(repository.get_all()) == 2

    def test_snapshot_names_do_not_collide(self, archive):
        """Test that a second snapshot never reuses an existing file name."""
        first = archive._snapshot_path()
        first.touch()

        second = archive._snapshot_path()

        assert second != first


class TestSearch:
    """Test searching live and archived tasks."""

    def test_keyword_search_requires_every_keyword(self, archive, repository):
        """Test that every keyword must match, case-insensitively."""
        repository.create("Parser", "Build the JSON parser")
        repository.create("Lexer", "Build the tokenizer", notes="json input")
        repository.create("Docs", "Write the manual")

        result = archive.search("json BUILD")

        assert sorted(t.name for t in result.tasks) == ["Lexer", "Parser"]
        assert result.pagination.total_results == 2

    def test_empty_query_matches_everything(self, archive, repository):
        """Test that an empty query returns all tasks."""
        repository.create("A", "a")
        repository.create("B", "b")

        assert archive.search("").pagination.total_results == 2

    def test_search_by_id(self, archive, repository):
        """Test exact id search."""
        task = repository.create("A", "a")
        repository.create("B", "b")

        result = archive.search(task.id, is_id=True)

        assert [t.id for t in result.tasks] == [task.id]

    def test_search_includes_archived_tasks(self, archive, repository, lifecycle):
        """Test that cleared completed tasks stay searchable."""
        done = repository.create("Archived parser", "Parse things")
        lifecycle.set_status(done.id, TaskStatus.COMPLETED)
        archive.clear_all()

        result = archive.search("parser")

        assert [t.id for t in result.tasks] == [done.id]
        assert result.tasks[0].status == TaskStatus.COMPLETED

    def test_live_task_wins_over_archive(self, archive, store, repository, registry_config):
        """Test that a live task shadows an archived copy with the same id."""
        live = repository.create("Live name", "current")
        stale = Task(id=live.id, name="Stale name", description="old", status=TaskStatus.COMPLETED)
        _write_snapshot(store, registry_config, "tasks_memory_2024-01-01T00-00-00.json", [stale])

        result = archive.search(live.id, is_id=True)

        assert [t.name for t in result.tasks] == ["Live name"]

    def test_completed_sorted_first(self, archive, repository, lifecycle):
        """Test that completed tasks come before unfinished ones."""
        repository.create("Pending task", "x")
        done = repository.create("Done task", "x")
        lifecycle.set_status(done.id, TaskStatus.COMPLETED)

        result = archive.search("task")

        assert [t.name for t in result.tasks] == ["Done task", "Pending task"]

    def test_pagination(self, archive, repository):
        """Test page slicing and clamping."""
        for i in range(7):
            repository.create(f"Task {i}", "x")

        page_two = archive.search("", page=2, page_size=5)
        assert len(page_two.tasks) == 2
        assert page_two.pagination.current_page == 2
        assert page_two.pagination.total_pages == 2
        assert not page_two.pagination.has_more

        first = archive.search("", page=1, page_size=5)
        assert first.pagination.has_more

        clamped = archive.search("", page=99, page_size=5)
        assert clamped.pagination.current_page == 2

        assert len(archive.search("", page_size=100).tasks) == 7
        assert archive.search("", page_size=0).pagination.total_pages == 7

    def test_no_results(self, archive):
        """Test pagination when nothing matches."""
        result = archive.search("nothing")

        assert result.tasks == []
        assert result.pagination.current_page == 1
        assert result.pagination.total_pages == 0
        assert not result.pagination.has_more

    def test_unreadable_snapshot_skipped(self, archive, registry_config, repository, caplog):
        """Test that a corrupt snapshot is skipped with a warning."""
        registry_config.archive_dir.mkdir(parents=True)
        (registry_config.archive_dir / "tasks_memory_2024-01-01T00-00-00.json").write_text("{bad")
        repository.create("Live", "x")

        with caplog.at_level(logging.WARNING):
            result = archive.search("")

        assert [t.name for t in result.tasks] == ["Live"]
        assert "Skipping unreadable snapshot" in caplog.text

    def test_non_utf8_snapshot_skipped(self, archive, registry_config, repository, caplog):
        """Test that a snapshot with invalid UTF-8 is skipped with a warning."""
        registry_config.archive_dir.mkdir(parents=True)
        (registry_config.archive_dir / "tasks_memory_2024-01-01T00-00-00.json").write_bytes(
            b'{"tasks": ["\xff\xfe"]}'
        )
        repository.create("Live", "x")

        with caplog.at_level(logging.WARNING):
            result = archive.search("")

        assert [t.name for t in result.tasks] == ["Live"]
        assert "Skipping unreadable snapshot" in caplog.text

    def test_only_recent_snapshots_read(self, store, data_dir):
        """Test that max_archive_files limits which snapshots are scanned."""
        config = RegistryConfig(data_dir=data_dir, max_archive_files=1)
        archive = ArchiveService(store, config)
        old = Task(name="Old", description="x", status=TaskStatus.COMPLETED)
        new = Task(name="New", description="x", status=TaskStatus.COMPLETED)
        _write_snapshot(store, config, "tasks_memory_2024-01-01T00-00-00.json", [old])
        _write_snapshot(store, config, "tasks_memory_2024-06-01T00-00-00.json", [new])

        assert [t.name for t in archive.search("").tasks] == ["New"]

    def test_archived_results_capped(self, store, data_dir):
        """Test that max_archive_results caps archived matches."""
        config = RegistryConfig(data_dir=data_dir, max_archive_results=3)
        archive = ArchiveService(store, config)
        tasks = [Task(name=f"T{i}", description="x", status=TaskStatus.COMPLETED) for i in range(5)]
        _write_snapshot(store, config, "tasks_memory_2024-01-01T00-00-00.json", tasks)

        assert archive.search("").pagination.total_results == 3

    def test_find_task_falls_back_to_archive(self, archive, repository, lifecycle):
        """Test looking up a task that only exists in a snapshot."""
        done = repository.create("Done", "d")
        lifecycle.set_status(done.id, TaskStatus.COMPLETED)
        archive.clear_all()

        assert archive.find_task(done.id).name == "Done"
        assert archive.find_task("nonexistent") is None
