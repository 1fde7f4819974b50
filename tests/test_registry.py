"""Tests for the TaskRegistry facade."""
import threading

from task_registry.models.config import RegistryConfig
from task_registry.models.task import TaskStatus, UpdateMode
from task_registry.registry import TaskRegistry
from task_registry.utils.config_manager import ConfigManager


class TestSplitTasks:
    """Test batch submission through the facade."""

    def test_append_message(self, registry):
        """Test the append mode result."""
        result = registry.split_tasks([{"name": "A", "description": "a"}], UpdateMode.APPEND)

        assert result.success
        assert result.message == "Successfully appended 1 new tasks."
        assert [t.name for t in result.tasks] == ["A"]

    def test_overwrite_message(self, registry):
        """Test the overwrite mode result."""
        result = registry.split_tasks([{"name": "A", "description": "a"}], "overwrite")

        assert result.message == "Successfully cleared unfinished tasks and created 1 new tasks."

    def test_selective_message(self, registry):
        """Test the selective mode result."""
        result = registry.split_tasks([{"name": "A", "description": "a"}], "selective")

        assert result.message == "Successfully selectively updated/created 1 tasks."

    def test_clear_all_tasks_archives_completed(self, registry, registry_config):
        """Test that clearAllTasks backs up completed work before replacing it."""
        done = registry.create_task("Done", "d")
        registry.set_status(done.id, TaskStatus.COMPLETED)
        registry.create_task("Pending", "p")

        result = registry.split_tasks([
            {"name": "New A", "description": "a"},
            {"name": "New B", "description": "b", "dependencies": ["New A"]},
        ], UpdateMode.CLEAR_ALL_TASKS)

        assert result.success
        assert result.backup_file is not None
        assert (registry_config.archive_dir / result.backup_file).exists()
        assert sorted(t.name for t in registry.list_tasks()) == ["New A", "New B"]
        new_a, new_b = result.tasks
        assert new_b.dependency_ids == [new_a.id]

    def test_invalid_batch_fails(self, registry):
        """Test that a malformed batch is reported, not raised."""
        registry.create_task("Existing", "e")

        result = registry.split_tasks([{"name": "A"}], UpdateMode.OVERWRITE)

        assert not result.success
        assert [t.name for t in registry.list_tasks()] == ["Existing"]

    def test_invalid_mode_fails(self, registry):
        """Test that an unknown mode is reported."""
        assert not registry.split_tasks([{"name": "A", "description": "a"}], "merge").success

    def test_cycle_fails_without_side_effects(self, registry, registry_config):
        """Test that a cyclic clearAllTasks batch leaves store and archive untouched."""
        done = registry.create_task("Done", "d")
        registry.set_status(done.id, TaskStatus.COMPLETED)

        result = registry.split_tasks([
            {"name": "A", "description": "a", "dependencies": ["B"]},
            {"name": "B", "description": "b", "dependencies": ["A"]},
        ], UpdateMode.CLEAR_ALL_TASKS)

        assert not result.success
        assert "Dependency cycle detected" in result.message
        assert [t.id for t in registry.list_tasks()] == [done.id]
        assert list(registry_config.archive_dir.glob("*.json")) == []


class TestRegistry:
    """Test the remaining facade operations."""

    def test_full_lifecycle(self, registry):
        """Test creating, starting and completing dependent tasks."""
        base = registry.create_task("Base", "b")
        child = registry.create_task("Child", "c", dependencies=[base.id])

        assert not registry.can_execute(child.id).can_execute
        assert registry.start_task(base.id).success
        assert registry.complete_task(base.id, "done").success
        assert registry.can_execute(child.id).can_execute
        assert [t.id for t in registry.executable_tasks()] == [child.id]

    def test_list_tasks_by_status(self, registry):
        """Test filtering the task list by status."""
        a = registry.create_task("A", "a")
        registry.create_task("B", "b")
        registry.set_status(a.id, "Blocked")

        assert [t.name for t in registry.list_tasks("Blocked")] == ["A"]
        assert [t.name for t in registry.list_tasks(TaskStatus.PENDING)] == ["B"]
        assert len(registry.list_tasks()) == 2

    def test_assess_complexity(self, registry):
        """Test complexity assessment by task id."""
        task = registry.create_task("A", "a")

        assert registry.assess_complexity(task.id) is not None
        assert registry.assess_complexity("nonexistent") is None

    def test_get_task_detail_from_archive(self, registry):
        """Test that archived tasks can still be looked up by id."""
        task = registry.create_task("A", "a")
        registry.set_status(task.id, TaskStatus.COMPLETED)
        registry.clear_all()

        assert registry.get_task(task.id) is None
        assert registry.get_task_detail(task.id).name == "A"

    def test_from_data_dir_uses_saved_config(self, data_dir):
        """Test opening a registry with a saved configuration."""
        ConfigManager(data_dir).save_config(RegistryConfig(data_dir=data_dir, archive_dir_name="backups"))

        registry = TaskRegistry.from_data_dir(data_dir)

        assert registry.config.archive_dir == data_dir / "backups"

    def test_concurrent_creates_are_not_lost(self, registry):
        """Test that concurrent writers in one process do not drop updates."""
        def worker(n):
            for i in range(5):
                registry.create_task(f"Task {n}-{i}", "x")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry.list_tasks()) == 40
