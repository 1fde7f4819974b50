"""Facade composing the task registry components around one store."""
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .core.batch_reconciler import BatchReconciler
from .core.complexity import assess_complexity
from .core.dependency_resolver import DependencyResolver
from .core.lifecycle import LifecycleController
from .core.store import StoreTransaction, TaskStore
from .core.task_repository import TaskRepository
from .models.config import RegistryConfig
from .models.results import (
    BatchResult,
    ClearResult,
    ComplexityAssessment,
    DeleteResult,
    ExecutionCheck,
    ExecutionResult,
    SearchResult,
    TaskResult,
)
from .models.task import Task, TaskInput, TaskStatus, UpdateMode
from .services.archive_service import ArchiveService
from .services.exceptions import TaskValidationError
from .utils.config_manager import ConfigManager

logger = logging.getLogger(__name__)

_BATCH_MESSAGES = {
    UpdateMode.APPEND: "Successfully appended {count} new tasks.",
    UpdateMode.OVERWRITE: "Successfully cleared unfinished tasks and created {count} new tasks.",
    UpdateMode.SELECTIVE: "Successfully selectively updated/created {count} tasks.",
    UpdateMode.CLEAR_ALL_TASKS: "Successfully cleared all tasks and created {count} new tasks.",
}


class TaskRegistry:
    """Single entry point over the task store.

    Every component shares the same :class:`TaskStore`, so all writes are
    serialized by one lock.
    """

    def __init__(self, config: RegistryConfig):
        self.config = config
        self.store = TaskStore(config)
        self.repository = TaskRepository(self.store)
        self.resolver = DependencyResolver(self.store)
        self.lifecycle = LifecycleController(self.store)
        self.reconciler = BatchReconciler(self.store)
        self.archive = ArchiveService(self.store, config)

    @classmethod
    def from_data_dir(cls, data_dir: Union[str, Path]) -> 'TaskRegistry':
        """Open the registry in ``data_dir`` using its saved configuration."""
        return cls(ConfigManager(Path(data_dir)).load_config())

    # Repository

    def create_task(self, name: str, description: str, notes: Optional[str] = None,
                    dependencies: Optional[List[str]] = None,
                    related_files: Optional[List[Any]] = None) -> Task:
        return self.repository.create(name, description, notes, dependencies, related_files)

    def get_task(self, task_id: str) -> Optional[Task]:
        return self.repository.get_by_id(task_id)

    def list_tasks(self, status: Optional[Union[TaskStatus, str]] = None) -> List[Task]:
        """List tasks, optionally only those in ``status``."""
        tasks = self.repository.get_all()
        if status is None:
            return tasks
        status = TaskStatus(status)
        return [task for task in tasks if task.status == status]

    def update_task(self, task_id: str, **fields) -> Optional[Task]:
        return self.repository.update(task_id, **fields)

    def update_content(self, task_id: str, **fields) -> TaskResult:
        return self.repository.update_content(task_id, **fields)

    def update_related_files(self, task_id: str, related_files: List[Any]) -> TaskResult:
        return self.repository.update_related_files(task_id, related_files)

    def add_conversation_entry(self, task_id: str, role: str, content: str,
                               tool_name: Optional[str] = None) -> Optional[Task]:
        return self.repository.add_conversation_entry(task_id, role, content, tool_name)

    def delete_task(self, task_id: str) -> DeleteResult:
        return self.repository.delete(task_id)

    # Dependencies and lifecycle

    def can_execute(self, task_id: str) -> ExecutionCheck:
        return self.resolver.can_execute(task_id)

    def executable_tasks(self) -> List[Task]:
        return self.resolver.executable_tasks()

    def set_status(self, task_id: str, status: Union[TaskStatus, str]) -> Optional[Task]:
        return self.lifecycle.set_status(task_id, status)

    def start_task(self, task_id: str) -> ExecutionResult:
        return self.lifecycle.start(task_id)

    def complete_task(self, task_id: str, summary: Optional[str] = None) -> TaskResult:
        return self.lifecycle.complete(task_id, summary)

    def assess_complexity(self, task_id: str) -> Optional[ComplexityAssessment]:
        """Assess a live task's complexity, or None if it does not exist."""
        task = self.get_task(task_id)
        if task is None:
            return None
        return assess_complexity(task)

    # Batches and archive

    def split_tasks(self, tasks: Iterable[Union[TaskInput, Dict[str, Any]]],
                    mode: Union[UpdateMode, str] = UpdateMode.CLEAR_ALL_TASKS,
                    global_analysis_result: Optional[str] = None) -> BatchResult:
        """Apply a batch of task definitions in one locked write.

        Validation failures and dependency cycles are reported as a failed
        result; the store is left untouched.
        """
        try:
            mode = UpdateMode(mode)
            inputs = self.reconciler.validate_inputs(tasks)
        except (ValueError, TaskValidationError) as e:
            return BatchResult(success=False, message=str(e))

        backup_file = None
        try:
            if mode == UpdateMode.CLEAR_ALL_TASKS:
                created: List[Task] = []

                def _append(txn: StoreTransaction) -> None:
                    created.extend(self.reconciler.apply(txn, inputs, UpdateMode.APPEND,
                                                         global_analysis_result))

                cleared = self.archive.clear_all(then=_append)
                backup_file = cleared.backup_file
            else:
                created = self.reconciler.reconcile(inputs, mode, global_analysis_result)
        except TaskValidationError as e:
            logger.warning(f"Rejected {mode.value} batch: {e}")
            return BatchResult(success=False, message=str(e))

        message = _BATCH_MESSAGES[mode].format(count=len(created))
        if backup_file:
            message += f" Completed tasks were backed up to {backup_file}."
        return BatchResult(success=True, message=message, tasks=created, backup_file=backup_file)

    def clear_all(self) -> ClearResult:
        return self.archive.clear_all()

    def search(self, query: str, is_id: bool = False, page: int = 1,
               page_size: int = 5) -> SearchResult:
        return self.archive.search(query, is_id=is_id, page=page, page_size=page_size)

    def get_task_detail(self, task_id: str) -> Optional[Task]:
        """Find a task by id in the live store or, failing that, the archive."""
        return self.archive.find_task(task_id)
