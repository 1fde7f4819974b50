"""CRUD over the persisted task collection."""
import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from ..models.results import DeleteResult, TaskResult
from ..models.task import (
    ConversationEntry,
    RelatedFile,
    Task,
    TaskDependency,
    TaskStatus,
    utcnow,
)
from ..services.exceptions import TaskValidationError
from .constants import COMPLETED_MUTABLE_FIELDS, UPDATABLE_FIELDS
from .dependency_resolver import DependencyResolver
from .store import TaskStore

logger = logging.getLogger(__name__)

CONTENT_FIELDS = (
    "name",
    "description",
    "notes",
    "dependencies",
    "related_files",
    "implementation_guide",
    "verification_criteria",
)


def coerce_related_files(related_files: Optional[Iterable[Any]]) -> Optional[List[RelatedFile]]:
    """Validate related files given as models or plain dicts.

    Raises:
        TaskValidationError: A file entry is malformed (e.g. a bad line range)
    """
    if related_files is None:
        return None
    try:
        return [
            f if isinstance(f, RelatedFile) else RelatedFile.model_validate(f)
            for f in related_files
        ]
    except ValidationError as e:
        raise TaskValidationError(f"Invalid related file: {e}") from e


def coerce_dependencies(dependencies: Optional[Iterable[Any]]) -> List[TaskDependency]:
    """Wrap dependency ids (or existing dependency records) without checking they exist."""
    result: List[TaskDependency] = []
    for dep in dependencies or []:
        dep_id = dep.task_id if isinstance(dep, TaskDependency) else str(dep)
        if dep_id not in (d.task_id for d in result):
            result.append(TaskDependency(task_id=dep_id))
    return result


class TaskRepository:
    """Creates, reads, updates and deletes tasks."""

    def __init__(self, store: TaskStore):
        """Initialize the repository.

        Args:
            store: Backing task store
        """
        self.store = store

    def get_all(self) -> List[Task]:
        """Return every task in the store."""
        return self.store.load().tasks

    def get_by_id(self, task_id: str) -> Optional[Task]:
        """Get a task by ID.

        Returns:
            Task if found, None otherwise
        """
        return self.store.load().find(task_id)

    def create(self, name: str, description: str, notes: Optional[str] = None,
               dependencies: Optional[List[str]] = None,
               related_files: Optional[List[Any]] = None) -> Task:
        """Create a new pending task.

        Dependency ids are stored as given; they are checked lazily by the
        dependency resolver.

        Args:
            name: Short task label
            description: Task description
            notes: Optional notes
            dependencies: Optional prerequisite task ids
            related_files: Optional related files (models or dicts)

        Returns:
            Created Task instance

        Raises:
            TaskValidationError: A related file is malformed
        """
        files = coerce_related_files(related_files)
        task = Task(
            name=name,
            description=description,
            notes=notes,
            dependencies=coerce_dependencies(dependencies),
            related_files=files,
        )

        with self.store.transaction() as txn:
            txn.tasks.append(task)

        logger.info(f"Created task {task.id} ({task.name})")
        return task

    def update(self, task_id: str, **fields) -> Optional[Task]:
        """Merge ``fields`` into a task.

        Completed tasks only accept ``summary`` and ``related_files``.

        Returns:
            The updated task, or None if the task is missing or the update is rejected
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            logger.info(f"Rejected update of {task_id}: unsupported fields {sorted(unknown)}")
            return None

        try:
            values = self._coerce_fields(fields)
        except TaskValidationError as e:
            logger.info(f"Rejected update of {task_id}: {e}")
            return None

        with self.store.transaction() as txn:
            task = txn.find(task_id)
            if task is None:
                txn.abort()
                return None

            if task.status == TaskStatus.COMPLETED:
                disallowed = set(values) - COMPLETED_MUTABLE_FIELDS
                if disallowed:
                    logger.info(f"Rejected update of completed task {task_id}: {sorted(disallowed)}")
                    txn.abort()
                    return None

            try:
                self._apply(task, values)
            except TaskValidationError as e:
                logger.info(f"Rejected update of {task_id}: {e}")
                txn.abort()
                return None
            return task

    def update_content(self, task_id: str, **fields) -> TaskResult:
        """Update the descriptive content of a task that is not yet completed.

        Related file line ranges are validated before anything is read or
        written, and dependency changes that would introduce a cycle are
        rejected.
        """
        unknown = set(fields) - set(CONTENT_FIELDS)
        if unknown:
            return TaskResult(success=False, message=f"Unsupported fields: {', '.join(sorted(unknown))}")

        try:
            values = self._coerce_fields({k: v for k, v in fields.items() if v is not None})
        except TaskValidationError:
            return TaskResult(
                success=False,
                message=(
                    "Invalid line number settings: start and end lines must both be set, "
                    "and the start line must not be after the end line"
                ),
            )

        with self.store.transaction() as txn:
            task = txn.find(task_id)
            if task is None:
                txn.abort()
                return TaskResult(success=False, message="Task not found")

            if task.status == TaskStatus.COMPLETED:
                txn.abort()
                return TaskResult(success=False, message="Cannot update completed tasks", task=task)

            if not values:
                txn.abort()
                return TaskResult(success=True, message="No content provided to update", task=task)

            if "dependencies" in values:
                original = task.dependencies
                task.dependencies = values["dependencies"]
                cycle = DependencyResolver.find_cycle(txn.tasks)
                task.dependencies = original
                if cycle:
                    txn.abort()
                    return TaskResult(
                        success=False,
                        message=f"Dependency cycle detected: {' -> '.join(cycle)}",
                        task=task,
                    )

            try:
                self._apply(task, values)
            except TaskValidationError as e:
                txn.abort()
                return TaskResult(success=False, message=str(e), task=task)

        logger.info(f"Updated content of task {task_id}: {sorted(values)}")
        return TaskResult(success=True, message="Task content updated successfully", task=task)

    def update_related_files(self, task_id: str, related_files: List[Any]) -> TaskResult:
        """Replace a task's related files (allowed on completed tasks too)."""
        try:
            files = coerce_related_files(related_files)
        except TaskValidationError as e:
            return TaskResult(success=False, message=str(e))

        task = self.update(task_id, related_files=files)
        if task is None:
            return TaskResult(success=False, message="Task not found")
        return TaskResult(
            success=True,
            message=f"Task related files updated successfully, {len(files)} files updated",
            task=task,
        )

    def add_conversation_entry(self, task_id: str, role: str, content: str,
                               tool_name: Optional[str] = None) -> Optional[Task]:
        """Append a message to a task's conversation history.

        Returns:
            The updated task, or None if the task is missing or completed
        """
        with self.store.transaction() as txn:
            task = txn.find(task_id)
            if task is None or task.status == TaskStatus.COMPLETED:
                txn.abort()
                return None

            task.conversation_history.append(
                ConversationEntry(role=role, content=content, tool_name=tool_name)
            )
            task.updated_at = utcnow()
            return task

    def delete(self, task_id: str) -> DeleteResult:
        """Delete a task that is neither completed nor depended upon."""
        with self.store.transaction() as txn:
            task = txn.find(task_id)
            if task is None:
                txn.abort()
                return DeleteResult(success=False, message="Task not found")

            if task.status == TaskStatus.COMPLETED:
                txn.abort()
                return DeleteResult(success=False, message="Cannot delete completed tasks")

            dependents = DependencyResolver.dependents_of(txn.tasks, task_id)
            if dependents:
                txn.abort()
                names = ", ".join(f'"{t.name}" (ID: {t.id})' for t in dependents)
                return DeleteResult(
                    success=False,
                    message=f"Cannot delete this task, because the following tasks depend on it: {names}",
                    blockers=[t.id for t in dependents],
                )

            txn.tasks = [t for t in txn.tasks if t.id != task_id]

        logger.info(f"Deleted task {task_id}")
        return DeleteResult(success=True, message="Task deleted successfully")

    @staticmethod
    def _coerce_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
        values = dict(fields)
        if "dependencies" in values:
            values["dependencies"] = coerce_dependencies(values["dependencies"])
        if "related_files" in values:
            values["related_files"] = coerce_related_files(values["related_files"])
        return values

    @staticmethod
    def _apply(task: Task, values: Dict[str, Any]) -> None:
        """Validate the merged task, then copy ``values`` onto ``task``.

        Raises:
            TaskValidationError: The merged task violates the schema; ``task`` is unchanged
        """
        try:
            merged = Task.model_validate({**task.model_dump(), **values})
        except ValidationError as e:
            raise TaskValidationError(f"Invalid task data: {e}") from e
        for key in values:
            setattr(task, key, getattr(merged, key))
        task.updated_at = utcnow()
