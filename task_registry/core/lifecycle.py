"""Task status transitions."""
import logging
from typing import Optional, Union

from ..models.results import ExecutionResult, TaskResult
from ..models.task import Task, TaskStatus, utcnow
from ..utils.summary import generate_task_summary
from .complexity import assess_complexity
from .dependency_resolver import DependencyResolver
from .store import TaskStore

logger = logging.getLogger(__name__)


class LifecycleController:
    """Enacts status transitions; ``Completed`` is terminal.

    Pending/Blocked -> In Progress -> Completed, with Pending/Blocked ->
    Completed allowed as a shortcut. Nothing leaves Completed.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    def set_status(self, task_id: str, status: Union[TaskStatus, str]) -> Optional[Task]:
        """Set a task's status, stamping completion time on entry to Completed.

        Returns:
            The updated task, or None if the status is unknown or the task is
            missing or already completed
        """
        try:
            status = TaskStatus(status)
        except ValueError:
            logger.info(f"Rejected unknown status {status!r} for task {task_id}")
            return None
        with self.store.transaction() as txn:
            task = txn.find(task_id)
            if task is None:
                txn.abort()
                return None
            if task.status == TaskStatus.COMPLETED:
                logger.info(f"Ignored status change of completed task {task_id} to {status.value}")
                txn.abort()
                return None

            now = utcnow()
            task.status = status
            if status == TaskStatus.COMPLETED:
                task.completed_at = now
            task.updated_at = now

        logger.info(f"Task {task_id} is now {status.value}")
        return task

    def start(self, task_id: str) -> ExecutionResult:
        """Move a ready task into In Progress.

        The result carries a complexity assessment and the prerequisite
        tasks so the caller can brief whoever executes it.
        """
        with self.store.transaction() as txn:
            task = txn.find(task_id)
            if task is None:
                txn.abort()
                return ExecutionResult(
                    success=False,
                    message=f"Task with ID {task_id} not found. Please confirm the ID is correct.",
                )

            if task.status == TaskStatus.COMPLETED:
                txn.abort()
                return ExecutionResult(
                    success=False,
                    message=(
                        f'Task "{task.name}" (ID: {task.id}) has already been completed. '
                        "To run it again, delete it and create it anew."
                    ),
                    task=task,
                )

            check = DependencyResolver.check(task, txn.tasks)
            if not check.can_execute:
                txn.abort()
                return ExecutionResult(
                    success=False,
                    message=(
                        f'Task "{task.name}" (ID: {task.id}) cannot be executed yet. '
                        f"Blocked by unfinished dependencies: {', '.join(check.blocked_by)}"
                    ),
                    task=task,
                    blocked_by=check.blocked_by,
                )

            if task.status == TaskStatus.IN_PROGRESS:
                txn.abort()
                return ExecutionResult(
                    success=False,
                    message=f'Task "{task.name}" (ID: {task.id}) is already in progress.',
                    task=task,
                )

            task.status = TaskStatus.IN_PROGRESS
            task.updated_at = utcnow()
            dependency_tasks = [t for t in txn.tasks if t.id in task.dependency_ids]

        logger.info(f"Started task {task_id}")
        return ExecutionResult(
            success=True,
            message=f'Task "{task.name}" (ID: {task.id}) is now in progress.',
            task=task,
            complexity=assess_complexity(task),
            dependency_tasks=dependency_tasks,
        )

    def complete(self, task_id: str, summary: Optional[str] = None) -> TaskResult:
        """Mark an in-progress task completed and record its summary.

        A summary is generated from the name and description when none is given.
        """
        with self.store.transaction() as txn:
            task = txn.find(task_id)
            if task is None:
                txn.abort()
                return TaskResult(success=False, message=f"Task with ID {task_id} not found.")

            if task.status != TaskStatus.IN_PROGRESS:
                txn.abort()
                return TaskResult(
                    success=False,
                    message=(
                        f'Task "{task.name}" (ID: {task.id}) is "{task.status.value}", not in progress, '
                        "so it cannot be marked as completed."
                    ),
                    task=task,
                )

            now = utcnow()
            task.status = TaskStatus.COMPLETED
            task.completed_at = now
            task.updated_at = now
            task.summary = summary or generate_task_summary(task.name, task.description)

        logger.info(f"Completed task {task_id}")
        return TaskResult(success=True, message=f'Task "{task.name}" completed.', task=task)
