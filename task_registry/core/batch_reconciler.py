"""Apply a batch of task definitions to the stored collection."""
import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Union

from pydantic import ValidationError

from ..models.task import Task, TaskDependency, TaskInput, TaskStatus, UpdateMode, utcnow
from ..services.exceptions import DependencyCycleError, TaskValidationError
from .constants import UUID_PATTERN
from .dependency_resolver import DependencyResolver
from .store import StoreTransaction, TaskStore

logger = logging.getLogger(__name__)


class BatchReconciler:
    """Merges caller-supplied task lists into the store.

    Reconciliation runs in two passes: the first creates or updates every
    task so each one has an id, the second resolves dependency references
    (ids or names) against those ids. A task earlier in the batch can
    therefore be the prerequisite of a later one.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    def reconcile(self, task_data_list: Iterable[Union[TaskInput, Dict[str, Any]]],
                  mode: Union[UpdateMode, str],
                  global_analysis_result: Optional[str] = None) -> List[Task]:
        """Reconcile a batch against the stored collection in one write.

        Args:
            task_data_list: Task definitions (models or dicts)
            mode: append, overwrite, selective or clearAllTasks
            global_analysis_result: Analysis text stored on every task in the batch

        Returns:
            The tasks created or updated by this batch

        Raises:
            TaskValidationError: Malformed input or duplicate names; nothing is written
            DependencyCycleError: The result would contain a cycle; nothing is written
        """
        inputs = self.validate_inputs(task_data_list)
        mode = UpdateMode(mode)
        with self.store.transaction() as txn:
            return self.apply(txn, inputs, mode, global_analysis_result)

    @staticmethod
    def validate_inputs(task_data_list: Iterable[Union[TaskInput, Dict[str, Any]]]) -> List[TaskInput]:
        """Validate a batch before any mutation.

        Raises:
            TaskValidationError: An entry is malformed or a name repeats
        """
        inputs: List[TaskInput] = []
        seen: Set[str] = set()
        for index, data in enumerate(task_data_list):
            try:
                item = data if isinstance(data, TaskInput) else TaskInput.model_validate(data)
            except ValidationError as e:
                raise TaskValidationError(f"Invalid task at position {index + 1}: {e}") from e
            if item.name in seen:
                raise TaskValidationError(
                    f"Duplicate task name '{item.name}' in batch; every task name must be unique"
                )
            seen.add(item.name)
            inputs.append(item)
        return inputs

    def apply(self, txn: StoreTransaction, inputs: List[TaskInput], mode: UpdateMode,
              global_analysis_result: Optional[str] = None) -> List[Task]:
        """Reconcile already validated ``inputs`` inside an open transaction."""
        existing = list(txn.tasks)
        tasks_to_keep = self._tasks_to_keep(existing, inputs, mode)

        # Pre-existing names first, then kept tasks and new tasks override
        name_to_id: Dict[str, str] = {task.name: task.id for task in existing}
        for task in tasks_to_keep:
            name_to_id[task.name] = task.id
        existing_by_id = {task.id: task for task in existing}

        now = utcnow()
        new_tasks: List[Task] = []
        for data in inputs:
            matched = None
            if mode == UpdateMode.SELECTIVE and data.name in name_to_id:
                candidate = existing_by_id.get(name_to_id[data.name])
                if candidate is not None and candidate.status != TaskStatus.COMPLETED:
                    matched = candidate

            if matched is not None:
                task = matched.model_copy(deep=True)
                task.name = data.name
                task.description = data.description
                task.notes = data.notes
                task.implementation_guide = data.implementation_guide
                task.verification_criteria = data.verification_criteria
                task.analysis_result = global_analysis_result
                task.updated_at = now
                if data.related_files is not None:
                    task.related_files = data.related_files
                tasks_to_keep = [t for t in tasks_to_keep if t.id != matched.id]
            else:
                task = Task(
                    name=data.name,
                    description=data.description,
                    notes=data.notes,
                    status=TaskStatus.PENDING,
                    created_at=now,
                    updated_at=now,
                    related_files=data.related_files,
                    implementation_guide=data.implementation_guide,
                    verification_criteria=data.verification_criteria,
                    analysis_result=global_analysis_result,
                )
                name_to_id[data.name] = task.id
            new_tasks.append(task)

        known_ids = {task.id for task in tasks_to_keep} | {task.id for task in new_tasks}
        for data, task in zip(inputs, new_tasks):
            if data.dependencies:
                task.dependencies = self._resolve_dependencies(task, data.dependencies, name_to_id, known_ids)

        all_tasks = tasks_to_keep + new_tasks
        cycle = DependencyResolver.find_cycle(all_tasks)
        if cycle:
            raise DependencyCycleError(cycle)

        txn.tasks = all_tasks
        logger.info(
            f"Reconciled {len(new_tasks)} task(s) in {mode.value} mode; "
            f"{len(tasks_to_keep)} existing task(s) kept"
        )
        return new_tasks

    @staticmethod
    def _tasks_to_keep(existing: List[Task], inputs: List[TaskInput], mode: UpdateMode) -> List[Task]:
        if mode == UpdateMode.APPEND:
            return list(existing)
        if mode == UpdateMode.OVERWRITE:
            return [task for task in existing if task.status == TaskStatus.COMPLETED]
        if mode == UpdateMode.SELECTIVE:
            names = {data.name for data in inputs}
            # Completed tasks are never dropped, even when a batch entry reuses the name
            return [
                task for task in existing
                if task.name not in names or task.status == TaskStatus.COMPLETED
            ]
        return []

    @staticmethod
    def _resolve_dependencies(task: Task, references: List[str], name_to_id: Dict[str, str],
                              known_ids: Set[str]) -> List[TaskDependency]:
        resolved: List[TaskDependency] = []
        for ref in references:
            if UUID_PATTERN.match(ref):
                dep_id = ref if ref in known_ids else None
            else:
                dep_id = name_to_id.get(ref)
                if dep_id not in known_ids:
                    dep_id = None

            if dep_id is None:
                logger.warning(f"Dropped unresolved dependency '{ref}' of task '{task.name}'")
                continue
            if dep_id == task.id:
                logger.warning(f"Dropped self dependency of task '{task.name}'")
                continue
            if all(dep.task_id != dep_id for dep in resolved):
                resolved.append(TaskDependency(task_id=dep_id))
        return resolved
