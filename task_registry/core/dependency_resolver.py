"""Prerequisite checks over the task dependency graph."""
from typing import Dict, Iterable, List, Optional

from ..models.results import ExecutionCheck
from ..models.task import Task, TaskStatus
from .store import TaskStore


class DependencyResolver:
    """Answers whether tasks are ready to run and who depends on whom."""

    def __init__(self, store: TaskStore):
        self.store = store

    def can_execute(self, task_id: str) -> ExecutionCheck:
        """Check whether every prerequisite of a task is completed.

        Args:
            task_id: The task ID

        Returns:
            ExecutionCheck; a missing task can never execute
        """
        tasks = self.store.load().tasks
        task = next((t for t in tasks if t.id == task_id), None)
        if task is None:
            return ExecutionCheck(can_execute=False)
        return self.check(task, tasks)

    def executable_tasks(self) -> List[Task]:
        """List every non-completed task whose prerequisites are all completed."""
        tasks = self.store.load().tasks
        return [task for task in tasks if self.check(task, tasks).can_execute]

    @staticmethod
    def check(task: Task, tasks: Iterable[Task]) -> ExecutionCheck:
        """Evaluate ``task`` against an already loaded collection."""
        if task.status == TaskStatus.COMPLETED:
            return ExecutionCheck(can_execute=False)
        if not task.dependencies:
            return ExecutionCheck(can_execute=True)

        status_by_id = {t.id: t.status for t in tasks}
        blocked_by = [
            dep_id for dep_id in task.dependency_ids
            if status_by_id.get(dep_id) != TaskStatus.COMPLETED
        ]
        return ExecutionCheck(can_execute=not blocked_by, blocked_by=blocked_by)

    @staticmethod
    def dependents_of(tasks: Iterable[Task], task_id: str) -> List[Task]:
        """Tasks (other than ``task_id`` itself) that list ``task_id`` as a prerequisite."""
        return [
            task for task in tasks
            if task.id != task_id and task_id in task.dependency_ids
        ]

    @staticmethod
    def find_cycle(tasks: Iterable[Task]) -> Optional[List[str]]:
        """Find one dependency cycle, if any.

        Edges pointing at ids outside ``tasks`` are ignored.

        Returns:
            The ids along the cycle with the first id repeated at the end,
            or None when the graph is acyclic
        """
        graph: Dict[str, List[str]] = {t.id: t.dependency_ids for t in tasks}
        visiting, done = set(), set()

        for root in graph:
            if root in done:
                continue
            path = [root]
            stack = [iter(graph[root])]
            visiting.add(root)
            while stack:
                next_id = next(stack[-1], None)
                if next_id is None:
                    stack.pop()
                    finished = path.pop()
                    visiting.discard(finished)
                    done.add(finished)
                    continue
                if next_id not in graph or next_id in done:
                    continue
                if next_id in visiting:
                    return path[path.index(next_id):] + [next_id]
                visiting.add(next_id)
                path.append(next_id)
                stack.append(iter(graph[next_id]))
        return None
