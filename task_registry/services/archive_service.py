"""Snapshots of completed work and search across live and archived tasks."""
import logging
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..core.constants import (
    ARCHIVE_FILE_PREFIX,
    ARCHIVE_TIMESTAMP_FORMAT,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from ..core.store import StoreTransaction, TaskStore
from ..models.config import RegistryConfig
from ..models.results import ClearResult, Pagination, SearchResult
from ..models.task import Task, TaskStatus
from .exceptions import StorageError

logger = logging.getLogger(__name__)


class ArchiveService:
    """Writes completed tasks to timestamped snapshot files and searches them."""

    def __init__(self, store: TaskStore, config: RegistryConfig):
        """Initialize the archive service.

        Args:
            store: Live task store
            config: Registry configuration naming the archive directory
        """
        self.store = store
        self.config = config
        self.archive_dir = config.archive_dir

    def clear_all(self, then: Optional[Callable[[StoreTransaction], None]] = None) -> ClearResult:
        """Snapshot completed tasks, then empty the live store.

        The snapshot is written before the store is cleared. If clearing
        fails the snapshot is removed again and the error propagates, so a
        snapshot never exists for a clear that did not happen.

        Args:
            then: Optional callback run against the emptied collection inside
                the same transaction (used to append a fresh batch)

        Returns:
            ClearResult naming the snapshot file, if one was written
        """
        snapshot: Optional[Path] = None
        try:
            with self.store.transaction() as txn:
                total = len(txn.tasks)
                if total == 0 and then is None:
                    txn.abort()
                    return ClearResult(success=True, message="No tasks need to be cleared")

                completed = [task for task in txn.tasks if task.status == TaskStatus.COMPLETED]
                if completed:
                    snapshot = self._snapshot_path()
                    self.store.write_snapshot(snapshot, completed)
                    logger.info(f"Archived {len(completed)} completed task(s) to {snapshot}")

                txn.tasks = []
                if then is not None:
                    then(txn)
        except BaseException:
            if snapshot is not None:
                snapshot.unlink(missing_ok=True)
                logger.warning(f"Removed snapshot {snapshot} after failed clear")
            raise

        logger.info(f"Cleared {total} task(s) from the store")
        return ClearResult(
            success=True,
            message=(
                f"All tasks cleared successfully, {total} tasks deleted, "
                f"{len(completed)} completed tasks backed up to memory directory"
            ),
            backup_file=snapshot.name if snapshot else None,
        )

    def _snapshot_path(self) -> Path:
        self.archive_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).strftime(ARCHIVE_TIMESTAMP_FORMAT)
        path = self.archive_dir / f"{ARCHIVE_FILE_PREFIX}{stamp}.json"
        counter = 1
        while path.exists():
            path = self.archive_dir / f"{ARCHIVE_FILE_PREFIX}{stamp}_{counter}.json"
            counter += 1
        return path

    def snapshot_files(self) -> List[Path]:
        """Snapshot files, newest first, limited to ``max_archive_files``."""
        if not self.archive_dir.exists():
            return []
        files = sorted(self.archive_dir.glob(f"{ARCHIVE_FILE_PREFIX}*.json"),
                       key=lambda p: p.name, reverse=True)
        return files[:self.config.max_archive_files]

    def archived_tasks(self) -> List[Task]:
        """Tasks from recent snapshots, capped at ``max_archive_results``.

        Unreadable snapshots are skipped with a warning.
        """
        tasks: List[Task] = []
        for path in self.snapshot_files():
            try:
                tasks.extend(self.store.read_collection(path).tasks)
            except (OSError, StorageError) as e:
                logger.warning(f"Skipping unreadable snapshot {path}: {e}")
                continue
            if len(tasks) >= self.config.max_archive_results:
                return tasks[:self.config.max_archive_results]
        return tasks

    def search(self, query: str, is_id: bool = False, page: int = 1,
               page_size: int = DEFAULT_PAGE_SIZE) -> SearchResult:
        """Search live and archived tasks.

        An id search matches the exact id. A keyword search splits ``query``
        on whitespace and matches tasks containing every keyword
        (case-insensitive) in their name, description, notes, implementation
        guide or summary. An empty query matches everything. Live tasks win
        over archived copies with the same id.

        Args:
            query: Id or keywords
            is_id: Treat ``query`` as a task id
            page: 1-based page number, clamped into range
            page_size: Results per page, clamped to 1..MAX_PAGE_SIZE

        Returns:
            SearchResult with one page of tasks and pagination info
        """
        merged: Dict[str, Task] = {}
        for task in self.archived_tasks():
            merged.setdefault(task.id, task)
        for task in self.store.load().tasks:
            merged[task.id] = task

        if is_id:
            matches = [task for task_id, task in merged.items() if task_id == query]
        else:
            keywords = [k.lower() for k in query.split()]
            matches = [task for task in merged.values() if self._matches(task, keywords)]

        matches.sort(key=lambda t: t.updated_at, reverse=True)
        matches.sort(key=lambda t: t.completed_at.timestamp() if t.completed_at else 0, reverse=True)
        matches.sort(key=lambda t: t.status != TaskStatus.COMPLETED)

        page_size = max(1, min(page_size, MAX_PAGE_SIZE))
        total = len(matches)
        total_pages = math.ceil(total / page_size)
        safe_page = max(1, min(page, total_pages or 1))
        start = (safe_page - 1) * page_size

        return SearchResult(
            tasks=matches[start:start + page_size],
            pagination=Pagination(
                current_page=safe_page,
                total_pages=total_pages,
                total_results=total,
                has_more=safe_page < total_pages,
            ),
        )

    @staticmethod
    def _matches(task: Task, keywords: List[str]) -> bool:
        haystack = " ".join(
            value for value in (
                task.name,
                task.description,
                task.notes,
                task.implementation_guide,
                task.summary,
            ) if value
        ).lower()
        return all(keyword in haystack for keyword in keywords)

    def find_task(self, task_id: str) -> Optional[Task]:
        """Find a task by id in the live store, falling back to snapshots."""
        task = self.store.load().find(task_id)
        if task is not None:
            return task
        result = self.search(task_id, is_id=True)
        return result.tasks[0] if result.tasks else None
