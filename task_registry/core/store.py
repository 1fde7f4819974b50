"""Durable JSON storage for the task collection."""
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from pydantic import ValidationError

from ..models.config import RegistryConfig
from ..models.task import Task, TaskCollection
from ..services.exceptions import StorageError

logger = logging.getLogger(__name__)


class StoreTransaction:
    """Working copy of the collection inside a read-modify-write cycle."""

    def __init__(self, collection: TaskCollection):
        self.collection = collection
        self.aborted = False

    @property
    def tasks(self) -> List[Task]:
        return self.collection.tasks

    @tasks.setter
    def tasks(self, tasks: List[Task]) -> None:
        self.collection.tasks = list(tasks)

    def find(self, task_id: str) -> Optional[Task]:
        return self.collection.find(task_id)

    def abort(self) -> None:
        """Discard the working copy; nothing is written on exit."""
        self.aborted = True


class TaskStore:
    """Loads and saves the whole task collection as one JSON document.

    Every mutation goes through :meth:`transaction`, which holds a single
    re-entrant lock for the full load-mutate-save cycle so concurrent
    callers in this process cannot lose each other's updates.
    """

    def __init__(self, config: RegistryConfig):
        """Initialize the store.

        Args:
            config: Registry configuration naming the data directory
        """
        self.config = config
        self.tasks_file = config.tasks_file
        self._lock = threading.RLock()
        self._ensure_storage_structure()

    def _ensure_storage_structure(self) -> None:
        """Ensure the data directory and task file exist."""
        self.config.data_dir.mkdir(parents=True, exist_ok=True)
        if not self.tasks_file.exists():
            self._write_json(self.tasks_file, {"tasks": []})
            logger.info(f"Initialized empty task store at {self.tasks_file}")

    @staticmethod
    def _serialize(collection: TaskCollection) -> dict:
        return collection.model_dump(mode="json", by_alias=True, exclude_none=True)

    @staticmethod
    def _write_json(path: Path, payload: dict) -> None:
        """Write JSON atomically: temp file in the same directory, then rename."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, path)
        except BaseException:
            Path(temp_path).unlink(missing_ok=True)
            raise

    @staticmethod
    def read_collection(path: Path) -> TaskCollection:
        """Read and validate a task document.

        Raises:
            OSError: The file could not be read
            StorageError: The file is not a valid task document
        """
        with open(path, encoding='utf-8') as f:
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise StorageError(f"Corrupt task file {path}: {e}") from e
        try:
            return TaskCollection.model_validate(data)
        except ValidationError as e:
            raise StorageError(f"Invalid task data in {path}: {e}") from e

    def load(self) -> TaskCollection:
        """Load the full collection, creating an empty one on first use."""
        with self._lock:
            self._ensure_storage_structure()
            return self.read_collection(self.tasks_file)

    def save(self, collection: TaskCollection) -> None:
        """Overwrite the stored collection atomically."""
        with self._lock:
            self._write_json(self.tasks_file, self._serialize(collection))

    def write_snapshot(self, path: Path, tasks: List[Task]) -> None:
        """Write ``tasks`` to ``path`` using the main store's schema."""
        self._write_json(path, self._serialize(TaskCollection(tasks=tasks)))

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Run one serialized read-modify-write cycle.

        The collection is saved when the block exits normally and has not
        been aborted. An exception inside the block leaves the store untouched.
        """
        with self._lock:
            txn = StoreTransaction(self.load())
            yield txn
            if txn.aborted:
                return
            self.save(txn.collection)
