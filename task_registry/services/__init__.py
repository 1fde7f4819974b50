"""Service layer: archive snapshots and registry exceptions.

``ArchiveService`` lives in :mod:`task_registry.services.archive_service`;
it is not re-exported here because the core store imports these exceptions.
"""

from .exceptions import (
    RegistryError,
    StorageError,
    TaskValidationError,
    DependencyCycleError,
)

__all__ = [
    "RegistryError",
    "StorageError",
    "TaskValidationError",
    "DependencyCycleError",
]
