"""Custom exceptions for the task registry."""


class RegistryError(Exception):
    """Base exception for all registry errors."""

    pass


class StorageError(RegistryError):
    """Exception raised when the task store cannot be read or decoded."""

    pass


class TaskValidationError(RegistryError):
    """Exception raised when submitted task data is malformed."""

    pass


class DependencyCycleError(TaskValidationError):
    """Exception raised when a write would create a dependency cycle."""

    def __init__(self, cycle):
        self.cycle = list(cycle)
        super().__init__(
            "Dependency cycle detected: " + " -> ".join(self.cycle)
        )
