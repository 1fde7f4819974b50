"""Models for Task Registry."""

from .config import RegistryConfig
from .results import (
    BatchResult,
    ClearResult,
    ComplexityAssessment,
    ComplexityLevel,
    ComplexityMetrics,
    DeleteResult,
    ExecutionCheck,
    ExecutionResult,
    Pagination,
    SearchResult,
    TaskResult,
)
from .task import (
    ConversationEntry,
    RelatedFile,
    RelatedFileType,
    Task,
    TaskCollection,
    TaskDependency,
    TaskInput,
    TaskStatus,
    UpdateMode,
)

__all__ = [
    'RegistryConfig',
    'BatchResult',
    'ClearResult',
    'ComplexityAssessment',
    'ComplexityLevel',
    'ComplexityMetrics',
    'DeleteResult',
    'ExecutionCheck',
    'ExecutionResult',
    'Pagination',
    'SearchResult',
    'TaskResult',
    'ConversationEntry',
    'RelatedFile',
    'RelatedFileType',
    'Task',
    'TaskCollection',
    'TaskDependency',
    'TaskInput',
    'TaskStatus',
    'UpdateMode',
]
