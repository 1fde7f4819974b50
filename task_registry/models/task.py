"""Task registry data models."""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class RegistryModel(BaseModel):
    """Base model persisted with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskStatus(str, Enum):
    """Task status enumeration."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    BLOCKED = "Blocked"


class RelatedFileType(str, Enum):
    """How a file relates to a task."""
    TO_MODIFY = "TO_MODIFY"
    REFERENCE = "REFERENCE"
    CREATE = "CREATE"
    DEPENDENCY = "DEPENDENCY"
    OTHER = "OTHER"


class UpdateMode(str, Enum):
    """Reconciliation strategy for a batch of task definitions."""
    APPEND = "append"
    OVERWRITE = "overwrite"
    SELECTIVE = "selective"
    CLEAR_ALL_TASKS = "clearAllTasks"


class RelatedFile(RegistryModel):
    """A file touched or referenced by a task."""
    path: str = Field(..., min_length=1)
    type: RelatedFileType
    description: Optional[str] = None
    line_start: Optional[int] = Field(None, gt=0)
    line_end: Optional[int] = Field(None, gt=0)

    @model_validator(mode="after")
    def _check_line_range(self) -> "RelatedFile":
        if (self.line_start is None) != (self.line_end is None):
            raise ValueError("line_start and line_end must be set together")
        if self.line_start is not None and self.line_start > self.line_end:
            raise ValueError("line_start must not be greater than line_end")
        return self


class TaskDependency(RegistryModel):
    """Reference to a prerequisite task."""
    task_id: str


class ConversationEntry(RegistryModel):
    """Single message recorded against a task."""
    timestamp: datetime = Field(default_factory=utcnow)
    role: str  # "user" or "assistant"
    content: str
    tool_name: Optional[str] = None


class Task(RegistryModel):
    """Atomic unit of trackable work."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: str
    notes: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    dependencies: List[TaskDependency] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    completed_at: Optional[datetime] = None
    summary: Optional[str] = None
    related_files: Optional[List[RelatedFile]] = None
    analysis_result: Optional[str] = None
    implementation_guide: Optional[str] = None
    verification_criteria: Optional[str] = None
    conversation_history: List[ConversationEntry] = Field(default_factory=list)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _default_timestamp(cls, value):
        # Older files may carry null timestamps
        return utcnow() if value is None else value

    @field_validator("created_at", "updated_at", "completed_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _normalize_completion(self) -> "Task":
        # completed_at is present iff the task is completed
        if self.status == TaskStatus.COMPLETED and self.completed_at is None:
            self.completed_at = self.updated_at
        elif self.status != TaskStatus.COMPLETED:
            self.completed_at = None
        return self

    @property
    def dependency_ids(self) -> List[str]:
        """Ids of prerequisite tasks, in order."""
        return [dep.task_id for dep in self.dependencies]

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class TaskCollection(RegistryModel):
    """The persisted document: every task in the store."""
    tasks: List[Task] = Field(default_factory=list)

    def find(self, task_id: str) -> Optional[Task]:
        """Return the task with ``task_id`` or None."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


class TaskInput(RegistryModel):
    """One task definition in a batch submission.

    ``dependencies`` holds raw references: either task ids or task names.
    """
    name: str = Field(..., min_length=1)
    description: str
    notes: Optional[str] = None
    dependencies: List[str] = Field(default_factory=list)
    related_files: Optional[List[RelatedFile]] = None
    implementation_guide: Optional[str] = None
    verification_criteria: Optional[str] = None
