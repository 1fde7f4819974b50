"""Result models returned by registry operations.

Business-rule outcomes (not found, rejected transitions, blocked deletes,
validation failures) are reported through these models instead of
exceptions so callers can branch on them.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .task import Task


class ComplexityLevel(str, Enum):
    """Task complexity tiers, lowest first."""
    LOW = "Low Complexity"
    MEDIUM = "Medium Complexity"
    HIGH = "High Complexity"
    VERY_HIGH = "Very High Complexity"

    @property
    def rank(self) -> int:
        return list(ComplexityLevel).index(self)


class ComplexityMetrics(BaseModel):
    """Raw measurements behind a complexity assessment."""
    description_length: int
    dependencies_count: int
    notes_length: int
    has_notes: bool


class ComplexityAssessment(BaseModel):
    """Complexity tier plus advisory recommendations."""
    level: ComplexityLevel
    metrics: ComplexityMetrics
    recommendations: List[str] = Field(default_factory=list)


class TaskResult(BaseModel):
    """Outcome of a write against a single task."""
    success: bool
    message: str
    task: Optional[Task] = None


class DeleteResult(BaseModel):
    """Outcome of a delete; ``blockers`` lists dependent task ids."""
    success: bool
    message: str
    blockers: List[str] = Field(default_factory=list)


class ExecutionCheck(BaseModel):
    """Whether a task's prerequisites are all completed."""
    can_execute: bool
    blocked_by: List[str] = Field(default_factory=list)


class ExecutionResult(BaseModel):
    """Outcome of starting a task."""
    success: bool
    message: str
    task: Optional[Task] = None
    complexity: Optional[ComplexityAssessment] = None
    dependency_tasks: List[Task] = Field(default_factory=list)
    blocked_by: List[str] = Field(default_factory=list)


class ClearResult(BaseModel):
    """Outcome of clearing the store."""
    success: bool
    message: str
    backup_file: Optional[str] = None


class BatchResult(BaseModel):
    """Outcome of a batch reconciliation."""
    success: bool
    message: str
    tasks: List[Task] = Field(default_factory=list)
    backup_file: Optional[str] = None


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_results: int
    has_more: bool


class SearchResult(BaseModel):
    """One page of search hits across live and archived tasks."""
    tasks: List[Task]
    pagination: Pagination
