"""Heuristic task complexity scoring."""
from typing import List, Tuple

from ..models.results import ComplexityAssessment, ComplexityLevel, ComplexityMetrics
from ..models.task import Task
from .constants import (
    DEPENDENCIES_COUNT_THRESHOLDS,
    DESCRIPTION_LENGTH_THRESHOLDS,
    NOTES_LENGTH_THRESHOLDS,
)


def _tier(value: int, thresholds: Tuple[int, int, int]) -> ComplexityLevel:
    medium, high, very_high = thresholds
    if value >= very_high:
        return ComplexityLevel.VERY_HIGH
    if value >= high:
        return ComplexityLevel.HIGH
    if value >= medium:
        return ComplexityLevel.MEDIUM
    return ComplexityLevel.LOW


def _recommendations(level: ComplexityLevel, metrics: ComplexityMetrics) -> List[str]:
    if level == ComplexityLevel.LOW:
        return [
            "This task is low complexity and can be executed directly",
            "Set clear completion criteria so acceptance has an unambiguous basis",
        ]

    if level == ComplexityLevel.MEDIUM:
        advice = [
            "This task has some complexity; plan the execution steps in detail",
            "Execute in stages and check progress periodically to keep the implementation accurate and complete",
        ]
        if metrics.dependencies_count > 0:
            advice.append("Check the completion status and output quality of every dependency task")
        return advice

    if level == ComplexityLevel.HIGH:
        advice = [
            "This task has high complexity; analyse and plan it thoroughly",
            "Consider splitting the task into smaller sub-tasks that can be executed independently",
            "Define clear milestones and checkpoints to track progress and quality",
        ]
        if metrics.dependencies_count > DEPENDENCIES_COUNT_THRESHOLDS[0]:
            advice.append("Many dependency tasks; draw the dependency graph to confirm the execution order")
        return advice

    advice = [
        "This task has very high complexity; strongly consider splitting it into several independent tasks",
        "Analyse and plan before executing, and define the scope and interface of each sub-task",
        "Assess the risks of the task, identify likely obstacles and prepare countermeasures",
        "Define concrete test and verification criteria for the output of each sub-task",
    ]
    if metrics.description_length >= DESCRIPTION_LENGTH_THRESHOLDS[2]:
        advice.append("The description is very long; extract the key points into a structured checklist")
    if metrics.dependencies_count >= DEPENDENCIES_COUNT_THRESHOLDS[1]:
        advice.append("Too many dependency tasks; re-evaluate the task boundaries to make sure the split is reasonable")
    return advice


def assess_complexity(task: Task) -> ComplexityAssessment:
    """Score a task's complexity from its description, dependencies and notes.

    Each metric is mapped to a tier on its own and the highest tier wins.
    The recommendations are advisory only.
    """
    metrics = ComplexityMetrics(
        description_length=len(task.description),
        dependencies_count=len(task.dependencies),
        notes_length=len(task.notes) if task.notes else 0,
        has_notes=bool(task.notes),
    )
    level = max(
        _tier(metrics.description_length, DESCRIPTION_LENGTH_THRESHOLDS),
        _tier(metrics.dependencies_count, DEPENDENCIES_COUNT_THRESHOLDS),
        _tier(metrics.notes_length, NOTES_LENGTH_THRESHOLDS),
        key=lambda tier: tier.rank,
    )
    return ComplexityAssessment(
        level=level,
        metrics=metrics,
        recommendations=_recommendations(level, metrics),
    )
