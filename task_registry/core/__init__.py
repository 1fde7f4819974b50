"""Core functionality for Task Registry."""

from .batch_reconciler import BatchReconciler
from .complexity import assess_complexity
from .dependency_resolver import DependencyResolver
from .lifecycle import LifecycleController
from .store import StoreTransaction, TaskStore
from .task_repository import TaskRepository

__all__ = [
    'BatchReconciler',
    'assess_complexity',
    'DependencyResolver',
    'LifecycleController',
    'StoreTransaction',
    'TaskStore',
    'TaskRepository'
]
