"""Utilities for Task Registry."""

from .config_manager import ConfigManager
from .summary import extract_summary, generate_task_summary

__all__ = [
    'ConfigManager',
    'extract_summary',
    'generate_task_summary'
]
