"""Task Registry - Persistent task tracking with dependencies and lifecycle rules."""

__version__ = "0.1.0"

from .registry import TaskRegistry

# Export main CLI for convenience
from .cli.main import cli

__all__ = ['TaskRegistry', 'cli']
