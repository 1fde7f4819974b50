"""CLI commands for Task Registry."""
