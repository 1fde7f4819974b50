"""CLI package for Task Registry."""
