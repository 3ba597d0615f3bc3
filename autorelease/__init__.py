"""Promote aged dependency-only GitHub draft releases."""

__version__ = "0.1.0"
