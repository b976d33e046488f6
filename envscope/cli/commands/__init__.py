"""CLI command handlers."""

from .get import get_variable

__all__ = ['get_variable']
