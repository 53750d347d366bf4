"""CLI command modules."""

from . import maintenance

__all__ = ["maintenance"]
