"""Aggregate import for all API route modules."""

from . import (
    modules,
    progress,
    chat,
    trainer,
)

__all__ = [
    "modules",
    "progress",
    "chat",
    "trainer",
]
