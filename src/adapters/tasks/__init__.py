"""Background task adapters - Fire-and-forget work scheduling."""

from .background import BackgroundTasksDispatcher, InlineDispatcher

__all__ = ["BackgroundTasksDispatcher", "InlineDispatcher"]
