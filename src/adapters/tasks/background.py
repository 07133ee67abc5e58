"""
Background dispatcher adapters - Implement BackgroundDispatcher protocol.

BackgroundTasksDispatcher queues work on the request's FastAPI
BackgroundTasks, which run after the response has been sent, keeping slow
collaborators (mail servers) off the request path. InlineDispatcher runs
the task on the calling thread.
"""

from collections.abc import Callable

from fastapi import BackgroundTasks


class BackgroundTasksDispatcher:
    """
    Implements BackgroundDispatcher protocol via FastAPI BackgroundTasks.

    Uses structural subtyping - no explicit inheritance from Protocol.
    One instance is built per request around that request's task list.
    """

    def __init__(self, background_tasks: BackgroundTasks) -> None:
        self._background_tasks = background_tasks

    def submit(self, task: Callable[[], None]) -> None:
        """Queue task to run once the response is sent."""
        self._background_tasks.add_task(task)


class InlineDispatcher:
    """
    Implements BackgroundDispatcher protocol by running tasks immediately.

    Used by tests and scripts that call the domain service directly.
    """

    def submit(self, task: Callable[[], None]) -> None:
        task()
