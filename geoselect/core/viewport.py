"""Contracts between the selection core and the map widget that hosts it."""

import asyncio
from collections.abc import Callable
from typing import Any, Protocol

from geoselect.core.errors import SchedulerUnavailableError


class MapViewportAdapter(Protocol):
    """Map widget commands used by the selection core.

    The widget also feeds events in the other direction by calling
    ``SelectionSession.on_click`` and ``SelectionSession.on_pointer_move``
    with raw map coordinates.
    """

    def recenter(self, latitude: float, longitude: float, zoom: int) -> None:
        """Move the view to a point at the given zoom level."""
        ...


class Cancellable(Protocol):
    """Handle of a scheduled callback."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay.

    ``asyncio.AbstractEventLoop`` satisfies this protocol directly.
    """

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> Cancellable: ...


class RunningLoopScheduler:
    """Scheduler that defers to whichever asyncio loop is running.

    Lets a session be constructed outside of a coroutine and still schedule
    work once events start arriving from inside the loop.
    """

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> Cancellable:
        """Schedule ``callback`` on the running loop.

        Raises:
            SchedulerUnavailableError: If no asyncio loop is running
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise SchedulerUnavailableError(
                "No running event loop to schedule the callback on"
            ) from e
        return loop.call_later(delay, callback, *args)
