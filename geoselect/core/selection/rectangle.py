"""Two-click rectangle drawing.

The first click anchors a corner and the live corner follows the pointer.
The second click emits the finished ``Bounds`` and returns to idle. The
finished outline stays visible for a short grace period; the cleanup that
removes it is a cancellable scheduled task tagged with the drawing session
it belongs to, so it can never clear the outline of a later session.
"""

import itertools
from collections.abc import Callable

from geoselect.core.errors import SchedulerUnavailableError
from geoselect.core.logging import get_logger
from geoselect.core.viewport import Cancellable, RunningLoopScheduler, Scheduler
from geoselect.models.geographic import (
    IDLE,
    Anchored,
    Bounds,
    Coordinate,
    DrawingState,
    RectanglePreview,
)

logger = get_logger(__name__)

DEFAULT_RESET_DELAY = 1.0


class RectangleDrawingStateMachine:
    """Finite-state machine for rectangle selections."""

    def __init__(
        self,
        on_complete: Callable[[Bounds], object],
        scheduler: Scheduler | None = None,
        reset_delay: float = DEFAULT_RESET_DELAY,
    ) -> None:
        """Initialize in the idle state.

        Args:
            on_complete: Receives the bounds of every finished rectangle
            scheduler: Runs the delayed preview cleanup, defaults to the
                running asyncio loop; outside a loop the outline is cleared
                as soon as the rectangle is emitted
            reset_delay: Seconds the finished outline stays visible
        """
        if reset_delay < 0:
            raise ValueError(f"reset_delay must be non-negative, got {reset_delay}")
        self.on_complete = on_complete
        self.scheduler: Scheduler = scheduler or RunningLoopScheduler()
        self.reset_delay = reset_delay

        self._state: DrawingState = IDLE
        self._preview: RectanglePreview | None = None
        self._cleanup: tuple[int, Cancellable] | None = None
        self._session_ids = itertools.count(1)

    @property
    def state(self) -> DrawingState:
        return self._state

    @property
    def preview(self) -> RectanglePreview | None:
        """Outline to draw, if any."""
        return self._preview

    @property
    def is_drawing(self) -> bool:
        return isinstance(self._state, Anchored)

    @property
    def cleanup_pending(self) -> bool:
        """True during the grace period after a rectangle was finished."""
        return self._cleanup is not None

    def handle_click(self, coordinate: Coordinate) -> Bounds | None:
        """Process a click.

        Args:
            coordinate: Clicked map coordinate

        Returns:
            The emitted bounds when the click finished a rectangle, else None
        """
        if isinstance(self._state, Anchored):
            return self._finish(self._state, coordinate)

        if self._cleanup is not None:
            # Previous outline is still on screen
            logger.debug("rectangle_click_ignored", reason="preview_grace_period")
            return None

        session_id = next(self._session_ids)
        self._state = Anchored(anchor=coordinate, live=coordinate, session_id=session_id)
        self._preview = RectanglePreview(
            anchor=coordinate, live=coordinate, session_id=session_id
        )
        logger.debug(
            "rectangle_anchored",
            session_id=session_id,
            lat=coordinate.lat,
            lng=coordinate.lng,
        )
        return None

    def handle_move(self, coordinate: Coordinate) -> None:
        """Move the live corner. Ignored unless a rectangle is anchored."""
        state = self._state
        if not isinstance(state, Anchored):
            return
        self._state = Anchored(
            anchor=state.anchor, live=coordinate, session_id=state.session_id
        )
        self._preview = RectanglePreview(
            anchor=state.anchor, live=coordinate, session_id=state.session_id
        )

    def reset(self) -> None:
        """Abandon any drawing and drop the outline without emitting."""
        if isinstance(self._state, Anchored):
            logger.info("rectangle_abandoned", session_id=self._state.session_id)
        self._state = IDLE
        self._cancel_cleanup()
        self._preview = None

    def close(self) -> None:
        """Tear down; no scheduled cleanup survives this call."""
        self.reset()

    def _finish(self, state: Anchored, coordinate: Coordinate) -> Bounds:
        bounds = Bounds.from_corners(state.anchor, coordinate)
        self._state = IDLE
        self._preview = RectanglePreview(
            anchor=state.anchor, live=coordinate, session_id=state.session_id
        )
        logger.debug("rectangle_finished", session_id=state.session_id)
        try:
            self.on_complete(bounds)
        finally:
            self._schedule_cleanup(state.session_id)
        return bounds

    def _schedule_cleanup(self, session_id: int) -> None:
        self._cancel_cleanup()
        if self.reset_delay == 0:
            self._clear_preview(session_id)
            return
        try:
            handle = self.scheduler.call_later(
                self.reset_delay, self._clear_preview, session_id
            )
        except SchedulerUnavailableError:
            # Synchronous host without a scheduler; drop the outline now
            logger.warning(
                "preview_cleanup_unscheduled",
                session_id=session_id,
                reason="no running event loop",
            )
            self._clear_preview(session_id)
            return
        self._cleanup = (session_id, handle)

    def _cancel_cleanup(self) -> None:
        if self._cleanup is not None:
            _, handle = self._cleanup
            handle.cancel()
            self._cleanup = None

    def _clear_preview(self, session_id: int) -> None:
        if self._cleanup is not None and self._cleanup[0] == session_id:
            self._cleanup = None
        if self._preview is not None and self._preview.session_id == session_id:
            self._preview = None
        else:
            logger.debug("stale_preview_cleanup_skipped", session_id=session_id)
