"""Tests for the rectangle drawing state machine."""

import asyncio

import pytest
from structlog.testing import capture_logs

from geoselect.core.selection.rectangle import RectangleDrawingStateMachine
from geoselect.models.geographic import IDLE, Anchored, Bounds, Coordinate


@pytest.fixture
def emitted() -> list[Bounds]:
    return []


@pytest.fixture
def machine(emitted, scheduler) -> RectangleDrawingStateMachine:
    return RectangleDrawingStateMachine(emitted.append, scheduler=scheduler)


def point(lat: float, lng: float) -> Coordinate:
    return Coordinate(lat=lat, lng=lng)


class TestDrawing:
    """Click and move transitions."""

    def test_starts_idle(self, machine):
        assert machine.state == IDLE
        assert machine.preview is None
        assert not machine.is_drawing

    def test_first_click_anchors(self, machine, emitted):
        """Test that the first click anchors both corners."""
        result = machine.handle_click(point(10.0, 20.0))

        assert result is None
        assert emitted == []
        assert isinstance(machine.state, Anchored)
        assert machine.state.anchor == point(10.0, 20.0)
        assert machine.state.live == point(10.0, 20.0)
        assert machine.preview is not None
        assert machine.preview.bounds.north == machine.preview.bounds.south == 10.0

    def test_move_tracks_live_corner(self, machine, emitted):
        """Test that pointer moves update the live corner without emitting."""
        machine.handle_click(point(10.0, 20.0))
        machine.handle_move(point(8.0, 18.0))
        machine.handle_move(point(6.0, 16.0))

        assert machine.state.live == point(6.0, 16.0)
        assert machine.state.anchor == point(10.0, 20.0)
        assert machine.preview.bounds == Bounds(
            north=10.0, south=6.0, east=20.0, west=16.0
        )
        assert emitted == []

    def test_move_while_idle_ignored(self, machine):
        machine.handle_move(point(1.0, 1.0))

        assert machine.state == IDLE
        assert machine.preview is None

    def test_second_click_emits_bounds(self, machine, emitted):
        """Test the finished rectangle and the return to idle."""
        machine.handle_click(point(10.0, 20.0))
        result = machine.handle_click(point(5.0, 15.0))

        expected = Bounds(north=10.0, south=5.0, east=20.0, west=15.0)
        assert result == expected
        assert emitted == [expected]
        assert machine.state == IDLE

    def test_degenerate_rectangle_emitted(self, machine, emitted):
        """Test that clicking the anchor again still emits."""
        machine.handle_click(point(3.0, 4.0))
        machine.handle_click(point(3.0, 4.0))

        assert emitted == [Bounds(north=3.0, south=3.0, east=4.0, west=4.0)]

    def test_session_ids_increase(self, machine, scheduler):
        machine.handle_click(point(0.0, 0.0))
        first = machine.state.session_id
        machine.handle_click(point(1.0, 1.0))
        scheduler.run_pending()
        machine.handle_click(point(2.0, 2.0))

        assert machine.state.session_id > first


class TestPreviewCleanup:
    """Grace period after a rectangle is finished."""

    def test_preview_retained_then_cleared(self, machine, scheduler):
        """Test that the outline stays until the scheduled cleanup runs."""
        machine.handle_click(point(10.0, 20.0))
        machine.handle_click(point(5.0, 15.0))

        assert machine.preview is not None
        assert machine.preview.live == point(5.0, 15.0)
        assert machine.cleanup_pending
        assert [h.delay for h in scheduler.pending] == [1.0]

        scheduler.run_pending()

        assert machine.preview is None
        assert not machine.cleanup_pending

    def test_click_during_grace_period_ignored(self, machine, scheduler, emitted):
        """Test that no new anchor starts before the cleanup ran."""
        machine.handle_click(point(10.0, 20.0))
        machine.handle_click(point(5.0, 15.0))

        machine.handle_click(point(1.0, 1.0))

        assert machine.state == IDLE
        assert machine.preview.live == point(5.0, 15.0)
        assert len(emitted) == 1

        scheduler.run_pending()
        machine.handle_click(point(1.0, 1.0))

        assert isinstance(machine.state, Anchored)
        assert machine.state.anchor == point(1.0, 1.0)

    def test_reset_cancels_pending_cleanup(self, machine, scheduler):
        """Test that a mode switch removes the outline and its timer."""
        machine.handle_click(point(10.0, 20.0))
        machine.handle_click(point(5.0, 15.0))
        handle = scheduler.pending[0]

        machine.reset()

        assert handle.cancelled
        assert machine.preview is None
        assert not machine.cleanup_pending

    def test_stale_cleanup_keeps_newer_preview(self, machine, scheduler):
        """Test that a timer firing late cannot erase a later session."""
        machine.handle_click(point(10.0, 20.0))
        machine.handle_click(point(5.0, 15.0))
        stale = scheduler.pending[0]
        machine.reset()
        machine.handle_click(point(1.0, 1.0))
        current = machine.preview

        stale.fire()

        assert machine.preview == current
        assert isinstance(machine.state, Anchored)

    def test_reset_abandons_drawing_without_emitting(self, machine, emitted):
        machine.handle_click(point(1.0, 1.0))
        machine.reset()

        assert machine.state == IDLE
        assert machine.preview is None
        assert emitted == []

    def test_close_cancels_cleanup(self, machine, scheduler):
        machine.handle_click(point(1.0, 1.0))
        machine.handle_click(point(2.0, 2.0))

        machine.close()

        assert all(h.cancelled for h in scheduler.handles)
        assert machine.preview is None

    def test_zero_delay_clears_immediately(self, emitted, scheduler):
        """Test that no timer is needed without a grace period."""
        machine = RectangleDrawingStateMachine(
            emitted.append, scheduler=scheduler, reset_delay=0
        )
        machine.handle_click(point(1.0, 1.0))
        machine.handle_click(point(2.0, 2.0))

        assert len(emitted) == 1
        assert machine.preview is None
        assert scheduler.handles == []

    def test_negative_delay_rejected(self, emitted):
        with pytest.raises(ValueError, match="reset_delay"):
            RectangleDrawingStateMachine(emitted.append, reset_delay=-1)

    def test_cleanup_scheduled_when_callback_raises(self, scheduler):
        """Test that a failing host callback does not leak the outline."""

        def explode(bounds: Bounds) -> None:
            raise RuntimeError("host failure")

        machine = RectangleDrawingStateMachine(explode, scheduler=scheduler)
        machine.handle_click(point(1.0, 1.0))

        with pytest.raises(RuntimeError):
            machine.handle_click(point(2.0, 2.0))

        assert machine.state == IDLE
        assert machine.cleanup_pending


class TestEventLoopScheduling:
    """Cleanup driven by the running asyncio loop."""

    def test_no_running_loop_clears_preview_immediately(self, emitted):
        """Test that a synchronous host is not left with a stuck outline."""
        machine = RectangleDrawingStateMachine(emitted.append)
        machine.handle_click(point(1.0, 1.0))

        with capture_logs() as logs:
            bounds = machine.handle_click(point(2.0, 2.0))

        assert emitted == [bounds]
        assert machine.state == IDLE
        assert machine.preview is None
        assert not machine.cleanup_pending
        assert any(log["event"] == "preview_cleanup_unscheduled" for log in logs)

        machine.handle_click(point(3.0, 3.0))

        assert isinstance(machine.state, Anchored)

    @pytest.mark.asyncio
    async def test_cleanup_runs_on_loop(self, emitted):
        machine = RectangleDrawingStateMachine(emitted.append, reset_delay=0.01)
        machine.handle_click(point(1.0, 1.0))
        machine.handle_click(point(2.0, 2.0))

        assert machine.preview is not None

        await asyncio.sleep(0.05)

        assert machine.preview is None
        assert not machine.cleanup_pending

    @pytest.mark.asyncio
    async def test_reset_cancels_loop_timer(self, emitted):
        machine = RectangleDrawingStateMachine(emitted.append, reset_delay=0.01)
        machine.handle_click(point(1.0, 1.0))
        machine.handle_click(point(2.0, 2.0))
        machine.reset()
        machine.handle_click(point(3.0, 3.0))

        await asyncio.sleep(0.05)

        assert machine.preview is not None
        assert machine.preview.anchor == point(3.0, 3.0)
