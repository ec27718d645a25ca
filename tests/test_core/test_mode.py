"""Tests for the selection mode controller."""

import pytest

from geoselect.core.selection.mode import SelectionModeController
from geoselect.core.selection.rectangle import RectangleDrawingStateMachine
from geoselect.models.geographic import IDLE, Anchored, Coordinate, SelectionMode


@pytest.fixture
def emitted() -> list:
    return []


@pytest.fixture
def drawing(emitted, scheduler) -> RectangleDrawingStateMachine:
    return RectangleDrawingStateMachine(emitted.append, scheduler=scheduler)


@pytest.fixture
def controller(drawing) -> SelectionModeController:
    return SelectionModeController(drawing)


def test_defaults_to_point(controller):
    assert controller.mode is SelectionMode.POINT
    assert controller.get_mode() is SelectionMode.POINT


def test_accepts_string_values(drawing):
    controller = SelectionModeController(drawing, "rectangle")
    assert controller.mode is SelectionMode.RECTANGLE

    controller.set_mode("point")
    assert controller.get_mode() is SelectionMode.POINT


def test_unknown_mode_rejected(controller):
    with pytest.raises(ValueError):
        controller.set_mode("polygon")


def test_switch_abandons_drawing(controller, drawing, emitted):
    """Test that a half-drawn rectangle disappears without a selection."""
    controller.set_mode(SelectionMode.RECTANGLE)
    drawing.handle_click(Coordinate(lat=1.0, lng=1.0))

    controller.set_mode(SelectionMode.POINT)

    assert drawing.state == IDLE
    assert drawing.preview is None
    assert emitted == []


def test_same_mode_is_noop(controller, drawing):
    """Test that re-selecting the active mode keeps the drawing."""
    controller.set_mode(SelectionMode.RECTANGLE)
    drawing.handle_click(Coordinate(lat=1.0, lng=1.0))

    controller.set_mode(SelectionMode.RECTANGLE)

    assert isinstance(drawing.state, Anchored)


def test_switch_flushes_grace_period(controller, drawing, scheduler):
    controller.set_mode(SelectionMode.RECTANGLE)
    drawing.handle_click(Coordinate(lat=1.0, lng=1.0))
    drawing.handle_click(Coordinate(lat=2.0, lng=2.0))

    controller.set_mode(SelectionMode.POINT)

    assert drawing.preview is None
    assert scheduler.pending == []


def test_listeners_notified_on_change(controller):
    seen: list[SelectionMode] = []
    controller.add_listener(seen.append)

    controller.set_mode(SelectionMode.RECTANGLE)
    controller.set_mode(SelectionMode.RECTANGLE)
    controller.set_mode(SelectionMode.POINT)

    assert seen == [SelectionMode.RECTANGLE, SelectionMode.POINT]

    controller.remove_listener(seen.append)
    controller.set_mode(SelectionMode.RECTANGLE)

    assert len(seen) == 2
