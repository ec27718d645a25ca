"""Selection mode ownership."""

from collections.abc import Callable

from geoselect.core.logging import get_logger
from geoselect.core.selection.rectangle import RectangleDrawingStateMachine
from geoselect.models.geographic import SelectionMode

logger = get_logger(__name__)

ModeListener = Callable[[SelectionMode], None]


class SelectionModeController:
    """Holds the active selection mode.

    Switching to a different mode abandons any half-drawn rectangle in the
    same call, without emitting a selection.
    """

    def __init__(
        self,
        drawing: RectangleDrawingStateMachine,
        mode: SelectionMode | str = SelectionMode.POINT,
    ) -> None:
        self.drawing = drawing
        self._mode = SelectionMode(mode)
        self._listeners: list[ModeListener] = []

    @property
    def mode(self) -> SelectionMode:
        return self._mode

    def get_mode(self) -> SelectionMode:
        return self._mode

    def set_mode(self, mode: SelectionMode | str) -> None:
        """Switch modes.

        Args:
            mode: Target mode or its value (``"point"``/``"rectangle"``)

        Raises:
            ValueError: If ``mode`` is not a known mode value
        """
        new_mode = SelectionMode(mode)
        if new_mode is self._mode:
            return

        self.drawing.reset()
        previous, self._mode = self._mode, new_mode
        logger.info("selection_mode_changed", previous=previous.value, mode=new_mode.value)

        for listener in list(self._listeners):
            listener(new_mode)

    def add_listener(self, listener: ModeListener) -> None:
        """Register a callback fired after every mode change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: ModeListener) -> None:
        self._listeners.remove(listener)
