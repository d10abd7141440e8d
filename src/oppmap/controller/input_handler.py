"""Input handler for pointer and wheel events.

Turns pointer drags into orbit rotation, wheel steps into zoom, and clean
clicks into task picks. A gesture that moved the pointer at all while the
button was down is an orbit, never a click.
"""

from collections.abc import Callable
from dataclasses import dataclass

from PyQt6.QtCore import Qt

from oppmap.model.task import Task
from oppmap.view.camera import OrbitCamera


@dataclass
class DragState:
    """Transient state of one drag gesture."""

    is_dragging: bool = False
    moved: bool = False
    last_x: float = 0.0
    last_y: float = 0.0


class InputHandler:
    """Handler for pointer and wheel input on the scatter view.

    Connects UI events to camera controls and task picking.
    """

    def __init__(self, camera: OrbitCamera, renderer: object) -> None:
        """Initialize input handler.

        Args:
            camera: Camera object to control
            renderer: View providing ``pick_at(x, y)`` for raycasting
        """
        self._camera = camera
        self._renderer = renderer
        self._drag = DragState()

        self._on_task_clicked: Callable[[Task], None] | None = None

    # Public API

    @property
    def drag_state(self) -> DragState:
        return self._drag

    def set_task_clicked_callback(self, callback: Callable[[Task], None]) -> None:
        """Set callback for task click events.

        Args:
            callback: Function receiving the clicked task
        """
        self._on_task_clicked = callback

    # Pointer state machine

    def pointer_down(self, x: float, y: float) -> None:
        """Idle -> Dragging; remember where the gesture started."""
        self._drag = DragState(is_dragging=True, moved=False, last_x=x, last_y=y)

    def pointer_move(self, x: float, y: float) -> bool:
        """Rotate the camera by the delta since the last move.

        Returns:
            True if the move was part of a drag
        """
        if not self._drag.is_dragging:
            return False

        dx = x - self._drag.last_x
        dy = y - self._drag.last_y
        if dx or dy:
            self._drag.moved = True
            self._camera.rotate(dx, dy)

        self._drag.last_x = x
        self._drag.last_y = y
        return True

    def pointer_up(self, x: float, y: float) -> Task | None:
        """Dragging -> Idle; a gesture without movement is a click.

        Returns:
            The picked task for a clean click on a marker, else None
        """
        was_click = self._drag.is_dragging and not self._drag.moved
        self._drag = DragState()

        if not was_click:
            return None

        task = self._renderer.pick_at(x, y)
        if task is not None and self._on_task_clicked:
            self._on_task_clicked(task)
        return task

    def wheel(self, delta: float) -> None:
        """Zoom one step; positive delta zooms out."""
        self._camera.zoom(delta)

    # Qt event adapters

    def mouse_press_event(self, event) -> bool:
        """Handle mouse press events.

        Returns:
            True if event was handled
        """
        if event.button() != Qt.MouseButton.LeftButton:
            return False
        pos = event.position()
        self.pointer_down(pos.x(), pos.y())
        return True

    def mouse_move_event(self, event) -> bool:
        """Handle mouse move events."""
        pos = event.position()
        return self.pointer_move(pos.x(), pos.y())

    def mouse_release_event(self, event) -> bool:
        """Handle mouse release events.

        Qt keeps delivering to the widget that got the press, so a drag
        that leaves the viewport still ends here.
        """
        if event.button() != Qt.MouseButton.LeftButton:
            return False
        pos = event.position()
        self.pointer_up(pos.x(), pos.y())
        return True

    def wheel_event(self, event) -> bool:
        """Handle mouse wheel events."""
        # Qt reports positive angleDelta when scrolling away from the user
        self.wheel(-event.angleDelta().y())
        return True
