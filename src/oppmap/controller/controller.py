"""Main controller for the application.

Coordinates between the TaskBoard model and the view layer, handling
user input and pushing immutable snapshots into the renderer.
"""

import logging

from PyQt6.QtCore import QEvent, QObject, pyqtSignal

from oppmap.errors import ValidationError
from oppmap.model.board import RangeFilter, TaskBoard
from oppmap.model.task import Task
from oppmap.view.main_window import MainWindow
from oppmap.view.theme import DEFAULT_THEME, Theme
from oppmap.controller.input_handler import InputHandler

logger = logging.getLogger(__name__)


class Controller(QObject):
    """Main application controller.

    Owns the TaskBoard and keeps the window and the 3D view in step with it.
    """

    # Signals for UI updates
    scene_changed = pyqtSignal(int)  # Emits task count
    task_selected = pyqtSignal(object)  # Emits selected task

    def __init__(
        self,
        board: TaskBoard | None = None,
        theme: Theme = DEFAULT_THEME,
        show_labels: bool = True,
    ) -> None:
        """Initialize controller.

        Args:
            board: Application state (a seeded board by default)
            theme: Colors for the 3D view
            show_labels: Show labels in the 3D view
        """
        super().__init__()

        self._board = board if board is not None else TaskBoard()

        # Create main window
        self._window = MainWindow(theme=theme, show_labels=show_labels)

        # Get renderer from window
        self._renderer = self._window.renderer
        self._camera = self._renderer.camera

        # Create input handler
        self._input_handler = InputHandler(self._camera, self._renderer)

        # Connect signals
        self._connect_signals()

        # Install event filter on renderer
        self._renderer.installEventFilter(self)
        self._window.installEventFilter(self)

        self._push_scene()

    def _connect_signals(self) -> None:
        """Connect internal signals."""
        panel = self._window.control_panel
        panel.add_task_requested.connect(self.add_task)
        panel.quick_wins_requested.connect(self.quick_wins)
        panel.clear_highlights_requested.connect(self.clear_highlights)
        panel.filter_changed.connect(self.apply_filter)
        panel.task_activated.connect(self.select_task)

        # Picks come from the renderer so they are reported once
        self._renderer.task_clicked.connect(self.select_task)

        self.task_selected.connect(panel.show_selected)

    @property
    def board(self) -> TaskBoard:
        return self._board

    @property
    def window(self) -> MainWindow:
        return self._window

    @property
    def input_handler(self) -> InputHandler:
        return self._input_handler

    def show(self) -> None:
        """Show the main window."""
        self._window.show()

    # Event filtering

    def eventFilter(self, obj, event) -> bool:
        """Filter events from the renderer and the window.

        Args:
            obj: Object sending the event
            event: Event object

        Returns:
            True if event was handled
        """
        event_type = event.type()

        if obj == self._renderer:
            if event_type == QEvent.Type.MouseButtonPress:
                return self._input_handler.mouse_press_event(event)
            elif event_type == QEvent.Type.MouseButtonRelease:
                return self._input_handler.mouse_release_event(event)
            elif event_type == QEvent.Type.MouseMove:
                return self._input_handler.mouse_move_event(event)
            elif event_type == QEvent.Type.Wheel:
                return self._input_handler.wheel_event(event)
        elif obj == self._window and event_type == QEvent.Type.Close:
            self.shutdown()

        return super().eventFilter(obj, event)

    # Board operations

    def add_task(self, name: str, roi: float, enjoyment: float, complexity: float) -> Task | None:
        """Add a challenge from the form.

        Invalid input is reported in the status bar and leaves the board
        unchanged.
        """
        try:
            task = self._board.add_task(name, roi, enjoyment, complexity)
        except ValidationError as e:
            logger.info(f"Rejected challenge: {e}")
            self._window.set_status_message(str(e))
            return None

        self._window.control_panel.reset_form()
        self._push_scene()
        self._window.set_status_message(f"Added '{task.name}'")
        return task

    def apply_filter(self, task_filter: RangeFilter) -> None:
        """Highlight the challenges inside the filter ranges."""
        try:
            highlighted = self._board.apply_filter(task_filter)
        except ValidationError as e:
            self._window.set_status_message(str(e))
            return

        self._push_scene()
        self._window.set_status_message(f"{len(highlighted)} challenges match the filters")

    def quick_wins(self) -> None:
        """Highlight high ROI, low enjoyment, low complexity challenges."""
        highlighted = self._board.quick_wins()
        self._push_scene()
        self._window.set_status_message(f"{len(highlighted)} quick wins")

    def clear_highlights(self) -> None:
        """Remove every highlight."""
        self._board.clear_highlights()
        self._push_scene()
        self._window.set_status_message("Highlights cleared")

    def select_task(self, task: Task | None) -> None:
        """Show a challenge in the selected-challenge card."""
        self._board.select(task)
        self.task_selected.emit(task)
        if task is not None:
            logger.debug(f"Selected task {task.id}: {task.name}")

    # Rendering

    def _push_scene(self) -> None:
        """Send the current snapshot to the view."""
        tasks = self._board.tasks
        highlighted = self._board.highlighted
        self._renderer.set_scene(tasks, highlighted)
        self._window.control_panel.set_tasks(tasks, highlighted)
        self.scene_changed.emit(len(tasks))

    def shutdown(self) -> None:
        """Stop rendering and release GPU resources. Idempotent."""
        self._renderer.removeEventFilter(self)
        self._window.removeEventFilter(self)
        self._renderer.teardown()
