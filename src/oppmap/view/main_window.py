"""Main application window for oppmap.

Provides the top-level window containing the 3D opportunity map and
the side panel with the challenge controls.
"""

from PyQt6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QPushButton,
    QLabel,
    QStatusBar,
    QLineEdit,
    QSlider,
    QGroupBox,
    QListWidget,
    QListWidgetItem,
    QScrollArea,
    QSplitter,
)
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction, QColor

from oppmap.model.task import SCORE_MAX, SCORE_MIN, Task
from oppmap.view.filter_panel import FilterPanel
from oppmap.view.renderer import Renderer
from oppmap.view.theme import DEFAULT_THEME, Theme

DEFAULT_SCORE = 5

# Tint of highlighted rows in the task list
HIGHLIGHT_ROW_COLOR = QColor(255, 237, 213)


class ScoreSlider(QWidget):
    """Labelled 1-10 slider for one score."""

    def __init__(self, title: str, parent=None) -> None:
        super().__init__(parent)
        self._title = title

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        self._label = QLabel()
        layout.addWidget(self._label)

        self._slider = QSlider(Qt.Orientation.Horizontal)
        self._slider.setRange(SCORE_MIN, SCORE_MAX)
        self._slider.setValue(DEFAULT_SCORE)
        self._slider.valueChanged.connect(self._update_label)
        layout.addWidget(self._slider)

        self._update_label(DEFAULT_SCORE)

    def _update_label(self, value: int) -> None:
        self._label.setText(f"{self._title}: {value}")

    def value(self) -> int:
        return self._slider.value()

    def reset(self) -> None:
        self._slider.setValue(DEFAULT_SCORE)


class ControlPanel(QWidget):
    """Side panel with the challenge form, filters, selection and list."""

    # Signals
    add_task_requested = pyqtSignal(str, int, int, int)  # name, roi, enjoyment, complexity
    quick_wins_requested = pyqtSignal()
    clear_highlights_requested = pyqtSignal()
    filter_changed = pyqtSignal(object)  # RangeFilter
    task_activated = pyqtSignal(object)  # Task

    def __init__(self, parent=None) -> None:
        """Initialize control panel."""
        super().__init__(parent)
        self._list_tasks: list[Task] = []
        self._setup_ui()

    def _setup_ui(self) -> None:
        """Set up the control panel UI."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(12)

        # Title
        title = QLabel("<b>AI Opportunity Mapper</b>")
        title.setStyleSheet("font-size: 14px;")
        layout.addWidget(title)
        subtitle = QLabel("Visualize and prioritize AI implementation opportunities")
        subtitle.setWordWrap(True)
        subtitle.setStyleSheet("color: gray; font-size: 10px;")
        layout.addWidget(subtitle)

        # Add new challenge
        add_group = QGroupBox("Add New Challenge")
        add_layout = QVBoxLayout()
        self._name_input = QLineEdit()
        self._name_input.setPlaceholderText("Challenge name")
        self._name_input.returnPressed.connect(self._on_add_clicked)
        add_layout.addWidget(self._name_input)

        self._roi_slider = ScoreSlider("ROI Potential")
        self._enjoyment_slider = ScoreSlider("Task Enjoyment")
        self._complexity_slider = ScoreSlider("Solution Complexity")
        add_layout.addWidget(self._roi_slider)
        add_layout.addWidget(self._enjoyment_slider)
        add_layout.addWidget(self._complexity_slider)

        add_btn = QPushButton("Add Challenge")
        add_btn.clicked.connect(self._on_add_clicked)
        add_layout.addWidget(add_btn)
        add_group.setLayout(add_layout)
        layout.addWidget(add_group)

        # Quick filters
        quick_group = QGroupBox("Quick Filters")
        quick_layout = QVBoxLayout()

        quick_wins_btn = QPushButton("Show Quick Wins")
        quick_wins_btn.setToolTip("High ROI + Low Enjoyment + Low Complexity")
        quick_wins_btn.clicked.connect(self.quick_wins_requested.emit)
        quick_layout.addWidget(quick_wins_btn)

        self._filters_btn = QPushButton("Show Custom Filters")
        self._filters_btn.setCheckable(True)
        self._filters_btn.setChecked(False)  # Default: OFF
        self._filters_btn.toggled.connect(self.set_filters_visible)
        quick_layout.addWidget(self._filters_btn)

        clear_btn = QPushButton("Clear Highlights")
        clear_btn.clicked.connect(self._on_clear_clicked)
        quick_layout.addWidget(clear_btn)

        quick_group.setLayout(quick_layout)
        layout.addWidget(quick_group)

        # Custom range filters
        self._filter_panel = FilterPanel()
        self._filter_panel.filter_changed.connect(self.filter_changed.emit)
        self._filter_panel.filters_cleared.connect(self.clear_highlights_requested.emit)
        self._filter_panel.setVisible(False)
        layout.addWidget(self._filter_panel)

        # Selected challenge
        self._selected_group = QGroupBox("Selected Challenge")
        selected_layout = QVBoxLayout()
        self._selected_label = QLabel()
        self._selected_label.setWordWrap(True)
        selected_layout.addWidget(self._selected_label)
        self._selected_group.setLayout(selected_layout)
        self._selected_group.setVisible(False)
        layout.addWidget(self._selected_group)

        # Current challenges
        self._list_group = QGroupBox("Current Challenges (0)")
        list_layout = QVBoxLayout()
        self._task_list = QListWidget()
        self._task_list.setMaximumHeight(180)
        self._task_list.itemClicked.connect(self._on_item_clicked)
        list_layout.addWidget(self._task_list)
        self._list_group.setLayout(list_layout)
        layout.addWidget(self._list_group)

        # Legend
        legend_group = QGroupBox("Legend")
        legend_layout = QVBoxLayout()
        legend = QLabel(
            "<b>Axes:</b><br>"
            "X = ROI Potential (1-10)<br>"
            "Y = Task Enjoyment (1-10)<br>"
            "Z = Solution Complexity (1-10)<br>"
            "<b>Visual Cues:</b><br>"
            "Color = ROI Level<br>"
            "Size = Complexity Level<br>"
            "Orange = Highlighted<br>"
            "<b>Sweet Spot:</b><br>"
            "High ROI (right), Low Enjoyment (bottom), Low Complexity (front)"
        )
        legend.setWordWrap(True)
        legend.setStyleSheet("font-size: 10px;")
        legend_layout.addWidget(legend)
        legend_group.setLayout(legend_layout)
        layout.addWidget(legend_group)

        # Info section
        info = QLabel("Drag: Rotate | Scroll: Zoom | Click: Details")
        info.setWordWrap(True)
        info.setStyleSheet("color: gray; font-size: 10px;")
        layout.addWidget(info)

        layout.addStretch()

    def _on_add_clicked(self) -> None:
        self.add_task_requested.emit(
            self._name_input.text(),
            self._roi_slider.value(),
            self._enjoyment_slider.value(),
            self._complexity_slider.value(),
        )

    def _on_clear_clicked(self) -> None:
        self._filter_panel.reset()
        self.clear_highlights_requested.emit()

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        row = self._task_list.row(item)
        if 0 <= row < len(self._list_tasks):
            self.task_activated.emit(self._list_tasks[row])

    def set_filters_visible(self, visible: bool) -> None:
        """Show or hide the custom range filters."""
        self._filter_panel.setVisible(visible)
        self._filters_btn.setText("Hide Custom Filters" if visible else "Show Custom Filters")
        if self._filters_btn.isChecked() != visible:
            self._filters_btn.setChecked(visible)

    @property
    def filters_visible(self) -> bool:
        return self._filters_btn.isChecked()

    def reset_form(self) -> None:
        """Clear the name and put the sliders back to the middle."""
        self._name_input.clear()
        self._roi_slider.reset()
        self._enjoyment_slider.reset()
        self._complexity_slider.reset()

    def set_tasks(self, tasks: tuple[Task, ...], highlighted: frozenset[int]) -> None:
        """Refill the task list, tinting highlighted rows.

        Args:
            tasks: Ordered task snapshot
            highlighted: Ids of highlighted tasks
        """
        self._list_tasks = list(tasks)
        self._task_list.clear()
        for task in tasks:
            item = QListWidgetItem(f"{task.name}\n{task.summary()}")
            if task.id in highlighted:
                item.setBackground(HIGHLIGHT_ROW_COLOR)
            self._task_list.addItem(item)
        self._list_group.setTitle(f"Current Challenges ({len(tasks)})")

    def show_selected(self, task: Task | None) -> None:
        """Fill the selected-challenge card (None hides it)."""
        if task is None:
            self._selected_group.setVisible(False)
            return
        self._selected_label.setText(
            f"<b>Name:</b> {task.name}<br>"
            f"<b>ROI Potential:</b> {task.roi:g}/10<br>"
            f"<b>Task Enjoyment:</b> {task.enjoyment:g}/10<br>"
            f"<b>Complexity:</b> {task.complexity:g}/10"
        )
        self._selected_group.setVisible(True)


class MainWindow(QMainWindow):
    """Main window for the oppmap application."""

    def __init__(self, theme: Theme = DEFAULT_THEME, show_labels: bool = True) -> None:
        """Initialize main window.

        Args:
            theme: Colors for the 3D view
            show_labels: Show task names and axis labels in the 3D view
        """
        super().__init__()

        self._theme = theme
        self._renderer = None
        self._control_panel = None
        self._show_labels = show_labels

        self._setup_ui()
        self._setup_menu_bar()

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        self.setWindowTitle("AI Opportunity Mapper")
        self.resize(1400, 900)

        # Main splitter: controls on the left, 3D view on the right
        main_splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(main_splitter)

        # Create control panel inside a scroll area
        self._control_panel = ControlPanel()
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)
        scroll.setWidget(self._control_panel)
        scroll.setMinimumWidth(280)
        main_splitter.addWidget(scroll)

        # Renderer container with a caption
        view_container = QWidget()
        view_layout = QVBoxLayout(view_container)
        view_layout.setContentsMargins(0, 0, 0, 0)
        view_layout.setSpacing(0)

        caption = QLabel("<b>3D Opportunity Map</b>")
        caption.setStyleSheet("padding: 6px;")
        view_layout.addWidget(caption)

        self._renderer = Renderer(theme=self._theme, show_labels=self._show_labels, parent=self)
        view_layout.addWidget(self._renderer, stretch=1)
        main_splitter.addWidget(view_container)

        # Set initial splitter sizes
        main_splitter.setSizes([300, 1100])

        # Create status bar
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Ready")

    def _setup_menu_bar(self) -> None:
        """Set up the menu bar."""
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu("&File")

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # View menu
        view_menu = menubar.addMenu("&View")

        self._toggle_filters_action = QAction("&Custom Filters", self)
        self._toggle_filters_action.setCheckable(True)
        self._toggle_filters_action.setChecked(False)  # Default: OFF
        self._toggle_filters_action.setShortcut("Ctrl+F")
        self._toggle_filters_action.triggered.connect(self._toggle_filter_panel)
        view_menu.addAction(self._toggle_filters_action)

        self._toggle_labels_action = QAction("&Labels", self)
        self._toggle_labels_action.setCheckable(True)
        self._toggle_labels_action.setChecked(self._show_labels)
        self._toggle_labels_action.setShortcut("Ctrl+L")
        self._toggle_labels_action.triggered.connect(self._toggle_labels)
        view_menu.addAction(self._toggle_labels_action)

        view_menu.addSeparator()

        reset_view_action = QAction("&Reset View", self)
        reset_view_action.setShortcut("Ctrl+R")
        reset_view_action.triggered.connect(self._reset_view)
        view_menu.addAction(reset_view_action)

        # Help menu
        help_menu = menubar.addMenu("&Help")

        about_action = QAction("&About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    # Menu actions

    def _toggle_filter_panel(self) -> None:
        """Toggle custom filter visibility."""
        visible = not self._control_panel.filters_visible
        self._control_panel.set_filters_visible(visible)
        self._toggle_filters_action.setChecked(visible)

    def _toggle_labels(self) -> None:
        """Toggle label visibility."""
        self._show_labels = not self._show_labels
        self._renderer.set_labels_visible(self._show_labels)
        self._toggle_labels_action.setChecked(self._show_labels)

    def _reset_view(self) -> None:
        """Reset camera to default view."""
        if self._renderer:
            self._renderer.reset_view()

    def _show_about(self) -> None:
        """Show about dialog."""
        from PyQt6.QtWidgets import QMessageBox

        QMessageBox.about(
            self,
            "About oppmap",
            "<h3>AI Opportunity Mapper</h3>"
            "<p>Plot workplace challenges in 3D by ROI potential, task enjoyment "
            "and solution complexity.</p>"
            "<p>Version 0.1.0</p>"
            "<ul>"
            "<li>Left-drag: Rotate camera</li>"
            "<li>Scroll: Zoom in/out</li>"
            "<li>Click: Show challenge details</li>"
            "</ul>"
        )

    # Public API

    @property
    def renderer(self) -> Renderer:
        """Get the renderer widget."""
        return self._renderer

    @property
    def control_panel(self) -> ControlPanel:
        """Get the control panel widget."""
        return self._control_panel

    @property
    def show_labels(self) -> bool:
        """Get whether labels are shown."""
        return self._show_labels

    def set_status_message(self, message: str) -> None:
        """Set status bar message.

        Args:
            message: Message to display
        """
        self._status_bar.showMessage(message)
