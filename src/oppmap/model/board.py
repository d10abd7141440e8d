"""Challenge board: the single source of truth for the controls.

Holds the ordered task list, the highlight set and the current selection.
The view layer only ever receives immutable snapshots (a tuple of tasks and
a frozenset of ids).
"""

from dataclasses import dataclass

from oppmap.errors import ValidationError
from oppmap.model.task import SCORE_MAX, SCORE_MIN, Task, TaskIdGenerator


@dataclass(frozen=True)
class RangeFilter:
    """Inclusive score ranges on all three axes.

    Attributes:
        min_roi / max_roi: ROI bounds
        min_enjoyment / max_enjoyment: Enjoyment bounds
        min_complexity / max_complexity: Complexity bounds
    """

    min_roi: float = SCORE_MIN
    max_roi: float = SCORE_MAX
    min_enjoyment: float = SCORE_MIN
    max_enjoyment: float = SCORE_MAX
    min_complexity: float = SCORE_MIN
    max_complexity: float = SCORE_MAX

    def matches(self, task: Task) -> bool:
        """Check whether a task falls inside every range."""
        return (
            self.min_roi <= task.roi <= self.max_roi
            and self.min_enjoyment <= task.enjoyment <= self.max_enjoyment
            and self.min_complexity <= task.complexity <= self.max_complexity
        )

    @property
    def is_default(self) -> bool:
        """True if the filter spans the full score range on every axis."""
        return self == RangeFilter()


# High ROI + low enjoyment + low complexity
QUICK_WINS = RangeFilter(min_roi=7, max_enjoyment=4, max_complexity=5)

SAMPLE_TASKS = (
    ("Content Creation", 8, 3, 4),
    ("Data Entry", 9, 2, 2),
    ("Email Management", 7, 2, 3),
)


class TaskBoard:
    """Application state for the opportunity map controls."""

    def __init__(self, with_samples: bool = True) -> None:
        """Initialize the board.

        Args:
            with_samples: Seed the board with the sample challenges
        """
        self._tasks: list[Task] = []
        self._highlighted: frozenset[int] = frozenset()
        self._selected: Task | None = None
        self._next_id = TaskIdGenerator()

        if with_samples:
            for index, (name, roi, enjoyment, complexity) in enumerate(SAMPLE_TASKS, start=1):
                self._tasks.append(Task.create(index, name, roi, enjoyment, complexity))
                self._next_id.reserve(index)

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Snapshot of the task list in creation order."""
        return tuple(self._tasks)

    @property
    def highlighted(self) -> frozenset[int]:
        """Snapshot of the highlighted task ids."""
        return self._highlighted

    @property
    def selected(self) -> Task | None:
        """Currently selected task, if any."""
        return self._selected

    def is_highlighted(self, task: Task) -> bool:
        return task.id in self._highlighted

    def add_task(self, name: str, roi: float, enjoyment: float, complexity: float) -> Task:
        """Validate and append a new task.

        Raises:
            ValidationError: If the name is blank or a score is out of range
        """
        task = Task.create(self._next_id(), name, roi, enjoyment, complexity)
        self._tasks.append(task)
        return task

    def apply_filter(self, task_filter: RangeFilter) -> frozenset[int]:
        """Replace the highlight set with the tasks matching the filter."""
        for low, high, axis in (
            (task_filter.min_roi, task_filter.max_roi, "roi"),
            (task_filter.min_enjoyment, task_filter.max_enjoyment, "enjoyment"),
            (task_filter.min_complexity, task_filter.max_complexity, "complexity"),
        ):
            if low > high:
                raise ValidationError(f"{axis} range", (low, high), "min <= max")
        self._highlighted = frozenset(t.id for t in self._tasks if task_filter.matches(t))
        return self._highlighted

    def quick_wins(self) -> frozenset[int]:
        """Highlight high ROI, low enjoyment, low complexity tasks."""
        return self.apply_filter(QUICK_WINS)

    def clear_highlights(self) -> None:
        self._highlighted = frozenset()

    def select(self, task: Task | None) -> None:
        """Set the selected task (None clears the selection)."""
        self._selected = task
