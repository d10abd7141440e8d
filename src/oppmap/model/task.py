"""Task class representing one challenge on the opportunity map."""

import time
from dataclasses import dataclass

from oppmap.errors import validate_name, validate_range

SCORE_MIN = 1
SCORE_MAX = 10


@dataclass(frozen=True)
class Task:
    """A user-entered challenge scored on three axes.

    Attributes:
        id: Unique identifier assigned at creation
        name: Display name (non-empty)
        roi: Potential return on investment, 1-10
        enjoyment: How much the task is enjoyed today, 1-10
        complexity: Complexity of an automated solution, 1-10
    """

    id: int
    name: str
    roi: float
    enjoyment: float
    complexity: float

    @classmethod
    def create(
        cls,
        task_id: int,
        name: str,
        roi: float,
        enjoyment: float,
        complexity: float,
    ) -> "Task":
        """Create a validated task.

        Raises:
            ValidationError: If the name is blank or a score is outside 1-10
        """
        clean_name = validate_name(name)
        validate_range(roi, SCORE_MIN, SCORE_MAX, "roi")
        validate_range(enjoyment, SCORE_MIN, SCORE_MAX, "enjoyment")
        validate_range(complexity, SCORE_MIN, SCORE_MAX, "complexity")
        return cls(task_id, clean_name, roi, enjoyment, complexity)

    def summary(self) -> str:
        """One-line score summary used by list views."""
        return f"ROI: {self.roi} | Enjoyment: {self.enjoyment} | Complexity: {self.complexity}"


class TaskIdGenerator:
    """Hands out strictly increasing ids from the millisecond clock."""

    def __init__(self, start: int = 0) -> None:
        self._last = start

    def __call__(self) -> int:
        candidate = time.time_ns() // 1_000_000
        # Two tasks created in the same millisecond still get distinct ids
        self._last = max(candidate, self._last + 1)
        return self._last

    def reserve(self, task_id: int) -> None:
        """Make sure future ids are greater than an id handed out elsewhere."""
        self._last = max(self._last, task_id)
