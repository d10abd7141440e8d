"""Model layer for oppmap.

This module contains the challenge data model and the board that
holds the task list and highlight state for the controls.
"""

from oppmap.model.task import Task, TaskIdGenerator
from oppmap.model.board import QUICK_WINS, RangeFilter, TaskBoard

__all__ = ["Task", "TaskIdGenerator", "RangeFilter", "QUICK_WINS", "TaskBoard"]
