"""Scalar-to-space mapping for the three-axis scatter plot.

Converts a task's (roi, enjoyment, complexity) scores into a render-space
position, a marker radius and a marker color. The same affine transform is
used for marker positions and for the axis tick marks, so a marker always
sits exactly on the tick of its score.
"""

from dataclasses import dataclass

import numpy as np

from oppmap.model.task import Task
from oppmap.view.theme import DEFAULT_THEME, Theme, blend_colors


@dataclass(frozen=True)
class MappingConfig:
    """Configuration for the scalar-to-space mapping.

    Attributes:
        value_min: Lowest score on every axis
        value_max: Highest score on every axis
        midpoint: Score mapped to the origin
        scale: Render units per score unit
        base_size: Marker radius offset
        size_range: Marker radius added at complexity 10
    """

    value_min: float = 1.0
    value_max: float = 10.0
    midpoint: float = 5.5
    scale: float = 0.9
    base_size: float = 0.2
    size_range: float = 0.3


DEFAULT_MAPPING = MappingConfig()

HIGHLIGHT_OPACITY = 0.9
DEFAULT_OPACITY = 0.8


def axis_coordinate(value: float, config: MappingConfig = DEFAULT_MAPPING) -> float:
    """Map a score to a render-space coordinate along one axis."""
    return (value - config.midpoint) * config.scale


def axis_half_length(config: MappingConfig = DEFAULT_MAPPING) -> float:
    """Distance from the origin to the end of each drawn axis."""
    return axis_coordinate(config.value_max, config)


def tick_values(config: MappingConfig = DEFAULT_MAPPING) -> list[int]:
    """Integer scores that get a tick mark."""
    return list(range(int(config.value_min), int(config.value_max) + 1))


def tick_coordinates(config: MappingConfig = DEFAULT_MAPPING) -> list[float]:
    """Render-space coordinates of every tick mark along an axis."""
    return [axis_coordinate(v, config) for v in tick_values(config)]


def task_position(task: Task, config: MappingConfig = DEFAULT_MAPPING) -> np.ndarray:
    """Get the marker center for a task.

    X follows ROI, Y follows enjoyment and Z follows complexity.
    """
    return np.array([
        axis_coordinate(task.roi, config),
        axis_coordinate(task.enjoyment, config),
        axis_coordinate(task.complexity, config),
    ], dtype=np.float64)


def task_size(task: Task, config: MappingConfig = DEFAULT_MAPPING) -> float:
    """Get the marker radius for a task; grows with complexity."""
    return config.base_size + (task.complexity / 10.0) * config.size_range


def task_color(task: Task, highlighted: bool, theme: Theme = DEFAULT_THEME) -> np.ndarray:
    """Get the marker RGB color for a task.

    Highlighted tasks use the theme accent. Everything else is interpolated
    between the gradient end colors by roi / 10, so higher ROI is hotter.
    """
    if highlighted:
        return np.array(theme.highlight_color[:3], dtype=np.float64)
    rgb = blend_colors(theme.gradient_low[:3], theme.gradient_high[:3], task.roi / 10.0)
    return np.array(rgb, dtype=np.float64)


def task_opacity(highlighted: bool) -> float:
    return HIGHLIGHT_OPACITY if highlighted else DEFAULT_OPACITY
