"""Scene graph maintenance for the opportunity map.

The SceneSynchronizer exclusively owns every renderable entity:

- Axis geometry (axis lines, endpoint cubes, tick marks, ground grid) is
  built once and lives until the scene is disposed.
- Task markers are rebuilt from scratch on every sync: all previous markers
  and their label children are disposed (GPU buffers released) before one
  fresh marker per task is created, in task order.

GPU work goes through an optional resource manager with ``create_mesh`` and
``release`` methods (see MeshBufferManager). Without one, entities keep
their CPU-side mesh data only, which is how the scene is built before a GL
context exists and how it is exercised in tests.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np

from oppmap.model.task import Task
from oppmap.view.geometry import MeshData, box_mesh, line_mesh, ring_mesh, sphere_mesh
from oppmap.view.mapping import (
    DEFAULT_MAPPING,
    MappingConfig,
    axis_half_length,
    task_color,
    task_opacity,
    task_position,
    task_size,
    tick_coordinates,
    tick_values,
)
from oppmap.view.theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)

# Per-frame spin of highlighted markers (radians around x, y, z)
HIGHLIGHT_SPIN = np.array([0.01, 0.02, 0.0])

LABEL_GAP = 0.1
LABEL_RING_INNER = 0.02
LABEL_RING_OUTER = 0.04
ENDPOINT_CUBE_SIZE = 0.1
TICK_HALF_LENGTH = 0.08

AXIS_TITLES = ("ROI", "Enjoyment", "Complexity")


def _release(resources: object | None, handle: object | None) -> None:
    if resources is not None and handle is not None:
        resources.release(handle)


@dataclass
class LabelEntity:
    """Decoration above a marker: a small ring plus the task name."""

    text: str
    position: np.ndarray
    mesh: MeshData
    handle: object | None = None

    def dispose(self, resources: object | None) -> None:
        _release(resources, self.handle)
        self.handle = None


@dataclass
class MarkerEntity:
    """Sphere marker for one task.

    Attributes:
        task: The task this marker represents
        position: Sphere center in render space
        radius: Sphere radius (from complexity)
        color: RGB color (from ROI or the highlight accent)
        opacity: Alpha used when drawing
        highlighted: Whether the task is in the highlight set
        rotation: Accumulated rotation in radians around x, y, z
        mesh: CPU-side sphere geometry
        handle: GPU mesh handle, if uploaded
        label: Optional label child
    """

    task: Task
    position: np.ndarray
    radius: float
    color: np.ndarray
    opacity: float
    highlighted: bool
    mesh: MeshData
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    handle: object | None = None
    label: LabelEntity | None = None
    disposed: bool = False

    def dispose(self, resources: object | None) -> None:
        """Release the sphere and label buffers; safe to call twice."""
        if self.disposed:
            return
        _release(resources, self.handle)
        self.handle = None
        if self.label is not None:
            self.label.dispose(resources)
        self.disposed = True


@dataclass
class AxisEntity:
    """Static axis geometry (lines, ticks, grid or an endpoint cube)."""

    name: str
    mesh: MeshData
    color: tuple[float, float, float, float]
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    handle: object | None = None

    def dispose(self, resources: object | None) -> None:
        _release(resources, self.handle)
        self.handle = None


@dataclass
class AxisLabel:
    """Overlay text anchored at a point in render space."""

    text: str
    position: np.ndarray
    is_title: bool = False


class SceneSynchronizer:
    """Builds and owns the renderable entities of the scatter view."""

    def __init__(
        self,
        mapping: MappingConfig = DEFAULT_MAPPING,
        theme: Theme = DEFAULT_THEME,
        resources: object | None = None,
        show_labels: bool = True,
    ) -> None:
        """Initialize an empty scene.

        Args:
            mapping: Scalar-to-space mapping configuration
            theme: Colors for markers and axes
            resources: GPU resource manager (None keeps geometry CPU-side)
            show_labels: Create label children above each marker
        """
        self.mapping = mapping
        self.theme = theme
        self.show_labels = show_labels
        self._resources = resources

        self._markers: list[MarkerEntity] = []
        self._axes: list[AxisEntity] = []
        self._axis_labels: list[AxisLabel] = []
        self._axes_built = False

        self._tasks: tuple[Task, ...] = ()
        self._highlighted: frozenset[int] = frozenset()

    # Snapshot accessors

    @property
    def markers(self) -> tuple[MarkerEntity, ...]:
        return tuple(self._markers)

    @property
    def marker_count(self) -> int:
        return len(self._markers)

    @property
    def axes(self) -> tuple[AxisEntity, ...]:
        return tuple(self._axes)

    @property
    def axis_labels(self) -> tuple[AxisLabel, ...]:
        return tuple(self._axis_labels)

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def highlighted(self) -> frozenset[int]:
        return self._highlighted

    # Resource ownership

    def attach_resources(self, resources: object | None) -> None:
        """Switch to a new resource manager and rebuild everything on it.

        Called by the renderer once its GL context exists, so entities
        created before that point get GPU buffers.
        """
        self.dispose()
        self._resources = resources
        self.build_axes()
        self.sync(self._tasks, self._highlighted)

    def dispose(self) -> None:
        """Release every marker and axis entity. Idempotent."""
        self._dispose_markers()
        for axis in self._axes:
            axis.dispose(self._resources)
        self._axes.clear()
        self._axis_labels.clear()
        self._axes_built = False

    # Scene construction

    def build_axes(self) -> None:
        """Create axis lines, endpoint cubes, ticks and grid (once)."""
        if self._axes_built:
            return

        half = axis_half_length(self.mapping)
        ticks = tick_coordinates(self.mapping)
        axis_color = self.theme.axis_color

        # One line per axis: X = ROI, Y = enjoyment, Z = complexity
        axis_segments = []
        for i in range(3):
            start = [0.0, 0.0, 0.0]
            end = [0.0, 0.0, 0.0]
            start[i] = -half
            end[i] = half
            axis_segments.append((tuple(start), tuple(end)))
        self._add_axis("axes", line_mesh(axis_segments), axis_color)

        # Tick marks cross each axis at exactly the marker coordinates
        tick_segments = []
        t = TICK_HALF_LENGTH
        for c in ticks:
            tick_segments.append(((c, -t, 0.0), (c, t, 0.0)))
            tick_segments.append(((-t, c, 0.0), (t, c, 0.0)))
            tick_segments.append(((0.0, -t, c), (0.0, t, c)))
        self._add_axis("ticks", line_mesh(tick_segments), axis_color)

        # Ground grid on y = 0 along the tick coordinates
        major, minor = [], []
        for index, c in enumerate(ticks):
            target = major if index in (0, len(ticks) - 1) else minor
            target.append(((c, 0.0, -half), (c, 0.0, half)))
            target.append(((-half, 0.0, c), (half, 0.0, c)))
        self._add_axis("grid_minor", line_mesh(minor), self.theme.grid_minor_color)
        self._add_axis("grid_major", line_mesh(major), self.theme.grid_major_color)

        # Reference cubes at both ends of every axis
        for i in range(3):
            for sign in (1.0, -1.0):
                position = np.zeros(3)
                position[i] = sign * half
                self._add_axis(
                    f"endpoint_{i}_{'+' if sign > 0 else '-'}",
                    box_mesh(ENDPOINT_CUBE_SIZE),
                    axis_color,
                    position,
                )

        # Overlay text: tick numbers and axis titles
        offset = 3 * TICK_HALF_LENGTH
        for value, c in zip(tick_values(self.mapping), ticks):
            text = str(value)
            self._axis_labels.append(AxisLabel(text, np.array([c, -offset, 0.0])))
            self._axis_labels.append(AxisLabel(text, np.array([-offset, c, 0.0])))
            self._axis_labels.append(AxisLabel(text, np.array([0.0, -offset, c])))
        for i, title in enumerate(AXIS_TITLES):
            position = np.zeros(3)
            position[i] = half + 0.4
            self._axis_labels.append(AxisLabel(title, position, is_title=True))

        self._axes_built = True
        logger.debug(f"Built {len(self._axes)} axis entities")

    def sync(self, tasks: Iterable[Task], highlighted_ids: Iterable[int]) -> None:
        """Rebuild all task markers from a snapshot.

        Args:
            tasks: Ordered task snapshot
            highlighted_ids: Ids of tasks to emphasize
        """
        self._tasks = tuple(tasks)
        self._highlighted = frozenset(highlighted_ids)

        self._dispose_markers()
        for task in self._tasks:
            self._markers.append(self._create_marker(task, task.id in self._highlighted))

        logger.debug(f"Created {len(self._markers)} task markers")

    def animate(self) -> None:
        """Advance the per-frame spin of highlighted markers."""
        for marker in self._markers:
            if marker.highlighted:
                marker.rotation += HIGHLIGHT_SPIN

    def marker_for(self, task_id: int) -> MarkerEntity | None:
        """Find the marker of a task id."""
        for marker in self._markers:
            if marker.task.id == task_id:
                return marker
        return None

    # Internal helpers

    def _create_marker(self, task: Task, highlighted: bool) -> MarkerEntity:
        position = task_position(task, self.mapping)
        radius = task_size(task, self.mapping)
        mesh = sphere_mesh(radius)
        marker = MarkerEntity(
            task=task,
            position=position,
            radius=radius,
            color=task_color(task, highlighted, self.theme),
            opacity=task_opacity(highlighted),
            highlighted=highlighted,
            mesh=mesh,
            handle=self._upload(mesh, f"marker:{task.id}"),
        )

        if self.show_labels:
            label_position = position + np.array([0.0, radius + LABEL_GAP, 0.0])
            ring = ring_mesh(LABEL_RING_INNER, LABEL_RING_OUTER, 8)
            marker.label = LabelEntity(
                text=task.name,
                position=label_position,
                mesh=ring,
                handle=self._upload(ring, f"label:{task.id}"),
            )
        return marker

    def _add_axis(self, name: str, mesh: MeshData, color, position: np.ndarray | None = None) -> None:
        entity = AxisEntity(name=name, mesh=mesh, color=color, handle=self._upload(mesh, name))
        if position is not None:
            entity.position = position
        self._axes.append(entity)

    def _upload(self, mesh: MeshData, name: str) -> object | None:
        if self._resources is None:
            return None
        return self._resources.create_mesh(mesh, name=name)

    def _dispose_markers(self) -> None:
        for marker in self._markers:
            marker.dispose(self._resources)
        self._markers.clear()
