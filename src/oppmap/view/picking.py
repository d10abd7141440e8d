"""Picking and raycasting for task marker selection.

Provides CPU-side ray-sphere intersection tests and screen-to-world
conversion for picking markers in the scatter view. Rays are built from
the camera's view and projection matrices, so picking always agrees with
what was drawn.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from oppmap.model.task import Task


@dataclass
class Ray:
    """3D ray for raycasting operations.

    Attributes:
        origin: Ray origin point [x, y, z]
        direction: Normalized direction vector [dx, dy, dz]
    """

    origin: np.ndarray
    direction: np.ndarray

    def __post_init__(self) -> None:
        """Ensure direction is normalized."""
        norm = np.linalg.norm(self.direction)
        if norm > 1e-6:
            self.direction = self.direction / norm

    def at(self, t: float) -> np.ndarray:
        """Get point along ray at distance t."""
        return self.origin + self.direction * t


class ViewportRect(NamedTuple):
    """Viewport rectangle in host-window pixels."""

    left: float
    top: float
    width: float
    height: float


def pointer_to_ndc(pointer_x: float, pointer_y: float, rect: ViewportRect) -> tuple[float, float]:
    """Convert pointer coordinates to normalized device coordinates.

    Screen Y grows downward while render Y grows upward, hence the flip.
    """
    ndc_x = (pointer_x - rect.left) / rect.width * 2.0 - 1.0
    ndc_y = -((pointer_y - rect.top) / rect.height * 2.0 - 1.0)
    return ndc_x, ndc_y


def screen_to_ray(
    ndc_x: float,
    ndc_y: float,
    view_matrix: np.ndarray,
    proj_matrix: np.ndarray,
) -> Ray:
    """Convert a point in NDC to a world-space ray.

    The NDC point is unprojected on the near and far planes; the ray starts
    at the camera and points from the near point to the far point.

    Args:
        ndc_x: X in [-1, 1]
        ndc_y: Y in [-1, 1], up positive
        view_matrix: 4x4 view matrix
        proj_matrix: 4x4 projection matrix

    Returns:
        Ray with origin at the camera position
    """
    inv_proj = np.linalg.inv(proj_matrix)
    inv_view = np.linalg.inv(view_matrix)

    def unproject(ndc_z: float) -> np.ndarray:
        view_pos = inv_proj @ np.array([ndc_x, ndc_y, ndc_z, 1.0])
        # Perspective divide
        if abs(view_pos[3]) > 1e-9:
            view_pos = view_pos / view_pos[3]
        return (inv_view @ view_pos)[:3]

    near_world = unproject(-1.0)
    far_world = unproject(1.0)

    # Camera position is the inverse view's translation
    origin = (inv_view @ np.array([0.0, 0.0, 0.0, 1.0]))[:3]
    return Ray(origin=origin, direction=far_world - near_world)


def ray_sphere_intersect(ray: Ray, center: np.ndarray, radius: float) -> float | None:
    """Compute the nearest ray-sphere hit in front of the ray origin.

    Args:
        ray: Ray to test (normalized direction)
        center: Sphere center
        radius: Sphere radius

    Returns:
        Distance t along the ray, or None if the sphere is missed or
        entirely behind the origin
    """
    oc = ray.origin - center
    b = float(np.dot(oc, ray.direction))
    c = float(np.dot(oc, oc)) - radius * radius
    discriminant = b * b - c
    if discriminant < 0.0:
        return None

    root = math.sqrt(discriminant)
    t = -b - root
    if t > 0.0:
        return t
    # Origin inside the sphere: use the exit point
    t = -b + root
    return t if t > 0.0 else None


def find_closest_intersection(ray: Ray, markers) -> object | None:
    """Find the marker with the smallest hit distance along a ray.

    Args:
        ray: World-space ray to test
        markers: Iterable of entities with ``position`` and ``radius``

    Returns:
        The frontmost intersected marker, or None
    """
    closest_marker = None
    closest_t = float('inf')

    for marker in markers:
        t = ray_sphere_intersect(ray, marker.position, marker.radius)
        if t is not None and t < closest_t:
            closest_t = t
            closest_marker = marker

    return closest_marker


class PickingSystem:
    """Resolves pointer positions to the task under the pointer."""

    def __init__(self, camera, synchronizer) -> None:
        """Initialize picking system.

        Args:
            camera: OrbitCamera providing view/projection matrices
            synchronizer: SceneSynchronizer owning the current markers
        """
        self._camera = camera
        self._synchronizer = synchronizer

    def ray_at(self, pointer_x: float, pointer_y: float, rect: ViewportRect) -> Ray:
        """Get the world-space ray under a pointer position."""
        ndc_x, ndc_y = pointer_to_ndc(pointer_x, pointer_y, rect)
        aspect = rect.width / rect.height
        return screen_to_ray(
            ndc_x,
            ndc_y,
            self._camera.view_matrix,
            self._camera.projection_matrix(aspect),
        )

    def pick(self, pointer_x: float, pointer_y: float, rect: ViewportRect) -> Task | None:
        """Pick the frontmost task under a pointer position.

        Args:
            pointer_x: Pointer X in host-window pixels
            pointer_y: Pointer Y in host-window pixels
            rect: Viewport rectangle in the same coordinates

        Returns:
            The picked Task, or None if nothing is under the pointer
        """
        if rect.width <= 0 or rect.height <= 0:
            return None

        markers = self._synchronizer.markers
        if not markers:
            return None

        marker = find_closest_intersection(self.ray_at(pointer_x, pointer_y, rect), markers)
        return marker.task if marker is not None else None
