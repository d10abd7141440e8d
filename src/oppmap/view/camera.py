"""Orbit camera for the 3D scatter view.

The camera always looks at the origin. Its position is parameterized by
azimuth, elevation and radius. Input moves the *target* angles; every frame
the *current* angles ease toward them, which keeps the motion smooth no
matter how jittery the pointer input is.
"""

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class OrbitConfig:
    """Configuration for the orbit camera.

    Attributes:
        rotation_sensitivity: Radians per pointer pixel
        smoothing_factor: Fraction of the remaining angle covered per frame
        min_radius: Closest allowed camera distance
        max_radius: Farthest allowed camera distance
        zoom_out_factor: Radius multiplier per zoom-out wheel step
        zoom_in_factor: Radius multiplier per zoom-in wheel step
        elevation_limit: Absolute elevation clamp in radians
        initial_azimuth: Azimuth at creation/reset
        initial_elevation: Elevation at creation/reset
        initial_radius: Distance at creation/reset
        fov: Vertical field of view in degrees
        near: Near clip plane
        far: Far clip plane
    """

    rotation_sensitivity: float = 0.01
    smoothing_factor: float = 0.1
    min_radius: float = 5.0
    max_radius: float = 30.0
    zoom_out_factor: float = 1.1
    zoom_in_factor: float = 0.9
    # Just short of the poles so the look-at basis never degenerates
    elevation_limit: float = math.pi / 2 - 0.01
    initial_azimuth: float = 0.5
    initial_elevation: float = 0.3
    initial_radius: float = 12.0
    fov: float = 60.0
    near: float = 0.1
    far: float = 1000.0


@dataclass
class CameraOrbitState:
    """Mutable orbit state (angles in radians)."""

    target_azimuth: float
    target_elevation: float
    current_azimuth: float
    current_elevation: float
    radius: float


WORLD_UP = np.array([0.0, 1.0, 0.0])


def spherical_to_cartesian(radius: float, azimuth: float, elevation: float) -> np.ndarray:
    """Convert orbit parameters to a position relative to the origin."""
    return np.array([
        radius * math.sin(azimuth) * math.cos(elevation),
        radius * math.sin(elevation),
        radius * math.cos(azimuth) * math.cos(elevation),
    ], dtype=np.float64)


def look_at(eye: np.ndarray, target: np.ndarray, up: np.ndarray = WORLD_UP) -> np.ndarray:
    """Compute a right-handed view matrix."""
    # Forward vector
    f = target - eye
    f = f / np.linalg.norm(f)

    # Right vector
    s = np.cross(f, up)
    s = s / np.linalg.norm(s)

    # Up vector (recalculated)
    u = np.cross(s, f)

    view = np.identity(4, dtype=np.float64)
    view[0, :3] = s
    view[1, :3] = u
    view[2, :3] = -f
    view[0, 3] = -np.dot(s, eye)
    view[1, 3] = -np.dot(u, eye)
    view[2, 3] = np.dot(f, eye)
    return view


def perspective(fov: float, aspect_ratio: float, near: float, far: float) -> np.ndarray:
    """Compute a perspective projection matrix (fov in degrees)."""
    f = 1.0 / math.tan(math.radians(fov) / 2.0)

    proj = np.zeros((4, 4), dtype=np.float64)
    proj[0, 0] = f / aspect_ratio
    proj[1, 1] = f
    proj[2, 2] = (far + near) / (near - far)
    proj[3, 2] = -1.0
    proj[2, 3] = (2.0 * far * near) / (near - far)
    return proj


class OrbitCamera:
    """Smoothed orbit camera aimed at the origin."""

    def __init__(self, config: OrbitConfig | None = None) -> None:
        """Initialize camera at the configured defaults.

        Args:
            config: Orbit configuration (uses defaults if None)
        """
        self.config = config or OrbitConfig()
        self._state = CameraOrbitState(
            target_azimuth=self.config.initial_azimuth,
            target_elevation=self.config.initial_elevation,
            current_azimuth=self.config.initial_azimuth,
            current_elevation=self.config.initial_elevation,
            radius=self._clamp_radius(self.config.initial_radius),
        )

    @property
    def state(self) -> CameraOrbitState:
        """Get current orbit state."""
        return self._state

    @property
    def position(self) -> np.ndarray:
        """Camera position derived from the current (smoothed) angles."""
        return spherical_to_cartesian(
            self._state.radius,
            self._state.current_azimuth,
            self._state.current_elevation,
        )

    @property
    def view_matrix(self) -> np.ndarray:
        """Get view matrix as 4x4 numpy array."""
        return look_at(self.position, np.zeros(3))

    def projection_matrix(self, aspect_ratio: float) -> np.ndarray:
        """Get projection matrix as 4x4 numpy array."""
        return perspective(self.config.fov, aspect_ratio, self.config.near, self.config.far)

    def rotate(self, dx: float, dy: float) -> None:
        """Move the target angles by a pointer delta in pixels."""
        sensitivity = self.config.rotation_sensitivity
        self._state.target_azimuth += dx * sensitivity
        self._state.target_elevation = self._clamp_elevation(
            self._state.target_elevation + dy * sensitivity
        )

    def zoom(self, delta: float) -> None:
        """Scale the orbit radius by one wheel step.

        Args:
            delta: Wheel delta; positive zooms out, negative zooms in
        """
        if delta == 0:
            return
        factor = self.config.zoom_out_factor if delta > 0 else self.config.zoom_in_factor
        self._state.radius = self._clamp_radius(self._state.radius * factor)

    def update(self) -> None:
        """Advance the smoothing by one frame."""
        k = self.config.smoothing_factor
        s = self._state
        s.current_azimuth += (s.target_azimuth - s.current_azimuth) * k
        s.current_elevation += (s.target_elevation - s.current_elevation) * k

    def snap(self) -> None:
        """Jump the current angles to their targets."""
        self._state.current_azimuth = self._state.target_azimuth
        self._state.current_elevation = self._state.target_elevation

    def reset(self) -> None:
        """Return to the default view (smoothly)."""
        self._state.target_azimuth = self.config.initial_azimuth
        self._state.target_elevation = self._clamp_elevation(self.config.initial_elevation)
        self._state.radius = self._clamp_radius(self.config.initial_radius)

    def _clamp_elevation(self, value: float) -> float:
        limit = self.config.elevation_limit
        return max(-limit, min(limit, value))

    def _clamp_radius(self, value: float) -> float:
        return max(self.config.min_radius, min(self.config.max_radius, value))
