#!/usr/bin/env python3
"""Unit tests for the orbit camera.

Tests the camera behaviour including:
- Initial position from the spherical parameters
- Elevation and radius clamping
- Per-frame smoothing toward the target angles
- View and projection matrices
"""

import math
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from oppmap.view.camera import OrbitCamera, OrbitConfig, spherical_to_cartesian


def test_initial_position():
    """Camera starts at azimuth 0.5, elevation 0.3, radius 12."""
    camera = OrbitCamera()
    expected = np.array([
        12 * math.sin(0.5) * math.cos(0.3),
        12 * math.sin(0.3),
        12 * math.cos(0.5) * math.cos(0.3),
    ])

    assert np.allclose(camera.position, expected)
    assert np.isclose(np.linalg.norm(camera.position), 12.0)

    print("✓ Initial position test passed")


def test_spherical_axes():
    """Zero angles put the camera on +Z; azimuth pi/2 on +X."""
    assert np.allclose(spherical_to_cartesian(10, 0.0, 0.0), [0, 0, 10])
    assert np.allclose(spherical_to_cartesian(10, math.pi / 2, 0.0), [10, 0, 0])
    assert np.allclose(spherical_to_cartesian(10, 0.0, math.pi / 2), [0, 10, 0])

    print("✓ Spherical axes test passed")


def test_elevation_clamp():
    """Target elevation never passes the poles, however far the drag goes."""
    camera = OrbitCamera()
    limit = math.pi / 2 - 0.01

    camera.rotate(0, 100000)
    assert camera.state.target_elevation == limit

    # Clamping is idempotent
    camera.rotate(0, 500)
    assert camera.state.target_elevation == limit

    camera.rotate(0, -1000000)
    assert camera.state.target_elevation == -limit

    # Azimuth is unbounded
    camera.rotate(10000, 0)
    assert np.isclose(camera.state.target_azimuth, 0.5 + 100.0)

    print("✓ Elevation clamp test passed")


def test_zoom_clamp():
    """Radius stays within [5, 30]."""
    camera = OrbitCamera()

    camera.zoom(120)
    assert np.isclose(camera.state.radius, 12 * 1.1)
    camera.zoom(-120)
    assert np.isclose(camera.state.radius, 12 * 1.1 * 0.9)

    for _ in range(100):
        camera.zoom(1)
    assert camera.state.radius == 30.0
    camera.zoom(1)
    assert camera.state.radius == 30.0

    for _ in range(100):
        camera.zoom(-1)
    assert camera.state.radius == 5.0

    # Zero delta is not a zoom step
    camera.zoom(0)
    assert camera.state.radius == 5.0

    print("✓ Zoom clamp test passed")


def test_smoothing():
    """Current angles cover 10% of the remaining distance per update."""
    camera = OrbitCamera()
    camera.rotate(100, 50)  # +1.0 azimuth, +0.5 elevation

    camera.update()
    assert np.isclose(camera.state.current_azimuth, 0.5 + 1.0 * 0.1)
    assert np.isclose(camera.state.current_elevation, 0.3 + 0.5 * 0.1)

    for _ in range(200):
        camera.update()
    assert np.isclose(camera.state.current_azimuth, 1.5)
    assert np.isclose(camera.state.current_elevation, 0.8)

    # Position follows the current (not target) angles
    assert np.allclose(camera.position, spherical_to_cartesian(12, 1.5, 0.8), atol=1e-6)

    print("✓ Smoothing test passed")


def test_snap_and_reset():
    """snap jumps to the target; reset returns the target to the defaults."""
    camera = OrbitCamera()
    camera.rotate(200, -20)
    camera.zoom(1)
    camera.snap()
    assert camera.state.current_azimuth == camera.state.target_azimuth

    camera.reset()
    camera.snap()
    assert camera.state.current_azimuth == 0.5
    assert camera.state.current_elevation == 0.3
    assert camera.state.radius == 12.0

    print("✓ Snap and reset test passed")


def test_view_matrix_looks_at_origin():
    """The origin lies straight ahead of the camera at the orbit radius."""
    camera = OrbitCamera()
    view = camera.view_matrix

    eye = view @ np.append(camera.position, 1.0)
    assert np.allclose(eye, [0, 0, 0, 1])

    origin = view @ np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(origin[:3], [0, 0, -12])

    print("✓ View matrix test passed")


def test_projection_matrix():
    """Points on the near and far planes map to NDC z = -1 and +1."""
    camera = OrbitCamera(OrbitConfig(fov=60.0, near=0.1, far=1000.0))
    proj = camera.projection_matrix(16 / 9)

    near = proj @ np.array([0.0, 0.0, -0.1, 1.0])
    far = proj @ np.array([0.0, 0.0, -1000.0, 1.0])
    assert np.isclose(near[2] / near[3], -1.0)
    assert np.isclose(far[2] / far[3], 1.0)
    assert np.isclose(proj[1, 1], 1.0 / math.tan(math.radians(30)))

    print("✓ Projection matrix test passed")


def run_all_tests():
    """Run all camera tests."""
    print("=== Running Camera Tests ===\n")

    test_initial_position()
    test_spherical_axes()
    test_elevation_clamp()
    test_zoom_clamp()
    test_smoothing()
    test_snap_and_reset()
    test_view_matrix_looks_at_origin()
    test_projection_matrix()

    print("\n=== All Camera Tests Passed! ===")


if __name__ == "__main__":
    run_all_tests()
