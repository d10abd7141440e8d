#!/usr/bin/env python3
"""Unit tests for marker picking.

Tests the pick resolver including:
- Pointer to NDC conversion
- Ray construction from the camera matrices
- Ray-sphere intersection
- Frontmost pick when markers overlap along the ray
"""

import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from oppmap.model.task import Task
from oppmap.view.camera import OrbitCamera, OrbitConfig
from oppmap.view.picking import (
    PickingSystem,
    Ray,
    ViewportRect,
    find_closest_intersection,
    pointer_to_ndc,
    ray_sphere_intersect,
)
from oppmap.view.scene import SceneSynchronizer

RECT = ViewportRect(0, 0, 800, 600)


def front_camera():
    """Camera on +Z at radius 12, looking down -Z at the origin."""
    return OrbitCamera(OrbitConfig(initial_azimuth=0.0, initial_elevation=0.0, initial_radius=12.0))


def test_pointer_to_ndc():
    """Viewport corners and center map to NDC with Y up."""
    assert pointer_to_ndc(400, 300, RECT) == (0.0, 0.0)
    assert pointer_to_ndc(0, 0, RECT) == (-1.0, 1.0)
    assert pointer_to_ndc(800, 600, RECT) == (1.0, -1.0)

    # Offsets of the viewport inside the host window are removed
    offset = ViewportRect(100, 50, 800, 600)
    assert pointer_to_ndc(500, 350, offset) == (0.0, 0.0)

    print("✓ Pointer to NDC test passed")


def test_center_ray():
    """The ray through the viewport center starts at the camera and hits the origin."""
    camera = front_camera()
    picking = PickingSystem(camera, SceneSynchronizer())

    ray = picking.ray_at(400, 300, RECT)
    assert np.allclose(ray.origin, [0, 0, 12])
    assert np.allclose(ray.direction, [0, 0, -1])
    assert np.isclose(np.linalg.norm(ray.direction), 1.0)

    print("✓ Center ray test passed")


def test_ray_sphere_intersect():
    """Nearest positive hit distance, or None."""
    ray = Ray(np.array([0.0, 0.0, 10.0]), np.array([0.0, 0.0, -2.0]))

    assert np.isclose(ray_sphere_intersect(ray, np.zeros(3), 1.0), 9.0)
    assert ray_sphere_intersect(ray, np.array([5.0, 0.0, 0.0]), 1.0) is None

    # Sphere behind the origin
    assert ray_sphere_intersect(ray, np.array([0.0, 0.0, 20.0]), 1.0) is None

    # Origin inside the sphere: exit point
    inside = Ray(np.zeros(3), np.array([1.0, 0.0, 0.0]))
    assert np.isclose(ray_sphere_intersect(inside, np.zeros(3), 2.0), 2.0)

    print("✓ Ray-sphere intersection test passed")


def test_frontmost_pick():
    """Of two markers on one ray the one nearer the camera wins."""
    camera = front_camera()
    scene = SceneSynchronizer()
    near = Task.create(1, "Near", 5.5, 5.5, 10)  # z = +4.05, toward the camera
    far = Task.create(2, "Far", 5.5, 5.5, 1)     # z = -4.05

    # Order in the list must not matter
    for tasks in ([far, near], [near, far]):
        scene.sync(tasks, set())
        picked = PickingSystem(camera, scene).pick(400, 300, RECT)
        assert picked is not None
        assert picked.id == 1

    # find_closest_intersection agrees on the raw markers
    ray = PickingSystem(camera, scene).ray_at(400, 300, RECT)
    assert find_closest_intersection(ray, scene.markers).task.id == 1

    print("✓ Frontmost pick test passed")


def test_pick_miss_and_empty():
    """Empty space, an empty scene and a zero-size viewport pick nothing."""
    camera = front_camera()
    scene = SceneSynchronizer()
    picking = PickingSystem(camera, scene)

    assert picking.pick(400, 300, RECT) is None

    scene.sync([Task.create(1, "Center", 5.5, 5.5, 5.5)], set())
    assert picking.pick(400, 300, RECT).id == 1
    assert picking.pick(5, 5, RECT) is None
    assert picking.pick(400, 300, ViewportRect(0, 0, 0, 0)) is None

    print("✓ Pick miss test passed")


def test_pick_follows_camera():
    """Picking uses the smoothed camera, not a stale one."""
    camera = front_camera()
    scene = SceneSynchronizer()
    # roi 10 sits on +X, visible at the center only when looking along -X
    scene.sync([Task.create(1, "Right", 10, 5.5, 5.5)], set())
    picking = PickingSystem(camera, scene)

    assert picking.pick(400, 300, RECT) is None

    camera.rotate(np.pi / 2 / 0.01, 0)
    camera.snap()
    assert picking.pick(400, 300, RECT).id == 1

    print("✓ Pick follows camera test passed")


def run_all_tests():
    """Run all picking tests."""
    print("=== Running Picking Tests ===\n")

    test_pointer_to_ndc()
    test_center_ray()
    test_ray_sphere_intersect()
    test_frontmost_pick()
    test_pick_miss_and_empty()
    test_pick_follows_camera()

    print("\n=== All Picking Tests Passed! ===")


if __name__ == "__main__":
    run_all_tests()
