"""View layer for the oppmap 3D opportunity map.

This module provides the scene and rendering components:

- mapping: Scalar-to-space mapping of task scores
- OrbitCamera: Smoothed spherical orbit camera
- SceneSynchronizer: Owner of axis and task marker entities
- PickingSystem: CPU-side ray-sphere picking
- RenderLoop: Display-driven per-frame driver
- Theme: Theme dataclass for visual styling

The Qt/OpenGL widgets (Renderer, MainWindow, FilterPanel, TextOverlay) and
MeshBufferManager live in their own modules and are imported from there, so
the pure scene logic stays importable without a GL library.
"""

from oppmap.view.camera import CameraOrbitState, OrbitCamera, OrbitConfig
from oppmap.view.geometry import MeshData, box_mesh, line_mesh, ring_mesh, sphere_mesh
from oppmap.view.mapping import (
    DEFAULT_MAPPING,
    MappingConfig,
    axis_coordinate,
    task_color,
    task_opacity,
    task_position,
    task_size,
)
from oppmap.view.picking import PickingSystem, Ray, ViewportRect, screen_to_ray
from oppmap.view.render_loop import RenderLoop
from oppmap.view.scene import AxisEntity, MarkerEntity, SceneSynchronizer
from oppmap.view.theme import (
    Theme,
    CORNDEL,
    DARK,
    DEFAULT_THEME,
    BUILTIN_THEMES,
    get_theme,
    list_themes,
    blend_colors,
    hex_to_rgba,
)

__all__ = [
    "CameraOrbitState",
    "OrbitCamera",
    "OrbitConfig",
    "MeshData",
    "box_mesh",
    "line_mesh",
    "ring_mesh",
    "sphere_mesh",
    "DEFAULT_MAPPING",
    "MappingConfig",
    "axis_coordinate",
    "task_color",
    "task_opacity",
    "task_position",
    "task_size",
    "PickingSystem",
    "Ray",
    "ViewportRect",
    "screen_to_ray",
    "RenderLoop",
    "AxisEntity",
    "MarkerEntity",
    "SceneSynchronizer",
    # Theme exports
    "Theme",
    "CORNDEL",
    "DARK",
    "DEFAULT_THEME",
    "BUILTIN_THEMES",
    "get_theme",
    "list_themes",
    "blend_colors",
    "hex_to_rgba",
]
