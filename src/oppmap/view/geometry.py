"""Mesh data for the scatter view.

Provides CPU-side vertex/normal/index arrays for the shapes the scene
uses: UV spheres for task markers, flat rings for label markers, small
boxes for axis endpoints and line sets for axes, ticks and the grid.
Uploading to the GPU is the resource manager's job.
"""

import math
from dataclasses import dataclass

import numpy as np

TRIANGLES = "triangles"
LINES = "lines"


@dataclass
class MeshData:
    """Indexed mesh geometry.

    Attributes:
        vertices: Vertex positions, shape (N, 3), float32
        normals: Vertex normals, shape (N, 3), float32
        indices: Element indices, uint32
        primitive: TRIANGLES or LINES
    """

    vertices: np.ndarray
    normals: np.ndarray
    indices: np.ndarray
    primitive: str = TRIANGLES

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def index_count(self) -> int:
        return len(self.indices)


def sphere_mesh(radius: float, width_segments: int = 32, height_segments: int = 32) -> MeshData:
    """Build a UV sphere centered at the origin.

    Args:
        radius: Sphere radius
        width_segments: Segments around the equator
        height_segments: Segments from pole to pole
    """
    vertices = []
    normals = []
    for iy in range(height_segments + 1):
        v = iy / height_segments
        theta = v * math.pi
        for ix in range(width_segments + 1):
            u = ix / width_segments
            phi = u * 2.0 * math.pi
            nx = -math.cos(phi) * math.sin(theta)
            ny = math.cos(theta)
            nz = math.sin(phi) * math.sin(theta)
            normals.append((nx, ny, nz))
            vertices.append((radius * nx, radius * ny, radius * nz))

    indices = []
    row = width_segments + 1
    for iy in range(height_segments):
        for ix in range(width_segments):
            a = iy * row + ix + 1
            b = iy * row + ix
            c = (iy + 1) * row + ix
            d = (iy + 1) * row + ix + 1
            # Skip the degenerate triangle at each pole
            if iy != 0:
                indices.extend((a, b, d))
            if iy != height_segments - 1:
                indices.extend((b, c, d))

    return MeshData(
        vertices=np.array(vertices, dtype=np.float32),
        normals=np.array(normals, dtype=np.float32),
        indices=np.array(indices, dtype=np.uint32),
    )


def ring_mesh(inner_radius: float, outer_radius: float, segments: int = 8) -> MeshData:
    """Build a flat ring in the XY plane facing +Z."""
    vertices = []
    for i in range(segments + 1):
        angle = 2.0 * math.pi * i / segments
        c, s = math.cos(angle), math.sin(angle)
        vertices.append((inner_radius * c, inner_radius * s, 0.0))
        vertices.append((outer_radius * c, outer_radius * s, 0.0))

    indices = []
    for i in range(segments):
        inner_a, outer_a = 2 * i, 2 * i + 1
        inner_b, outer_b = 2 * i + 2, 2 * i + 3
        indices.extend((inner_a, outer_a, outer_b, outer_b, inner_b, inner_a))

    vertices_arr = np.array(vertices, dtype=np.float32)
    normals = np.tile(np.array([0.0, 0.0, 1.0], dtype=np.float32), (len(vertices_arr), 1))
    return MeshData(vertices_arr, normals, np.array(indices, dtype=np.uint32))


def box_mesh(size: float) -> MeshData:
    """Build an axis-aligned cube with per-face normals."""
    h = size / 2.0
    faces = [
        ((0, 0, 1), [(-h, -h, h), (h, -h, h), (h, h, h), (-h, h, h)]),
        ((0, 0, -1), [(h, -h, -h), (-h, -h, -h), (-h, h, -h), (h, h, -h)]),
        ((0, 1, 0), [(-h, h, h), (h, h, h), (h, h, -h), (-h, h, -h)]),
        ((0, -1, 0), [(-h, -h, -h), (h, -h, -h), (h, -h, h), (-h, -h, h)]),
        ((1, 0, 0), [(h, -h, h), (h, -h, -h), (h, h, -h), (h, h, h)]),
        ((-1, 0, 0), [(-h, -h, -h), (-h, -h, h), (-h, h, h), (-h, h, -h)]),
    ]
    vertices = []
    normals = []
    indices = []
    for normal, corners in faces:
        base = len(vertices)
        vertices.extend(corners)
        normals.extend([normal] * 4)
        indices.extend((base, base + 1, base + 2, base + 2, base + 3, base))

    return MeshData(
        vertices=np.array(vertices, dtype=np.float32),
        normals=np.array(normals, dtype=np.float32),
        indices=np.array(indices, dtype=np.uint32),
    )


def line_mesh(segments: list[tuple[tuple[float, float, float], tuple[float, float, float]]]) -> MeshData:
    """Build a line list from (start, end) point pairs."""
    vertices = np.array([p for segment in segments for p in segment], dtype=np.float32).reshape(-1, 3)
    normals = np.tile(np.array([0.0, 1.0, 0.0], dtype=np.float32), (len(vertices), 1))
    indices = np.arange(len(vertices), dtype=np.uint32)
    return MeshData(vertices, normals, indices, primitive=LINES)
