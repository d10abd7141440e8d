"""GPU buffer management for the legacy OpenGL renderer.

This module provides the MeshBufferManager class, which uploads MeshData
into vertex/index buffer objects with PyOpenGL, draws them, and tracks
every buffer it created so they can be released explicitly on rebuild and
on teardown.

All methods require the owning widget's GL context to be current.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from OpenGL.GL import (
    GL_ARRAY_BUFFER,
    GL_ELEMENT_ARRAY_BUFFER,
    GL_FLOAT,
    GL_LINES,
    GL_NORMAL_ARRAY,
    GL_STATIC_DRAW,
    GL_TRIANGLES,
    GL_UNSIGNED_INT,
    GL_VERTEX_ARRAY,
    glBindBuffer,
    glBufferData,
    glDeleteBuffers,
    glDisableClientState,
    glDrawElements,
    glEnableClientState,
    glGenBuffers,
    glNormalPointer,
    glVertexPointer,
)

from oppmap.view.geometry import LINES, MeshData

logger = logging.getLogger(__name__)


@dataclass
class MeshHandle:
    """GPU-side buffers backing one mesh."""

    vertex_buffer: int
    normal_buffer: int
    index_buffer: int
    index_count: int
    primitive: str
    name: str | None = None


class MeshBufferManager:
    """Manage VBO/EBO buffers for meshes drawn with legacy OpenGL."""

    def __init__(self) -> None:
        self._meshes: dict[int, MeshHandle] = {}

    def create_mesh(self, mesh: MeshData, name: str | None = None) -> MeshHandle:
        """Upload a mesh to the GPU.

        Args:
            mesh: CPU-side geometry
            name: Optional name for debug logging

        Returns:
            Handle used to draw and release the mesh

        Raises:
            ValueError: If the mesh arrays have the wrong shape
        """
        if mesh.vertices.ndim != 2 or mesh.vertices.shape[1] != 3:
            raise ValueError("Mesh vertices must have shape (N, 3)")

        vertices = np.ascontiguousarray(mesh.vertices, dtype=np.float32)
        normals = np.ascontiguousarray(mesh.normals, dtype=np.float32)
        indices = np.ascontiguousarray(mesh.indices, dtype=np.uint32)

        vertex_buffer, normal_buffer, index_buffer = (int(b) for b in glGenBuffers(3))

        glBindBuffer(GL_ARRAY_BUFFER, vertex_buffer)
        glBufferData(GL_ARRAY_BUFFER, vertices.nbytes, vertices, GL_STATIC_DRAW)
        glBindBuffer(GL_ARRAY_BUFFER, normal_buffer)
        glBufferData(GL_ARRAY_BUFFER, normals.nbytes, normals, GL_STATIC_DRAW)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, index_buffer)
        glBufferData(GL_ELEMENT_ARRAY_BUFFER, indices.nbytes, indices, GL_STATIC_DRAW)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, 0)

        handle = MeshHandle(
            vertex_buffer=vertex_buffer,
            normal_buffer=normal_buffer,
            index_buffer=index_buffer,
            index_count=len(indices),
            primitive=mesh.primitive,
            name=name,
        )
        self._meshes[vertex_buffer] = handle
        logger.debug(f"Created mesh '{name}': {len(vertices)} vertices, {len(indices)} indices")
        return handle

    def draw(self, handle: MeshHandle) -> None:
        """Draw a previously uploaded mesh with the current GL state."""
        if handle.index_count == 0:
            return

        glEnableClientState(GL_VERTEX_ARRAY)
        glEnableClientState(GL_NORMAL_ARRAY)

        glBindBuffer(GL_ARRAY_BUFFER, handle.vertex_buffer)
        glVertexPointer(3, GL_FLOAT, 0, None)
        glBindBuffer(GL_ARRAY_BUFFER, handle.normal_buffer)
        glNormalPointer(GL_FLOAT, 0, None)

        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, handle.index_buffer)
        mode = GL_LINES if handle.primitive == LINES else GL_TRIANGLES
        glDrawElements(mode, handle.index_count, GL_UNSIGNED_INT, None)

        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, 0)
        glBindBuffer(GL_ARRAY_BUFFER, 0)
        glDisableClientState(GL_NORMAL_ARRAY)
        glDisableClientState(GL_VERTEX_ARRAY)

    def release(self, handle: MeshHandle) -> bool:
        """Release the buffers of one mesh.

        Returns:
            True if the mesh was found and released, False otherwise
        """
        if self._meshes.pop(handle.vertex_buffer, None) is None:
            logger.warning(f"Mesh '{handle.name}' not found for release")
            return False

        glDeleteBuffers(3, [handle.vertex_buffer, handle.normal_buffer, handle.index_buffer])
        logger.debug(f"Released mesh '{handle.name}'")
        return True

    def clear(self) -> None:
        """Release every managed mesh."""
        for handle in list(self._meshes.values()):
            self.release(handle)
        logger.debug("Released all meshes")

    @property
    def mesh_count(self) -> int:
        """Get number of live meshes."""
        return len(self._meshes)
