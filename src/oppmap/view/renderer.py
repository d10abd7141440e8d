"""OpenGL widget for rendering the 3D opportunity map.

Uses PyOpenGL with Legacy OpenGL 2.1 for Mac compatibility.
"""

import logging
import math

import numpy as np
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import *
from OpenGL.GLU import gluLookAt, gluPerspective

from oppmap.errors import RenderError
from oppmap.model.task import Task
from oppmap.view.camera import OrbitCamera, OrbitConfig
from oppmap.view.gl_resources import MeshBufferManager
from oppmap.view.mapping import DEFAULT_MAPPING, MappingConfig
from oppmap.view.picking import PickingSystem, ViewportRect
from oppmap.view.render_loop import RenderLoop
from oppmap.view.scene import SceneSynchronizer
from oppmap.view.text_overlay import ScreenLabel, TextOverlay
from oppmap.view.theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)

LABEL_RING_ALPHA = 0.7


class Renderer(QOpenGLWidget):
    """OpenGL widget for the three-axis challenge scatter plot."""

    # Signals
    task_clicked = pyqtSignal(object)  # Task

    def __init__(
        self,
        theme: Theme = DEFAULT_THEME,
        mapping: MappingConfig = DEFAULT_MAPPING,
        orbit: OrbitConfig | None = None,
        show_labels: bool = True,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(320, 240)

        self._theme = theme

        # Camera
        self.camera = OrbitCamera(orbit)

        # Scene, picking and the display-driven loop
        self._scene = SceneSynchronizer(mapping, theme, resources=None, show_labels=show_labels)
        self._scene.build_axes()
        self._picking = PickingSystem(self.camera, self._scene)
        self._loop = RenderLoop(self.camera, self._scene, self.update)
        self.frameSwapped.connect(self._loop.on_frame_presented)

        # GPU buffers exist only while a GL context does
        self._buffers: MeshBufferManager | None = None

        self._overlay = TextOverlay(self, color=theme.label_color)
        self._show_labels = show_labels

        # OpenGL state
        self._initialized = False
        self._torn_down = False

    # Public API

    @property
    def scene(self) -> SceneSynchronizer:
        return self._scene

    @property
    def render_loop(self) -> RenderLoop:
        return self._loop

    def set_scene(self, tasks: tuple[Task, ...], highlighted_ids: frozenset[int]) -> None:
        """Rebuild the task markers from a snapshot.

        The rebuild finishes before the next frame is drawn. Before the GL
        context exists the markers are built CPU-side and uploaded during
        initializeGL.
        """
        if self._torn_down:
            return

        if self._initialized:
            self.makeCurrent()
            try:
                self._scene.sync(tasks, highlighted_ids)
            finally:
                self.doneCurrent()
        else:
            self._scene.sync(tasks, highlighted_ids)
        self.update()

    def pick_at(self, x: float, y: float) -> Task | None:
        """Get the task under a widget-local pointer position."""
        if self._torn_down:
            return None
        task = self._picking.pick(x, y, ViewportRect(0, 0, self.width(), self.height()))
        if task is not None:
            self.task_clicked.emit(task)
        return task

    def set_labels_visible(self, visible: bool) -> None:
        """Show or hide task names, label rings and axis text."""
        self._show_labels = visible
        if not visible:
            self._overlay.clear()
        self.update()

    def reset_view(self) -> None:
        """Ease the camera back to the default view."""
        self.camera.reset()
        self.update()

    def teardown(self) -> None:
        """Stop rendering and release every GL resource. Idempotent."""
        if self._torn_down:
            return
        self._torn_down = True

        self._loop.stop()
        self.frameSwapped.disconnect(self._loop.on_frame_presented)

        if self._initialized and self.context() is not None and self.context().isValid():
            self.makeCurrent()
            try:
                self._scene.dispose()
                self._buffers.clear()
            finally:
                self.doneCurrent()
        else:
            self._scene.dispose()

        self._buffers = None
        self._initialized = False
        self._overlay.clear()
        logger.info("Renderer torn down")

    # QOpenGLWidget hooks

    def initializeGL(self) -> None:
        """Initialize OpenGL resources."""
        if self._torn_down:
            return

        if not self.context() or not self.context().isValid():
            raise RenderError("no valid OpenGL context")

        glClearColor(*self._theme.background_color)
        glEnable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glEnable(GL_NORMALIZE)

        # Ambient fill plus one directional light
        glLightModelfv(GL_LIGHT_MODEL_AMBIENT, [0.8, 0.8, 0.8, 1.0])
        glEnable(GL_LIGHT0)
        glLightfv(GL_LIGHT0, GL_DIFFUSE, [0.6, 0.6, 0.6, 1.0])
        glLightfv(GL_LIGHT0, GL_SPECULAR, [0.0, 0.0, 0.0, 1.0])
        glColorMaterial(GL_FRONT_AND_BACK, GL_AMBIENT_AND_DIFFUSE)
        glEnable(GL_COLOR_MATERIAL)

        self._buffers = MeshBufferManager()
        self._scene.attach_resources(self._buffers)

        # Release buffers before Qt drops the context on widget destruction
        self.context().aboutToBeDestroyed.connect(self.teardown)

        self._initialized = True
        self._loop.start()
        logger.info(f"Renderer initialized: {self._scene.marker_count} markers, {len(self._scene.axes)} axis entities")

    def resizeGL(self, w: int, h: int) -> None:
        """Handle viewport resize."""
        ratio = self.devicePixelRatio()
        glViewport(0, 0, int(w * ratio), int(h * ratio))
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        config = self.camera.config
        gluPerspective(config.fov, w / max(1, h), config.near, config.far)
        glMatrixMode(GL_MODELVIEW)
        self._overlay.resize(w, h)

    def paintGL(self) -> None:
        """Render the scene."""
        if not self._initialized or self._torn_down:
            return
        if not self._loop.frame(self._draw_scene):
            self._draw_scene()

    # Drawing

    def _draw_scene(self) -> None:
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        eye = self.camera.position
        gluLookAt(eye[0], eye[1], eye[2], 0.0, 0.0, 0.0, 0.0, 1.0, 0.0)

        # Directional light in world space (w = 0)
        glLightfv(GL_LIGHT0, GL_POSITION, [10.0, 10.0, 5.0, 0.0])

        self._draw_axes()
        self._draw_markers(eye)
        self._update_overlay()

    def _draw_axes(self) -> None:
        glDisable(GL_LIGHTING)
        glLineWidth(2.0)
        for axis in self._scene.axes:
            if axis.handle is None:
                continue
            glColor4f(*axis.color)
            glPushMatrix()
            glTranslatef(*axis.position)
            self._buffers.draw(axis.handle)
            glPopMatrix()
        glLineWidth(1.0)

    def _draw_markers(self, eye: np.ndarray) -> None:
        # Back to front so the translucent spheres blend correctly
        markers = sorted(
            self._scene.markers,
            key=lambda m: float(np.linalg.norm(m.position - eye)),
            reverse=True,
        )

        glEnable(GL_LIGHTING)
        for marker in markers:
            if marker.handle is None:
                continue
            r, g, b = marker.color
            glColor4f(r, g, b, marker.opacity)
            glPushMatrix()
            glTranslatef(*marker.position)
            glRotatef(math.degrees(marker.rotation[0]), 1.0, 0.0, 0.0)
            glRotatef(math.degrees(marker.rotation[1]), 0.0, 1.0, 0.0)
            glRotatef(math.degrees(marker.rotation[2]), 0.0, 0.0, 1.0)
            self._buffers.draw(marker.handle)
            glPopMatrix()
        glDisable(GL_LIGHTING)

        if not self._show_labels:
            return

        # Label rings always face the camera
        state = self.camera.state
        r, g, b, _ = self._theme.label_color
        glColor4f(r, g, b, LABEL_RING_ALPHA)
        for marker in markers:
            label = marker.label
            if label is None or label.handle is None:
                continue
            glPushMatrix()
            glTranslatef(*label.position)
            glRotatef(math.degrees(state.current_azimuth), 0.0, 1.0, 0.0)
            glRotatef(-math.degrees(state.current_elevation), 1.0, 0.0, 0.0)
            self._buffers.draw(label.handle)
            glPopMatrix()

    def _update_overlay(self) -> None:
        if not self._show_labels:
            return

        labels = []
        for axis_label in self._scene.axis_labels:
            screen = self.get_screen_position(axis_label.position)
            if screen is not None:
                labels.append(ScreenLabel(axis_label.text, screen[0], screen[1], is_title=axis_label.is_title))
        for marker in self._scene.markers:
            if marker.label is None:
                continue
            screen = self.get_screen_position(marker.label.position)
            if screen is not None:
                # Text sits just above the ring
                labels.append(ScreenLabel(marker.label.text, screen[0], screen[1] - 6, is_task=True))
        self._overlay.set_labels(labels)

    def get_screen_position(self, world_pos: np.ndarray) -> tuple[int, int] | None:
        """Project a world position to widget-local pixels.

        Returns:
            (x, y) in pixels, or None if the point is behind the camera
        """
        width, height = self.width(), self.height()
        if width <= 0 or height <= 0:
            return None

        view = self.camera.view_matrix
        proj = self.camera.projection_matrix(width / height)
        clip = proj @ view @ np.append(np.asarray(world_pos, dtype=np.float64), 1.0)
        if clip[3] <= 1e-6:
            return None

        ndc = clip[:3] / clip[3]
        x = (ndc[0] + 1.0) / 2.0 * width
        y = (1.0 - ndc[1]) / 2.0 * height
        return int(x), int(y)
