"""Display-driven render loop.

The loop never runs on a timer. The host widget calls ``frame()`` from its
paint callback and ``on_frame_presented()`` once the frame reached the
screen (QOpenGLWidget.frameSwapped); the loop then asks the host for exactly
one more repaint. Stopping the loop drops the pending request, so no frame
is advanced after ``stop()``.
"""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class RenderLoop:
    """Per-frame driver for camera smoothing, animation and drawing."""

    def __init__(self, camera, synchronizer, request_frame: Callable[[], None]) -> None:
        """Initialize a stopped loop.

        Args:
            camera: OrbitCamera advanced once per frame
            synchronizer: SceneSynchronizer animated once per frame
            request_frame: Asks the host for one repaint (e.g. widget.update)
        """
        self._camera = camera
        self._synchronizer = synchronizer
        self._request_frame = request_frame
        self._running = False
        self._pending = False
        self._frame_count = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def has_pending_frame(self) -> bool:
        return self._pending

    @property
    def frame_count(self) -> int:
        """Number of frames advanced since creation."""
        return self._frame_count

    def start(self) -> None:
        """Start the loop by requesting the first frame."""
        if self._running:
            return
        self._running = True
        logger.debug("Render loop started")
        self._schedule()

    def stop(self) -> None:
        """Stop the loop and cancel the pending reschedule."""
        if self._running:
            logger.debug(f"Render loop stopped after {self._frame_count} frames")
        self._running = False
        self._pending = False

    def frame(self, draw: Callable[[], None]) -> bool:
        """Advance and draw one frame.

        Order is fixed: camera smoothing, marker animation, draw.

        Returns:
            False if the loop is stopped and nothing was done
        """
        if not self._running:
            return False
        self._pending = False
        self._camera.update()
        self._synchronizer.animate()
        draw()
        self._frame_count += 1
        return True

    def on_frame_presented(self) -> None:
        """Reschedule after the host presented a frame."""
        if self._running:
            self._schedule()

    def _schedule(self) -> None:
        if self._pending:
            return
        self._pending = True
        self._request_frame()
