"""Controller layer for the oppmap 3D opportunity map.

This module provides the input handling and application coordination:

- InputHandler: Pointer and wheel event processing
- Controller: Main application coordinator (``oppmap.controller.controller``,
  imported directly since it pulls in the OpenGL widgets)
"""

from oppmap.controller.input_handler import (
    InputHandler,
    DragState,
)

__all__ = [
    "InputHandler",
    "DragState",
]
