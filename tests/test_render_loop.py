#!/usr/bin/env python3
"""Unit tests for the display-driven render loop.

Tests the loop including:
- Fixed per-frame order (camera, animation, draw)
- One pending frame request at a time
- Cancellation on stop
"""

import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from oppmap.view.render_loop import RenderLoop


class CallLog:
    """Records the order of per-frame calls."""

    def __init__(self):
        self.calls = []
        self.requests = 0

    def update(self):
        self.calls.append("camera")

    def animate(self):
        self.calls.append("animate")

    def draw(self):
        self.calls.append("draw")

    def request_frame(self):
        self.requests += 1


def make_loop():
    log = CallLog()
    return RenderLoop(camera=log, synchronizer=log, request_frame=log.request_frame), log


def test_frame_order():
    """Each frame smooths the camera, animates markers, then draws."""
    loop, log = make_loop()
    loop.start()

    assert loop.frame(log.draw)
    assert loop.frame(log.draw)
    assert log.calls == ["camera", "animate", "draw"] * 2
    assert loop.frame_count == 2

    print("✓ Frame order test passed")


def test_start_requests_single_frame():
    """Starting twice or presenting without a paint does not pile up requests."""
    loop, log = make_loop()

    loop.start()
    loop.start()
    assert log.requests == 1
    assert loop.has_pending_frame

    loop.on_frame_presented()
    assert log.requests == 1

    loop.frame(log.draw)
    assert not loop.has_pending_frame
    loop.on_frame_presented()
    assert log.requests == 2

    print("✓ Single pending frame test passed")


def test_stop_cancels_pending_frame():
    """No frame advances after stop, even if a paint was already queued."""
    loop, log = make_loop()
    loop.start()
    loop.frame(log.draw)
    loop.on_frame_presented()
    assert loop.has_pending_frame

    loop.stop()
    assert not loop.is_running
    assert not loop.has_pending_frame

    calls_before = list(log.calls)
    assert not loop.frame(log.draw)
    loop.on_frame_presented()
    assert log.calls == calls_before
    assert log.requests == 2

    # Stopping again is harmless
    loop.stop()

    print("✓ Stop cancellation test passed")


def test_stopped_loop_ignores_frames():
    """A loop that never started does nothing."""
    loop, log = make_loop()

    assert not loop.frame(log.draw)
    loop.on_frame_presented()
    assert log.calls == []
    assert log.requests == 0

    print("✓ Stopped loop test passed")


def run_all_tests():
    """Run all render loop tests."""
    print("=== Running Render Loop Tests ===\n")

    test_frame_order()
    test_start_requests_single_frame()
    test_stop_cancels_pending_frame()
    test_stopped_loop_ignores_frames()

    print("\n=== All Render Loop Tests Passed! ===")


if __name__ == "__main__":
    run_all_tests()
