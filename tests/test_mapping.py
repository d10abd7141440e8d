#!/usr/bin/env python3
"""Unit tests for the scalar-to-space mapping.

Tests the score mapping including:
- Coordinate monotonicity and range
- Alignment of marker positions with tick marks
- Marker size and color rules
- The extreme-corner challenge scenario
"""

import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from oppmap.model.task import Task
from oppmap.view.mapping import (
    DEFAULT_MAPPING,
    MappingConfig,
    axis_coordinate,
    axis_half_length,
    task_color,
    task_opacity,
    task_position,
    task_size,
    tick_coordinates,
    tick_values,
)
from oppmap.view.theme import CORNDEL, DARK, blend_colors, hex_to_rgba


def make_task(roi=5, enjoyment=5, complexity=5, task_id=1, name="X"):
    return Task.create(task_id, name, roi, enjoyment, complexity)


def test_coordinate_monotonic():
    """Coordinates strictly increase with the score."""
    values = np.linspace(1.0, 10.0, 37)
    coords = [axis_coordinate(v) for v in values]

    assert all(b > a for a, b in zip(coords, coords[1:]))
    assert axis_coordinate(5.5) == 0.0
    assert np.isclose(axis_coordinate(1), -4.05)
    assert np.isclose(axis_coordinate(10), 4.05)

    print("✓ Coordinate monotonicity test passed")


def test_size_monotonic():
    """Marker radius grows with complexity and spans 0.23..0.5."""
    sizes = [task_size(make_task(complexity=c)) for c in range(1, 11)]

    assert all(b > a for a, b in zip(sizes, sizes[1:]))
    assert np.isclose(sizes[0], 0.23)
    assert np.isclose(sizes[-1], 0.5)

    print("✓ Size monotonicity test passed")


def test_ticks_match_positions():
    """Every integer score lands exactly on its tick coordinate."""
    ticks = dict(zip(tick_values(), tick_coordinates()))
    assert list(ticks) == list(range(1, 11))

    for score in range(1, 11):
        pos = task_position(make_task(roi=score, enjoyment=score, complexity=score))
        assert pos[0] == ticks[score]
        assert pos[1] == ticks[score]
        assert pos[2] == ticks[score]

    # Axes end exactly at the outermost ticks
    assert axis_half_length() == ticks[10]
    assert -axis_half_length() == ticks[1]

    print("✓ Tick alignment test passed")


def test_custom_mapping():
    """Mapping follows its configuration."""
    config = MappingConfig(scale=2.0)
    assert axis_coordinate(6.5, config) == 2.0
    assert axis_half_length(config) == 9.0
    assert tick_coordinates(config)[0] == -9.0

    print("✓ Custom mapping test passed")


def test_color_gradient():
    """Non-highlighted color blends toward the high end as ROI grows."""
    high = np.array(CORNDEL.gradient_high[:3])
    distances = [
        np.linalg.norm(task_color(make_task(roi=r), False, CORNDEL) - high)
        for r in range(1, 11)
    ]

    assert all(b < a for a, b in zip(distances, distances[1:]))
    assert np.allclose(task_color(make_task(roi=10), False, CORNDEL), high)

    print("✓ Color gradient test passed")


def test_highlight_color_and_opacity():
    """Highlighted tasks use the accent color regardless of ROI."""
    accent = np.array(hex_to_rgba("#E96301")[:3])
    for roi in (1, 5, 10):
        assert np.allclose(task_color(make_task(roi=roi), True, CORNDEL), accent)

    assert task_opacity(True) == 0.9
    assert task_opacity(False) == 0.8

    print("✓ Highlight color test passed")


def test_theme_helpers():
    """Hex parsing and color blending."""
    assert hex_to_rgba("#ff0000") == (1.0, 0.0, 0.0, 1.0)
    assert hex_to_rgba("00000080")[3] == 128 / 255.0

    low, high = (0.0, 0.0, 0.0), (1.0, 0.5, 0.25)
    assert blend_colors(low, high, 0.0) == low
    assert blend_colors(low, high, 1.0) == high
    assert blend_colors(low, high, 2.0) == high
    assert np.allclose(blend_colors(low, high, 0.5), (0.5, 0.25, 0.125))

    # Themes differ only in colors, never in mapping
    assert task_size(make_task(), DEFAULT_MAPPING) == task_size(make_task())
    assert DARK.highlight_color != DARK.gradient_high

    print("✓ Theme helper test passed")


def test_extreme_corner_task():
    """High ROI, lowest enjoyment and complexity sits in the sweet-spot corner."""
    task = Task.create(1, "X", 10, 1, 1)

    pos = task_position(task)
    assert np.allclose(pos, [(10 - 5.5) * 0.9, (1 - 5.5) * 0.9, (1 - 5.5) * 0.9])
    assert pos[0] == axis_half_length()
    assert pos[1] == -axis_half_length()
    assert pos[2] == -axis_half_length()

    # Smallest marker of any valid task
    assert task_size(task) == min(task_size(make_task(complexity=c)) for c in range(1, 11))

    # Hottest end of the ROI gradient
    assert np.allclose(task_color(task, False, CORNDEL), hex_to_rgba("#CE0058")[:3])

    print("✓ Extreme corner scenario test passed")


def run_all_tests():
    """Run all mapping tests."""
    print("=== Running Mapping Tests ===\n")

    test_coordinate_monotonic()
    test_size_monotonic()
    test_ticks_match_positions()
    test_custom_mapping()
    test_color_gradient()
    test_highlight_color_and_opacity()
    test_theme_helpers()
    test_extreme_corner_task()

    print("\n=== All Mapping Tests Passed! ===")


if __name__ == "__main__":
    run_all_tests()
