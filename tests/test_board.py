#!/usr/bin/env python3
"""Unit tests for the challenge board.

Tests the application state including:
- Sample challenges and id assignment
- Input validation
- Range filters and the quick-wins preset
- Highlight clearing and selection
"""

import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from oppmap.errors import OppmapError, ValidationError, validate_name, validate_range
from oppmap.model.board import QUICK_WINS, RangeFilter, TaskBoard
from oppmap.model.task import Task, TaskIdGenerator


def test_sample_tasks():
    """The seeded board carries the three sample challenges."""
    board = TaskBoard()

    assert [t.name for t in board.tasks] == ["Content Creation", "Data Entry", "Email Management"]
    assert [t.id for t in board.tasks] == [1, 2, 3]
    assert board.highlighted == frozenset()
    assert board.selected is None

    assert TaskBoard(with_samples=False).tasks == ()

    print("✓ Sample tasks test passed")


def test_add_task():
    """Added tasks get trimmed names and fresh increasing ids."""
    board = TaskBoard()
    first = board.add_task("  Invoice matching  ", 6, 3, 7)
    second = board.add_task("Meeting notes", 4, 5, 2)

    assert first.name == "Invoice matching"
    assert first.id > 3
    assert second.id > first.id
    assert board.tasks[-2:] == (first, second)

    print("✓ Add task test passed")


def test_add_task_validation():
    """Blank names and out-of-range scores are rejected without side effects."""
    board = TaskBoard()

    for args in (("   ", 5, 5, 5), ("X", 0, 5, 5), ("X", 5, 11, 5), ("X", 5, 5, "high"), ("X", True, 5, 5)):
        with pytest.raises(ValidationError):
            board.add_task(*args)

    assert len(board.tasks) == 3

    with pytest.raises(OppmapError):
        Task.create(1, "", 5, 5, 5)

    print("✓ Add task validation test passed")


def test_validation_helpers():
    """Range and name helpers."""
    validate_range(1, 1, 10)
    validate_range(10.0, 1, 10)
    with pytest.raises(ValidationError) as exc_info:
        validate_range(10.5, 1, 10, "roi")
    assert exc_info.value.field == "roi"

    assert validate_name(" a ") == "a"
    with pytest.raises(ValidationError):
        validate_name(None)

    print("✓ Validation helper test passed")


def test_quick_wins():
    """Quick wins: roi >= 7, enjoyment <= 4, complexity <= 5."""
    board = TaskBoard(with_samples=False)
    win = board.add_task("Data Entry", 9, 2, 2)
    edge = board.add_task("Edge", 7, 4, 5)
    board.add_task("Fun", 9, 8, 2)
    board.add_task("Hard", 9, 2, 9)
    board.add_task("Low ROI", 3, 2, 2)

    assert board.quick_wins() == frozenset({win.id, edge.id})
    assert board.highlighted == frozenset({win.id, edge.id})
    assert QUICK_WINS.matches(edge)

    # All three samples are quick wins
    assert TaskBoard().quick_wins() == frozenset({1, 2, 3})

    print("✓ Quick wins test passed")


def test_apply_filter():
    """Inclusive ranges on every axis replace the highlight set."""
    board = TaskBoard()

    assert board.apply_filter(RangeFilter(min_roi=8)) == frozenset({1, 2})
    assert board.apply_filter(RangeFilter(max_complexity=3)) == frozenset({2, 3})
    assert board.apply_filter(RangeFilter(min_roi=10)) == frozenset()
    assert board.apply_filter(RangeFilter()) == frozenset({1, 2, 3})

    with pytest.raises(ValidationError):
        board.apply_filter(RangeFilter(min_roi=8, max_roi=2))
    # Failed filter leaves highlights alone
    assert board.highlighted == frozenset({1, 2, 3})

    assert RangeFilter().is_default
    assert not QUICK_WINS.is_default

    print("✓ Apply filter test passed")


def test_clear_and_select():
    """Clearing empties the highlight set; selection is independent."""
    board = TaskBoard()
    board.quick_wins()
    board.select(board.tasks[0])

    board.clear_highlights()
    assert board.highlighted == frozenset()
    assert board.selected == board.tasks[0]
    assert not board.is_highlighted(board.tasks[0])

    board.select(None)
    assert board.selected is None

    print("✓ Clear and select test passed")


def test_id_generator():
    """Ids strictly increase and skip reserved values."""
    ids = TaskIdGenerator()
    generated = [ids() for _ in range(100)]
    assert all(b > a for a, b in zip(generated, generated[1:]))

    ids.reserve(generated[-1] + 1000)
    assert ids() > generated[-1] + 1000

    print("✓ Id generator test passed")


def run_all_tests():
    """Run all board tests."""
    print("=== Running Board Tests ===\n")

    test_sample_tasks()
    test_add_task()
    test_add_task_validation()
    test_validation_helpers()
    test_quick_wins()
    test_apply_filter()
    test_clear_and_select()
    test_id_generator()

    print("\n=== All Board Tests Passed! ===")


if __name__ == "__main__":
    run_all_tests()
