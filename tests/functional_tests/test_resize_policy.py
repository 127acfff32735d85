#!/usr/bin/env python3
"""
Functional Test: Resize Policy

Pure arithmetic, no images involved:
1. Longest-side ceiling used by normalization
2. Independent max_width / max_height bounds used by optimize_image
3. Never upscale, never produce a zero dimension
"""

import sys
from pathlib import Path

repo_root = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(repo_root))

from docnorm.processors.resize import (
    ResizeTarget,
    calculate_target_size,
    target_for_bounds,
    target_for_ceiling,
)
from docnorm.utilities import Print


def test_calculate_target_size():
    assert calculate_target_size(4000, 3000, 2000) == (2000, 1500)
    assert calculate_target_size(3000, 4000, 2000) == (1500, 2000)
    assert calculate_target_size(2000, 2000, 2000) == (2000, 2000)
    assert calculate_target_size(800, 600, 2000) == (800, 600)
    # Extreme aspect ratio keeps at least one pixel
    assert calculate_target_size(10000, 1, 2000) == (2000, 1)
    assert calculate_target_size(1, 10000, 2000) == (1, 2000)
    # Half rounds up
    assert calculate_target_size(4000, 1001, 2000) == (2000, 501)


def test_ceiling_idempotent():
    Print("HEADER", "Testing ceiling idempotence")
    for size in ((2000, 2000), (1999, 10), (1, 1), (2000, 1)):
        assert target_for_ceiling(*size, ceiling=2000) is None, size

    target = target_for_ceiling(5000, 2500, ceiling=2000)
    assert target == ResizeTarget(2000, 1000)
    # Applying the policy to its own output changes nothing
    assert target_for_ceiling(target.width, target.height, ceiling=2000) is None


def test_ceiling_disabled():
    assert target_for_ceiling(9000, 9000, ceiling=0) is None
    assert target_for_ceiling(9000, 9000, ceiling=None) is None


def test_bounds_unconstrained():
    assert target_for_bounds(4000, 3000) is None
    assert target_for_bounds(4000, 3000, 0, 0) is None
    assert target_for_bounds(4000, 3000, None, 0) is None


def test_bounds_width_only():
    assert target_for_bounds(1000, 500, max_width=100) == ResizeTarget(100, 50)
    # Portrait image: only the width bound applies, height may stay above it
    assert target_for_bounds(500, 1000, max_width=100) == ResizeTarget(100, 200)
    assert target_for_bounds(80, 1000, max_width=100) is None


def test_bounds_height_only():
    assert target_for_bounds(1000, 500, max_height=100) == ResizeTarget(200, 100)
    assert target_for_bounds(1000, 80, max_height=100) is None


def test_bounds_binding_constraint_wins():
    Print("HEADER", "Testing fit within both bounds")
    # Height is the binding constraint
    assert target_for_bounds(1000, 200, max_width=800, max_height=100) == ResizeTarget(500, 100)
    # Width is the binding constraint
    assert target_for_bounds(1000, 200, max_width=250, max_height=150) == ResizeTarget(250, 50)
    # Only one side exceeds its bound
    assert target_for_bounds(600, 900, max_width=800, max_height=300) == ResizeTarget(200, 300)

    target = target_for_bounds(1234, 987, max_width=321, max_height=123)
    assert target.width <= 321 and target.height <= 123


def test_bounds_never_upscale():
    assert target_for_bounds(50, 40, max_width=100, max_height=100) is None
    assert target_for_bounds(1, 1, max_width=1, max_height=1) is None


def test_bounds_minimum_one_pixel():
    assert target_for_bounds(10000, 3, max_width=100) == ResizeTarget(100, 1)
    assert target_for_bounds(3, 10000, max_height=100) == ResizeTarget(1, 100)


def main():
    tests = [value for key, value in sorted(globals().items()) if key.startswith('test_')]
    failed = 0
    for test in tests:
        try:
            test()
            print(f"  ✓ {test.__name__}: PASSED")
        except AssertionError as e:
            failed += 1
            print(f"  ✗ {test.__name__}: FAILED ({e})")

    if failed:
        Print("FAILURE", f"{failed} test(s) failed")
        sys.exit(1)
    Print("COMPLETED", "All resize policy tests passed!")


if __name__ == "__main__":
    main()
