"""
Tests for grid geometry.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tetris.geometry import Vector, ORIGIN, LEFT, RIGHT, DOWN


class TestVector:
    """Test vector arithmetic."""

    def test_addition(self):
        assert Vector(1, 2) + Vector(3, -4) == Vector(4, -2)

    def test_direction_constants(self):
        assert ORIGIN + LEFT == Vector(-1, 0)
        assert ORIGIN + RIGHT == Vector(1, 0)
        assert ORIGIN + DOWN == Vector(0, 1)

    def test_immutable(self):
        """Vectors are frozen values."""
        v = Vector(1, 1)
        with pytest.raises(AttributeError):
            v.x = 5

    def test_hashable(self):
        assert len({Vector(0, 0), Vector(0, 0), Vector(1, 0)}) == 2


class TestRotation:
    """Test 90 degree rotations."""

    def test_rotate_right(self):
        """(x, y) -> (-y, x)."""
        assert Vector(1, 0).rotate_right() == Vector(0, 1)
        assert Vector(0, 1).rotate_right() == Vector(-1, 0)
        assert Vector(2, -3).rotate_right() == Vector(3, 2)

    def test_rotate_left_inverts_right(self):
        for v in [Vector(1, 0), Vector(2, -3), Vector(-1, -1), ORIGIN]:
            assert v.rotate_right().rotate_left() == v
            assert v.rotate_left().rotate_right() == v

    @pytest.mark.parametrize("v", [Vector(1, 2), Vector(-3, 0), Vector(0, -1)])
    def test_four_rotations_identity(self, v):
        r = v
        l = v
        for _ in range(4):
            r = r.rotate_right()
            l = l.rotate_left()
        assert r == v
        assert l == v
