"""
Tests for mino definitions and rotation systems.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tetris.geometry import Vector
from tetris.minos import (
    BASIC_KINDS, COLORS, GAME_OVER_COLOR, KICK_TABLE, LATERAL_KICKS, SHAPES,
    CellKind, Direction, KickFamily, Mino, RotationSystem,
    ghost_color, kick_candidates, kick_family,
    new_mino, offsets_for, rotate_left, rotate_right, visualize_mino,
)


class TestCatalog:
    """Test the kind catalog."""

    def test_seven_basic_kinds(self):
        assert len(BASIC_KINDS) == 7
        assert CellKind.EMPTY not in BASIC_KINDS
        assert CellKind.WALL not in BASIC_KINDS
        assert CellKind.GAME_OVER not in BASIC_KINDS

    def test_every_kind_has_color(self):
        for kind in CellKind:
            assert kind in COLORS

    def test_game_over_color(self):
        assert GAME_OVER_COLOR == (128, 128, 128)

    @pytest.mark.parametrize("kind", BASIC_KINDS)
    def test_shapes_have_four_distinct_cells(self, kind):
        assert len(SHAPES[kind]) == 4
        assert len(set(SHAPES[kind])) == 4

    def test_new_mino(self):
        mino = new_mino(CellKind.T)
        assert mino.kind == CellKind.T
        assert mino.orientation == 0
        assert mino.offsets == SHAPES[CellKind.T]
        assert mino.color == COLORS[CellKind.T]

    def test_new_mino_rejects_sentinels(self):
        with pytest.raises(ValueError):
            new_mino(CellKind.WALL)

    def test_cells_relative_to_anchor(self):
        mino = new_mino(CellKind.O)
        assert mino.cells(Vector(3, 4)) == [Vector(3, 4), Vector(4, 4), Vector(3, 5), Vector(4, 5)]

    def test_with_color_returns_new_value(self):
        mino = new_mino(CellKind.S)
        grey = mino.with_color(GAME_OVER_COLOR)
        assert grey.color == GAME_OVER_COLOR
        assert mino.color == COLORS[CellKind.S]
        assert grey.offsets == mino.offsets

    def test_ghost_color(self):
        assert ghost_color((0, 255, 255)) == (0, 255, 255, 0.12)

    def test_visualize(self):
        assert visualize_mino(new_mino(CellKind.I)) == "□□□□"


class TestSimpleRotation:
    """Test orientation offsets."""

    def test_i_orientations(self):
        assert offsets_for(CellKind.I, 0) == (Vector(-1, 0), Vector(0, 0), Vector(1, 0), Vector(2, 0))
        assert offsets_for(CellKind.I, 1) == (Vector(1, -1), Vector(1, 0), Vector(1, 1), Vector(1, 2))
        assert offsets_for(CellKind.I, 2) == (Vector(-1, 1), Vector(0, 1), Vector(1, 1), Vector(2, 1))
        assert offsets_for(CellKind.I, 3) == (Vector(0, -1), Vector(0, 0), Vector(0, 1), Vector(0, 2))

    def test_o_is_rotation_invariant(self):
        for orientation in range(4):
            assert offsets_for(CellKind.O, orientation) == SHAPES[CellKind.O]

    def test_t_rotated_right_once(self):
        rotated = rotate_right(new_mino(CellKind.T))
        assert rotated.orientation == 1
        assert set(rotated.offsets) == {Vector(1, 0), Vector(0, -1), Vector(0, 0), Vector(0, 1)}

    def test_orientation_wraps(self):
        mino = new_mino(CellKind.L)
        assert rotate_left(mino).orientation == 3
        assert rotate_right(rotate_left(mino)).orientation == 0

    @pytest.mark.parametrize("kind", BASIC_KINDS)
    def test_four_right_rotations_round_trip(self, kind):
        original = new_mino(kind)
        mino = original
        for _ in range(4):
            mino = rotate_right(mino)
        assert mino == original

    @pytest.mark.parametrize("kind", BASIC_KINDS)
    def test_four_left_rotations_round_trip(self, kind):
        original = new_mino(kind)
        mino = original
        for _ in range(4):
            mino = rotate_left(mino)
        assert mino == original

    @pytest.mark.parametrize("kind", BASIC_KINDS)
    def test_left_undoes_right(self, kind):
        mino = new_mino(kind)
        for _ in range(3):
            assert rotate_left(rotate_right(mino)) == mino
            mino = rotate_right(mino)

    def test_rotation_keeps_color(self):
        mino = new_mino(CellKind.Z).with_color(GAME_OVER_COLOR)
        assert rotate_right(mino).color == GAME_OVER_COLOR

    def test_rotation_is_pure(self):
        mino = new_mino(CellKind.J)
        rotate_right(mino)
        assert mino.orientation == 0


class TestKickTable:
    """Test the super rotation kick tables."""

    def test_table_size(self):
        assert len(KICK_TABLE) == 24
        for family in KickFamily:
            for orientation in range(4):
                for direction in Direction:
                    assert (family, orientation, direction) in KICK_TABLE

    def test_families(self):
        assert kick_family(CellKind.T) == KickFamily.T
        assert kick_family(CellKind.I) == KickFamily.I
        for kind in (CellKind.O, CellKind.S, CellKind.Z, CellKind.J, CellKind.L):
            assert kick_family(kind) == KickFamily.OTHER

    def test_every_list_starts_in_place(self):
        for kicks in KICK_TABLE.values():
            assert kicks[0] == Vector(0, 0)
            assert len(kicks) == 5

    def test_direction_tables_differ(self):
        """Right and left kicks from one orientation are not mirror images."""
        right = KICK_TABLE[(KickFamily.I, 0, Direction.RIGHT)]
        left = KICK_TABLE[(KickFamily.I, 0, Direction.LEFT)]
        assert right != left
        assert right != tuple(Vector(-v.x, -v.y) for v in left)

    def test_simple_candidates(self):
        mino = new_mino(CellKind.T)
        assert kick_candidates(mino, Direction.RIGHT, RotationSystem.SIMPLE) == LATERAL_KICKS
        assert LATERAL_KICKS == (Vector(0, 0), Vector(1, 0), Vector(-1, 0))

    def test_super_candidates_follow_table_then_fallback(self):
        mino = new_mino(CellKind.I)
        candidates = kick_candidates(mino, Direction.RIGHT, RotationSystem.SUPER)
        table = KICK_TABLE[(KickFamily.I, 0, Direction.RIGHT)]
        assert candidates[:len(table)] == table
        assert set(LATERAL_KICKS) <= set(candidates)
        assert len(candidates) == len(set(candidates))
