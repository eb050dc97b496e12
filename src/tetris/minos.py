"""
Mino Catalog.

This module defines the seven basic tetromino kinds plus the sentinel
cell kinds used on the board, and the rotation systems:
- Canonical orientation-0 cell offsets and colours per kind
- Simple rotation (pure 90 degree rotation, fixed table for the I bar)
- Super rotation wall-kick tables keyed by (family, orientation, direction)

Offsets are (x, y) vectors relative to the mino anchor, y growing downward.
"""
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Dict, List, Tuple

from .geometry import Vector


class CellKind(IntEnum):
    """Kind of a board cell. Values are stored directly in the board grid."""
    EMPTY = 0
    I = 1
    O = 2
    S = 3
    Z = 4
    J = 5
    L = 6
    T = 7
    WALL = 8
    GAME_OVER = 9


BASIC_KINDS: Tuple[CellKind, ...] = (
    CellKind.I, CellKind.O, CellKind.S, CellKind.Z,
    CellKind.J, CellKind.L, CellKind.T,
)

Color = Tuple[int, ...]

COLORS: Dict[CellKind, Color] = {
    CellKind.I: (0, 255, 255),
    CellKind.O: (255, 255, 0),
    CellKind.S: (0, 255, 0),
    CellKind.Z: (255, 0, 0),
    CellKind.J: (0, 0, 255),
    CellKind.L: (255, 128, 0),
    CellKind.T: (255, 0, 255),
    CellKind.WALL: (128, 128, 128),
    CellKind.EMPTY: (255, 255, 255),
    CellKind.GAME_OVER: (128, 128, 128),
}

GAME_OVER_COLOR: Color = COLORS[CellKind.GAME_OVER]
GHOST_ALPHA = 0.12

NUM_ORIENTATIONS = 4


def _v(*pairs: Tuple[int, int]) -> Tuple[Vector, ...]:
    """Helper to build an immutable offset list from (x, y) pairs."""
    return tuple(Vector(x, y) for x, y in pairs)


# =============================================================================
# CANONICAL SHAPES (orientation 0)
# =============================================================================

SHAPES: Dict[CellKind, Tuple[Vector, ...]] = {
    CellKind.I: _v((-1, 0), (0, 0), (1, 0), (2, 0)),   # □□□□
    CellKind.O: _v((0, 0), (1, 0), (0, 1), (1, 1)),    # □□
                                                       # □□
    CellKind.S: _v((0, -1), (1, -1), (-1, 0), (0, 0)), #  □□
                                                       # □□
    CellKind.Z: _v((-1, -1), (0, -1), (0, 0), (1, 0)), # □□
                                                       #  □□
    CellKind.J: _v((-1, -1), (-1, 0), (0, 0), (1, 0)), # □
                                                       # □□□
    CellKind.L: _v((1, -1), (-1, 0), (0, 0), (1, 0)),  #   □
                                                       # □□□
    CellKind.T: _v((0, -1), (-1, 0), (0, 0), (1, 0)),  #  □
                                                       # □□□
}

# The I bar pivots between cells, so its orientations are tabulated
# instead of rotated around the origin.
I_ORIENTATIONS: Tuple[Tuple[Vector, ...], ...] = (
    _v((-1, 0), (0, 0), (1, 0), (2, 0)),
    _v((1, -1), (1, 0), (1, 1), (1, 2)),
    _v((-1, 1), (0, 1), (1, 1), (2, 1)),
    _v((0, -1), (0, 0), (0, 1), (0, 2)),
)


def offsets_for(kind: CellKind, orientation: int) -> Tuple[Vector, ...]:
    """
    Get the cell offsets of a basic kind in the given orientation.

    Args:
        kind: One of BASIC_KINDS
        orientation: 0-3, taken modulo 4

    Returns:
        Tuple of offsets relative to the anchor
    """
    orientation %= NUM_ORIENTATIONS
    if kind == CellKind.O:
        return SHAPES[CellKind.O]
    if kind == CellKind.I:
        return I_ORIENTATIONS[orientation]
    offsets = SHAPES[kind]
    for _ in range(orientation):
        offsets = tuple(offset.rotate_right() for offset in offsets)
    return offsets


# =============================================================================
# MINO VALUE
# =============================================================================

@dataclass(frozen=True)
class Mino:
    """An active piece: kind, orientation, current offsets and colour."""
    kind: CellKind
    orientation: int
    offsets: Tuple[Vector, ...]
    color: Color

    @property
    def num_cells(self) -> int:
        return len(self.offsets)

    def cells(self, anchor: Vector) -> List[Vector]:
        """Absolute cells covered when placed at anchor."""
        return [anchor + offset for offset in self.offsets]

    def with_color(self, color: Color) -> "Mino":
        return replace(self, color=color)

    def __repr__(self) -> str:
        return f"Mino({self.kind.name}, orientation={self.orientation})"


def new_mino(kind: CellKind) -> Mino:
    """Create a mino of a basic kind in orientation 0."""
    if kind not in SHAPES:
        raise ValueError(f"Not a basic mino kind: {kind!r}")
    return Mino(kind, 0, offsets_for(kind, 0), COLORS[kind])


def rotate_right(mino: Mino) -> Mino:
    """Rotate a mino one step to the right. Placement is not checked."""
    orientation = (mino.orientation + 1) % NUM_ORIENTATIONS
    return replace(mino, orientation=orientation, offsets=offsets_for(mino.kind, orientation))


def rotate_left(mino: Mino) -> Mino:
    """Rotate a mino one step to the left. Placement is not checked."""
    orientation = (mino.orientation + 3) % NUM_ORIENTATIONS
    return replace(mino, orientation=orientation, offsets=offsets_for(mino.kind, orientation))


def ghost_color(color: Color) -> Tuple[float, ...]:
    """Turn an RGB colour into the translucent RGBA used for the ghost."""
    return (*color[:3], GHOST_ALPHA)


# =============================================================================
# ROTATION SYSTEMS
# =============================================================================

class RotationSystem(Enum):
    """Rotation policy used for a whole game."""
    SIMPLE = "simple"
    SUPER = "super"


class Direction(Enum):
    RIGHT = "right"
    LEFT = "left"


class KickFamily(Enum):
    T = "T"
    I = "I"
    OTHER = "other"


def kick_family(kind: CellKind) -> KickFamily:
    if kind == CellKind.T:
        return KickFamily.T
    if kind == CellKind.I:
        return KickFamily.I
    return KickFamily.OTHER


# Anchor shifts tried after a rotation when no kick table applies.
LATERAL_KICKS: Tuple[Vector, ...] = _v((0, 0), (1, 0), (-1, 0))

# Super rotation kicks, keyed by the orientation the mino rotates FROM.
# y is downward, so upward kicks have negative y.
_JLSZ_KICKS = {
    (0, Direction.RIGHT): _v((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (1, Direction.RIGHT): _v((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    (2, Direction.RIGHT): _v((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    (3, Direction.RIGHT): _v((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (0, Direction.LEFT): _v((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    (1, Direction.LEFT): _v((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    (2, Direction.LEFT): _v((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (3, Direction.LEFT): _v((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
}

_T_KICKS = {
    (0, Direction.RIGHT): _v((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (1, Direction.RIGHT): _v((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    (2, Direction.RIGHT): _v((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    (3, Direction.RIGHT): _v((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (0, Direction.LEFT): _v((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    (1, Direction.LEFT): _v((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    (2, Direction.LEFT): _v((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (3, Direction.LEFT): _v((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
}

_I_KICKS = {
    (0, Direction.RIGHT): _v((0, 0), (-2, 0), (1, 0), (-2, 1), (1, -2)),
    (1, Direction.RIGHT): _v((0, 0), (-1, 0), (2, 0), (-1, -2), (2, 1)),
    (2, Direction.RIGHT): _v((0, 0), (2, 0), (-1, 0), (2, -1), (-1, 2)),
    (3, Direction.RIGHT): _v((0, 0), (1, 0), (-2, 0), (1, 2), (-2, -1)),
    (0, Direction.LEFT): _v((0, 0), (-1, 0), (2, 0), (-1, -2), (2, 1)),
    (1, Direction.LEFT): _v((0, 0), (2, 0), (-1, 0), (2, -1), (-1, 2)),
    (2, Direction.LEFT): _v((0, 0), (1, 0), (-2, 0), (1, 2), (-2, -1)),
    (3, Direction.LEFT): _v((0, 0), (-2, 0), (1, 0), (-2, 1), (1, -2)),
}

KICK_TABLE: Dict[Tuple[KickFamily, int, Direction], Tuple[Vector, ...]] = {
    (family, orientation, direction): kicks
    for family, table in (
        (KickFamily.T, _T_KICKS),
        (KickFamily.I, _I_KICKS),
        (KickFamily.OTHER, _JLSZ_KICKS),
    )
    for (orientation, direction), kicks in table.items()
}


def kick_candidates(
    mino: Mino,
    direction: Direction,
    system: RotationSystem = RotationSystem.SIMPLE,
) -> Tuple[Vector, ...]:
    """
    Anchor shifts to try, in order, when rotating `mino` (the unrotated
    mino) in `direction`. The first shift whose placement is legal wins.
    """
    if system == RotationSystem.SIMPLE:
        return LATERAL_KICKS
    kicks = KICK_TABLE[(kick_family(mino.kind), mino.orientation, direction)]
    return kicks + tuple(shift for shift in LATERAL_KICKS if shift not in kicks)


# =============================================================================
# HELPERS
# =============================================================================

def visualize_mino(mino: Mino) -> str:
    """Create a string visualization of a mino's current offsets."""
    xs = [offset.x for offset in mino.offsets]
    ys = [offset.y for offset in mino.offsets]
    occupied = set(mino.offsets)
    lines = []
    for y in range(min(ys), max(ys) + 1):
        line = "".join("□" if Vector(x, y) in occupied else " " for x in range(min(xs), max(xs) + 1))
        lines.append(line.rstrip())
    return "\n".join(lines)


if __name__ == "__main__":
    for kind in BASIC_KINDS:
        mino = new_mino(kind)
        print(f"\n{kind.name}:")
        for _ in range(NUM_ORIENTATIONS):
            print(visualize_mino(mino))
            print("-" * 4)
            mino = rotate_right(mino)
