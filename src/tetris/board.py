"""
Tetris Board Module.

This module implements the playfield:
- Fixed 12x22 grid of cell kinds, bordered by walls
- Placement validation for minoes
- Committing locked minoes
- Full-row clearing with refill from the top
- Game-over conversion of occupied cells
"""
import numpy as np

from .geometry import DOWN, Vector
from .minos import CellKind, Mino


class Board:
    """
    Represents the fixed-size Tetris playfield.

    The board is a 2D numpy array indexed as grid[y, x] holding CellKind
    values. The bottom row, leftmost column and rightmost column are WALL
    cells and never change.
    """

    WIDTH = 12
    HEIGHT = 22

    def __init__(self):
        """Initialize an empty bordered board."""
        self.width = self.WIDTH
        self.height = self.HEIGHT
        self.grid = np.full((self.height, self.width), CellKind.EMPTY, dtype=np.int8)
        self._draw_border()

    def _draw_border(self) -> None:
        self.grid[self.height - 1, :] = CellKind.WALL
        self.grid[:, 0] = CellKind.WALL
        self.grid[:, self.width - 1] = CellKind.WALL

    def _empty_row(self) -> np.ndarray:
        row = np.full(self.width, CellKind.EMPTY, dtype=np.int8)
        row[0] = row[self.width - 1] = CellKind.WALL
        return row

    def copy(self) -> "Board":
        """Create a deep copy of this board."""
        new_board = Board()
        new_board.grid = self.grid.copy()
        return new_board

    def reset(self) -> None:
        """Clear the board back to an empty bordered grid."""
        self.grid.fill(CellKind.EMPTY)
        self._draw_border()

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if coordinates are within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> CellKind:
        """Get the kind of a cell."""
        return CellKind(int(self.grid[y, x]))

    def is_empty(self, x: int, y: int) -> bool:
        return self.grid[y, x] == CellKind.EMPTY

    def can_place(self, mino: Mino, anchor: Vector) -> bool:
        """
        Check if a mino fits at the given anchor.

        Args:
            mino: The mino to test
            anchor: Absolute position its offsets are relative to

        Returns:
            True if every cell is in bounds and EMPTY
        """
        width, height = self.width, self.height
        grid = self.grid
        for offset in mino.offsets:
            x, y = anchor.x + offset.x, anchor.y + offset.y
            if x < 0 or x >= width or y < 0 or y >= height:
                return False
            if grid[y, x] != CellKind.EMPTY:
                return False
        return True

    def commit(self, mino: Mino, anchor: Vector) -> None:
        """
        Write a mino's kind into the board.

        The caller must have checked can_place first.
        """
        for cell in mino.cells(anchor):
            self.grid[cell.y, cell.x] = mino.kind

    def drop_position(self, mino: Mino, anchor: Vector) -> Vector:
        """Lowest anchor reachable from `anchor` by straight downward moves."""
        while self.can_place(mino, anchor + DOWN):
            anchor = anchor + DOWN
        return anchor

    def find_complete_rows(self) -> np.ndarray:
        """
        Find rows to clear.

        A row is complete when it holds no EMPTY cell and is not made
        entirely of WALL cells, which keeps the floor.
        """
        no_gaps = np.all(self.grid != CellKind.EMPTY, axis=1)
        all_wall = np.all(self.grid == CellKind.WALL, axis=1)
        return np.flatnonzero(no_gaps & ~all_wall)

    def clear_lines(self) -> int:
        """
        Remove all complete rows and insert bordered empty rows on top.

        Returns:
            Number of rows removed
        """
        complete_rows = self.find_complete_rows()
        num_cleared = len(complete_rows)
        if num_cleared == 0:
            return 0

        remaining = np.delete(self.grid, complete_rows, axis=0)
        fresh = np.tile(self._empty_row(), (num_cleared, 1))
        self.grid = np.vstack([fresh, remaining])
        return num_cleared

    def convert_to_game_over(self) -> bool:
        """
        Turn every non-EMPTY cell into GAME_OVER.

        Returns:
            True if any cell changed
        """
        mask = (self.grid != CellKind.EMPTY) & (self.grid != CellKind.GAME_OVER)
        if not mask.any():
            return False
        self.grid[mask] = CellKind.GAME_OVER
        return True

    def count_filled(self) -> int:
        """Number of cells holding a basic mino kind."""
        return int(np.sum((self.grid >= CellKind.I) & (self.grid <= CellKind.T)))

    def get_state(self) -> np.ndarray:
        """Get a read-only copy of the grid."""
        state = self.grid.copy()
        state.setflags(write=False)
        return state

    def __str__(self) -> str:
        """Create a string visualization of the board."""
        glyphs = {CellKind.EMPTY: "·", CellKind.WALL: "▓", CellKind.GAME_OVER: "▒"}
        lines = []
        for y in range(self.height):
            lines.append(" ".join(glyphs.get(CellKind(int(v)), "█") for v in self.grid[y]))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board(width={self.width}, height={self.height}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return False
        return np.array_equal(self.grid, other.grid)
