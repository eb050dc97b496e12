"""
Tetris Board Renderer.

Provides terminal visualization of game snapshots.
"""
import os
from typing import Dict

import numpy as np

from .engine import GameSnapshot
from .minos import CellKind


class Renderer:
    """
    ASCII renderer for Tetris snapshots.

    Reads a GameSnapshot only; it never touches the engine.
    """

    EMPTY = "·"
    WALL = "▓"
    GAME_OVER = "▒"
    GHOST = "○"

    GLYPHS: Dict[CellKind, str] = {
        CellKind.I: "I",
        CellKind.O: "O",
        CellKind.S: "S",
        CellKind.Z: "Z",
        CellKind.J: "J",
        CellKind.L: "L",
        CellKind.T: "T",
    }

    def glyph(self, kind: CellKind) -> str:
        if kind == CellKind.EMPTY:
            return self.EMPTY
        if kind == CellKind.WALL:
            return self.WALL
        if kind == CellKind.GAME_OVER:
            return self.GAME_OVER
        return self.GLYPHS[kind]

    def render_board(self, snapshot: GameSnapshot, show_ghost: bool = True) -> str:
        """
        Render the board with the ghost and the active mino drawn on top.

        Args:
            snapshot: Snapshot to draw
            show_ghost: Whether to draw the landing preview

        Returns:
            String representation of the board
        """
        height, width = snapshot.board.shape
        canvas = np.empty((height, width), dtype=object)
        for y in range(height):
            for x in range(width):
                canvas[y, x] = self.glyph(CellKind(int(snapshot.board[y, x])))

        if show_ghost and not snapshot.is_game_over:
            for cell in snapshot.ghost_cells:
                if canvas[cell.y, cell.x] == self.EMPTY:
                    canvas[cell.y, cell.x] = self.GHOST

        mino_glyph = self.GAME_OVER if snapshot.is_game_over else self.glyph(snapshot.mino.kind)
        for cell in snapshot.cells:
            if 0 <= cell.y < height and 0 <= cell.x < width:
                canvas[cell.y, cell.x] = mino_glyph

        return "\n".join(" ".join(row) for row in canvas)

    def render_game_state(self, snapshot: GameSnapshot) -> str:
        """
        Render the complete game state.

        Returns:
            Board plus a status header
        """
        lines = []
        lines.append("=" * 30)
        status = "GAME OVER" if snapshot.is_game_over else snapshot.mino.kind.name
        lines.append(f"Lines: {snapshot.lines_cleared}  |  Tick: {snapshot.tick}  |  {status}")
        lines.append("=" * 30)
        lines.append(self.render_board(snapshot))
        lines.append("=" * 30)
        return "\n".join(lines)


def clear_screen():
    """Clear the terminal screen."""
    os.system('cls' if os.name == 'nt' else 'clear')
