"""Falling-block game engine."""
from .geometry import Vector
from .minos import CellKind, Mino, RotationSystem, BASIC_KINDS, new_mino, rotate_right, rotate_left
from .board import Board
from .engine import TetrisEngine, SimulationConfig, Command, GameStatus, GameSnapshot

__all__ = [
    "Vector",
    "CellKind",
    "Mino",
    "RotationSystem",
    "BASIC_KINDS",
    "new_mino",
    "rotate_right",
    "rotate_left",
    "Board",
    "TetrisEngine",
    "SimulationConfig",
    "Command",
    "GameStatus",
    "GameSnapshot",
]
