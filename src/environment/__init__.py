"""Reinforcement learning environment for Tetris."""
from .tetris_env import TetrisEnv

__all__ = [
    "TetrisEnv",
]
