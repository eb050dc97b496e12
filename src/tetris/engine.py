"""
Tetris Game Engine.

This module implements the tick-driven simulation:
- Buffered key input, one command consumed per tick
- Gravity on a fixed tick interval
- Lock delay measured from ground contact
- Locking, line clearing and spawning from a shuffled supply
- Game over detection and the game-over cell conversion
"""
from dataclasses import dataclass, field, asdict
from typing import List, Tuple, Optional, Dict, Any, Union
from enum import Enum
import numpy as np

from .board import Board
from .geometry import DOWN, LEFT, RIGHT, Vector
from .minos import (
    BASIC_KINDS, GAME_OVER_COLOR, CellKind, Direction, Mino, RotationSystem,
    ghost_color, kick_candidates, new_mino, rotate_left, rotate_right,
)


GAME_FPS = 24
SPAWN_ANCHOR = Vector(Board.WIDTH // 2, 1)


class GameStatus(Enum):
    """Game status enumeration."""
    FALLING = "falling"
    GAME_OVER = "game_over"


class Command(Enum):
    """Player commands delivered by the host."""
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE_RIGHT = "rotate_right"
    ROTATE_LEFT = "rotate_left"
    HARD_DROP = "hard_drop"


KEY_BINDINGS: Dict[str, Command] = {
    "h": Command.MOVE_LEFT,
    "l": Command.MOVE_RIGHT,
    "j": Command.SOFT_DROP,
    "k": Command.ROTATE_RIGHT,
    "K": Command.ROTATE_LEFT,
    " ": Command.HARD_DROP,
    "ArrowLeft": Command.MOVE_LEFT,
    "ArrowRight": Command.MOVE_RIGHT,
    "ArrowDown": Command.SOFT_DROP,
    "ArrowUp": Command.ROTATE_RIGHT,
}

KeyInput = Union[str, Command]


def resolve_command(key: KeyInput) -> Optional[Command]:
    """Map a key identifier to a command. Unknown keys map to None."""
    if isinstance(key, Command):
        return key
    return KEY_BINDINGS.get(key)


@dataclass
class SimulationConfig:
    """Timing and rotation settings for one game."""
    drop_interval: int = GAME_FPS // 3
    lock_delay_threshold: int = GAME_FPS // 2
    lock_delay_damping: float = 1.2
    rotation_system: RotationSystem = RotationSystem.SIMPLE
    seed: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.rotation_system, RotationSystem):
            try:
                self.rotation_system = RotationSystem(str(self.rotation_system).lower())
            except ValueError:
                valid = [system.value for system in RotationSystem]
                raise ValueError(
                    f"Unknown rotation system: {self.rotation_system}. Valid systems: {valid}"
                ) from None
        if self.drop_interval <= 0:
            raise ValueError(f"drop_interval must be positive, got {self.drop_interval}")
        if self.lock_delay_threshold <= 0:
            raise ValueError(f"lock_delay_threshold must be positive, got {self.lock_delay_threshold}")
        if self.lock_delay_damping < 1.0:
            raise ValueError(f"lock_delay_damping must be >= 1.0, got {self.lock_delay_damping}")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["rotation_system"] = self.rotation_system.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        """Create from a config section, ignoring unknown keys."""
        known = {name: data[name] for name in cls.__dataclass_fields__ if name in data}
        return cls(**known)


class PieceSupply:
    """
    Endless supply of basic kinds.

    Kinds are handed out from a shuffled batch of all seven; the batch is
    reshuffled when exhausted.
    """

    def __init__(self, rng: np.random.Generator, kinds: Tuple[CellKind, ...] = BASIC_KINDS):
        self.rng = rng
        self.kinds = tuple(kinds)
        self._batch: List[CellKind] = []
        self._index = 0

    def _refill(self) -> None:
        order = self.rng.permutation(len(self.kinds))
        self._batch = [self.kinds[i] for i in order]
        self._index = 0

    def next(self) -> CellKind:
        if self._index >= len(self._batch):
            self._refill()
        kind = self._batch[self._index]
        self._index += 1
        return kind


@dataclass
class StepResult:
    """Result of one simulation tick."""
    tick: int
    command: Optional[Command] = None
    command_succeeded: bool = False
    locked: bool = False
    lines_cleared: int = 0
    game_over: bool = False


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view of the game for rendering."""
    board: np.ndarray
    mino: Mino
    anchor: Vector
    ghost_anchor: Vector
    lines_cleared: int
    tick: int
    status: GameStatus
    lock_delay: float = 0.0
    cells: Tuple[Vector, ...] = field(default=())
    ghost_cells: Tuple[Vector, ...] = field(default=())

    @property
    def is_game_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER

    @property
    def ghost_color(self) -> Tuple[float, ...]:
        return ghost_color(self.mino.color)


class TetrisEngine:
    """
    Tick-driven Tetris simulation.

    The host appends key events with push_input and calls step once per
    tick. All state changes happen inside step (or the command methods it
    calls); rendering reads snapshot().
    """

    def __init__(self, config: Optional[SimulationConfig] = None, seed: Optional[int] = None):
        """
        Initialize a new game.

        Args:
            config: Timing and rotation settings (defaults if omitted)
            seed: Random seed, overrides config.seed
        """
        self.config = config if config is not None else SimulationConfig()
        self.board = Board()
        self.rng = np.random.default_rng(seed if seed is not None else self.config.seed)
        self.supply = PieceSupply(self.rng)

        self.tick = 0
        self.pending_inputs: List[KeyInput] = []
        self.status = GameStatus.FALLING
        self.lines_cleared = 0
        self.lock_delay = 0.0
        self.lock_delay_threshold = self.config.lock_delay_threshold

        self.active_mino: Optional[Mino] = None
        self.anchor = SPAWN_ANCHOR

        # Statistics
        self.pieces_locked = 0
        self.max_lines_at_once = 0

        self._spawn()

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Reset the game to its initial state.

        Args:
            seed: New random seed (optional)

        Returns:
            Initial snapshot
        """
        if seed is not None:
            self.rng = np.random.default_rng(seed)
            self.supply = PieceSupply(self.rng)

        self.board.reset()
        self.tick = 0
        self.pending_inputs = []
        self.status = GameStatus.FALLING
        self.lines_cleared = 0
        self.lock_delay = 0.0
        self.active_mino = None
        self.anchor = SPAWN_ANCHOR
        self.pieces_locked = 0
        self.max_lines_at_once = 0

        self._spawn()

        return self.snapshot()

    # ------------------------------------------------------------------
    # Host interface
    # ------------------------------------------------------------------

    def push_input(self, key: KeyInput) -> None:
        """Buffer a key event; it takes effect on the next tick."""
        self.pending_inputs.append(key)

    def step(self) -> StepResult:
        """Advance the simulation by exactly one tick."""
        result = StepResult(tick=self.tick)

        if self.status == GameStatus.FALLING:
            command = self._take_input()
            if command is not None:
                result.command = command
                result.command_succeeded = self.apply_command(command)

            if self.tick % self.config.drop_interval == 0:
                self.try_move(DOWN)

            if self.can_move_down():
                self.lock_delay = 0.0
            else:
                self.lock_delay += 1

            if self.lock_delay >= self.lock_delay_threshold:
                result.locked = True
                result.lines_cleared = self._lock_and_clear()
        else:
            self.pending_inputs.clear()

        if self.status == GameStatus.GAME_OVER:
            self._apply_game_over_transform()

        result.game_over = self.is_game_over()
        self.tick += 1
        return result

    def _take_input(self) -> Optional[Command]:
        """Take the oldest buffered key and drop the rest."""
        if not self.pending_inputs:
            return None
        key = self.pending_inputs[0]
        self.pending_inputs.clear()
        return resolve_command(key)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def apply_command(self, command: Command) -> bool:
        """
        Apply one player command to the active mino.

        Returns:
            True if the mino moved or rotated
        """
        if self.status == GameStatus.GAME_OVER:
            return False
        if command == Command.MOVE_LEFT:
            return self.try_move(LEFT)
        elif command == Command.MOVE_RIGHT:
            return self.try_move(RIGHT)
        elif command == Command.SOFT_DROP:
            return self.try_move(DOWN)
        elif command == Command.ROTATE_RIGHT:
            return self.try_rotate(Direction.RIGHT)
        elif command == Command.ROTATE_LEFT:
            return self.try_rotate(Direction.LEFT)
        elif command == Command.HARD_DROP:
            self.hard_drop()
            return True
        return False

    def try_move(self, delta: Vector) -> bool:
        """
        Translate the active mino by `delta` if the destination is free.

        A downward step clears the lock delay; a sideways step only damps it.

        Returns:
            True if the mino moved
        """
        destination = self.anchor + delta
        if not self.board.can_place(self.active_mino, destination):
            return False
        self.anchor = destination
        if delta == DOWN:
            self.lock_delay = 0.0
        else:
            self._damp_lock_delay()
        return True

    def _damp_lock_delay(self) -> None:
        self.lock_delay /= self.config.lock_delay_damping

    def try_rotate(self, direction: Direction) -> bool:
        """
        Rotate the active mino, trying each kick candidate in order.

        Returns:
            True if a candidate anchor accepted the rotated mino
        """
        rotated = rotate_right(self.active_mino) if direction == Direction.RIGHT else rotate_left(self.active_mino)
        for shift in kick_candidates(self.active_mino, direction, self.config.rotation_system):
            anchor = self.anchor + shift
            if self.board.can_place(rotated, anchor):
                self.active_mino = rotated
                self.anchor = anchor
                self._damp_lock_delay()
                return True
        return False

    def hard_drop(self) -> int:
        """
        Drop the active mino to its landing row and force the lock.

        Returns:
            Number of rows dropped
        """
        landing = self.ghost_position()
        distance = landing.y - self.anchor.y
        self.anchor = landing
        self.lock_delay = float(self.lock_delay_threshold)
        return distance

    # ------------------------------------------------------------------
    # Locking and spawning
    # ------------------------------------------------------------------

    def can_move_down(self) -> bool:
        return self.board.can_place(self.active_mino, self.anchor + DOWN)

    def ghost_position(self) -> Vector:
        """Lowest legal anchor straight below the active mino."""
        return self.board.drop_position(self.active_mino, self.anchor)

    def _lock_and_clear(self) -> int:
        self.board.commit(self.active_mino, self.anchor)
        self.pieces_locked += 1

        cleared = self.board.clear_lines()
        self.lines_cleared += cleared
        self.max_lines_at_once = max(self.max_lines_at_once, cleared)

        self._spawn()
        return cleared

    def _spawn(self) -> bool:
        """
        Install the next mino at the spawn anchor.

        If it does not fit the game is over and the previous mino stays.
        """
        mino = new_mino(self.supply.next())
        if not self.board.can_place(mino, SPAWN_ANCHOR):
            self.status = GameStatus.GAME_OVER
            if self.active_mino is None:
                self.active_mino = mino
            return False
        self.active_mino = mino
        self.anchor = SPAWN_ANCHOR
        self.lock_delay = 0.0
        return True

    def _apply_game_over_transform(self) -> None:
        self.board.convert_to_game_over()
        if self.active_mino.color != GAME_OVER_COLOR:
            self.active_mino = self.active_mino.with_color(GAME_OVER_COLOR)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self.status == GameStatus.GAME_OVER

    def snapshot(self) -> GameSnapshot:
        """Immutable view of the current state for rendering."""
        ghost_anchor = self.ghost_position()
        return GameSnapshot(
            board=self.board.get_state(),
            mino=self.active_mino,
            anchor=self.anchor,
            ghost_anchor=ghost_anchor,
            lines_cleared=self.lines_cleared,
            tick=self.tick,
            status=self.status,
            lock_delay=self.lock_delay,
            cells=tuple(self.active_mino.cells(self.anchor)),
            ghost_cells=tuple(self.active_mino.cells(ghost_anchor)),
        )

    def get_observation(self) -> Dict[str, np.ndarray]:
        """
        Get observation arrays.

        Returns:
            Dictionary with:
            - 'board': (22, 12) int8 array of cell kinds
            - 'piece': (22, 12) float32 mask of the active mino cells
        """
        piece = np.zeros((self.board.height, self.board.width), dtype=np.float32)
        for cell in self.active_mino.cells(self.anchor):
            if self.board.in_bounds(cell.x, cell.y):
                piece[cell.y, cell.x] = 1.0
        return {
            'board': self.board.grid.copy(),
            'piece': piece,
        }

    def get_statistics(self) -> Dict[str, Any]:
        """Get game statistics."""
        return {
            'ticks': self.tick,
            'lines_cleared': self.lines_cleared,
            'pieces_locked': self.pieces_locked,
            'max_lines_at_once': self.max_lines_at_once,
            'filled_cells': self.board.count_filled(),
            'game_over': self.is_game_over(),
        }

    def __str__(self) -> str:
        """String representation of the game state."""
        lines = [str(self.board)]
        lines.append(f"\nTick: {self.tick} | Lines: {self.lines_cleared} | "
                     f"Lock delay: {self.lock_delay:.1f}/{self.lock_delay_threshold} | "
                     f"Status: {self.status.value}")
        lines.append(f"Active: {self.active_mino} at ({self.anchor.x}, {self.anchor.y})")
        return "\n".join(lines)


def play_random_game(
    seed: Optional[int] = None,
    max_ticks: int = 20000,
    input_rate: float = 0.3,
    config: Optional[SimulationConfig] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Play a game with random key presses.

    Args:
        seed: Random seed for both the piece supply and the inputs
        max_ticks: Stop after this many ticks even if the game is running
        input_rate: Probability of pressing a key on each tick
        config: Simulation settings
        verbose: Whether to print line clears and the final board

    Returns:
        Dictionary with game statistics
    """
    engine = TetrisEngine(config=config, seed=seed)
    input_rng = np.random.default_rng(seed)
    commands = list(Command)

    while not engine.is_game_over() and engine.tick < max_ticks:
        if input_rng.random() < input_rate:
            engine.push_input(commands[input_rng.integers(len(commands))])
        result = engine.step()
        if verbose and result.lines_cleared > 0:
            print(f"Tick {result.tick}: cleared {result.lines_cleared} lines")

    stats = engine.get_statistics()

    if verbose:
        print("\n" + "=" * 40)
        print(engine)
        print(f"\nFinal Statistics: {stats}")

    return stats


if __name__ == "__main__":
    stats = play_random_game(seed=42, verbose=True)

