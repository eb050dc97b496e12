"""
Tetris Gymnasium Environment.

This module provides a Gymnasium-compatible environment that drives the
tick-based engine one tick per step.
"""
from typing import Dict, Tuple, Any, Optional, List
import numpy as np
import gymnasium as gym
from gymnasium import spaces

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tetris.board import Board
from tetris.engine import TetrisEngine, SimulationConfig, Command, StepResult
from tetris.minos import CellKind
from tetris.renderer import Renderer


class TetrisEnv(gym.Env):
    """
    Gymnasium environment for Tetris.

    Observation Space:
        Dictionary with:
        - 'board': (22, 12) int8 array of cell kinds
        - 'piece': (22, 12) float32 mask of the active mino

    Action Space:
        Discrete(7): 0 = no input, 1-6 = the Command members in order
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 24}

    ACTIONS: List[Optional[Command]] = [None] + list(Command)

    def __init__(
        self,
        render_mode: Optional[str] = None,
        reward_config: Optional[Dict[str, float]] = None,
        simulation_config: Optional[SimulationConfig] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the Tetris environment.

        Args:
            render_mode: 'human' for console output, 'ansi' for string return
            reward_config: Custom reward configuration
            simulation_config: Engine timing and rotation settings
            seed: Random seed for reproducibility
        """
        super().__init__()

        self.render_mode = render_mode
        self.seed_value = seed

        self.reward_config = {
            'line_clear': 1.0,
            'game_over_penalty': -1.0,
            'survival_bonus': 0.001,
        }
        if reward_config:
            self.reward_config.update(reward_config)

        self.engine = TetrisEngine(config=simulation_config, seed=seed)
        self.renderer = Renderer()

        shape = (Board.HEIGHT, Board.WIDTH)
        self.observation_space = spaces.Dict({
            'board': spaces.Box(
                low=0, high=int(CellKind.GAME_OVER),
                shape=shape,
                dtype=np.int8
            ),
            'piece': spaces.Box(
                low=0.0, high=1.0,
                shape=shape,
                dtype=np.float32
            ),
        })

        self.action_space = spaces.Discrete(len(self.ACTIONS))

    def _calculate_reward(self, result: StepResult) -> float:
        reward = self.reward_config['survival_bonus']
        reward += result.lines_cleared * self.reward_config['line_clear']
        if result.game_over:
            reward += self.reward_config['game_over_penalty']
        return reward

    def reset(
        self,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment to initial state.

        Returns:
            Tuple of (observation, info)
        """
        super().reset(seed=seed)

        if seed is not None:
            self.seed_value = seed

        self.engine.reset(seed=self.seed_value)

        return self.engine.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Push the action's command and advance one tick.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if not self.action_space.contains(int(action)):
            raise ValueError(f"Invalid action {action}, expected 0-{len(self.ACTIONS) - 1}")

        command = self.ACTIONS[int(action)]
        if command is not None:
            self.engine.push_input(command)

        result = self.engine.step()
        reward = self._calculate_reward(result)

        observation = self.engine.get_observation()
        info = self._get_info(result)

        if self.render_mode == "human":
            self.render()

        return observation, reward, result.game_over, False, info

    def _get_info(self, result: Optional[StepResult] = None) -> Dict[str, Any]:
        """Get info dictionary."""
        info = dict(self.engine.get_statistics())
        if result:
            info['last_step'] = {
                'command': result.command.value if result.command else None,
                'command_succeeded': result.command_succeeded,
                'locked': result.locked,
                'lines_cleared': result.lines_cleared,
            }
        return info

    def render(self) -> Optional[str]:
        """Render the current game state."""
        if self.render_mode == "ansi":
            return self.renderer.render_game_state(self.engine.snapshot())
        elif self.render_mode == "human":
            print("\033[2J\033[H")
            print(self.renderer.render_game_state(self.engine.snapshot()))
        return None

    def close(self) -> None:
        pass


gym.register(
    id='Tetris-v0',
    entry_point='environment.tetris_env:TetrisEnv',
    max_episode_steps=50000,
)
