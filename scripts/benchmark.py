"""
Performance benchmark script for Tetris.

Tests the speed of the game engine and environment.
"""
import argparse
import sys
import time
from pathlib import Path
from typing import Dict, Any
import numpy as np
from tqdm import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from utils.config import load_config, simulation_config


def benchmark_engine(num_games: int = 100, seed: int = 42, max_ticks: int = 20000) -> Dict[str, float]:
    """
    Benchmark the simulation tick rate with random inputs.

    Args:
        num_games: Number of games to play
        seed: Random seed
        max_ticks: Tick limit per game

    Returns:
        Dictionary of benchmark results
    """
    from tetris.engine import TetrisEngine, Command

    commands = list(Command)
    total_ticks = 0
    total_time = 0.0

    for i in tqdm(range(num_games), desc="Engine"):
        engine = TetrisEngine(seed=seed + i)
        rng = np.random.default_rng(seed + i)

        start = time.perf_counter()
        while not engine.is_game_over() and engine.tick < max_ticks:
            if rng.random() < 0.3:
                engine.push_input(commands[rng.integers(len(commands))])
            engine.step()
        total_time += time.perf_counter() - start
        total_ticks += engine.tick

    return {
        'num_games': num_games,
        'total_ticks': total_ticks,
        'total_time': total_time,
        'ticks_per_second': total_ticks / total_time,
        'games_per_second': num_games / total_time,
        'avg_ticks_per_game': total_ticks / num_games,
    }


def benchmark_environment(num_steps: int = 50000, seed: int = 42, config: Dict[str, Any] = None) -> Dict[str, float]:
    """
    Benchmark the RL environment speed.

    Args:
        num_steps: Number of steps to run
        seed: Random seed
        config: Loaded configuration (simulation and rewards sections)

    Returns:
        Dictionary of benchmark results
    """
    from environment.tetris_env import TetrisEnv

    config = config if config is not None else load_config()
    env = TetrisEnv(
        reward_config=config["rewards"],
        simulation_config=simulation_config(config),
        seed=seed,
    )
    env.reset(seed=seed)
    env.action_space.seed(seed)
    episodes = 0

    start = time.perf_counter()
    for _ in tqdm(range(num_steps), desc="Environment"):
        _, _, terminated, truncated, _ = env.step(env.action_space.sample())
        if terminated or truncated:
            episodes += 1
            env.reset()
    elapsed = time.perf_counter() - start

    return {
        'num_steps': num_steps,
        'episodes': episodes,
        'total_time': elapsed,
        'steps_per_second': num_steps / elapsed,
    }


def print_results(title: str, results: Dict[str, Any]) -> None:
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)
    for key, value in results.items():
        if isinstance(value, float):
            print(f"  {key}: {value:,.2f}")
        else:
            print(f"  {key}: {value:,}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Benchmark Tetris")
    parser.add_argument("--config", type=str, default="config/default.yaml", help="Path to configuration file")
    parser.add_argument("--games", type=int, default=100, help="Games for the engine benchmark")
    parser.add_argument("--steps", type=int, default=50000, help="Steps for the environment benchmark")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--skip-env", action="store_true", help="Only benchmark the engine")

    args = parser.parse_args()

    print_results("ENGINE", benchmark_engine(num_games=args.games, seed=args.seed))
    if not args.skip_env:
        print_results("ENVIRONMENT", benchmark_environment(num_steps=args.steps, seed=args.seed, config=load_config(args.config)))


if __name__ == "__main__":
    main()
