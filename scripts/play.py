"""
Interactive play script for Tetris.

Allows playing in the terminal or watching a random agent.
"""
import argparse
import sys
import time
from pathlib import Path
from typing import Any, Dict
import numpy as np
from tqdm import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tetris.engine import TetrisEngine, SimulationConfig, KEY_BINDINGS, play_random_game
from tetris.renderer import Renderer, clear_screen
from utils.config import load_config, simulation_config
from utils.logger import Logger, MetricsTracker


def play_manual(config: SimulationConfig, seed: int = 42) -> None:
    """
    Play Tetris in the terminal, one line of keys at a time.

    Each typed key is pushed and followed by one tick. An empty line
    lets the mino fall for one gravity interval.

    Args:
        config: Simulation settings
        seed: Random seed
    """
    engine = TetrisEngine(config=config, seed=seed)
    renderer = Renderer()

    print("\n" + "=" * 60)
    print("TETRIS - Manual Play")
    print("=" * 60)
    print("\nControls:")
    print("  h / l  move left / right    j  soft drop")
    print("  k / K  rotate right / left  .  hard drop")
    print("  Enter alone to wait, 'q' to quit, 'r' to restart")
    print("=" * 60 + "\n")

    while True:
        clear_screen()
        print(renderer.render_game_state(engine.snapshot()))

        if engine.is_game_over():
            print("\n*** GAME OVER! ***")
            print(f"Lines: {engine.lines_cleared}")
            print(f"Pieces: {engine.pieces_locked}")

            action = input("\nPlay again? (y/n): ").strip().lower()
            if action == 'y':
                engine.reset()
                continue
            else:
                break

        user_input = input("\nKeys: ")
        if user_input.strip() == 'q':
            print("Thanks for playing!")
            break
        elif user_input.strip() == 'r':
            engine.reset()
            continue

        if not user_input:
            for _ in range(config.drop_interval):
                engine.step()
            continue

        for key in user_input:
            # '.' is a visible alias for the space bar
            if key == '.':
                key = ' '
            if key not in KEY_BINDINGS:
                continue
            engine.push_input(key)
            result = engine.step()
            if result.lines_cleared > 0:
                print(f"\n*** Cleared {result.lines_cleared} lines! ***")
                time.sleep(0.5)


def play_random(
    config: SimulationConfig,
    num_games: int = 10,
    seed: int = 42,
    max_ticks: int = 20000,
    input_rate: float = 0.3,
    logger: Logger = None,
) -> Dict[str, Any]:
    """
    Play random games and show statistics.

    Args:
        config: Simulation settings
        num_games: Number of games to play
        seed: Random seed
        max_ticks: Tick limit per game
        input_rate: Probability of a key press per tick
        logger: Optional logger receiving one record per game

    Returns:
        Dictionary of aggregate statistics
    """
    lines = []
    ticks = []
    pieces = []
    tracker = MetricsTracker(window_size=20)

    progress = tqdm(range(num_games), desc="Playing")
    for i in progress:
        stats = play_random_game(
            seed=seed + i,
            max_ticks=max_ticks,
            input_rate=input_rate,
            config=config,
        )
        lines.append(stats['lines_cleared'])
        ticks.append(stats['ticks'])
        pieces.append(stats['pieces_locked'])
        tracker.add('lines', stats['lines_cleared'])
        progress.set_postfix(lines=f"{tracker.get_mean('lines'):.1f}")
        if logger is not None:
            logger.log_game(stats, seed=seed + i)

    results = {
        'num_games': num_games,
        'mean_lines': float(np.mean(lines)),
        'max_lines': int(np.max(lines)),
        'mean_ticks': float(np.mean(ticks)),
        'mean_pieces': float(np.mean(pieces)),
    }

    print("\n" + "=" * 60)
    print("RANDOM AGENT STATISTICS")
    print("=" * 60)
    print(f"Games: {num_games}")
    print(f"Mean Lines: {results['mean_lines']:.2f} ± {np.std(lines):.2f}")
    print(f"Max Lines: {results['max_lines']}")
    print(f"Mean Ticks: {results['mean_ticks']:.1f}")
    print(f"Mean Pieces: {results['mean_pieces']:.1f}")
    print("=" * 60)

    return results


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Play Tetris")
    parser.add_argument(
        "--mode",
        type=str,
        choices=["manual", "random"],
        default="manual",
        help="Play mode: play manually or watch a random agent"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/default.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=None,
        help="Number of games to play (random mode)"
    )
    parser.add_argument(
        "--rotation",
        type=str,
        choices=["simple", "super"],
        default=None,
        help="Override the rotation system"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed"
    )

    args = parser.parse_args()

    config = load_config(args.config)
    if args.rotation is not None:
        config['simulation']['rotation_system'] = args.rotation
    sim_config = simulation_config(config)

    if args.mode == "manual":
        play_manual(sim_config, seed=args.seed)

    elif args.mode == "random":
        play_cfg = config['play']
        log_cfg = config['logging']
        logger = Logger(log_cfg['log_dir'], log_cfg['name'])
        play_random(
            sim_config,
            num_games=args.games if args.games is not None else play_cfg['games'],
            seed=args.seed,
            max_ticks=play_cfg['max_ticks'],
            input_rate=play_cfg['input_rate'],
            logger=logger,
        )
        summary_file = logger.save_summary()
        print(f"\nLogs saved to {logger.log_file} (summary: {summary_file})")


if __name__ == "__main__":
    main()
