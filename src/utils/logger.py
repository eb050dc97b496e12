"""
Per-game session logging.

Each finished game becomes one JSON line; a summary file aggregates the
numeric game statistics when the session ends.
"""
from typing import Dict, Any, List, Optional
from pathlib import Path
import json
import time
from datetime import datetime
from collections import defaultdict, deque
import numpy as np


# Numeric fields of TetrisEngine.get_statistics() that are aggregated
GAME_FIELDS = ('lines_cleared', 'ticks', 'pieces_locked', 'max_lines_at_once', 'filled_cells')


def convert_to_serializable(obj):
    """Convert numpy and enum values to plain Python types for JSON."""
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {k: convert_to_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_to_serializable(i) for i in obj]
    elif hasattr(obj, "value") and hasattr(obj, "name"):
        return obj.value
    return obj


class Logger:
    """
    Writes one record per finished game to `<name>_<timestamp>.jsonl`.

    Args:
        log_dir: Directory for the log and summary files
        name: Session name used as the file prefix
    """

    def __init__(self, log_dir: str, name: str = "session"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.name = name
        self.started = time.time()
        self.log_file = self.log_dir / f"{name}_{datetime.now():%Y%m%d_%H%M%S}.jsonl"

        self.games = 0
        self.games_over = 0
        self.history: Dict[str, List[float]] = defaultdict(list)

    def log_game(self, stats: Dict[str, Any], seed: Optional[int] = None) -> Dict[str, Any]:
        """
        Append the statistics of one game and return the written record.
        """
        self.games += 1
        if stats.get('game_over'):
            self.games_over += 1
        for key in GAME_FIELDS:
            if key in stats:
                self.history[key].append(float(stats[key]))

        record = {'game': self.games, 'seed': seed, 'elapsed': time.time() - self.started, **stats}
        record = convert_to_serializable(record)
        with open(self.log_file, 'a') as f:
            f.write(json.dumps(record) + '\n')
        return record

    def save_summary(self) -> Path:
        """Write mean/std/min/max of every game field and return the file path."""
        summary = {
            'name': self.name,
            'games': self.games,
            'games_over': self.games_over,
            'total_time': time.time() - self.started,
            'stats': {
                key: {
                    'mean': float(np.mean(values)),
                    'std': float(np.std(values)),
                    'min': float(np.min(values)),
                    'max': float(np.max(values)),
                }
                for key, values in self.history.items()
            },
        }
        summary_file = self.log_dir / f"{self.name}_summary.json"
        with open(summary_file, 'w') as f:
            json.dump(summary, f, indent=2)
        return summary_file


class MetricsTracker:
    """Rolling means over the most recent games, for progress bars."""

    def __init__(self, window_size: int = 100):
        self.window_size = window_size
        self.metrics: Dict[str, deque] = defaultdict(lambda: deque(maxlen=self.window_size))

    def add(self, name: str, value: float) -> None:
        self.metrics[name].append(value)

    def get_mean(self, name: str) -> float:
        values = self.metrics.get(name)
        return float(np.mean(values)) if values else 0.0
