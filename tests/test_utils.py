"""
Tests for configuration and logging utilities.
"""
import json
import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tetris.minos import RotationSystem
from utils.config import DEFAULT_CONFIG, load_config, merge_config, simulation_config
from tetris.engine import play_random_game
from utils.logger import GAME_FIELDS, Logger, MetricsTracker, convert_to_serializable


PROJECT_ROOT = Path(__file__).parent.parent


class TestConfig:
    """Test YAML configuration loading."""

    def test_default_file_matches_defaults(self):
        config = load_config(PROJECT_ROOT / "config" / "default.yaml")
        assert config == DEFAULT_CONFIG

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")
        assert config == DEFAULT_CONFIG

    def test_partial_override(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("simulation:\n  rotation_system: super\n  drop_interval: 4\n")
        config = load_config(path)
        assert config['simulation']['rotation_system'] == 'super'
        assert config['simulation']['lock_delay_threshold'] == 12
        assert config['play'] == DEFAULT_CONFIG['play']

        sim = simulation_config(config)
        assert sim.rotation_system == RotationSystem.SUPER
        assert sim.drop_interval == 4

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_invalid_rotation_system(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("simulation:\n  rotation_system: sideways\n")
        with pytest.raises(ValueError):
            simulation_config(load_config(path))

    def test_merge_does_not_mutate(self):
        base = {'a': {'b': 1, 'c': 2}}
        merged = merge_config(base, {'a': {'b': 5}})
        assert merged == {'a': {'b': 5, 'c': 2}}
        assert base == {'a': {'b': 1, 'c': 2}}


class TestLogger:
    """Test the per-game JSON-lines logger."""

    def test_log_game_writes_records(self, tmp_path):
        logger = Logger(str(tmp_path), "test")
        logger.log_game({'lines_cleared': np.int64(3), 'ticks': 100, 'game_over': True}, seed=7)
        logger.log_game({'lines_cleared': 5, 'ticks': 300, 'game_over': False}, seed=8)

        records = [json.loads(line) for line in logger.log_file.read_text().splitlines()]
        assert [r['game'] for r in records] == [1, 2]
        assert records[0]['seed'] == 7
        assert records[0]['lines_cleared'] == 3
        assert records[1]['game_over'] is False
        assert logger.games_over == 1
        assert logger.history['lines_cleared'] == [3.0, 5.0]
        assert 'game_over' not in logger.history

    def test_logs_engine_statistics(self, tmp_path):
        """Every aggregated field comes straight from a finished game."""
        stats = play_random_game(seed=0, max_ticks=2000)
        logger = Logger(str(tmp_path), "random")
        record = logger.log_game(stats, seed=0)
        for key in GAME_FIELDS:
            assert record[key] == stats[key]
            assert logger.history[key] == [float(stats[key])]

    def test_save_summary(self, tmp_path):
        logger = Logger(str(tmp_path), "test")
        for lines in (1, 2, 3):
            logger.log_game({'lines_cleared': lines, 'game_over': True})
        summary = json.loads(logger.save_summary().read_text())
        assert summary['games'] == 3
        assert summary['games_over'] == 3
        assert summary['stats']['lines_cleared']['mean'] == pytest.approx(2.0)
        assert summary['stats']['lines_cleared']['max'] == 3.0

    def test_convert_to_serializable(self):
        data = {'a': np.float32(1.5), 'b': np.array([1, 2]), 'c': (np.int8(1),)}
        assert convert_to_serializable(data) == {'a': 1.5, 'b': [1, 2], 'c': [1]}
        assert convert_to_serializable(RotationSystem.SUPER) == 'super'


class TestMetricsTracker:
    """Test rolling means."""

    def test_window(self):
        tracker = MetricsTracker(window_size=3)
        for value in (1, 2, 3, 4):
            tracker.add('lines', value)
        assert tracker.get_mean('lines') == pytest.approx(3.0)

    def test_missing_metric(self):
        assert MetricsTracker().get_mean('nothing') == 0.0
