"""
Unit tests for configuration and estimator settings.
"""
import os
import sys
import tempfile
import importlib
import unittest
import yaml
from pydantic import ValidationError

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

config_module = importlib.import_module('tar_threshold.core.config')
from tar_threshold.core.config import Config, initialize_config, get_config
from tar_threshold.core.exceptions import ConfigurationError
from tar_threshold.models.schemas import EstimatorConfig


class TestConfig(unittest.TestCase):
    """Test cases for the Config class."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.original = config_module.config

    def tearDown(self):
        """Clean up test fixtures."""
        config_module.config = self.original
        self.temp_dir.cleanup()

    def test_defaults(self):
        cfg = Config()
        self.assertEqual(cfg.get('parameters.threshold_search.min_regime_fraction'), 0.2)
        self.assertEqual(cfg.get('parameters.threshold_search.tie_policy'), 'mean')
        self.assertIsNone(cfg.get('parameters.threshold_search.grid_points'))
        self.assertEqual(cfg.get('missing.key', 'fallback'), 'fallback')

    def test_set_and_save(self):
        path = os.path.join(self.temp_dir.name, 'config.yaml')
        cfg = Config()
        cfg.set('parameters.threshold_search.grid_points', 40)
        cfg.set('new.section.value', 1)
        cfg.save(path)

        reloaded = Config(path)
        self.assertEqual(reloaded.get('parameters.threshold_search.grid_points'), 40)
        self.assertEqual(reloaded.get('new.section.value'), 1)

    def test_partial_file_merges_defaults(self):
        path = os.path.join(self.temp_dir.name, 'partial.yaml')
        with open(path, 'w') as f:
            yaml.safe_dump({'parameters': {'threshold_search': {'tie_policy': 'first'}}}, f)

        cfg = Config(path)
        self.assertEqual(cfg.get('parameters.threshold_search.tie_policy'), 'first')
        self.assertEqual(cfg.get('parameters.threshold_search.chunk_size'), 256)
        self.assertEqual(cfg.get('directories.results_dir'), 'results')

    def test_non_mapping_file(self):
        path = os.path.join(self.temp_dir.name, 'list.yaml')
        with open(path, 'w') as f:
            f.write("- 1\n- 2\n")
        with self.assertRaises(ConfigurationError):
            Config(path)

    def test_save_without_path(self):
        with self.assertRaises(ConfigurationError):
            Config().save()

    def test_initialize_global(self):
        path = os.path.join(self.temp_dir.name, 'global.yaml')
        with open(path, 'w') as f:
            yaml.safe_dump({'model': {'version': '2.5'}}, f)

        initialize_config(path)
        self.assertEqual(get_config().get('model.version'), '2.5')


class TestEstimatorConfig(unittest.TestCase):
    """Test cases for the EstimatorConfig schema."""

    def test_from_config(self):
        cfg = Config()
        cfg.set('parameters.threshold_search.grid_points', 30)
        est = EstimatorConfig.from_config(cfg)

        self.assertEqual(est.grid_points, 30)
        self.assertEqual(est.min_regime_fraction, 0.2)
        self.assertEqual(est.tie_policy, 'mean')

    def test_overrides(self):
        est = EstimatorConfig.from_config(Config(), tie_policy='first', grid_points=None)
        self.assertEqual(est.tie_policy, 'first')
        self.assertIsNone(est.grid_points)

    def test_validation(self):
        with self.assertRaises(ValidationError):
            EstimatorConfig(tie_policy='last')
        with self.assertRaises(ValidationError):
            EstimatorConfig(min_regime_fraction=0.7)
        with self.assertRaises(ValidationError):
            EstimatorConfig(grid_points=1)

    def test_frozen(self):
        est = EstimatorConfig()
        with self.assertRaises(ValidationError):
            est.tie_policy = 'first'


if __name__ == '__main__':
    unittest.main()
