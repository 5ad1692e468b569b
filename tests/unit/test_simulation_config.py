"""
Unit tests for synthetic TAR series generation.
"""
import os
import sys
import unittest
import numpy as np
from pydantic import ValidationError

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from tar_threshold.models.schemas import SimulationConfig
from tar_threshold.models.simulation import generate_tar_series


class TestGenerateTarSeries(unittest.TestCase):
    """Test cases for generate_tar_series."""

    def setUp(self):
        """Set up test fixtures."""
        self.config = SimulationConfig(
            n_obs=600, rho=-0.5, threshold=10.0, noise_scale=10.0, initial_level=100.0, seed=3
        )

    def test_length_and_start(self):
        levels = generate_tar_series(self.config)
        self.assertEqual(len(levels), 600)
        self.assertEqual(levels[0], 100.0)
        self.assertTrue(np.all(np.isfinite(levels)))

    def test_reproducible(self):
        np.testing.assert_array_equal(generate_tar_series(self.config), generate_tar_series(self.config))

        other = self.config.model_copy(update={'seed': 4})
        self.assertFalse(np.array_equal(generate_tar_series(other), generate_tar_series(self.config)))

    def test_outer_regime_mean_reverts(self):
        """Large differences shrink on average; inner ones do not."""
        m = np.diff(generate_tar_series(self.config.model_copy(update={'n_obs': 5000})))
        m_lag, dm = m[:-1], np.diff(m)
        outside = np.abs(m_lag) > 10.0

        slope_out = np.dot(m_lag[outside], dm[outside]) / np.dot(m_lag[outside], m_lag[outside])
        self.assertAlmostEqual(slope_out, -0.5, delta=0.1)
        self.assertGreater(outside.mean(), 0.2)
        self.assertLess(outside.mean(), 0.8)

    def test_time_varying_path(self):
        config = self.config.model_copy(update={'threshold_end': 20.0})
        self.assertTrue(config.is_time_varying)
        self.assertFalse(self.config.is_time_varying)
        self.assertEqual(len(generate_tar_series(config)), 600)


class TestSimulationConfig(unittest.TestCase):
    """Test cases for SimulationConfig validation."""

    def test_rejects_explosive_rho(self):
        with self.assertRaises(ValidationError):
            SimulationConfig(n_obs=100, rho=0.5, threshold=1.0)
        with self.assertRaises(ValidationError):
            SimulationConfig(n_obs=100, rho=-2.5, threshold=1.0)

    def test_rejects_short_series(self):
        with self.assertRaises(ValidationError):
            SimulationConfig(n_obs=2, threshold=1.0)

    def test_rejects_negative_threshold(self):
        with self.assertRaises(ValidationError):
            SimulationConfig(n_obs=100, threshold=-1.0)

    def test_frozen(self):
        config = SimulationConfig(n_obs=100, threshold=1.0)
        with self.assertRaises(ValidationError):
            config.rho = -0.2


if __name__ == '__main__':
    unittest.main()
