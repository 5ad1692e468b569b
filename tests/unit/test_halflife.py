"""
Unit tests for halflife and tie utilities.
"""
import os
import sys
import math
import unittest
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from tar_threshold.core.exceptions import DegenerateRegressionError, UndefinedHalflifeError
from tar_threshold.models.threshold.threshold_utils import (
    calculate_halflife, find_minimisers, resolve_ties, f_statistic, f_pvalue
)


class TestCalculateHalflife(unittest.TestCase):
    """Test cases for calculate_halflife."""

    def test_half_adjustment(self):
        self.assertAlmostEqual(calculate_halflife(-0.5), 1.0)

    def test_slow_adjustment(self):
        self.assertAlmostEqual(calculate_halflife(-0.25), math.log(0.5) / math.log(0.75))
        self.assertGreater(calculate_halflife(-0.1), calculate_halflife(-0.5))

    def test_zero_raises(self):
        with self.assertRaises(UndefinedHalflifeError) as ctx:
            calculate_halflife(0.0)
        self.assertEqual(ctx.exception.rho, 0.0)

    def test_overshooting_raises(self):
        for rho in (-1.0, -1.5, -3.0):
            with self.assertRaises(UndefinedHalflifeError):
                calculate_halflife(rho)

    def test_non_finite_raises(self):
        for rho in (np.nan, np.inf, -np.inf, None):
            with self.assertRaises(UndefinedHalflifeError):
                calculate_halflife(rho)

    def test_positive_rho_negative_halflife(self):
        """Explosive adjustment gives a finite negative value and a warning."""
        with self.assertLogs('tar_threshold.models.threshold.threshold_utils', level='WARNING'):
            halflife = calculate_halflife(0.2)
        self.assertTrue(np.isfinite(halflife))
        self.assertLess(halflife, 0)


class TestTies(unittest.TestCase):
    """Test cases for minimiser selection."""

    def test_exact_ties(self):
        rss = np.array([3.0, 1.0, np.nan, 1.0, 1.0 + 1e-12])
        np.testing.assert_array_equal(find_minimisers(rss), [1, 3])

    def test_surface_flat_indices(self):
        surface = np.array([[2.0, 1.0], [1.0, np.nan]])
        np.testing.assert_array_equal(find_minimisers(surface), [1, 2])

    def test_all_nan(self):
        with self.assertRaises(DegenerateRegressionError):
            find_minimisers(np.array([np.nan, np.nan]))

    def test_resolve(self):
        self.assertEqual(resolve_ties([1.0, 2.0, 6.0]), 3.0)
        self.assertEqual(resolve_ties([1.0, 2.0, 6.0], 'first'), 1.0)
        with self.assertRaises(ValueError):
            resolve_ties([1.0], 'last')


class TestFStatistic(unittest.TestCase):
    """Test cases for the threshold F statistic."""

    def test_value(self):
        self.assertAlmostEqual(f_statistic(66.0, 65.0, 4), 3.0 / 65.0)

    def test_edge_cases(self):
        self.assertTrue(math.isnan(f_statistic(1.0, 0.5, 1)))
        self.assertEqual(f_statistic(1.0, 0.0, 10), float('inf'))

    def test_pvalue(self):
        self.assertGreater(f_pvalue(0.1, 100), 0.5)
        self.assertLess(f_pvalue(50.0, 100), 0.001)
        self.assertEqual(f_pvalue(float('inf'), 100), 0.0)
        self.assertTrue(math.isnan(f_pvalue(1.0, 1)))


if __name__ == '__main__':
    unittest.main()
