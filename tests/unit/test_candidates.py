"""
Unit tests for candidate threshold generation.
"""
import os
import sys
import unittest
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from tar_threshold.core.exceptions import NoAdmissibleThresholdError
from tar_threshold.models.threshold.candidates import (
    generate_candidates, regime_fractions, thin_candidates
)


class TestGenerateCandidates(unittest.TestCase):
    """Test cases for the admissible candidate set."""

    def setUp(self):
        """Set up test fixtures."""
        self.rng = np.random.default_rng(42)
        self.m = self.rng.normal(0, 5, 300)

    def test_small_example(self):
        """Only 1 and 2 leave a fifth of the series on each side."""
        candidates = generate_candidates([0, 1, -2, 15, -16, 2])
        np.testing.assert_array_equal(candidates, [1.0, 2.0])

    def test_strictly_increasing(self):
        """Candidates are distinct and sorted."""
        candidates = generate_candidates(self.m)
        self.assertTrue(np.all(np.diff(candidates) > 0))

    def test_every_candidate_balanced(self):
        """Each candidate passes both regime fractions on the same series."""
        for theta in generate_candidates(self.m):
            inside, outside = regime_fractions(self.m, theta)
            self.assertGreaterEqual(inside, 0.2)
            self.assertGreaterEqual(outside, 0.2)

    def test_excluded_values_unbalanced(self):
        """Every distinct value left out fails one of the fractions."""
        candidates = set(generate_candidates(self.m))
        for theta in np.unique(np.abs(self.m)):
            if theta in candidates:
                continue
            inside, outside = regime_fractions(self.m, theta)
            self.assertTrue(inside < 0.2 or outside < 0.2)

    def test_regime_fractions(self):
        """Fractions are counted over every difference."""
        inside, outside = regime_fractions([0, 1, -2, 15, -16, 2], 1.0)
        self.assertAlmostEqual(inside, 2 / 6)
        self.assertAlmostEqual(outside, 4 / 6)

    def test_no_admissible_threshold(self):
        """A constant magnitude leaves nothing outside."""
        with self.assertRaises(NoAdmissibleThresholdError):
            generate_candidates([1.0, -1.0, 1.0, 1.0, -1.0])

    def test_custom_fraction(self):
        """A stricter balance requirement keeps fewer candidates."""
        loose = generate_candidates(self.m, min_regime_fraction=0.1)
        strict = generate_candidates(self.m, min_regime_fraction=0.4)
        self.assertLess(len(strict), len(loose))
        self.assertTrue(set(strict).issubset(set(loose)))

    def test_read_only(self):
        """The candidate set cannot be modified."""
        candidates = generate_candidates(self.m)
        with self.assertRaises(ValueError):
            candidates[0] = 0.0


class TestThinCandidates(unittest.TestCase):
    """Test cases for grid thinning."""

    def test_keeps_ends(self):
        """Thinning keeps the smallest and largest candidates."""
        full = np.arange(100, dtype=float)
        thinned = thin_candidates(full, 10)

        self.assertEqual(len(thinned), 10)
        self.assertEqual(thinned[0], 0.0)
        self.assertEqual(thinned[-1], 99.0)
        self.assertTrue(np.all(np.diff(thinned) > 0))

    def test_no_thinning_needed(self):
        """A cap above the candidate count is a no-op."""
        full = np.arange(5, dtype=float)
        np.testing.assert_array_equal(thin_candidates(full, 50), full)
        np.testing.assert_array_equal(thin_candidates(full, None), full)

    def test_thinned_subset_of_admissible(self):
        """Thinning happens after admissibility."""
        m = np.random.default_rng(1).normal(0, 1, 500)
        full = generate_candidates(m)
        thinned = generate_candidates(m, grid_points=25)

        self.assertEqual(len(thinned), 25)
        self.assertTrue(set(thinned).issubset(set(full)))
        self.assertEqual(thinned[0], full[0])
        self.assertEqual(thinned[-1], full[-1])


if __name__ == '__main__':
    unittest.main()
