"""
Unit tests for estimation results and their export.
"""
import os
import sys
import json
import dataclasses
import tempfile
import unittest
import numpy as np
import pandas as pd

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from tar_threshold.data.preprocessors import from_differences
from tar_threshold.models.schemas import EstimatorConfig
from tar_threshold.models.threshold.constant import ConstantThresholdSearch
from tar_threshold.models.threshold.time_varying import TimeVaryingThresholdSearch
from tar_threshold.reporting.output_manager import NumpyEncoder, OutputManager


class TestEstimationResult(unittest.TestCase):
    """Test cases for EstimationResult."""

    @classmethod
    def setUpClass(cls):
        """Set up test fixtures."""
        cls.series = series = from_differences(np.random.default_rng(21).normal(0, 1, 80))
        config = EstimatorConfig(parallel=False)
        cls.constant = ConstantThresholdSearch(config).search(series)
        cls.time_varying = TimeVaryingThresholdSearch(config).search(series)

    def test_constant_dict(self):
        out = self.constant.to_dict()

        for key in ('threshold', 'rho_hat', 'rss_curve', 'halflife'):
            self.assertIn(key, out)
        self.assertEqual(out['variant'], 'constant')
        self.assertEqual(len(out['rss_curve']), self.constant.n_candidates)
        self.assertEqual(out['rss_curve'][0][0], float(self.constant.candidates[0]))
        self.assertNotIn('rss_surface', out)

    def test_time_varying_dict(self):
        out = self.time_varying.to_dict()

        for key in ('theta_first', 'theta_last', 'rho_hat', 'rss_surface', 'halflife'):
            self.assertIn(key, out)
        self.assertEqual(len(out['rss_surface']), self.time_varying.n_candidates ** 2)
        self.assertEqual(len(out['rss_surface'][0]), 3)
        self.assertNotIn('threshold', out)

    def test_diagnostics(self):
        result = self.constant
        self.assertAlmostEqual(result.rss_null, float(np.sum(self.series.dm ** 2)))
        self.assertGreaterEqual(result.rss_null, result.rss)
        self.assertGreaterEqual(result.f_statistic, 0)
        self.assertTrue(0 <= result.f_pvalue <= 1)
        self.assertAlmostEqual(result.regime_balance['inside'] + result.regime_balance['outside'], 1.0)
        self.assertEqual(result.n_evaluated, result.n_candidates)

    def test_immutable(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.constant.threshold = 0.0
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.constant.fit.rho_hat = 0.0
        with self.assertRaises(ValueError):
            self.constant.rss_curve[0] = 0.0
        with self.assertRaises(ValueError):
            self.time_varying.rss_surface[0, 0] = 0.0
        with self.assertRaises(TypeError):
            self.constant.regime_balance['inside'] = 0.0

    def test_json_serialisable(self):
        text = json.dumps(self.time_varying.to_dict(), cls=NumpyEncoder)
        self.assertIn('theta_first', json.loads(text))


class TestStrictJson(unittest.TestCase):
    """Non-finite values are exported as null."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.TemporaryDirectory()
        # Threshold 2 leaves the outer regime empty, so its RSS is NaN
        series = from_differences([1.0, 1.0, 2.0, 1.0, 9.0])
        self.result = ConstantThresholdSearch(EstimatorConfig(parallel=False)).search(series)

    def tearDown(self):
        """Clean up test fixtures."""
        self.temp_dir.cleanup()

    def test_degenerate_rss_is_null(self):
        out = self.result.to_dict()

        self.assertAlmostEqual(out['rss_curve'][0][1], 65.0)
        self.assertEqual(out['rss_curve'][1], (2.0, None))
        json.dumps(out, cls=NumpyEncoder, allow_nan=False)

    def test_infinite_statistic_is_null(self):
        result = dataclasses.replace(self.result, f_statistic=float('inf'), f_pvalue=0.0)
        out = result.to_dict()

        self.assertIsNone(out['f_statistic'])
        self.assertEqual(out['f_pvalue'], 0.0)

    def test_saved_file_is_strict_json(self):
        manager = OutputManager(output_dir=self.temp_dir.name, run_name='strict', version='1.0')
        path = manager.save_result(self.result, 'degenerate')

        self.assertIsNotNone(path)
        with open(path) as f:
            data = json.load(f, parse_constant=lambda token: self.fail(f"non-standard token {token}"))
        self.assertIsNone(data['rss_curve'][1][1])


class TestOutputManager(unittest.TestCase):
    """Test cases for OutputManager."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.TemporaryDirectory()
        series = from_differences(np.random.default_rng(8).normal(0, 1, 60))
        self.result = ConstantThresholdSearch(EstimatorConfig(parallel=False)).search(series)
        self.manager = OutputManager(output_dir=self.temp_dir.name, run_name='unit', version='1.0')

    def tearDown(self):
        """Clean up test fixtures."""
        self.temp_dir.cleanup()

    def test_directories(self):
        self.assertTrue(os.path.isdir(os.path.join(self.temp_dir.name, 'v1.0', 'unit', 'visualizations')))

    def test_save_result(self):
        path = self.manager.save_result(self.result, 'Test Series')

        self.assertTrue(path.endswith('_test_series.json'))
        with open(path) as f:
            data = json.load(f)
        self.assertEqual(data['threshold'], self.result.threshold)
        self.assertEqual(len(data['rss_curve']), self.result.n_candidates)

    def test_save_rss_table_and_manifest(self):
        csv_path = self.manager.save_rss_table(self.result, 'series')
        manifest_path = self.manager.save_manifest()

        df = pd.read_csv(csv_path)
        self.assertEqual(list(df.columns), ['threshold', 'rss'])
        self.assertEqual(len(df), self.result.n_candidates)
        with open(manifest_path) as f:
            manifest = json.load(f)
        self.assertEqual(len(manifest['files']), 1)

    def test_result_unchanged(self):
        before = self.result.to_dict()
        self.manager.save_result(self.result)
        np.testing.assert_array_equal(np.asarray(self.result.to_dict()['rss_curve']), np.asarray(before['rss_curve']))

    def test_numpy_encoder(self):
        payload = {'a': np.float32(1.5), 'b': np.int64(2), 'c': np.arange(3), 'd': np.bool_(True)}
        self.assertEqual(json.loads(json.dumps(payload, cls=NumpyEncoder)),
                         {'a': 1.5, 'b': 2, 'c': [0, 1, 2], 'd': True})


if __name__ == '__main__':
    unittest.main()
