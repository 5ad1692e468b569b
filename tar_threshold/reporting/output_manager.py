"""
Output file management for TAR threshold estimation.
"""
import os
import json
import logging
import numpy as np
import pandas as pd
from typing import Any, Dict, Optional
from datetime import datetime

from ..core.config import get_config
from ..core.decorators import error_handler
from ..models.threshold.results import CONSTANT, EstimationResult

logger = logging.getLogger(__name__)


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles NumPy types."""

    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, np.bool_):
            return bool(obj)
        elif isinstance(obj, (datetime, pd.Timestamp)):
            return obj.isoformat()
        return super().default(obj)


def _slug(name: str) -> str:
    return name.replace(' ', '_').lower()


class OutputManager:
    """Manager for saving estimation outputs under a versioned run directory."""

    def __init__(
        self,
        output_dir: Optional[str] = None,
        run_name: str = 'threshold_search',
        version: Optional[str] = None
    ):
        """Initialize output manager with directory structure."""
        config = get_config()
        self.base_dir = output_dir or config.get('directories.results_dir', 'results')

        self.version = str(version or config.get('model.version', '1.0'))
        if not self.version.startswith('v'):
            self.version = f"v{self.version}"

        self.run_name = run_name
        self.timestamp = datetime.now().strftime("%Y%m%d")
        self.setup_directories()

        self.manifest: Dict[str, Any] = {
            "timestamp": self.timestamp,
            "version": self.version,
            "run": self.run_name,
            "files": []
        }

    def setup_directories(self) -> None:
        """Create directory structure for outputs."""
        self.run_dir = os.path.join(self.base_dir, self.version, self.run_name)
        os.makedirs(self.run_dir, exist_ok=True)

        self.viz_dir = os.path.join(self.run_dir, "visualizations")
        os.makedirs(self.viz_dir, exist_ok=True)

        logger.info(f"Set up output directories at {self.run_dir}")

    def _record(self, file_path: str, file_type: str) -> None:
        self.manifest["files"].append({
            "path": os.path.basename(file_path),
            "type": file_type,
            "timestamp": self.timestamp
        })

    @error_handler(fallback_value=None)
    def save_json(self, data: Dict[str, Any], filename: str) -> Optional[str]:
        """Save data as a JSON file in the run directory."""
        file_path = os.path.join(self.run_dir, filename)
        with open(file_path, 'w') as f:
            json.dump(data, f, cls=NumpyEncoder, indent=2, allow_nan=False)

        self._record(file_path, "json")
        logger.info(f"Saved JSON to {file_path}")
        return file_path

    def save_result(self, result: EstimationResult, name: str = 'result') -> Optional[str]:
        """
        Save an estimation result as JSON.

        Args:
            result: Estimation result; not modified
            name: Base file name

        Returns:
            Path of the written file, or None if writing failed
        """
        payload = result.to_dict()
        payload['saved_at'] = datetime.now()
        return self.save_json(payload, f"{self.timestamp}_{_slug(name)}.json")

    @error_handler(fallback_value=None)
    def save_rss_table(self, result: EstimationResult, name: str = 'result') -> Optional[str]:
        """Save the RSS curve or surface as a long-format CSV."""
        if result.variant == CONSTANT:
            df = pd.DataFrame(result.rss_curve_points(), columns=['threshold', 'rss'])
        else:
            df = pd.DataFrame(result.rss_surface_points(), columns=['theta_first', 'theta_last', 'rss'])

        file_path = os.path.join(self.run_dir, f"{self.timestamp}_{_slug(name)}_rss.csv")
        df.to_csv(file_path, index=False)

        self._record(file_path, "csv")
        logger.info(f"Saved RSS table to {file_path}")
        return file_path

    @error_handler(fallback_value=None)
    def save_manifest(self) -> Optional[str]:
        """Save manifest file listing all outputs."""
        file_path = os.path.join(self.run_dir, "manifest.json")
        with open(file_path, 'w') as f:
            json.dump(self.manifest, f, cls=NumpyEncoder, indent=2)

        logger.info(f"Saved manifest to {file_path}")
        return file_path
