"""
Configuration management for TAR threshold estimation.
"""
import os
import copy
import yaml
from typing import Dict, Any, Optional

from .exceptions import ConfigurationError


DEFAULT_CONFIG: Dict[str, Any] = {
    'directories': {
        'results_dir': 'results',
        'logs_dir': 'results/logs'
    },
    'parameters': {
        'threshold_search': {
            'min_regime_fraction': 0.2,
            'tie_policy': 'mean',
            'grid_points': None,
            'parallel': True,
            'max_workers': None,
            'chunk_size': 256,
            'strict_halflife': False
        }
    },
    'logging': {
        'log_level': 'INFO',
        'verbose_libraries': {
            'matplotlib': 'WARNING',
            'matplotlib.font_manager': 'ERROR'
        }
    },
    'model': {
        'version': '1.0'
    }
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration from file or defaults."""
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file layered over the defaults."""
        if self.config_path and os.path.exists(self.config_path):
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ConfigurationError(
                    f"Configuration file {self.config_path} must contain a mapping"
                )
            return _merge(DEFAULT_CONFIG, loaded)

        return copy.deepcopy(DEFAULT_CONFIG)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key_path.split('.')
        result = self.config

        for key in keys:
            if isinstance(result, dict) and key in result:
                result = result[key]
            else:
                return default

        return result

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation."""
        keys = key_path.split('.')
        target = self.config

        for key in keys[:-1]:
            if key not in target:
                target[key] = {}
            target = target[key]

        target[keys[-1]] = value

    def save(self, path: Optional[str] = None) -> None:
        """Save current configuration to file."""
        save_path = path or self.config_path
        if not save_path:
            raise ConfigurationError("No path specified for saving configuration")

        with open(save_path, 'w') as f:
            yaml.dump(self.config, f, default_flow_style=False)


# Global configuration instance
config = Config()


def initialize_config(config_path: Optional[str]) -> Config:
    """Initialize the global configuration."""
    global config
    config = Config(config_path)
    return config


def get_config() -> Config:
    """Return the current global configuration."""
    return config
