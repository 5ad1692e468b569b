"""
Pydantic schemas for TAR threshold estimation.
"""
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.config import Config, get_config


class EstimatorConfig(BaseModel):
    """Schema for threshold search configuration."""
    model_config = ConfigDict(frozen=True)

    min_regime_fraction: float = Field(0.2, gt=0, le=0.5)
    tie_policy: Literal['mean', 'first'] = 'mean'
    grid_points: Optional[int] = Field(None, ge=2)
    parallel: bool = True
    max_workers: Optional[int] = Field(None, ge=1)
    chunk_size: int = Field(256, ge=1)
    strict_halflife: bool = False

    @classmethod
    def from_config(cls, config: Optional[Config] = None, **overrides) -> 'EstimatorConfig':
        """
        Build from the ``parameters.threshold_search`` section of a Config.

        Args:
            config: Configuration to read; defaults to the global configuration
            **overrides: Values taking precedence over the configuration

        Returns:
            Validated EstimatorConfig
        """
        config = config or get_config()
        values = dict(config.get('parameters.threshold_search', {}) or {})
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**{k: v for k, v in values.items() if k in cls.model_fields})


class SimulationConfig(BaseModel):
    """Schema for synthetic TAR series generation."""
    model_config = ConfigDict(frozen=True)

    n_obs: int = Field(..., ge=3)
    # |1 + rho| < 1 keeps the outer regime mean reverting
    rho: float = Field(-0.5, gt=-2.0, lt=0.0)
    threshold: float = Field(..., ge=0)
    threshold_end: Optional[float] = Field(None, ge=0)
    noise_scale: float = Field(1.0, gt=0)
    initial_level: float = 0.0
    seed: Optional[int] = None

    @field_validator('threshold_end')
    @classmethod
    def check_threshold_end(cls, v: Optional[float]) -> Optional[float]:
        """Reject NaN endpoints."""
        if v is not None and v != v:
            raise ValueError("threshold_end must be a number")
        return v

    @property
    def is_time_varying(self) -> bool:
        return self.threshold_end is not None and self.threshold_end != self.threshold
