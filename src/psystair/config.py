"""
config.py
---------

Experiment configuration.

Every field is a required input; there are no hidden defaults. Values are
checked once, when the config is built, so an invalid configuration never
reaches the trial loop.

Examples
--------
>>> config = ExperimentConfig(
...     initial_contrast=0.2,
...     contrast_step=0.02,
...     min_contrast=0.01,
...     max_contrast=0.5,
...     max_reversals=8,
...     max_response_time=3.0,
...     inter_stimulus_interval=1.0,
... )
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from psystair.exceptions import ConfigurationError


@dataclass(frozen=True)
class ExperimentConfig:
    """
    Immutable staircase and timing parameters.

    Attributes
    ----------
    initial_contrast : float
        Contrast of the first trial.
    contrast_step : float
        Fixed step added or subtracted on each staircase move. Must be > 0.
    min_contrast, max_contrast : float
        Bounds the contrast is clamped to.
    max_reversals : int
        Run stops once this many reversals have been recorded.
    max_response_time : float
        Response window in seconds; no answer within it is a timeout.
    inter_stimulus_interval : float
        Pause between trials in seconds.
    """

    initial_contrast: float
    contrast_step: float
    min_contrast: float
    max_contrast: float
    max_reversals: int
    max_response_time: float
    inter_stimulus_interval: float

    def __post_init__(self):
        """Validate configuration."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(
                    f"{f.name} must be a number, got {type(value).__name__}"
                )
            if not math.isfinite(value):
                raise ConfigurationError(f"{f.name} must be finite, got {value}")
        if not isinstance(self.max_reversals, numbers.Integral):
            raise ConfigurationError(
                f"max_reversals must be an integer, got {self.max_reversals}"
            )
        if self.min_contrast > self.max_contrast:
            raise ConfigurationError(
                f"min_contrast ({self.min_contrast}) must not exceed "
                f"max_contrast ({self.max_contrast})"
            )
        if not self.min_contrast <= self.initial_contrast <= self.max_contrast:
            raise ConfigurationError(
                f"initial_contrast must lie in [{self.min_contrast}, "
                f"{self.max_contrast}], got {self.initial_contrast}"
            )
        if self.contrast_step <= 0:
            raise ConfigurationError(
                f"contrast_step must be positive, got {self.contrast_step}"
            )
        if self.max_reversals < 1:
            raise ConfigurationError(
                f"max_reversals must be positive, got {self.max_reversals}"
            )
        if self.max_response_time <= 0:
            raise ConfigurationError(
                f"max_response_time must be positive, got {self.max_response_time}"
            )
        if self.inter_stimulus_interval < 0:
            raise ConfigurationError(
                "inter_stimulus_interval must be non-negative, "
                f"got {self.inter_stimulus_interval}"
            )

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> ExperimentConfig:
        """
        Build a config from a mapping, e.g. a parsed JSON or TOML table.

        Raises
        ------
        ConfigurationError
            If a field is missing or an unknown key is present.
        """
        names = [f.name for f in fields(cls)]
        missing = [name for name in names if name not in values]
        unknown = sorted(set(values) - set(names))
        if missing:
            raise ConfigurationError(f"Missing config fields: {', '.join(missing)}")
        if unknown:
            raise ConfigurationError(f"Unknown config fields: {', '.join(unknown)}")
        return cls(**{name: values[name] for name in names})
