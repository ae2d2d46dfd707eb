"""
test_config.py
--------------

Validation of ExperimentConfig.
"""

import numpy as np
import pytest

from psystair.config import ExperimentConfig
from psystair.exceptions import ConfigurationError

VALID = dict(
    initial_contrast=0.2,
    contrast_step=0.02,
    min_contrast=0.01,
    max_contrast=0.5,
    max_reversals=8,
    max_response_time=3.0,
    inter_stimulus_interval=1.0,
)


def test_valid_config_builds():
    config = ExperimentConfig(**VALID)
    assert config.max_reversals == 8


@pytest.mark.parametrize(
    "overrides, match",
    [
        ({"min_contrast": 0.6}, "must not exceed"),
        ({"initial_contrast": 0.6}, "initial_contrast"),
        ({"initial_contrast": 0.001}, "initial_contrast"),
        ({"contrast_step": 0.0}, "contrast_step"),
        ({"contrast_step": -0.01}, "contrast_step"),
        ({"max_reversals": 0}, "max_reversals"),
        ({"max_reversals": 2.5}, "max_reversals"),
        ({"max_response_time": 0}, "max_response_time"),
        ({"inter_stimulus_interval": -1}, "inter_stimulus_interval"),
        ({"contrast_step": float("nan")}, "contrast_step must be finite"),
        ({"contrast_step": float("inf")}, "contrast_step must be finite"),
        ({"initial_contrast": float("nan")}, "initial_contrast must be finite"),
        ({"max_contrast": float("inf")}, "max_contrast must be finite"),
        ({"min_contrast": float("-inf")}, "min_contrast must be finite"),
        ({"max_reversals": float("inf")}, "max_reversals must be finite"),
        ({"max_reversals": float("nan")}, "max_reversals must be finite"),
        ({"max_reversals": 8.0}, "max_reversals must be an integer"),
        ({"max_reversals": True}, "max_reversals must be a number"),
        ({"max_response_time": float("nan")}, "max_response_time must be finite"),
        ({"inter_stimulus_interval": float("inf")}, "inter_stimulus_interval must be finite"),
        ({"contrast_step": "0.02"}, "contrast_step must be a number"),
    ],
)
def test_invalid_config_raises(overrides, match):
    with pytest.raises(ConfigurationError, match=match):
        ExperimentConfig(**{**VALID, **overrides})


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        ExperimentConfig(**{**VALID, "contrast_step": 0})


def test_config_is_immutable():
    config = ExperimentConfig(**VALID)
    with pytest.raises(AttributeError):
        config.contrast_step = 0.1


class TestFromDict:
    def test_round_trip(self):
        assert ExperimentConfig.from_dict(VALID) == ExperimentConfig(**VALID)

    def test_missing_field(self):
        values = dict(VALID)
        del values["max_reversals"]
        with pytest.raises(ConfigurationError, match="Missing config fields: max_reversals"):
            ExperimentConfig.from_dict(values)

    def test_unknown_field(self):
        with pytest.raises(ConfigurationError, match="Unknown config fields: numBlocks"):
            ExperimentConfig.from_dict({**VALID, "numBlocks": 1})


def test_numpy_scalars_accepted():
    config = ExperimentConfig(
        **{**VALID, "max_reversals": np.int64(8), "contrast_step": np.float64(0.02)}
    )
    assert config.max_reversals == 8
