"""
Central pytest configuration for this project.

This file is automatically discovered by pytest and is intended for:

- **Fixtures**: reusable objects or setup logic shared across multiple test files.
- **Fakes**: scripted random sources and presenters standing in for hardware.

Notes
-----
- Contributors should
  install the package in editable mode (`pip install -e .[test]`) so that imports
  are resolved consistently in local dev and CI environments.
- Keep this file focused on test setup. Do not add application logic here.
"""

from __future__ import annotations

import pytest

from psystair.config import ExperimentConfig
from psystair.data.dataset import Participant
from psystair.session.presenter import Presenter
from psystair.utils.rng import RandomSource


class ScriptedRandomSource(RandomSource):
    """Returns the given draws in order; repeats the last one when exhausted."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.calls = 0

    def uniform(self) -> float:
        index = min(self.calls, len(self.draws) - 1)
        self.calls += 1
        return self.draws[index]


class ScriptedPresenter(Presenter):
    """
    Presenter returning scripted outcomes.

    Each entry is a PresentationResult, or an exception instance to raise.
    """

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.presented = []
        self.waits = []
        self.cleanup_calls = 0

    def present(self, stimulus, contrast, max_response_time):
        if len(self.presented) >= len(self.outcomes):
            raise AssertionError("Presenter called more often than scripted")
        outcome = self.outcomes[len(self.presented)]
        self.presented.append((stimulus, contrast, max_response_time))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def inter_trial_wait(self, duration_s):
        self.waits.append(duration_s)

    def cleanup(self):
        self.cleanup_calls += 1


@pytest.fixture
def config():
    """Staircase config used throughout the worked examples."""
    return ExperimentConfig(
        initial_contrast=0.20,
        contrast_step=0.02,
        min_contrast=0.01,
        max_contrast=0.50,
        max_reversals=2,
        max_response_time=3.0,
        inter_stimulus_interval=1.0,
    )


@pytest.fixture
def participant():
    return Participant(id="02", gender="M", age=25)


@pytest.fixture
def scripted_source():
    """Factory for ScriptedRandomSource."""
    return ScriptedRandomSource


@pytest.fixture
def scripted_presenter():
    """Factory for ScriptedPresenter."""
    return ScriptedPresenter
