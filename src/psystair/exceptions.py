"""
exceptions.py
-------------

Error types raised by psystair.

- PsystairError: common base class.
- ConfigurationError: invalid ExperimentConfig, raised before any trial runs.
- UserAbort: the presenter reported an abort request during a response wait.

Timeouts are not errors: a trial without a response is scored as incorrect
and the run continues.
"""

from __future__ import annotations

from typing import Any


class PsystairError(Exception):
    """Base class for all psystair errors."""


class ConfigurationError(PsystairError, ValueError):
    """Raised when an experiment configuration is invalid."""


class UserAbort(PsystairError):
    """
    Raised when a run is stopped by an abort request from the presenter.

    Attributes
    ----------
    completed_trials : tuple[TrialRecord, ...]
        Trials recorded before the abort. The aborted trial itself is not
        included.
    """

    def __init__(self, message: str, completed_trials: tuple[Any, ...] = ()):
        super().__init__(message)
        self.completed_trials = tuple(completed_trials)
