"""
session
=======

Experiment orchestration.

This subpackage provides:
- ExperimentRunner : drives the trial loop, owns the staircase state and
  the trial log, and guarantees presenter cleanup.
- RunResult / run_experiment : one-call runs with a seeded scheduler.
- Presenter : interface to display and response hardware.
- PresentationResult : response, reaction time, or abort request.
- SimulatedObserver : display-free Presenter for offline runs.
"""

from .experiment_session import ExperimentRunner, RunResult, TrialStream, run_experiment
from .presenter import PresentationResult, Presenter, SimulatedObserver

__all__ = [
    "ExperimentRunner",
    "PresentationResult",
    "Presenter",
    "RunResult",
    "SimulatedObserver",
    "TrialStream",
    "run_experiment",
]
