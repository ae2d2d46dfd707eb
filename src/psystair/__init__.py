"""
psystair
========

Adaptive staircase estimation of contrast detection thresholds.

On every trial a stimulus is shown or withheld (fair coin), the participant
answers yes or no within a response window, and the answer is scored. The
contrast then moves down one step after each correct answer and up one step
after two incorrect answers in a row. The run ends once a fixed number of
reversals has been recorded.

----------------------------------------------------------------------
Workflow
----------------------------------------------------------------------

Core design
-----------
1. ExperimentConfig (config.py):
   - Staircase and timing parameters, validated once at construction.

2. classify_response (model/task.py):
   - Yes/no scoring rule; timeouts are always incorrect.

3. StaircaseController (trial_placement/staircase.py):
   - Pure update(state, correct) -> new StaircaseState.

4. TrialScheduler (trial_placement/scheduler.py):
   - Stimulus presence and orientation per trial, from an injectable
     RandomSource (JAX PRNG keys by default).

5. ExperimentRunner (session/experiment_session.py):
   - Drives the loop through a Presenter and writes a TrialLog.

Unified import style
--------------------
Top-level:
  from psystair import ExperimentConfig, ExperimentRunner, Participant
  from psystair import SimulatedObserver, TrialScheduler, JaxRandomSource

Subpackages:
  from psystair.model import Response, classify_response
  from psystair.trial_placement import StaircaseController, StaircaseState
  from psystair.data import TrialLog, save_trials_csv, load_trials_csv
  from psystair.session import Presenter, PresentationResult, run_experiment

Data flow
---------
- Presenter.present(stimulus, contrast) -> PresentationResult
- classify_response(stimulus.present, result.response) -> correct
- StaircaseController.update(state, correct) -> next state
- TrialRecord (with the contrast shown on the trial) -> TrialLog
- save_trials_csv(log, default_data_filename(participant))

----------------------------------------------------------------------
"""

from . import data as data
from . import model as model
from . import session as session
from . import trial_placement as trial_placement
from . import utils as utils
from .config import ExperimentConfig
from .data.dataset import Participant, TrialLog, TrialRecord
from .exceptions import ConfigurationError, PsystairError, UserAbort
from .model.task import Response, classify_response

# Experiment orchestration
from .session.experiment_session import ExperimentRunner, RunResult, run_experiment
from .session.presenter import PresentationResult, Presenter, SimulatedObserver

# Staircase
from .trial_placement.scheduler import StimulusDescriptor, TrialScheduler
from .trial_placement.staircase import (
    Direction,
    StaircaseController,
    StaircaseState,
)
from .utils.rng import JaxRandomSource, RandomSource

__all__ = [
    # Configuration and errors
    "ExperimentConfig",
    "ConfigurationError",
    "PsystairError",
    "UserAbort",
    # Task
    "Response",
    "classify_response",
    # Staircase
    "Direction",
    "StaircaseController",
    "StaircaseState",
    "StimulusDescriptor",
    "TrialScheduler",
    "JaxRandomSource",
    "RandomSource",
    # Session orchestration
    "ExperimentRunner",
    "RunResult",
    "run_experiment",
    "Presenter",
    "PresentationResult",
    "SimulatedObserver",
    # Data handling
    "Participant",
    "TrialRecord",
    "TrialLog",
    # Subpackages
    "model",
    "trial_placement",
    "utils",
    "data",
    "session",
]
