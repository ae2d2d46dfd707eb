"""
trial_placement
===============

Deciding what to show on the next trial.

- StaircaseController / StaircaseState: the 1-down / 2-up contrast rule.
- StaircasePlacement: stateful wrapper for hand-written trial loops.
- TrialScheduler: stimulus presence and orientation per trial.

Examples
--------
>>> from psystair.trial_placement import StaircaseController, StaircaseState
>>> controller = StaircaseController(config)
>>> state = controller.update(StaircaseState.initial(config), correct=False)
"""

from psystair.trial_placement.scheduler import (
    StimulusDescriptor,
    TrialScheduler,
    stimulus_from_draws,
)
from psystair.trial_placement.staircase import (
    Direction,
    StaircaseController,
    StaircasePlacement,
    StaircaseState,
    is_reversal,
)

__all__ = [
    "Direction",
    "StaircaseController",
    "StaircasePlacement",
    "StaircaseState",
    "StimulusDescriptor",
    "TrialScheduler",
    "is_reversal",
    "stimulus_from_draws",
]
