"""
staircase.py
------------

Adaptive contrast staircase (1-down / 2-up).

Rule
----
- Correct response: step contrast down by one step.
- Incorrect response: step contrast up by one step, but only on the second
  incorrect response in a row. A single incorrect response changes nothing
  except the consecutive-incorrect counter.

This rule is sometimes labelled "2-up/1-down" in task scripts; the behavior
described above is what is implemented and what defines the convergence
point, whatever the label.

Reversals
---------
A reversal is counted when a move is recorded in the opposite direction of
the previous move. The first move of a run is never a reversal. Contrast is
clamped to [min_contrast, max_contrast], and a move is recorded even when the
clamp leaves the contrast unchanged; at a bound this can count reversals
that did not change the presented contrast. A RuntimeWarning is emitted when
that happens.

The controller is pure: update() returns a new StaircaseState and never
mutates its input. StaircasePlacement wraps it for callers that prefer a
stateful object driving their own trial loop.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, replace
from enum import Enum

from psystair.config import ExperimentConfig

# Consecutive incorrect responses needed before stepping contrast up.
INCORRECT_RUN_TO_STEP_UP = 2


class Direction(Enum):
    """Direction of the last staircase move."""

    NONE = 0
    INCREASE = 1
    DECREASE = -1


@dataclass(frozen=True)
class StaircaseState:
    """
    Snapshot of the staircase between trials.

    Attributes
    ----------
    contrast : float
        Contrast for the next trial, always within the configured bounds.
    last_direction : Direction
        Direction of the most recent move (Direction.NONE before the first).
    reversal_count : int
        Number of reversals so far. Never decreases.
    consecutive_incorrect : int
        Incorrect responses since the last correct response or upward move.
    """

    contrast: float
    last_direction: Direction = Direction.NONE
    reversal_count: int = 0
    consecutive_incorrect: int = 0

    @classmethod
    def initial(cls, config: ExperimentConfig) -> StaircaseState:
        """Return the state a run starts from."""
        return cls(contrast=config.initial_contrast)


def is_reversal(previous: Direction, new: Direction) -> bool:
    """True if moving in `new` after `previous` counts as a reversal."""
    return previous is not Direction.NONE and new is not previous


class StaircaseController:
    """
    Transition rule of the staircase.

    Parameters
    ----------
    config : ExperimentConfig
        Supplies the step size, contrast bounds and reversal limit.

    Examples
    --------
    >>> controller = StaircaseController(config)
    >>> state = StaircaseState.initial(config)
    >>> state = controller.update(state, correct=True)
    """

    def __init__(self, config: ExperimentConfig):
        self.config = config

    def update(self, state: StaircaseState, correct: bool) -> StaircaseState:
        """
        Return the state after one classified trial.

        Parameters
        ----------
        state : StaircaseState
            State in effect during the trial.
        correct : bool
            Classification of the trial's response.

        Returns
        -------
        StaircaseState
            New state; `state` is left untouched.
        """
        if correct:
            contrast = max(
                self.config.min_contrast, state.contrast - self.config.contrast_step
            )
            return self._move(state, Direction.DECREASE, contrast)

        consecutive = state.consecutive_incorrect + 1
        if consecutive < INCORRECT_RUN_TO_STEP_UP:
            return replace(state, consecutive_incorrect=consecutive)

        contrast = min(
            self.config.max_contrast, state.contrast + self.config.contrast_step
        )
        return self._move(state, Direction.INCREASE, contrast)

    def is_finished(self, state: StaircaseState) -> bool:
        """True once the reversal limit has been reached."""
        return state.reversal_count >= self.config.max_reversals

    def _move(
        self, state: StaircaseState, direction: Direction, contrast: float
    ) -> StaircaseState:
        reversal = is_reversal(state.last_direction, direction)
        if contrast == state.contrast:
            warnings.warn(
                f"Contrast pinned at {contrast}; {direction.name.lower()} recorded "
                "without a contrast change, later reversals may be inflated.",
                RuntimeWarning,
                stacklevel=3,
            )
        return StaircaseState(
            contrast=contrast,
            last_direction=direction,
            reversal_count=state.reversal_count + int(reversal),
            consecutive_incorrect=0,
        )


class StaircasePlacement:
    """
    Stateful staircase for hand-written trial loops.

    Parameters
    ----------
    config : ExperimentConfig
        Staircase parameters.

    Attributes
    ----------
    state : StaircaseState
        Current staircase state.
    """

    def __init__(self, config: ExperimentConfig):
        self.controller = StaircaseController(config)
        self.state = StaircaseState.initial(config)

    @property
    def finished(self) -> bool:
        return self.controller.is_finished(self.state)

    def propose(self) -> float:
        """Return the contrast for the next trial."""
        if self.finished:
            raise RuntimeError("Staircase finished: reversal limit reached.")
        return self.state.contrast

    def update(self, correct: bool) -> StaircaseState:
        """
        Update the staircase with the last trial's classification.

        Parameters
        ----------
        correct : bool
            True = correct, False = incorrect.
        """
        self.state = self.controller.update(self.state, correct)
        return self.state
