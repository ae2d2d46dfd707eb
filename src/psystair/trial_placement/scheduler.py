"""
scheduler.py
------------

Per-trial stimulus scheduling.

Each trial flips a fair coin for whether a stimulus is shown. Present
stimuli also get an orientation drawn uniformly from [90°, 180°), in radians.
The orientation is passed on to the presenter for rendering only; it plays
no part in scoring or in the staircase.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from psystair.utils.rng import RandomSource

PRESENT_PROBABILITY = 0.5
ORIENTATION_RANGE_DEG = (90.0, 180.0)


@dataclass(frozen=True)
class StimulusDescriptor:
    """
    What to show on a trial.

    Attributes
    ----------
    present : bool
        Whether the stimulus is shown (False = noise only).
    orientation : float | None
        Orientation in radians; None when the stimulus is absent.
    """

    present: bool
    orientation: float | None = None

    def __post_init__(self):
        if self.present and self.orientation is None:
            raise ValueError("A present stimulus needs an orientation")
        if not self.present and self.orientation is not None:
            raise ValueError("An absent stimulus has no orientation")


def stimulus_from_draws(
    present_draw: float, orientation_draw: float | None = None
) -> StimulusDescriptor:
    """
    Map uniform draws to a StimulusDescriptor.

    Parameters
    ----------
    present_draw : float
        Uniform draw on [0, 1); below 0.5 means the stimulus is present.
    orientation_draw : float, optional
        Uniform draw on [0, 1) for the orientation. Required only when the
        stimulus is present.
    """
    if not present_draw < PRESENT_PROBABILITY:
        return StimulusDescriptor(present=False)
    if orientation_draw is None:
        raise ValueError("orientation_draw is required for a present stimulus")
    low, high = ORIENTATION_RANGE_DEG
    degrees = low + (high - low) * orientation_draw
    return StimulusDescriptor(present=True, orientation=math.radians(degrees))


class TrialScheduler:
    """
    Draw one StimulusDescriptor per trial.

    Parameters
    ----------
    random_source : RandomSource
        Source of uniform draws. One draw decides presence; a second draw is
        taken only for present stimuli.

    Examples
    --------
    >>> from psystair.utils.rng import JaxRandomSource
    >>> scheduler = TrialScheduler(JaxRandomSource(0))
    >>> stimulus = scheduler.next_stimulus()
    """

    def __init__(self, random_source: RandomSource):
        self.random_source = random_source

    def next_stimulus(self) -> StimulusDescriptor:
        present_draw = self.random_source.uniform()
        if not present_draw < PRESENT_PROBABILITY:
            return stimulus_from_draws(present_draw)
        return stimulus_from_draws(present_draw, self.random_source.uniform())
