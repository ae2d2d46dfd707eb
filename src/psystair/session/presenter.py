"""
presenter.py
------------

Interface between the trial loop and whatever shows stimuli and collects
responses (a PsychoPy window and keyboard, a hardware rig, a simulation).

A Presenter must:
- present(stimulus, contrast, max_response_time): show the stimulus at the
  given contrast and block until a yes/no answer, a timeout, or an abort
  request. Abort is reported in the returned PresentationResult; presenters
  translate their own interrupt mechanism (an ESC key, a signal) into it.
- inter_trial_wait(duration_s): blocking pause between trials.
- cleanup(): release display and input resources. Called exactly once by
  the runner when a run ends, however it ends.

SimulatedObserver is a Presenter with no display, for offline runs and
tests.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from psystair.model.task import Response
from psystair.trial_placement.scheduler import StimulusDescriptor
from psystair.utils.rng import RandomSource


@dataclass(frozen=True)
class PresentationResult:
    """
    Outcome of one presentation.

    Attributes
    ----------
    response : Response
        YES / NO, or NONE on timeout or abort.
    reaction_time_ms : float | None
        Reaction time for YES / NO responses.
    aborted : bool
        True if an abort was requested during the response wait.
    """

    response: Response
    reaction_time_ms: float | None = None
    aborted: bool = False

    @classmethod
    def answer(cls, response: Response, reaction_time_ms: float) -> PresentationResult:
        if response is Response.NONE:
            raise ValueError("Use PresentationResult.timeout() for missing responses")
        return cls(response=response, reaction_time_ms=float(reaction_time_ms))

    @classmethod
    def timeout(cls) -> PresentationResult:
        return cls(response=Response.NONE)

    @classmethod
    def abort(cls) -> PresentationResult:
        return cls(response=Response.NONE, aborted=True)


class Presenter(ABC):
    """Abstract presentation and response-collection backend."""

    @abstractmethod
    def present(
        self, stimulus: StimulusDescriptor, contrast: float, max_response_time: float
    ) -> PresentationResult:
        """
        Show a stimulus and wait for the response.

        Parameters
        ----------
        stimulus : StimulusDescriptor
            Presence and orientation for this trial.
        contrast : float
            Contrast to render a present stimulus at.
        max_response_time : float
            Response window in seconds.

        Returns
        -------
        PresentationResult
        """
        ...

    @abstractmethod
    def inter_trial_wait(self, duration_s: float) -> None:
        """Block for `duration_s` seconds between trials."""
        ...

    @abstractmethod
    def cleanup(self) -> None:
        """Release presentation and input resources."""
        ...


class SimulatedObserver(Presenter):
    """
    Simulated participant.

    Present stimuli are detected with a Weibull probability of contrast,
        p(yes | present) = 1 - exp(-(contrast / threshold) ** slope),
    and absent stimuli produce a false alarm with probability
    `false_alarm_rate`. With probability `timeout_rate` the observer does
    not answer at all.

    Parameters
    ----------
    random_source : RandomSource
        Source of the observer's draws (two per presentation).
    threshold : float
        Contrast at which detection probability is 1 - 1/e.
    slope : float, default=3.5
        Steepness of the psychometric function.
    false_alarm_rate : float, default=0.0
    timeout_rate : float, default=0.0
    reaction_time_ms : float, default=500.0
        Reaction time reported for every answer.
    abort_after : int, optional
        If given, request an abort on presentation number abort_after + 1.

    Attributes
    ----------
    presentations : list[tuple[StimulusDescriptor, float]]
        Every (stimulus, contrast) pair presented.
    waits : list[float]
        Every inter-trial wait requested.
    cleanup_calls : int
    """

    def __init__(
        self,
        random_source: RandomSource,
        threshold: float,
        slope: float = 3.5,
        false_alarm_rate: float = 0.0,
        timeout_rate: float = 0.0,
        reaction_time_ms: float = 500.0,
        abort_after: int | None = None,
    ):
        if threshold <= 0:
            raise ValueError(f"threshold must be positive, got {threshold}")
        for name, rate in (
            ("false_alarm_rate", false_alarm_rate),
            ("timeout_rate", timeout_rate),
        ):
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {rate}")
        self.random_source = random_source
        self.threshold = threshold
        self.slope = slope
        self.false_alarm_rate = false_alarm_rate
        self.timeout_rate = timeout_rate
        self.reaction_time_ms = reaction_time_ms
        self.abort_after = abort_after

        self.presentations: list[tuple[StimulusDescriptor, float]] = []
        self.waits: list[float] = []
        self.cleanup_calls = 0

    def p_yes(self, stimulus: StimulusDescriptor, contrast: float) -> float:
        """Probability of answering YES to this stimulus."""
        if not stimulus.present:
            return self.false_alarm_rate
        return 1.0 - math.exp(-((contrast / self.threshold) ** self.slope))

    def present(
        self, stimulus: StimulusDescriptor, contrast: float, max_response_time: float
    ) -> PresentationResult:
        if self.abort_after is not None and len(self.presentations) >= self.abort_after:
            return PresentationResult.abort()
        self.presentations.append((stimulus, contrast))

        timeout_draw = self.random_source.uniform()
        answer_draw = self.random_source.uniform()
        if timeout_draw < self.timeout_rate:
            return PresentationResult.timeout()
        response = Response.YES if answer_draw < self.p_yes(stimulus, contrast) else Response.NO
        return PresentationResult.answer(
            response, min(self.reaction_time_ms, max_response_time * 1000.0)
        )

    def inter_trial_wait(self, duration_s: float) -> None:
        self.waits.append(duration_s)

    def cleanup(self) -> None:
        self.cleanup_calls += 1
