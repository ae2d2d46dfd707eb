"""
experiment_session.py
---------------------

ExperimentRunner orchestrates the staircase trial loop.

Responsibilities
----------------
1. Ask the TrialScheduler for each trial's stimulus.
2. Hand stimulus and current contrast to the Presenter and wait for the
   outcome.
3. Score the outcome, record the trial, and advance the staircase.
4. Stop once the reversal limit is reached, or on an abort request.
5. Guarantee Presenter.cleanup() runs exactly once, on every exit path.

Trials run strictly one after another. The runner owns its StaircaseState
and TrialLog for the whole run; nothing else writes to them.

Outcomes
--------
- Completed: reversal limit reached; every trial is in the log.
- Aborted: trials() raises UserAbort carrying the completed trials;
  run() reports status "aborted" and returns the same trials.
- Timeouts are ordinary trials, scored incorrect.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Literal

from psystair.config import ExperimentConfig
from psystair.data.dataset import Participant, TrialLog, TrialRecord
from psystair.exceptions import UserAbort
from psystair.model.task import classify_response
from psystair.session.presenter import Presenter
from psystair.trial_placement.scheduler import TrialScheduler
from psystair.trial_placement.staircase import StaircaseController, StaircaseState
from psystair.utils.rng import JaxRandomSource

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """
    Result of ExperimentRunner.run().

    Attributes
    ----------
    log : TrialLog
        Every completed trial, in order.
    final_state : StaircaseState
        Staircase state after the last completed trial.
    status : {"completed", "aborted"}
    reversal_contrasts : list[float]
        Contrast presented on each trial that produced a reversal.
    """

    log: TrialLog
    final_state: StaircaseState
    status: Literal["completed", "aborted"]
    reversal_contrasts: list[float] = field(default_factory=list)

    @property
    def aborted(self) -> bool:
        return self.status == "aborted"


class TrialStream:
    """
    Iterator over the trials of one run.

    Wraps the trial generator so that close() releases the presenter even
    when no trial has been started yet; a bare generator closed before its
    first next() never enters its try/finally.
    """

    def __init__(self, loop: Iterator[TrialRecord], on_close: Callable[[], None]):
        self._loop = loop
        self._on_close = on_close

    def __iter__(self) -> TrialStream:
        return self

    def __next__(self) -> TrialRecord:
        return next(self._loop)

    def close(self) -> None:
        """Stop the run and release the presenter."""
        try:
            self._loop.close()
        finally:
            self._on_close()

    def __enter__(self) -> TrialStream:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ExperimentRunner:
    """
    Trial loop for one participant.

    Parameters
    ----------
    config : ExperimentConfig
        Validated staircase and timing parameters.
    participant : Participant
        Written into every TrialRecord.
    presenter : Presenter
        Shows stimuli and collects responses.
    scheduler : TrialScheduler
        Decides stimulus presence and orientation per trial.

    Attributes
    ----------
    log : TrialLog
        Trials completed so far.
    state : StaircaseState
        Current staircase state.
    reversal_contrasts : list[float]
        Contrast presented on each reversal trial so far.
    """

    def __init__(
        self,
        config: ExperimentConfig,
        participant: Participant,
        presenter: Presenter,
        scheduler: TrialScheduler,
    ):
        self.config = config
        self.participant = participant
        self.presenter = presenter
        self.scheduler = scheduler
        self.controller = StaircaseController(config)

        self.log = TrialLog()
        self.state = StaircaseState.initial(config)
        self.reversal_contrasts: list[float] = []

        self._started = False
        self._cleaned_up = False

    # ------------------------------------------------------------------
    # TRIAL LOOP
    # ------------------------------------------------------------------
    def trials(self) -> TrialStream:
        """
        Run trials lazily, yielding each TrialRecord once it is logged.

        The stream can only be consumed once. Closing it, including before
        the first trial, or any exception inside the loop still runs
        Presenter.cleanup() exactly once.

        Yields
        ------
        TrialRecord

        Raises
        ------
        UserAbort
            If the presenter reports an abort request. The aborted trial is
            not recorded.
        RuntimeError
            If trials() was already started on this runner.
        """
        if self._started:
            raise RuntimeError("This run has already been started; create a new runner.")
        self._started = True
        return TrialStream(self._trial_loop(), self._cleanup)

    def _trial_loop(self) -> Iterator[TrialRecord]:
        logger.info(
            "Starting staircase for participant %s at contrast %.4f",
            self.participant.id,
            self.state.contrast,
        )
        try:
            while not self.controller.is_finished(self.state):
                yield self._run_trial()
            logger.info(
                "Run complete after %d trials (%d reversals)",
                len(self.log),
                self.state.reversal_count,
            )
        finally:
            self._cleanup()

    def _run_trial(self) -> TrialRecord:
        index = len(self.log) + 1
        stimulus = self.scheduler.next_stimulus()
        contrast = self.state.contrast

        outcome = self.presenter.present(
            stimulus, contrast, self.config.max_response_time
        )
        if outcome.aborted:
            logger.info("Run aborted by user during trial %d", index)
            raise UserAbort(
                f"Experiment aborted by user during trial {index}",
                completed_trials=self.log.records,
            )

        correct = classify_response(stimulus.present, outcome.response)
        record = TrialRecord(
            participant=self.participant,
            trial=index,
            contrast=contrast,
            stimulus_present=stimulus.present,
            response=outcome.response,
            correct=correct,
            reaction_time_ms=outcome.reaction_time_ms,
        )

        previous = self.state
        self.state = self.controller.update(previous, correct)
        if self.state.reversal_count > previous.reversal_count:
            self.reversal_contrasts.append(contrast)
            logger.info(
                "Reversal %d/%d at trial %d (contrast %.4f)",
                self.state.reversal_count,
                self.config.max_reversals,
                index,
                contrast,
            )
        self.log.append(record)
        logger.debug(
            "Trial %d: present=%s contrast=%.4f response=%s correct=%s -> %.4f",
            index,
            stimulus.present,
            contrast,
            outcome.response.name,
            correct,
            self.state.contrast,
        )

        self.presenter.inter_trial_wait(self.config.inter_stimulus_interval)
        return record

    def _cleanup(self) -> None:
        if self._cleaned_up:
            return
        self._cleaned_up = True
        self.presenter.cleanup()

    def __enter__(self) -> ExperimentRunner:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._cleanup()

    # ------------------------------------------------------------------
    # CONVENIENCE
    # ------------------------------------------------------------------
    def run(self) -> RunResult:
        """
        Run the whole experiment.

        Returns
        -------
        RunResult
            status "aborted" if the presenter requested an abort; the log
            then holds the trials completed before it.
        """
        status: Literal["completed", "aborted"] = "completed"
        with self, self.trials() as trials:
            try:
                for _ in trials:
                    pass
            except UserAbort:
                status = "aborted"
        return RunResult(
            log=self.log,
            final_state=self.state,
            status=status,
            reversal_contrasts=list(self.reversal_contrasts),
        )


def run_experiment(
    config: ExperimentConfig,
    participant: Participant,
    presenter: Presenter,
    *,
    seed: int = 0,
) -> RunResult:
    """
    Run a full staircase with a seeded JAX random source for the scheduler.

    Parameters
    ----------
    config : ExperimentConfig
    participant : Participant
    presenter : Presenter
    seed : int, default=0
        Seed for stimulus presence and orientation draws.

    Returns
    -------
    RunResult
    """
    scheduler = TrialScheduler(JaxRandomSource(seed))
    return ExperimentRunner(config, participant, presenter, scheduler).run()
