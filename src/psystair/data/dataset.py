"""
dataset.py
-----------

Core data containers for psystair.

defines:
- Participant: identifying fields, read-only for a run
- TrialRecord: one completed trial, immutable
- TrialLog: append-only, ordered collection of TrialRecords

Notes
-----
- Records are plain Python values; to_numpy() converts the log into
  column arrays for analysis, with NaN for missing reaction times.
- The exported column order is fixed (EXPORT_COLUMNS).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, overload

import numpy as np

from psystair.model.task import Response

BLOCK = 1

EXPORT_COLUMNS = (
    "id",
    "gender",
    "age",
    "block",
    "trial",
    "contrastUsed",
    "stimPresent",
    "response",
    "correct",
    "reactionTime",
)


@dataclass(frozen=True)
class Participant:
    """
    Participant identity.

    Attributes
    ----------
    id : str
    gender : str
    age : int
    """

    id: str
    gender: str
    age: int


@dataclass(frozen=True)
class TrialRecord:
    """
    A single completed trial.

    Attributes
    ----------
    participant : Participant
        Who ran the trial.
    trial : int
        1-based trial index.
    contrast : float
        Contrast presented on this trial (before the staircase update).
    stimulus_present : bool
        Whether a stimulus was shown.
    response : Response
        YES, NO or NONE (timeout).
    correct : bool
        Classification of the response.
    reaction_time_ms : float | None
        Reaction time in milliseconds; None exactly when response is NONE.
    block : int
        Block number, always 1.
    """

    participant: Participant
    trial: int
    contrast: float
    stimulus_present: bool
    response: Response
    correct: bool
    reaction_time_ms: float | None = None
    block: int = BLOCK

    def __post_init__(self):
        if self.trial < 1:
            raise ValueError(f"trial index must be >= 1, got {self.trial}")
        if (self.response is Response.NONE) != (self.reaction_time_ms is None):
            raise ValueError(
                "reaction_time_ms must be given for YES/NO responses and "
                f"omitted for timeouts (response={self.response.name}, "
                f"reaction_time_ms={self.reaction_time_ms})"
            )

    def to_row(self) -> tuple[Any, ...]:
        """Return the export row, ordered as EXPORT_COLUMNS."""
        return (
            self.participant.id,
            self.participant.gender,
            self.participant.age,
            self.block,
            self.trial,
            self.contrast,
            self.stimulus_present,
            self.response.code,
            self.correct,
            float("nan") if self.reaction_time_ms is None else self.reaction_time_ms,
        )


class TrialLog:
    """
    Append-only ordered log of TrialRecords.

    Records must arrive with consecutive trial indices starting at 1; once
    appended they are never modified or removed.
    """

    def __init__(self) -> None:
        self._records: list[TrialRecord] = []

    def append(self, record: TrialRecord) -> None:
        """
        Append the next trial.

        Parameters
        ----------
        record : TrialRecord
            Must carry trial index len(self) + 1.
        """
        expected = len(self._records) + 1
        if record.trial != expected:
            raise ValueError(
                f"Expected trial {expected}, got trial {record.trial}"
            )
        self._records.append(record)

    @property
    def records(self) -> tuple[TrialRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        """Return number of trials."""
        return len(self._records)

    def __iter__(self) -> Iterator[TrialRecord]:
        return iter(tuple(self._records))

    @overload
    def __getitem__(self, index: int) -> TrialRecord: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[TrialRecord, ...]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._records[index])
        return self._records[index]

    def to_rows(self) -> list[tuple[Any, ...]]:
        """Return one export row per trial, ordered as EXPORT_COLUMNS."""
        return [record.to_row() for record in self._records]

    def to_numpy(self) -> dict[str, np.ndarray]:
        """
        Return the log as numpy columns keyed by EXPORT_COLUMNS.

        Returns
        -------
        dict[str, np.ndarray]
            Numeric columns use numeric dtypes; reactionTime is float with
            NaN on timeouts.
        """
        rows = self.to_rows()
        columns = list(zip(*rows)) if rows else [()] * len(EXPORT_COLUMNS)
        dtypes = {
            "id": str,
            "gender": str,
            "age": int,
            "block": int,
            "trial": int,
            "contrastUsed": float,
            "stimPresent": bool,
            "response": int,
            "correct": bool,
            "reactionTime": float,
        }
        return {
            name: np.asarray(column, dtype=dtypes[name])
            for name, column in zip(EXPORT_COLUMNS, columns)
        }
