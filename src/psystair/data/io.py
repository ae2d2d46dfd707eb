"""
io.py
-----

Saving and loading trial logs.

Supports:
- CSV, one row per trial in EXPORT_COLUMNS order

Notes
-----
- Booleans are written as 0/1 and responses as 1 / 0 / -1.
- A timeout's reaction time is written as "nan".
"""

from __future__ import annotations

import csv
import math
from pathlib import Path
from typing import Union

from psystair.model.task import YesNoDetectionTask

from .dataset import EXPORT_COLUMNS, Participant, TrialLog, TrialRecord

PathLike = Union[str, Path]


def default_data_filename(participant: Participant) -> str:
    """Return the conventional file name for a participant's data."""
    return f"Participant_{participant.id}_Data_Staircase.csv"


def save_trials_csv(log: TrialLog, path: PathLike) -> None:
    """
    Save a TrialLog to a CSV file.

    Parameters
    ----------
    log : TrialLog
    path : str or Path
    """
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(EXPORT_COLUMNS)
        for row in log.to_rows():
            writer.writerow(
                [int(value) if isinstance(value, bool) else value for value in row]
            )


def load_trials_csv(path: PathLike) -> TrialLog:
    """
    Load a TrialLog from a CSV file written by save_trials_csv.

    Parameters
    ----------
    path : str or Path

    Returns
    -------
    TrialLog
    """
    log = TrialLog()
    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        missing = set(EXPORT_COLUMNS) - set(reader.fieldnames or ())
        if missing:
            raise ValueError(f"{path}: missing columns {sorted(missing)}")
        for row in reader:
            reaction_time = float(row["reactionTime"])
            log.append(
                TrialRecord(
                    participant=Participant(
                        id=row["id"], gender=row["gender"], age=int(row["age"])
                    ),
                    trial=int(row["trial"]),
                    contrast=float(row["contrastUsed"]),
                    stimulus_present=bool(int(row["stimPresent"])),
                    response=YesNoDetectionTask.response_from_code(int(row["response"])),
                    correct=bool(int(row["correct"])),
                    reaction_time_ms=None if math.isnan(reaction_time) else reaction_time,
                    block=int(row["block"]),
                )
            )
    return log
