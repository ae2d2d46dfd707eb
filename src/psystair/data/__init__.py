"""
psystair.data
=============

submodule for handling trial data.

Includes:
- dataset: Participant, TrialRecord, TrialLog
- io: save/load trial logs as CSV
"""

from .dataset import EXPORT_COLUMNS, Participant, TrialLog, TrialRecord
from .io import default_data_filename, load_trials_csv, save_trials_csv

__all__ = [
    "EXPORT_COLUMNS",
    "Participant",
    "TrialLog",
    "TrialRecord",
    "default_data_filename",
    "load_trials_csv",
    "save_trials_csv",
]
