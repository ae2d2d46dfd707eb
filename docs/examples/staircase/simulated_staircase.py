"""
Simulated staircase run: estimate a detection threshold offline
----------------------------------------------------------------

This script runs the full trial loop against a simulated observer instead of
a display and keyboard:

1. Define the staircase (the values used for the Gabor detection task).
2. Create a SimulatedObserver with a known detection threshold.
3. Run the staircase until 8 reversals and save the trial log as CSV.
4. Plot the contrast track with reversals marked.

The observer says "yes" to a present stimulus with probability
    p = 1 - exp(-(contrast / threshold) ** slope)
and occasionally reports a stimulus on blank trials (false alarms).

Note:
- Reversal contrasts are reported as raw data; no psychometric function is
  fitted here.
"""

from __future__ import annotations

import logging
import os
import sys

import matplotlib.pyplot as plt
import numpy as np

# Allow running the script directly from repo root without installing the package.
# (Alternative: export PYTHONPATH=$PWD/src)
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../src")))
# --8<-- [start:imports]
from psystair import ExperimentConfig, Participant, SimulatedObserver, run_experiment
from psystair.data import default_data_filename, save_trials_csv
from psystair.utils.rng import JaxRandomSource

# --8<-- [end:imports]

OUTPUT_DIR = os.path.join(os.path.dirname(__file__), "output")
TRUE_THRESHOLD = 0.08

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# 1) Staircase configuration
print("[1/4] Configuring staircase...")
# --8<-- [start:config]
config = ExperimentConfig(
    initial_contrast=0.2,
    contrast_step=0.02,
    min_contrast=0.01,
    max_contrast=0.5,
    max_reversals=8,
    max_response_time=3.0,
    inter_stimulus_interval=1.0,
)
participant = Participant(id="02", gender="M", age=25)
# --8<-- [end:config]

# 2) Simulated observer
print("[2/4] Creating simulated observer...")
observer = SimulatedObserver(
    JaxRandomSource(1),
    threshold=TRUE_THRESHOLD,
    slope=3.5,
    false_alarm_rate=0.05,
    timeout_rate=0.02,
)

# 3) Run
print("[3/4] Running staircase...")
# --8<-- [start:run]
result = run_experiment(config, participant, observer, seed=0)
os.makedirs(OUTPUT_DIR, exist_ok=True)
save_trials_csv(result.log, os.path.join(OUTPUT_DIR, default_data_filename(participant)))
# --8<-- [end:run]
print(
    f"      {len(result.log)} trials, status={result.status}, "
    f"reversal contrasts={np.round(result.reversal_contrasts, 3).tolist()}"
)

# 4) Plot contrast track
print("[4/4] Plotting...")
columns = result.log.to_numpy()
trials = columns["trial"]
contrast = columns["contrastUsed"]
correct = columns["correct"]

fig, ax = plt.subplots(figsize=(8, 4))
ax.plot(trials, contrast, color="#7f7f7f", lw=1.0, zorder=1)
ax.scatter(trials[correct], contrast[correct], s=18, c="#1b9e77", label="Correct", zorder=2)
ax.scatter(trials[~correct], contrast[~correct], s=18, c="#d95f02", label="Incorrect", zorder=2)
ax.axhline(TRUE_THRESHOLD, color="#377eb8", ls="--", lw=1.5, label="Observer threshold")
ax.set_xlabel("Trial")
ax.set_ylabel("Contrast")
ax.set_title(f"Staircase track, participant {participant.id}")
ax.legend(loc="upper right")
ax.grid(True, alpha=0.3)
plt.tight_layout()
fig.savefig(os.path.join(OUTPUT_DIR, "staircase_track.png"), dpi=200, bbox_inches="tight")
