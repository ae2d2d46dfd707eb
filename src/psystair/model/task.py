"""
task.py
-------

Decision rule for the yes/no detection task.

On each trial a stimulus is either shown or not, and the participant answers
"yes" (I saw it) or "no" (I did not), or fails to answer before the response
window closes.

Scoring
-------
- present + YES  -> correct
- absent  + NO   -> correct
- anything else  -> incorrect

A timeout (Response.NONE) is incorrect in both conditions. This includes
absent-stimulus trials, where withholding a report could be read as the
right behavior; the rule is kept as is and flagged for review rather than
changed.

Connections
-----------
- ExperimentRunner classifies every presenter outcome with classify_response
  and feeds the result to the StaircaseController.
- Response codes (1 / 0 / -1) are the values written to the exported dataset.
"""

from __future__ import annotations

from enum import Enum


class Response(Enum):
    """Participant response on a single trial, valued by its export code."""

    YES = 1
    NO = 0
    NONE = -1

    @property
    def code(self) -> int:
        return self.value


def classify_response(stimulus_present: bool, response: Response) -> bool:
    """
    Score a single trial.

    Parameters
    ----------
    stimulus_present : bool
        Whether a stimulus was shown on the trial.
    response : Response
        Observed response; Response.NONE for a timeout.

    Returns
    -------
    bool
        True if the response is correct.
    """
    if not isinstance(response, Response):
        raise TypeError(f"response must be a Response, got {type(response).__name__}")
    if stimulus_present:
        return response is Response.YES
    return response is Response.NO


class YesNoDetectionTask:
    """
    Yes/no detection task.

    Bundles the scoring rule with decoding of exported response codes, so
    loaders and presenters share a single definition of the task.

    Examples
    --------
    >>> task = YesNoDetectionTask()
    >>> task.classify(True, Response.YES)
    True
    >>> task.response_from_code(-1)
    <Response.NONE: -1>
    """

    def classify(self, stimulus_present: bool, response: Response) -> bool:
        """Return True if `response` is correct for this stimulus condition."""
        return classify_response(stimulus_present, response)

    @staticmethod
    def response_from_code(code: int) -> Response:
        """Decode an exported response code (1, 0 or -1)."""
        try:
            return Response(int(code))
        except ValueError:
            raise ValueError(
                f"Unknown response code {code!r}; expected 1, 0 or -1"
            ) from None
