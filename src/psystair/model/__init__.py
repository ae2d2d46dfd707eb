"""
psystair.model
==============

Task definitions:
- Response: yes / no / timeout, with export codes
- classify_response: scoring rule for the yes/no detection task
- YesNoDetectionTask: task object wrapping the scoring rule

typical usage:

    from psystair.model import Response, classify_response
"""

from .task import Response, YesNoDetectionTask, classify_response

__all__ = ["Response", "YesNoDetectionTask", "classify_response"]
