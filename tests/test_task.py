"""
test_task.py
------------

Tests for yes/no response scoring.
"""

import pytest

from psystair.model.task import Response, YesNoDetectionTask, classify_response


@pytest.mark.parametrize(
    "present, response, expected",
    [
        (True, Response.YES, True),
        (True, Response.NO, False),
        (True, Response.NONE, False),
        (False, Response.YES, False),
        (False, Response.NO, True),
        (False, Response.NONE, False),
    ],
)
def test_classification_table(present, response, expected):
    assert classify_response(present, response) is expected


def test_timeout_on_absent_stimulus_is_incorrect():
    """Withholding a response on a blank trial still counts as incorrect."""
    assert classify_response(False, Response.NONE) is False


def test_non_response_value_rejected():
    with pytest.raises(TypeError, match="Response"):
        classify_response(True, 1)


def test_response_codes():
    assert [r.code for r in (Response.YES, Response.NO, Response.NONE)] == [1, 0, -1]


def test_task_decodes_codes():
    task = YesNoDetectionTask()
    assert task.response_from_code(1) is Response.YES
    assert task.response_from_code(0) is Response.NO
    assert task.response_from_code(-1) is Response.NONE
    assert task.classify(False, Response.NO) is True
    with pytest.raises(ValueError, match="Unknown response code"):
        task.response_from_code(2)
