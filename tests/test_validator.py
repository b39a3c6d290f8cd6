"""
Tests for response schema validation.
"""

import copy

import pytest

from shared.analysis.validator import validate_response
from shared.contracts.analysis import BusinessResponse, ClimateResponse, CyberResponse, Task
from shared.errors import SchemaError
from tests.conftest import BUSINESS_REPLY, CLIMATE_REPLY, CYBER_REPLY


def _paths(exc_info):
    return [v.path for v in exc_info.value.violations]


def test_valid_replies_become_typed_responses():
    assert isinstance(validate_response(Task.CLIMATE, CLIMATE_REPLY), ClimateResponse)
    assert isinstance(validate_response("business", BUSINESS_REPLY), BusinessResponse)
    assert isinstance(validate_response(Task.CYBER, CYBER_REPLY), CyberResponse)


def test_business_missing_score_names_score():
    candidate = copy.deepcopy(BUSINESS_REPLY)
    del candidate["score"]

    with pytest.raises(SchemaError) as exc_info:
        validate_response(Task.BUSINESS, candidate)

    assert "score" in _paths(exc_info)
    assert exc_info.value.code == "SCHEMA_ERROR"
    assert exc_info.value.task == "business_shield"


def test_climate_confidence_out_of_range_names_confidence():
    candidate = copy.deepcopy(CLIMATE_REPLY)
    candidate["findings"][0]["confidence"] = 1.5

    with pytest.raises(SchemaError) as exc_info:
        validate_response(Task.CLIMATE, candidate)

    assert any(path.endswith("confidence") for path in _paths(exc_info))
    assert _paths(exc_info) == ["findings.0.confidence"]


@pytest.mark.parametrize("score", [101, -1, 62.5, "62"])
def test_business_score_must_be_int_in_range(score):
    candidate = copy.deepcopy(BUSINESS_REPLY)
    candidate["score"] = score

    with pytest.raises(SchemaError) as exc_info:
        validate_response(Task.BUSINESS, candidate)

    assert "score" in _paths(exc_info)


def test_negative_saving_is_rejected():
    candidate = copy.deepcopy(CLIMATE_REPLY)
    candidate["recommendations"][0]["est_saving_usd"] = -10

    with pytest.raises(SchemaError) as exc_info:
        validate_response(Task.CLIMATE, candidate)

    assert _paths(exc_info) == ["recommendations.0.est_saving_usd"]


def test_numeric_strings_are_not_coerced():
    candidate = copy.deepcopy(CLIMATE_REPLY)
    candidate["findings"][0]["confidence"] = "0.8"

    with pytest.raises(SchemaError):
        validate_response(Task.CLIMATE, candidate)


def test_cyber_requires_actions_and_findings():
    candidate = {"ok": True, "task": "cyberprotect"}

    with pytest.raises(SchemaError) as exc_info:
        validate_response(Task.CYBER, candidate)

    assert set(_paths(exc_info)) == {"actions", "findings"}


def test_unknown_action_type_and_classification_are_rejected():
    candidate = copy.deepcopy(CYBER_REPLY)
    candidate["actions"][0]["type"] = "delete"
    candidate["actions"][0]["classification"] = "evil"

    with pytest.raises(SchemaError) as exc_info:
        validate_response(Task.CYBER, candidate)

    assert set(_paths(exc_info)) == {"actions.0.type", "actions.0.classification"}


def test_wrong_task_literal_is_rejected():
    candidate = copy.deepcopy(CLIMATE_REPLY)
    candidate["task"] = "business_shield"

    with pytest.raises(SchemaError) as exc_info:
        validate_response(Task.CLIMATE, candidate)

    assert "task" in _paths(exc_info)


def test_invalid_risk_level_is_rejected():
    candidate = copy.deepcopy(CLIMATE_REPLY)
    candidate["risk_level"] = "extreme"

    with pytest.raises(SchemaError) as exc_info:
        validate_response(Task.CLIMATE, candidate)

    assert _paths(exc_info) == ["risk_level"]


def test_non_object_candidate_is_rejected():
    with pytest.raises(SchemaError) as exc_info:
        validate_response(Task.CLIMATE, [CLIMATE_REPLY])

    assert _paths(exc_info) == ["$"]


def test_schema_error_message_lists_violations():
    candidate = copy.deepcopy(BUSINESS_REPLY)
    del candidate["score"]

    with pytest.raises(SchemaError) as exc_info:
        validate_response(Task.BUSINESS, candidate)

    assert "score" in str(exc_info.value)
    assert exc_info.value.violations[0].to_dict()["path"] == "score"
