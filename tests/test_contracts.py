"""
Tests for request contracts: the inputs accepted at the HTTP boundary.
"""

import pytest
from pydantic import ValidationError

from shared.contracts.analysis import (
    BusinessRequest,
    ClimateInputs,
    ClimateRequest,
    Constraints,
    CyberInputs,
    Task,
)

VALID_BUSINESS = {
    "sales": [{"date": "2025-01-01", "qty": 100, "revenue": 5000}],
    "stock": [{"sku": "PROD-001", "qty": 50, "leadDays": 14}],
    "suppliers": [{"name": "Supplier A", "onTimeRate": 0.9, "region": "Dakar"}],
}


def test_request_defaults():
    request = ClimateRequest.model_validate({
        "inputs": {"lat": 14.7167, "lon": -17.4677, "horizonDays": 10, "sector": "agri"},
    })
    assert request.task == Task.CLIMATE
    assert request.locale == "fr-TN"
    assert request.constraints == Constraints(max_recos=5, tone="concise", cost_mode="cheap_fast")


def test_requests_are_immutable(climate_request):
    with pytest.raises(ValidationError):
        climate_request.locale = "en"


@pytest.mark.parametrize(
    "field, value",
    [("lat", 95), ("lon", -181), ("horizonDays", 0), ("horizonDays", 11), ("sector", "mining")],
)
def test_climate_inputs_out_of_range(field, value):
    data = {"lat": 14.7, "lon": -17.4, "horizonDays": 10, "sector": "agri", field: value}
    with pytest.raises(ValidationError):
        ClimateInputs.model_validate(data)


def test_business_on_time_rate_above_one_is_rejected():
    body = {**VALID_BUSINESS, "suppliers": [{"name": "A", "onTimeRate": 1.5, "region": "Dakar"}]}
    with pytest.raises(ValidationError) as exc_info:
        BusinessRequest.model_validate({"inputs": body})
    assert exc_info.value.errors()[0]["loc"][-1] == "onTimeRate"


def test_business_date_format_is_enforced():
    body = {**VALID_BUSINESS, "sales": [{"date": "01/01/2025", "qty": 1, "revenue": 1}]}
    with pytest.raises(ValidationError):
        BusinessRequest.model_validate({"inputs": body})


@pytest.mark.parametrize("field", ["sales", "stock", "suppliers"])
def test_business_lists_must_not_be_empty(field):
    with pytest.raises(ValidationError):
        BusinessRequest.model_validate({"inputs": {**VALID_BUSINESS, field: []}})


def test_cyber_event_type_is_enforced_and_metadata_optional():
    CyberInputs.model_validate({"events": [{"id": "e1", "type": "url", "content": "https://example.com"}]})
    with pytest.raises(ValidationError):
        CyberInputs.model_validate({"events": [{"id": "e1", "type": "sms", "content": "hi"}]})


@pytest.mark.parametrize(
    "constraints",
    [{"max_recos": 0}, {"max_recos": 11}, {"tone": "casual"}, {"cost_mode": "free"}],
)
def test_constraints_bounds(constraints):
    with pytest.raises(ValidationError):
        Constraints.model_validate(constraints)


def test_task_names():
    assert Task.CLIMATE.internal_name == "climate_guard"
    assert Task.BUSINESS.internal_name == "business_shield"
    assert Task.CYBER.internal_name == "cyberprotect"
