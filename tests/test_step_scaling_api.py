"""
tests/test_step_scaling_api.py

HTTP contract tests for the step scaling planning endpoint.
"""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.step_scaling_service import StepScalingPlanService, get_step_scaling_plan_service


def _body(**overrides) -> dict:
    body = {
        "metric": {"namespace": "App/Queue", "metric_name": "Backlog", "statistic": "Average"},
        "scaling_steps": [
            {"upper": 10, "change": -1},
            {"lower": 10, "upper": 50, "change": 0},
            {"lower": 50, "change": 3},
        ],
        "scaling_target": "service/web",
        "cooldown_sec": 60,
    }
    body.update(overrides)
    return body


@pytest.fixture()
def client() -> TestClient:
    application = create_app()
    return TestClient(application)


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_plan_returns_both_alarms(client) -> None:
    response = client.post("/step-scaling/plan", json=_body())

    assert response.status_code == 200
    payload = response.json()
    assert payload["intervals"] == [
        {"lower": None, "upper": 10.0, "change": -1.0},
        {"lower": 10.0, "upper": 50.0, "change": 0.0},
        {"lower": 50.0, "upper": None, "change": 3.0},
    ]

    alarms = {alarm["name"]: alarm for alarm in payload["alarms"]}
    assert set(alarms) == {"LowerAlarm", "UpperAlarm"}

    lower = alarms["LowerAlarm"]
    assert lower["threshold"] == 10.0
    assert lower["comparison"] == "<="
    assert lower["period_sec"] == 60
    assert lower["evaluation_periods"] == 1
    [action] = lower["actions"]
    assert action["name"] == "LowerPolicy"
    assert action["adjustment_type"] == "ChangeInCapacity"
    assert action["metric_aggregation_type"] == "Average"
    assert action["cooldown_sec"] == 60
    assert action["scaling_target"] == "service/web"
    assert action["adjustments"] == [{"adjustment": -1.0, "lower_bound": None, "upper_bound": 0.0}]

    upper = alarms["UpperAlarm"]
    assert upper["comparison"] == ">="
    assert upper["actions"][0]["adjustments"] == [
        {"adjustment": 3.0, "lower_bound": 0.0, "upper_bound": None}
    ]


def test_unsupported_statistic_is_422(client) -> None:
    body = _body(metric={"namespace": "App/Web", "metric_name": "Latency", "statistic": "p99"})
    response = client.post("/step-scaling/plan", json=body)

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "unsupported_statistic"


def test_non_monotonic_is_422(client) -> None:
    body = _body(scaling_steps=[{"upper": 5, "change": 2}, {"lower": 5, "change": -1}])
    response = client.post("/step-scaling/plan", json=body)

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "non_monotonic_adjustment"


def test_step_limit_is_enforced() -> None:
    application = create_app()
    application.dependency_overrides[get_step_scaling_plan_service] = lambda: StepScalingPlanService(
        max_scaling_steps=2
    )
    response = TestClient(application).post("/step-scaling/plan", json=_body())

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["code"] == "too_many_intervals"
    assert detail["context"] == {"count": 3, "limit": 2}


def test_malformed_step_is_rejected_by_schema(client) -> None:
    body = _body(scaling_steps=[{"upper": 5}, {"lower": 5, "change": 1}])
    response = client.post("/step-scaling/plan", json=body)

    assert response.status_code == 422
    assert isinstance(response.json()["detail"], list)


def test_bounded_metric_range_is_accepted(client) -> None:
    body = _body(
        scaling_steps=[
            {"lower": 0, "upper": 10, "change": -1},
            {"lower": 10, "upper": 50, "change": 0},
            {"lower": 50, "upper": 100, "change": 2},
        ]
    )
    response = client.post("/step-scaling/plan", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert payload["intervals"] == [
        {"lower": None, "upper": 10.0, "change": -1.0},
        {"lower": 10.0, "upper": 50.0, "change": 0.0},
        {"lower": 50.0, "upper": None, "change": 2.0},
    ]
    assert {alarm["name"]: alarm["threshold"] for alarm in payload["alarms"]} == {
        "LowerAlarm": 10.0,
        "UpperAlarm": 50.0,
    }


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_bound_is_rejected_by_schema(client, value: float) -> None:
    body = _body(
        scaling_steps=[
            {"upper": value, "change": -1},
            {"lower": value, "upper": 50, "change": 0},
            {"lower": 50, "change": 3},
        ]
    )
    # json.dumps writes NaN / Infinity tokens, which the JSON parser accepts.
    response = client.post(
        "/step-scaling/plan",
        content=json.dumps(body),
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 422
    assert isinstance(response.json()["detail"], list)
    [first, *_] = response.json()["detail"]
    assert first["loc"][:2] == ["body", "scaling_steps"]
    assert "input" not in first
