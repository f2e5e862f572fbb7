import uuid

import pytest

pytestmark = pytest.mark.django_db


def test_not_found_envelope_carries_request_id(api_client):
    res = api_client.get(f"/api/v1/medications/{uuid.uuid4()}/priority/", HTTP_X_REQUEST_ID="req-123")
    assert res.status_code == 404
    assert res["X-Request-ID"] == "req-123"
    assert "X-Response-Time-Ms" in res

    error = res.json()["error"]
    assert error["code"] == "not_found"
    assert error["request_id"] == "req-123"
    assert error["details"] is None


def test_request_id_generated_when_missing(api_client):
    res = api_client.get("/api/v1/sites/")
    assert res.status_code == 200
    assert len(res["X-Request-ID"]) == 32


def test_invalid_query_param_is_validation_error(api_client):
    res = api_client.get("/api/v1/inventory/lots/", {"site": "not-a-uuid"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "validation_error"
    assert error["details"] == {"site": ["Invalid UUID"]}


def test_query_param_errors_share_list_shape(api_client):
    res = api_client.get("/api/v1/inventory/lots/expiring/", {"days": "soon"})
    assert res.status_code == 400
    assert res.json()["error"]["details"] == {"days": ["Must be an integer."]}

    res = api_client.get("/api/v1/inventory/stock-suggestions/")
    assert res.status_code == 400
    assert res.json()["error"]["details"] == {"medication": ["This field is required."]}
