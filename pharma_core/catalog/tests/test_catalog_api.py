import uuid

import pytest


@pytest.mark.django_db
def test_priority_endpoint_returns_automatic_tier(api_client, critical_med):
    res = api_client.get(f"/api/v1/medications/{critical_med.id}/priority/")
    assert res.status_code == 200
    assert res.data["tier"] == "CRITICAL"
    assert res.data["source"] == "AUTOMATIC"


@pytest.mark.django_db
def test_priority_endpoint_unknown_medication(api_client):
    res = api_client.get(f"/api/v1/medications/{uuid.uuid4()}/priority/")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "not_found"


@pytest.mark.django_db
def test_medication_list(api_client, critical_med, low_med):
    res = api_client.get("/api/v1/medications/")
    assert res.status_code == 200
    names = [m["name"] for m in res.data["results"]]
    assert names == ["Cisplatin", "Hydrocortisone"]
