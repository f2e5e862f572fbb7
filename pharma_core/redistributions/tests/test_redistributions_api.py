import pytest
from rest_framework.test import APIClient

from pharma_core.redistributions.models import RedistributionStatus
from pharma_core.redistributions.services import RedistributionService

pytestmark = pytest.mark.django_db


def _create(med, origin, destination, quantity=10, **extra):
    req, _ = RedistributionService.create(
        medication_id=med.id,
        origin_site_id=origin.id,
        destination_site_id=destination.id,
        requested_quantity=quantity,
        requested_by_user_id=1,
        medical_justification="Shortage",
        **extra,
    )
    return req


def test_create_uses_authenticated_requester(api_client, user, critical_med, site_x, site_y, make_lot):
    make_lot(critical_med, site_x, "L1", 50)

    res = api_client.post(
        "/api/v1/redistributions/",
        {
            "medication_id": str(critical_med.id),
            "origin_site_id": str(site_x.id),
            "destination_site_id": str(site_y.id),
            "requested_quantity": 20,
            "medical_justification": "Chemotherapy cycle",
            "affected_patients": 4,
        },
        format="json",
    )
    assert res.status_code == 201
    body = res.json()
    assert body["redistribution"]["requested_by_user_id"] == user.id
    assert body["redistribution"]["lot_code"] == "L1"
    assert body["priority"] == {"source": "AUTOMATIC", "tier": "CRITICAL", "justification": ""}


def test_create_validation_envelope(api_client, low_med, site_x):
    res = api_client.post(
        "/api/v1/redistributions/",
        {
            "medication_id": str(low_med.id),
            "origin_site_id": str(site_x.id),
            "destination_site_id": str(site_x.id),
            "requested_quantity": 5,
            "medical_justification": "x",
        },
        format="json",
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "validation_error"
    assert "destination_site_id" in error["details"]
    assert error["request_id"]


def test_complete_endpoint_and_double_completion(api_client, user, low_med, site_x, site_y, make_lot):
    make_lot(low_med, site_x, "L1", 50)
    req = _create(low_med, site_x, site_y)

    res = api_client.post(f"/api/v1/redistributions/{req.id}/complete/", {"approved_quantity": 8}, format="json")
    assert res.status_code == 200
    body = res.json()
    assert body["redistribution"]["status"] == RedistributionStatus.COMPLETED
    assert body["redistribution"]["completed_by_user_id"] == user.id
    assert body["lot_code"] == "L1"

    res = api_client.post(f"/api/v1/redistributions/{req.id}/complete/", {"approved_quantity": 8}, format="json")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "invalid_state"


def test_complete_insufficient_stock_details(api_client, low_med, site_x, site_y, make_lot):
    make_lot(low_med, site_x, "A", 6)
    make_lot(low_med, site_x, "B", 6)
    req = _create(low_med, site_x, site_y)

    res = api_client.post(f"/api/v1/redistributions/{req.id}/complete/", {"approved_quantity": 10}, format="json")
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "insufficient_stock"
    assert error["details"] == {"reason": "no_single_lot", "available": 12, "requested": 10}


def test_detail_includes_origin_stock(api_client, low_med, site_x, site_y, make_lot):
    make_lot(low_med, site_x, "L1", 30)
    make_lot(low_med, site_x, "L2", 12)
    req = _create(low_med, site_x, site_y)

    res = api_client.get(f"/api/v1/redistributions/{req.id}/")
    assert res.status_code == 200
    assert res.json()["origin_stock"] == 42


def test_list_priority_filter_matches_automatic_or_manual(api_client, low_med, critical_med, site_x, site_y):
    auto_critical = _create(critical_med, site_x, site_y)
    manual_critical = _create(low_med, site_x, site_y, manual_priority="CRITICAL", priority_justification="ICU")
    _create(low_med, site_x, site_y)

    res = api_client.get("/api/v1/redistributions/", {"priority": "CRITICAL"})
    assert res.status_code == 200
    ids = {r["id"] for r in res.json()["results"]}
    assert ids == {str(auto_critical.id), str(manual_critical.id)}


def test_stats(api_client, low_med, critical_med, site_x, site_y, make_lot):
    make_lot(low_med, site_x, "L1", 100)
    done = _create(low_med, site_x, site_y)
    RedistributionService.complete(request_id=done.id, approved_quantity=10, actor_user_id=1)
    _create(critical_med, site_x, site_y)
    _create(low_med, site_x, site_y, manual_priority="CRITICAL", priority_justification="ICU")
    # Manual override away from CRITICAL is not a critical pending request.
    _create(critical_med, site_x, site_y, manual_priority="LOW", priority_justification="Stable patient")

    res = api_client.get("/api/v1/redistributions/stats/")
    assert res.status_code == 200
    assert res.json() == {"total": 4, "pending": 3, "completed": 1, "critical_pending": 2}


def test_requires_authentication(low_med):
    res = APIClient().get("/api/v1/redistributions/")
    assert res.status_code == 401
