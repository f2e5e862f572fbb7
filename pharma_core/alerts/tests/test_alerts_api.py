import pytest

from pharma_core.alerts.models import AlertStatus, AlertType
from pharma_core.alerts.services import AlertService

pytestmark = pytest.mark.django_db


def _raise(med, site, alert_type=AlertType.LOW_STOCK, tier="LOW"):
    return AlertService.raise_alert(
        medication_id=med.id,
        site_id=site.id,
        alert_type=alert_type,
        priority_tier=tier,
        description="api alert",
    )


def test_default_scope_is_assigned_site(api_client, low_med, site_x, site_y):
    mine = _raise(low_med, site_x)
    _raise(low_med, site_y)

    res = api_client.get("/api/v1/alerts/")
    assert res.status_code == 200
    assert [a["id"] for a in res.json()["results"]] == [str(mine.id)]


def test_scope_all_and_type_filter(api_client, low_med, site_x, site_y):
    _raise(low_med, site_x, AlertType.STOCKOUT)
    _raise(low_med, site_y, AlertType.STOCKOUT)
    _raise(low_med, site_y, AlertType.EXPIRY)

    res = api_client.get("/api/v1/alerts/", {"scope": "all", "alert_type": "STOCKOUT"})
    assert res.status_code == 200
    assert res.json()["count"] == 2


def test_invalid_scope(api_client):
    res = api_client.get("/api/v1/alerts/", {"scope": "everything"})
    assert res.status_code == 400


def test_resolve_endpoint_uses_authenticated_actor(api_client, user, low_med, site_x):
    alert = _raise(low_med, site_x)

    res = api_client.post(f"/api/v1/alerts/{alert.id}/resolve/", {"observations": "checked"}, format="json")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == AlertStatus.RESOLVED
    assert body["resolved_by_user_id"] == user.id

    res = api_client.get("/api/v1/alerts/", {"scope": "resolved"})
    assert res.json()["count"] == 1


def test_stats_endpoint(api_client, low_med, site_x):
    _raise(low_med, site_x, AlertType.STOCKOUT, tier="CRITICAL")

    res = api_client.get("/api/v1/alerts/stats/")
    assert res.status_code == 200
    assert res.json() == {"total": 1, "critical": 1, "expiry": 0, "stockout": 1}

    res = api_client.get("/api/v1/alerts/stats/", {"scope": "resolved"})
    assert res.json() == {"count": 0, "avg_resolution_hours": None}
