from io import StringIO

import pytest
from django.core.management import call_command

from pharma_core.alerts.models import Alert, AlertType

pytestmark = pytest.mark.django_db


def test_command_raises_expiry_alert_per_lot(make_lot, critical_med, low_med, site_x, site_y):
    make_lot(critical_med, site_x, "SOON", 10, expires_in=5)
    make_lot(low_med, site_y, "EXPIRED", 3, expires_in=-1)
    make_lot(low_med, site_y, "FINE", 3, expires_in=200)
    make_lot(low_med, site_x, "EMPTY", 0, expires_in=5)

    out = StringIO()
    call_command("raise_expiry_alerts", stdout=out)

    alerts = Alert.objects.filter(alert_type=AlertType.EXPIRY)
    assert alerts.count() == 2
    soon = alerts.get(meta__lot_code="SOON")
    assert soon.priority_tier == "CRITICAL"
    assert soon.site_id == site_x.id
    assert "Raised 2 expiry alert(s)" in out.getvalue()


def test_command_respects_days_option(make_lot, low_med, site_x, settings):
    make_lot(low_med, site_x, "L1", 10, expires_in=20)

    call_command("raise_expiry_alerts", "--days", "10", stdout=StringIO())
    assert not Alert.objects.exists()

    settings.PHARMA_INVENTORY = {**settings.PHARMA_INVENTORY, "EXPIRY_WARNING_DAYS": 30}
    call_command("raise_expiry_alerts", stdout=StringIO())
    assert Alert.objects.count() == 1
