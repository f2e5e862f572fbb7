# pharma_core/redistributions/tests/test_create.py
import uuid

import pytest
from rest_framework.exceptions import ValidationError

from pharma_core.alerts.models import Alert, AlertType
from pharma_core.catalog.priority import PrioritySource
from pharma_core.common.exceptions import NotFoundError
from pharma_core.redistributions.models import RedistributionRequest, RedistributionStatus
from pharma_core.redistributions.services import RedistributionService

pytestmark = pytest.mark.django_db


def _create(med, origin, destination, **overrides):
    kwargs = dict(
        medication_id=med.id,
        origin_site_id=origin.id,
        destination_site_id=destination.id,
        requested_quantity=20,
        requested_by_user_id=1,
        medical_justification="Ward running out",
    )
    kwargs.update(overrides)
    return RedistributionService.create(**kwargs)


def test_critical_request_raises_alert_at_destination(critical_med, site_x, site_y, make_lot):
    make_lot(critical_med, site_x, "L-A", 50)

    req, priority = _create(critical_med, site_x, site_y)

    assert req.status == RedistributionStatus.REQUESTED
    assert req.automatic_priority == "CRITICAL"
    assert req.manual_priority is None
    assert req.completed_at is None
    assert priority.source == PrioritySource.AUTOMATIC
    assert priority.tier == "CRITICAL"

    alert = Alert.objects.get()
    assert alert.alert_type == AlertType.CRITICAL
    assert alert.site_id == site_y.id
    assert alert.redistribution_id == req.id
    assert "20 units" in alert.description
    assert site_x.name in alert.description and site_y.name in alert.description


def test_non_critical_request_raises_no_alert(low_med, site_x, site_y):
    _create(low_med, site_x, site_y)
    assert not Alert.objects.exists()


def test_manual_override_to_critical_raises_alert(low_med, site_x, site_y):
    req, priority = _create(low_med, site_x, site_y, manual_priority="CRITICAL", priority_justification="ICU surge")

    assert req.automatic_priority == "LOW"
    assert req.manual_priority == "CRITICAL"
    assert req.effective_priority == "CRITICAL"
    assert priority.is_manual
    assert Alert.objects.filter(alert_type=AlertType.CRITICAL, site=site_y).count() == 1


def test_manual_override_down_from_critical_raises_no_alert(critical_med, site_x, site_y):
    _create(critical_med, site_x, site_y, manual_priority="MEDIUM", priority_justification="Elective use")
    assert not Alert.objects.exists()


def test_suggested_lot_is_stored(low_med, site_x, site_y, make_lot):
    make_lot(low_med, site_x, "EARLY-SMALL", 5, expires_in=10)
    make_lot(low_med, site_x, "COVERS", 30, expires_in=40)

    req, _ = _create(low_med, site_x, site_y)
    assert req.lot_code == "COVERS"


def test_request_allowed_without_origin_stock(low_med, site_x, site_y):
    req, _ = _create(low_med, site_x, site_y)
    assert req.lot_code is None


@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"requested_quantity": 0}, "requested_quantity"),
        ({"requested_quantity": -3}, "requested_quantity"),
        ({"medical_justification": "   "}, "medical_justification"),
        ({"affected_patients": -1}, "affected_patients"),
        ({"manual_priority": "HIGH", "priority_justification": ""}, "priority_justification"),
    ],
)
def test_invalid_input_rejected_without_writes(critical_med, site_x, site_y, overrides, field):
    with pytest.raises(ValidationError) as exc:
        _create(critical_med, site_x, site_y, **overrides)

    assert field in exc.value.detail
    assert not RedistributionRequest.objects.exists()
    assert not Alert.objects.exists()


def test_same_origin_and_destination_rejected(critical_med, site_x):
    with pytest.raises(ValidationError) as exc:
        _create(critical_med, site_x, site_x)
    assert "destination_site_id" in exc.value.detail


def test_unknown_site_is_not_found(critical_med, site_x):
    with pytest.raises(NotFoundError):
        RedistributionService.create(
            medication_id=critical_med.id,
            origin_site_id=site_x.id,
            destination_site_id=uuid.uuid4(),
            requested_quantity=1,
            requested_by_user_id=1,
            medical_justification="x",
        )
    assert not RedistributionRequest.objects.exists()


def test_unknown_medication_is_not_found(site_x, site_y):
    with pytest.raises(NotFoundError):
        RedistributionService.create(
            medication_id=uuid.uuid4(),
            origin_site_id=site_x.id,
            destination_site_id=site_y.id,
            requested_quantity=1,
            requested_by_user_id=1,
            medical_justification="x",
        )


def test_stored_priority_projects_from_tagged_value(low_med, critical_med, site_x, site_y):
    manual, _ = _create(low_med, site_x, site_y, manual_priority="HIGH", priority_justification="Outbreak")
    manual.refresh_from_db()
    assert manual.priority.source == PrioritySource.MANUAL
    assert manual.priority.justification == "Outbreak"
    assert manual.priority_assessment.automatic.tier == "LOW"
    assert manual.effective_priority == manual.priority.tier == "HIGH"

    automatic, _ = _create(critical_med, site_x, site_y)
    automatic.refresh_from_db()
    assert automatic.priority.source == PrioritySource.AUTOMATIC
    assert automatic.effective_priority == "CRITICAL"
