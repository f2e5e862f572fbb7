# pharma_core/inventory/tests/test_stock_service.py
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from pharma_core.alerts.models import Alert, AlertStatus, AlertType
from pharma_core.common.exceptions import InsufficientStockError
from pharma_core.inventory.models import InventoryLot
from pharma_core.inventory.services import StockService
from pharma_core.movements.models import MovementRecord, MovementType

pytestmark = pytest.mark.django_db


def test_entry_creates_lot_and_movement(low_med, site_x, user):
    result = StockService.record_entry(
        medication_id=low_med.id,
        site_id=site_x.id,
        lot_code="NEW-1",
        quantity=25,
        actor_user_id=user.id,
        expiry_date=timezone.localdate() + timedelta(days=365),
        supplier="Lab Dos",
    )
    assert result.lot_created is True
    assert result.lot.quantity == 25
    assert result.movement.movement_type == MovementType.ENTRY
    assert result.movement.quantity == 25
    assert result.movement.actor_user_id == user.id


def test_entry_leaves_active_alerts_in_place(low_med, site_x, user, make_lot):
    make_lot(low_med, site_x, "L1", 1)
    StockService.record_exit(
        medication_id=low_med.id,
        site_id=site_x.id,
        quantity=1,
        actor_user_id=user.id,
        lot_code="L1",
    )
    assert Alert.objects.filter(status=AlertStatus.ACTIVE, alert_type=AlertType.STOCKOUT).count() == 1

    result = StockService.record_entry(
        medication_id=low_med.id,
        site_id=site_x.id,
        lot_code="L1",
        quantity=1,
        actor_user_id=user.id,
    )
    assert result.lot_created is False
    assert result.lot.quantity == 1
    stockout = Alert.objects.get(alert_type=AlertType.STOCKOUT)
    assert stockout.status == AlertStatus.ACTIVE
    assert stockout.resolved_at is None


def test_exit_from_named_lot(high_med, site_x, user, make_lot):
    make_lot(high_med, site_x, "L1", 50)
    result = StockService.record_exit(
        medication_id=high_med.id,
        site_id=site_x.id,
        quantity=20,
        actor_user_id=user.id,
        lot_code="L1",
        patient_document="CC-123",
    )
    assert result.lot.quantity == 30
    assert result.movement.movement_type == MovementType.EXIT
    assert result.movement.patient_document == "CC-123"
    assert result.alerts == []


def test_exit_without_lot_uses_fefo(high_med, site_x, user, make_lot):
    make_lot(high_med, site_x, "LATE", 50, expires_in=200)
    make_lot(high_med, site_x, "EARLY", 50, expires_in=20)

    result = StockService.record_exit(medication_id=high_med.id, site_id=site_x.id, quantity=10, actor_user_id=user.id)
    assert result.movement.lot_code == "EARLY"
    assert InventoryLot.objects.get(lot_code="EARLY").quantity == 40


def test_exit_raises_alerts_for_resulting_stock(high_med, site_x, user, make_lot):
    make_lot(high_med, site_x, "L1", 12)
    result = StockService.record_exit(medication_id=high_med.id, site_id=site_x.id, quantity=9, actor_user_id=user.id)

    types = sorted(a.alert_type for a in result.alerts)
    assert types == [AlertType.CRITICAL, AlertType.LOW_STOCK]


def test_exit_to_zero_raises_stockout(low_med, site_x, user, make_lot):
    make_lot(low_med, site_x, "L1", 3)
    result = StockService.record_exit(medication_id=low_med.id, site_id=site_x.id, quantity=3, actor_user_id=user.id)
    assert [a.alert_type for a in result.alerts] == [AlertType.STOCKOUT]


def test_exit_without_single_covering_lot(low_med, site_x, user, make_lot):
    make_lot(low_med, site_x, "A", 6)
    make_lot(low_med, site_x, "B", 6)

    with pytest.raises(InsufficientStockError) as exc:
        StockService.record_exit(medication_id=low_med.id, site_id=site_x.id, quantity=10, actor_user_id=user.id)
    assert exc.value.reason == InsufficientStockError.NO_SINGLE_LOT
    assert not MovementRecord.objects.exists()


def test_exit_beyond_site_total(low_med, site_x, user, make_lot):
    make_lot(low_med, site_x, "A", 6)
    with pytest.raises(InsufficientStockError) as exc:
        StockService.record_exit(medication_id=low_med.id, site_id=site_x.id, quantity=7, actor_user_id=user.id)
    assert exc.value.reason == InsufficientStockError.AGGREGATE


def test_exit_rejects_non_positive_quantity(low_med, site_x, user):
    with pytest.raises(ValidationError):
        StockService.record_exit(medication_id=low_med.id, site_id=site_x.id, quantity=0, actor_user_id=user.id)
