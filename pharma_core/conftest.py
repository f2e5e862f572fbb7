# pharma_core/conftest.py
from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from pharma_core.catalog.models import Medication, PathologyCategory, PriorityTier
from pharma_core.common.events import clear_subscribers
from pharma_core.inventory.models import InventoryLot
from pharma_core.sites.services import SiteService


@pytest.fixture(autouse=True)
def _isolated_event_bus():
    yield
    clear_subscribers()


@pytest.fixture
def site_x(db):
    return SiteService.create(name="Hospital Central", code="central", city="Bogota", site_type="HOSPITAL")


@pytest.fixture
def site_y(db):
    return SiteService.create(name="Clinica Norte", code="norte", city="Bogota")


@pytest.fixture
def site_z(db):
    return SiteService.create(name="Farmacia Sur", code="sur", city="Cali", site_type="PHARMACY")


@pytest.fixture
def critical_category(db):
    return PathologyCategory.objects.create(name="Oncology", priority_tier=PriorityTier.CRITICAL)


@pytest.fixture
def high_category(db):
    return PathologyCategory.objects.create(name="Cardiology", priority_tier=PriorityTier.HIGH)


@pytest.fixture
def low_category(db):
    return PathologyCategory.objects.create(name="Dermatology", priority_tier=PriorityTier.LOW)


@pytest.fixture
def critical_med(db, critical_category):
    return Medication.objects.create(name="Cisplatin", strength="50 mg", form="vial", category=critical_category)


@pytest.fixture
def high_med(db, high_category):
    return Medication.objects.create(name="Enoxaparin", strength="40 mg", form="syringe", category=high_category)


@pytest.fixture
def low_med(db, low_category):
    return Medication.objects.create(name="Hydrocortisone", strength="1%", form="cream", category=low_category)


@pytest.fixture
def uncategorized_med(db):
    return Medication.objects.create(name="Saline", strength="0.9%", form="bag")


@pytest.fixture
def make_lot(db):
    """
    make_lot(medication, site, "L-001", 50, expires_in=90)
    """
    def _make(medication, site, lot_code, quantity, *, expires_in=180, supplier="Acme Pharma", unit_price=None):
        return InventoryLot.objects.create(
            medication=medication,
            site=site,
            lot_code=lot_code,
            quantity=quantity,
            expiry_date=timezone.localdate() + timedelta(days=expires_in),
            supplier=supplier,
            unit_price=unit_price,
        )
    return _make


@pytest.fixture
def user(db, site_x):
    from pharma_core.iam.models import UserProfile

    User = get_user_model()
    user = User.objects.create_user(username="pharmacist", password="testpass", is_active=True)
    UserProfile.objects.create(user=user, full_name="Ana Pharmacist", assigned_site=site_x, is_active=True)
    return user


@pytest.fixture
def api_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c
