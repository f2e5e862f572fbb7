# pharma_core/catalog/tests/test_priority.py
import uuid

import pytest
from rest_framework.exceptions import ValidationError

from pharma_core.catalog.models import Medication, PathologyCategory, PriorityTier
from pharma_core.catalog.priority import (
    PrioritySource,
    assess_priority,
    automatic_priority,
    build_manual_override,
    normalize_tier,
)
from pharma_core.common.exceptions import NotFoundError


@pytest.mark.django_db
def test_automatic_priority_comes_from_category(critical_med, high_med):
    p = automatic_priority(medication_id=critical_med.id)
    assert p.source == PrioritySource.AUTOMATIC
    assert p.tier == PriorityTier.CRITICAL
    assert automatic_priority(medication_id=high_med.id).tier == PriorityTier.HIGH


@pytest.mark.django_db
def test_medication_without_category_is_low(uncategorized_med):
    assert automatic_priority(medication_id=uncategorized_med.id).tier == PriorityTier.LOW


@pytest.mark.django_db
def test_unrecognized_category_tier_fails_open_to_low():
    # Bypass choices validation the way a legacy row would.
    cat = PathologyCategory.objects.create(name="Legacy", priority_tier="URGENTISIMO")
    med = Medication.objects.create(name="Legacy drug", category=cat)
    assert automatic_priority(medication_id=med.id).tier == PriorityTier.LOW


@pytest.mark.django_db
def test_unknown_medication_is_not_found():
    with pytest.raises(NotFoundError):
        automatic_priority(medication_id=uuid.uuid4())


def test_normalize_tier_accepts_lowercase():
    assert normalize_tier("high") == PriorityTier.HIGH
    assert normalize_tier(None) == PriorityTier.LOW
    assert normalize_tier("") == PriorityTier.LOW


def test_manual_override_requires_justification():
    with pytest.raises(ValidationError) as exc:
        build_manual_override(manual_tier="CRITICAL", justification="   ")
    assert "priority_justification" in exc.value.detail


def test_manual_override_rejects_unknown_tier():
    with pytest.raises(ValidationError) as exc:
        build_manual_override(manual_tier="EXTREME", justification="because")
    assert "manual_priority" in exc.value.detail


def test_no_override_requested_returns_none():
    assert build_manual_override(manual_tier=None, justification="ignored") is None


@pytest.mark.django_db
def test_manual_override_replaces_automatic_tier(low_med):
    assessment = assess_priority(
        medication_id=low_med.id,
        manual_tier="critical",
        justification="Outbreak at destination",
    )
    assert assessment.automatic.tier == PriorityTier.LOW
    assert assessment.effective.is_manual
    assert assessment.effective_tier == PriorityTier.CRITICAL
    assert assessment.effective.justification == "Outbreak at destination"


@pytest.mark.django_db
def test_manual_override_can_lower_priority(critical_med):
    assessment = assess_priority(medication_id=critical_med.id, manual_tier="LOW", justification="Patient discharged")
    assert assessment.effective_tier == PriorityTier.LOW


@pytest.mark.django_db
def test_invalid_override_is_rejected_before_lookup():
    # Validation error wins over the unknown medication.
    with pytest.raises(ValidationError):
        assess_priority(medication_id=uuid.uuid4(), manual_tier="HIGH", justification="")
