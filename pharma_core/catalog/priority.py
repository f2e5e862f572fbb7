# pharma_core/catalog/priority.py
"""
Priority resolution for medications and redistribution requests.

The automatic tier comes from the medication's pathology category. A manual
override, when present, replaces it for every downstream purpose.
PriorityAssessment.effective is the one place that choice is made.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import models
from rest_framework.exceptions import ValidationError

from pharma_core.catalog.models import Medication, PriorityTier
from pharma_core.common.exceptions import NotFoundError


class PrioritySource(models.TextChoices):
    AUTOMATIC = "AUTOMATIC", "Automatic"
    MANUAL = "MANUAL", "Manual"


# Tiers that escalate a low-stock condition to a CRITICAL alert.
URGENT_TIERS = frozenset({PriorityTier.CRITICAL, PriorityTier.HIGH})


@dataclass(frozen=True)
class Priority:
    source: str
    tier: str
    justification: str = ""

    @property
    def is_manual(self) -> bool:
        return self.source == PrioritySource.MANUAL


@dataclass(frozen=True)
class PriorityAssessment:
    automatic: Priority
    manual: Optional[Priority] = None

    @property
    def effective(self) -> Priority:
        return self.manual if self.manual is not None else self.automatic

    @property
    def effective_tier(self) -> str:
        return self.effective.tier


def normalize_tier(value: Optional[str]) -> str:
    """Unknown or missing tiers fail open to LOW."""
    if value and str(value).upper() in PriorityTier.values:
        return PriorityTier(str(value).upper()).value
    return PriorityTier.LOW.value


def tier_for_medication(medication: Medication) -> str:
    category = medication.category
    if category is None:
        return PriorityTier.LOW.value
    return normalize_tier(category.priority_tier)


def automatic_priority(*, medication_id: UUID) -> Priority:
    medication = Medication.objects.select_related("category").filter(id=medication_id).first()
    if medication is None:
        raise NotFoundError(f"Medication {medication_id} not found.")
    return Priority(source=PrioritySource.AUTOMATIC, tier=tier_for_medication(medication))


def build_manual_override(*, manual_tier: Optional[str], justification: Optional[str]) -> Optional[Priority]:
    """
    Returns None when no override was requested.
    Raises ValidationError for an unknown tier or a missing justification.
    """
    if not manual_tier:
        return None

    tier = str(manual_tier).upper()
    if tier not in PriorityTier.values:
        raise ValidationError({"manual_priority": f"Invalid priority tier '{manual_tier}'."})

    text = (justification or "").strip()
    if not text:
        raise ValidationError(
            {"priority_justification": "A justification is required when the priority is adjusted manually."}
        )
    return Priority(source=PrioritySource.MANUAL, tier=tier, justification=text)


def assess_priority(
    *,
    medication_id: UUID,
    manual_tier: Optional[str] = None,
    justification: Optional[str] = None,
) -> PriorityAssessment:
    # Validate the override before touching the database.
    manual = build_manual_override(manual_tier=manual_tier, justification=justification)
    return PriorityAssessment(automatic=automatic_priority(medication_id=medication_id), manual=manual)
