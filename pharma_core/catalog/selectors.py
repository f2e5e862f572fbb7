# pharma_core/catalog/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from pharma_core.catalog.models import Medication
from pharma_core.common.exceptions import NotFoundError


def medications_qs() -> QuerySet[Medication]:
    return Medication.objects.select_related("category").order_by("name", "strength")


def medication_by_id(*, medication_id: UUID) -> Medication:
    try:
        return Medication.objects.select_related("category").get(id=medication_id)
    except Medication.DoesNotExist:
        raise NotFoundError(f"Medication {medication_id} not found.")
