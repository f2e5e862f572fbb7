# pharma_core/movements/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from pharma_core.movements.models import MovementRecord


def movements_qs(
    *,
    site_id: UUID | None = None,
    medication_id: UUID | None = None,
    movement_type: str | None = None,
    redistribution_id: UUID | None = None,
) -> QuerySet[MovementRecord]:
    qs = MovementRecord.objects.select_related("medication", "site")
    if site_id:
        qs = qs.filter(site_id=site_id)
    if medication_id:
        qs = qs.filter(medication_id=medication_id)
    if movement_type:
        qs = qs.filter(movement_type=movement_type)
    if redistribution_id:
        qs = qs.filter(redistribution_id=redistribution_id)
    return qs.order_by("-occurred_at", "-created_at")
