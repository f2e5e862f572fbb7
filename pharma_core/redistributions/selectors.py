# pharma_core/redistributions/selectors.py
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from django.db.models import Count, Q, QuerySet

from pharma_core.catalog.models import PriorityTier
from pharma_core.common.exceptions import NotFoundError
from pharma_core.inventory.selectors import total_stock
from pharma_core.redistributions.models import RedistributionRequest, RedistributionStatus

EFFECTIVE_CRITICAL = Q(manual_priority=PriorityTier.CRITICAL) | Q(
    manual_priority__isnull=True,
    automatic_priority=PriorityTier.CRITICAL,
)


def redistributions_qs() -> QuerySet[RedistributionRequest]:
    return RedistributionRequest.objects.select_related(
        "medication",
        "origin_site",
        "destination_site",
    ).order_by("-requested_at")


def filter_by_priority(qs: QuerySet[RedistributionRequest], tier: str) -> QuerySet[RedistributionRequest]:
    """Matches either the automatic or the manual tier."""
    return qs.filter(Q(automatic_priority=tier) | Q(manual_priority=tier))


def redistribution_stats() -> dict:
    return RedistributionRequest.objects.aggregate(
        total=Count("id"),
        pending=Count("id", filter=Q(status=RedistributionStatus.REQUESTED)),
        completed=Count("id", filter=Q(status=RedistributionStatus.COMPLETED)),
        critical_pending=Count("id", filter=Q(status=RedistributionStatus.REQUESTED) & EFFECTIVE_CRITICAL),
    )


@dataclass(frozen=True)
class RedistributionDetail:
    request: RedistributionRequest
    origin_stock: int


def redistribution_detail(*, request_id: UUID) -> RedistributionDetail:
    req = redistributions_qs().filter(id=request_id).first()
    if req is None:
        raise NotFoundError(f"Redistribution {request_id} not found.")
    return RedistributionDetail(
        request=req,
        origin_stock=total_stock(medication_id=req.medication_id, site_id=req.origin_site_id),
    )
