from __future__ import annotations

from uuid import UUID

from django.db.models import Avg, Case, Count, DurationField, ExpressionWrapper, F, IntegerField, Q, QuerySet, Value, When

from pharma_core.alerts.models import Alert, AlertStatus, AlertType
from pharma_core.catalog.models import PriorityTier

TIER_RANK = Case(
    When(priority_tier=PriorityTier.CRITICAL, then=Value(0)),
    When(priority_tier=PriorityTier.HIGH, then=Value(1)),
    When(priority_tier=PriorityTier.MEDIUM, then=Value(2)),
    default=Value(3),
    output_field=IntegerField(),
)


def alerts_qs() -> QuerySet[Alert]:
    return Alert.objects.select_related("medication", "site")


def active_alerts_for_site(*, site_id: UUID) -> QuerySet[Alert]:
    """Most urgent first, newest first within a tier."""
    return (
        alerts_qs()
        .filter(site_id=site_id, status=AlertStatus.ACTIVE)
        .annotate(tier_rank=TIER_RANK)
        .order_by("tier_rank", "-generated_at")
    )


def active_alerts() -> QuerySet[Alert]:
    return (
        alerts_qs()
        .filter(status=AlertStatus.ACTIVE)
        .annotate(tier_rank=TIER_RANK)
        .order_by("tier_rank", "-generated_at")
    )


def resolved_alerts(*, site_id: UUID | None = None) -> QuerySet[Alert]:
    qs = alerts_qs().filter(status=AlertStatus.RESOLVED)
    if site_id:
        qs = qs.filter(site_id=site_id)
    return qs.order_by("-resolved_at")


def site_alert_stats(*, site_id: UUID) -> dict:
    return Alert.objects.filter(site_id=site_id, status=AlertStatus.ACTIVE).aggregate(
        total=Count("id"),
        critical=Count("id", filter=Q(priority_tier=PriorityTier.CRITICAL)),
        expiry=Count("id", filter=Q(alert_type=AlertType.EXPIRY)),
        stockout=Count("id", filter=Q(alert_type=AlertType.STOCKOUT)),
    )


def global_alert_stats() -> dict:
    """Active alerts across all sites, per priority tier."""
    return Alert.objects.filter(status=AlertStatus.ACTIVE).aggregate(
        total=Count("id"),
        critical=Count("id", filter=Q(priority_tier=PriorityTier.CRITICAL)),
        high=Count("id", filter=Q(priority_tier=PriorityTier.HIGH)),
        medium=Count("id", filter=Q(priority_tier=PriorityTier.MEDIUM)),
        low=Count("id", filter=Q(priority_tier=PriorityTier.LOW)),
    )


def resolved_alert_stats(*, site_id: UUID | None = None) -> dict:
    qs = Alert.objects.filter(status=AlertStatus.RESOLVED, resolved_at__isnull=False)
    if site_id:
        qs = qs.filter(site_id=site_id)
    agg = qs.aggregate(
        count=Count("id"),
        avg_duration=Avg(ExpressionWrapper(F("resolved_at") - F("generated_at"), output_field=DurationField())),
    )
    duration = agg["avg_duration"]
    return {
        "count": agg["count"],
        "avg_resolution_hours": round(duration.total_seconds() / 3600, 2) if duration is not None else None,
    }
