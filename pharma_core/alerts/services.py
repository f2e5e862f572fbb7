# pharma_core/alerts/services.py
from __future__ import annotations

import logging
from typing import Iterable
from uuid import UUID

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from pharma_core.alerts.models import Alert, AlertStatus, AlertType
from pharma_core.catalog.models import Medication, PriorityTier
from pharma_core.catalog.priority import URGENT_TIERS, normalize_tier
from pharma_core.common.events import publish_on_commit
from pharma_core.common.exceptions import NotFoundError
from pharma_core.inventory.selectors import total_stock
from pharma_core.sites.models import Site

logger = logging.getLogger(__name__)

LOW_STOCK_THRESHOLD = 10
CRITICAL_STOCK_THRESHOLD = 5


def alerts_for_stock_level(total: int, tier: str) -> list[str]:
    """
    Alert types owed for a resulting site total.

        0                          -> STOCKOUT
        below LOW_STOCK_THRESHOLD  -> LOW_STOCK
        below CRITICAL_STOCK_THRESHOLD with an urgent tier -> CRITICAL as well
    """
    if total <= 0:
        return [AlertType.STOCKOUT]

    owed: list[str] = []
    if total < LOW_STOCK_THRESHOLD:
        owed.append(AlertType.LOW_STOCK)
    if total < CRITICAL_STOCK_THRESHOLD and tier in URGENT_TIERS:
        owed.append(AlertType.CRITICAL)
    return owed


def _describe(alert_type: str, *, medication: Medication, site: Site, total: int) -> str:
    if alert_type == AlertType.STOCKOUT:
        return f"{medication} is out of stock at {site.name}."
    if alert_type == AlertType.LOW_STOCK:
        return f"Low stock of {medication} at {site.name}: {total} units left."
    return f"Critical stock of {medication} at {site.name}: {total} units left."


class AlertService:
    @staticmethod
    @transaction.atomic
    def raise_alert(
        *,
        medication_id: UUID,
        site_id: UUID,
        alert_type: str,
        priority_tier: str,
        description: str,
        redistribution_id: UUID | None = None,
        meta: dict | None = None,
    ) -> Alert:
        if alert_type not in AlertType.values:
            raise ValidationError({"alert_type": "Invalid alert_type."})

        alert = Alert.objects.create(
            medication_id=medication_id,
            site_id=site_id,
            alert_type=alert_type,
            priority_tier=normalize_tier(priority_tier),
            description=description,
            status=AlertStatus.ACTIVE,
            redistribution_id=redistribution_id,
            meta=meta or {},
        )
        logger.info(
            "alert_raised alert_id=%s type=%s tier=%s site_id=%s medication_id=%s",
            alert.id,
            alert.alert_type,
            alert.priority_tier,
            site_id,
            medication_id,
        )
        publish_on_commit(
            "alert.raised",
            {
                "alert_id": str(alert.id),
                "alert_type": alert.alert_type,
                "priority_tier": alert.priority_tier,
                "site_id": str(site_id),
                "medication_id": str(medication_id),
            },
        )
        return alert

    @staticmethod
    @transaction.atomic
    def resolve(*, alert_id: UUID, resolver_user_id: int, observations: str | None = None) -> Alert:
        alert = Alert.objects.select_for_update().filter(id=alert_id).first()
        if alert is None:
            raise NotFoundError(f"Alert {alert_id} not found.")

        # Resolving twice rewrites the resolution fields.
        alert.status = AlertStatus.RESOLVED
        alert.resolved_at = timezone.now()
        alert.resolved_by_user_id = resolver_user_id
        if observations is not None:
            alert.observations = observations
        alert.save(update_fields=["status", "resolved_at", "resolved_by_user_id", "observations", "updated_at"])

        logger.info("alert_resolved alert_id=%s resolver_user_id=%s", alert.id, resolver_user_id)
        return alert

    @staticmethod
    @transaction.atomic
    def resolve_all_matching(
        *,
        medication_id: UUID,
        site_id: UUID,
        types: Iterable[str],
        resolver_user_id: int,
        only_active: bool = True,
        observations: str = "",
    ) -> int:
        qs = Alert.objects.filter(medication_id=medication_id, site_id=site_id, alert_type__in=list(types))
        if only_active:
            qs = qs.filter(status=AlertStatus.ACTIVE)

        now = timezone.now()
        count = qs.update(
            status=AlertStatus.RESOLVED,
            resolved_at=now,
            resolved_by_user_id=resolver_user_id,
            observations=observations,
            updated_at=now,
        )
        if count:
            logger.info(
                "alert_resolved count=%s site_id=%s medication_id=%s resolver_user_id=%s",
                count,
                site_id,
                medication_id,
                resolver_user_id,
            )
        return count

    @staticmethod
    @transaction.atomic
    def react_to_stock_change(
        *,
        medication_id: UUID,
        site_id: UUID,
        tier: str,
        redistribution_id: UUID | None = None,
        context: str = "",
    ) -> list[Alert]:
        """
        Raise the alerts owed for the site's total stock as it stands now,
        i.e. after the caller's writes in the current transaction.
        """
        total = total_stock(medication_id=medication_id, site_id=site_id)
        owed = alerts_for_stock_level(total, tier)
        if not owed:
            return []

        medication = Medication.objects.get(id=medication_id)
        site = Site.objects.get(id=site_id)
        meta = {"total_stock": total}
        if context:
            meta["context"] = context

        raised = []
        for alert_type in owed:
            raised.append(
                AlertService.raise_alert(
                    medication_id=medication_id,
                    site_id=site_id,
                    alert_type=alert_type,
                    priority_tier=PriorityTier.CRITICAL if alert_type == AlertType.CRITICAL else tier,
                    description=_describe(alert_type, medication=medication, site=site, total=total),
                    redistribution_id=redistribution_id,
                    meta=meta,
                )
            )
        return raised
