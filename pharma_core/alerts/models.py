from __future__ import annotations

from django.db import models
from django.utils import timezone

from pharma_core.catalog.models import Medication, PriorityTier
from pharma_core.common.models import UUIDModel
from pharma_core.sites.models import Site


class AlertType(models.TextChoices):
    EXPIRY = "EXPIRY", "Expiry"
    STOCKOUT = "STOCKOUT", "Stockout"
    LOW_STOCK = "LOW_STOCK", "Low stock"
    CRITICAL = "CRITICAL", "Critical"


class AlertStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    RESOLVED = "RESOLVED", "Resolved"


# Stock alerts cleared when stock arrives at a site.
STOCK_LEVEL_TYPES = (AlertType.STOCKOUT, AlertType.LOW_STOCK)


class Alert(UUIDModel):
    """
    Stock or expiry condition for a medication at a site.
    Rows are never de-duplicated; each qualifying change inserts a new one.
    """
    medication = models.ForeignKey(Medication, on_delete=models.PROTECT, related_name="alerts")
    site = models.ForeignKey(Site, on_delete=models.PROTECT, related_name="alerts")

    alert_type = models.CharField(max_length=16, choices=AlertType.choices, db_index=True)
    priority_tier = models.CharField(
        max_length=16,
        choices=PriorityTier.choices,
        default=PriorityTier.LOW,
        db_index=True,
    )
    description = models.TextField(blank=True, default="")
    status = models.CharField(
        max_length=16,
        choices=AlertStatus.choices,
        default=AlertStatus.ACTIVE,
        db_index=True,
    )

    generated_at = models.DateTimeField(default=timezone.now, db_index=True)
    resolved_at = models.DateTimeField(null=True, blank=True)
    resolved_by_user_id = models.IntegerField(null=True, blank=True)
    observations = models.TextField(blank=True, default="")

    redistribution_id = models.UUIDField(null=True, blank=True, db_index=True)
    meta = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "alerts_alert"
        indexes = [
            models.Index(fields=["site", "status", "priority_tier"], name="alert_site_status_tier_idx"),
            models.Index(fields=["medication", "site", "alert_type"], name="alert_med_site_type_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.alert_type} [{self.priority_tier}] {self.status}"

    @property
    def resolution_hours(self) -> float | None:
        if self.resolved_at is None:
            return None
        return round((self.resolved_at - self.generated_at).total_seconds() / 3600, 2)
