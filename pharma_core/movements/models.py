# pharma_core/movements/models.py
from __future__ import annotations

from django.db import models
from django.db.models import Q
from django.utils import timezone

from pharma_core.catalog.models import Medication
from pharma_core.common.models import UUIDModel
from pharma_core.sites.models import Site


class MovementType(models.TextChoices):
    ENTRY = "ENTRY", "Entry"
    EXIT = "EXIT", "Exit"


class MovementRecord(UUIDModel):
    """
    Append-only stock movement. Never updated or deleted by services.
    """
    medication = models.ForeignKey(Medication, on_delete=models.PROTECT, related_name="movements")
    site = models.ForeignKey(Site, on_delete=models.PROTECT, related_name="movements")
    actor_user_id = models.IntegerField(db_index=True)

    movement_type = models.CharField(max_length=8, choices=MovementType.choices, db_index=True)
    quantity = models.PositiveIntegerField()
    lot_code = models.CharField(max_length=64, blank=True, default="")

    occurred_at = models.DateTimeField(default=timezone.now, db_index=True)
    notes = models.TextField(blank=True, default="")
    patient_document = models.CharField(max_length=64, blank=True, default="")

    redistribution_id = models.UUIDField(null=True, blank=True, db_index=True)

    class Meta:
        db_table = "movements_movement"
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gt=0), name="ck_movement_quantity_positive"),
        ]
        indexes = [
            models.Index(fields=["site", "occurred_at"], name="mov_site_occurred_idx"),
            models.Index(fields=["medication", "site", "occurred_at"], name="mov_med_site_occurred_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.movement_type} {self.quantity} {self.lot_code}"
