# pharma_core/inventory/models.py
from __future__ import annotations

from django.db import models
from django.db.models import Q
from django.utils import timezone

from pharma_core.catalog.models import Medication
from pharma_core.common.models import UUIDModel
from pharma_core.sites.models import Site


class InventoryLot(UUIDModel):
    """
    Quantity of one batch of a medication held at one site.

    Identity is the (medication, site, lot_code) triple. Expiry, supplier and
    unit price belong to the batch and travel with it between sites.
    Lots that reach zero are kept as history.
    """
    medication = models.ForeignKey(Medication, on_delete=models.PROTECT, related_name="lots")
    site = models.ForeignKey(Site, on_delete=models.PROTECT, related_name="lots")
    lot_code = models.CharField(max_length=64)

    quantity = models.PositiveIntegerField(default=0)

    expiry_date = models.DateField(db_index=True)
    received_on = models.DateField(default=timezone.localdate)
    supplier = models.CharField(max_length=255, blank=True, default="")
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    class Meta:
        db_table = "inventory_lot"
        constraints = [
            models.UniqueConstraint(
                fields=["medication", "site", "lot_code"],
                name="uq_lot_medication_site_code",
            ),
            models.CheckConstraint(
                condition=Q(quantity__gte=0),
                name="ck_lot_quantity_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["medication", "site", "expiry_date"], name="inv_lot_med_site_expiry_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.lot_code} x{self.quantity} @ {self.site_id}"
