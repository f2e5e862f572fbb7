# pharma_core/sites/models.py
from __future__ import annotations

from django.db import models

from pharma_core.common.models import UUIDModel


class SiteType(models.TextChoices):
    HOSPITAL = "HOSPITAL", "Hospital"
    CLINIC = "CLINIC", "Clinic"
    PHARMACY = "PHARMACY", "Pharmacy"
    WAREHOUSE = "WAREHOUSE", "Warehouse"
    OTHER = "OTHER", "Other"


class Site(UUIDModel):
    """
    A care site of the network. Holds stock and takes part in redistributions
    as origin or destination.
    """

    name = models.CharField(max_length=255)
    code = models.SlugField(max_length=64, unique=True)
    city = models.CharField(max_length=128, blank=True, default="")

    site_type = models.CharField(
        max_length=24,
        choices=SiteType.choices,
        default=SiteType.CLINIC,
        db_index=True,
    )

    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = "sites_site"
        indexes = [
            models.Index(fields=["is_active", "name"], name="sites_active_name_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"
