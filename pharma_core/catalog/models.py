# pharma_core/catalog/models.py
from __future__ import annotations

from django.db import models

from pharma_core.common.models import UUIDModel


class PriorityTier(models.TextChoices):
    CRITICAL = "CRITICAL", "Critical"
    HIGH = "HIGH", "High"
    MEDIUM = "MEDIUM", "Medium"
    LOW = "LOW", "Low"


class PathologyCategory(UUIDModel):
    """
    Therapeutic/pathology grouping. Its tier drives the automatic priority of
    every medication that references it.
    """
    name = models.CharField(max_length=128, unique=True)
    priority_tier = models.CharField(
        max_length=16,
        choices=PriorityTier.choices,
        default=PriorityTier.LOW,
        db_index=True,
    )
    color = models.CharField(max_length=16, blank=True, default="")
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = "catalog_pathology_category"
        verbose_name_plural = "pathology categories"

    def __str__(self) -> str:
        return f"{self.name} [{self.priority_tier}]"


class Medication(UUIDModel):
    """
    Reference data: read-only from the point of view of stock operations.
    """
    name = models.CharField(max_length=255, db_index=True)
    strength = models.CharField(max_length=64, blank=True, default="")  # e.g. "500 mg"
    form = models.CharField(max_length=64, blank=True, default="")  # e.g. "tablet"
    active_ingredient = models.CharField(max_length=255, blank=True, default="")
    unit_of_measure = models.CharField(max_length=32, blank=True, default="")
    requires_refrigeration = models.BooleanField(default=False)

    category = models.ForeignKey(
        PathologyCategory,
        on_delete=models.PROTECT,
        related_name="medications",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "catalog_medication"
        indexes = [
            models.Index(fields=["name", "strength"], name="catalog_med_name_strength_idx"),
        ]

    def __str__(self) -> str:
        return " ".join(part for part in (self.name, self.strength, self.form) if part)
