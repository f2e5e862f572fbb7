# pharma_core/redistributions/models.py
from __future__ import annotations

from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from pharma_core.catalog.models import Medication, PriorityTier
from pharma_core.catalog.priority import Priority, PriorityAssessment, PrioritySource
from pharma_core.common.models import UUIDModel
from pharma_core.sites.models import Site


class RedistributionStatus(models.TextChoices):
    REQUESTED = "REQUESTED", "Requested"
    COMPLETED = "COMPLETED", "Completed"


class RedistributionRequest(UUIDModel):
    """
    Transfer of a medication quantity from an origin site to a destination site.

    Lifecycle: REQUESTED -> COMPLETED. There is no other transition.
    `lot_code` holds the advisory lot suggested at creation and is replaced by
    the lot actually moved when the request completes.
    """
    medication = models.ForeignKey(Medication, on_delete=models.PROTECT, related_name="redistributions")
    origin_site = models.ForeignKey(Site, on_delete=models.PROTECT, related_name="outgoing_redistributions")
    destination_site = models.ForeignKey(Site, on_delete=models.PROTECT, related_name="incoming_redistributions")

    requested_by_user_id = models.IntegerField(db_index=True)
    requested_quantity = models.PositiveIntegerField()
    lot_code = models.CharField(max_length=64, null=True, blank=True)

    automatic_priority = models.CharField(max_length=16, choices=PriorityTier.choices, db_index=True)
    manual_priority = models.CharField(max_length=16, choices=PriorityTier.choices, null=True, blank=True, db_index=True)
    priority_justification = models.TextField(blank=True, default="")

    medical_justification = models.TextField()
    affected_patients = models.PositiveIntegerField(null=True, blank=True)

    status = models.CharField(
        max_length=16,
        choices=RedistributionStatus.choices,
        default=RedistributionStatus.REQUESTED,
        db_index=True,
    )
    requested_at = models.DateTimeField(default=timezone.now, db_index=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    approved_quantity = models.PositiveIntegerField(null=True, blank=True)
    completed_by_user_id = models.IntegerField(null=True, blank=True)
    observations = models.TextField(blank=True, default="")

    class Meta:
        db_table = "redistributions_request"
        constraints = [
            models.CheckConstraint(
                condition=Q(status=RedistributionStatus.REQUESTED, completed_at__isnull=True)
                | Q(status=RedistributionStatus.COMPLETED, completed_at__isnull=False),
                name="ck_redist_completed_at_status",
            ),
            models.CheckConstraint(
                condition=~Q(origin_site=F("destination_site")),
                name="ck_redist_distinct_sites",
            ),
            models.CheckConstraint(
                condition=Q(requested_quantity__gt=0),
                name="ck_redist_quantity_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "requested_at"], name="redist_status_requested_idx"),
            models.Index(fields=["origin_site", "status"], name="redist_origin_status_idx"),
            models.Index(fields=["destination_site", "status"], name="redist_dest_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.medication_id} {self.origin_site_id}->{self.destination_site_id} ({self.status})"

    @property
    def priority_assessment(self) -> PriorityAssessment:
        manual = None
        if self.manual_priority:
            manual = Priority(
                source=PrioritySource.MANUAL,
                tier=self.manual_priority,
                justification=self.priority_justification,
            )
        return PriorityAssessment(
            automatic=Priority(source=PrioritySource.AUTOMATIC, tier=self.automatic_priority),
            manual=manual,
        )

    @property
    def priority(self) -> Priority:
        return self.priority_assessment.effective

    @property
    def effective_priority(self) -> str:
        return self.priority.tier
