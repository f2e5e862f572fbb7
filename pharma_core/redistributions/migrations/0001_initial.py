import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

TIER_CHOICES = [("CRITICAL", "Critical"), ("HIGH", "High"), ("MEDIUM", "Medium"), ("LOW", "Low")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        ("sites", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="RedistributionRequest",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("requested_by_user_id", models.IntegerField(db_index=True)),
                ("requested_quantity", models.PositiveIntegerField()),
                ("lot_code", models.CharField(blank=True, max_length=64, null=True)),
                ("automatic_priority", models.CharField(choices=TIER_CHOICES, db_index=True, max_length=16)),
                (
                    "manual_priority",
                    models.CharField(blank=True, choices=TIER_CHOICES, db_index=True, max_length=16, null=True),
                ),
                ("priority_justification", models.TextField(blank=True, default="")),
                ("medical_justification", models.TextField()),
                ("affected_patients", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("REQUESTED", "Requested"), ("COMPLETED", "Completed")],
                        db_index=True,
                        default="REQUESTED",
                        max_length=16,
                    ),
                ),
                ("requested_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("approved_quantity", models.PositiveIntegerField(blank=True, null=True)),
                ("completed_by_user_id", models.IntegerField(blank=True, null=True)),
                ("observations", models.TextField(blank=True, default="")),
                (
                    "medication",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="redistributions",
                        to="catalog.medication",
                    ),
                ),
                (
                    "origin_site",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="outgoing_redistributions",
                        to="sites.site",
                    ),
                ),
                (
                    "destination_site",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="incoming_redistributions",
                        to="sites.site",
                    ),
                ),
            ],
            options={
                "db_table": "redistributions_request",
                "indexes": [
                    models.Index(fields=["status", "requested_at"], name="redist_status_requested_idx"),
                    models.Index(fields=["origin_site", "status"], name="redist_origin_status_idx"),
                    models.Index(fields=["destination_site", "status"], name="redist_dest_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("status", "REQUESTED"), ("completed_at__isnull", True))
                        | models.Q(("status", "COMPLETED"), ("completed_at__isnull", False)),
                        name="ck_redist_completed_at_status",
                    ),
                    models.CheckConstraint(
                        condition=~models.Q(origin_site=models.F("destination_site")),
                        name="ck_redist_distinct_sites",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("requested_quantity__gt", 0)),
                        name="ck_redist_quantity_positive",
                    ),
                ],
            },
        ),
    ]
