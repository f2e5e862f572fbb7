import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        ("sites", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Alert",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "alert_type",
                    models.CharField(
                        choices=[
                            ("EXPIRY", "Expiry"),
                            ("STOCKOUT", "Stockout"),
                            ("LOW_STOCK", "Low stock"),
                            ("CRITICAL", "Critical"),
                        ],
                        db_index=True,
                        max_length=16,
                    ),
                ),
                (
                    "priority_tier",
                    models.CharField(
                        choices=[("CRITICAL", "Critical"), ("HIGH", "High"), ("MEDIUM", "Medium"), ("LOW", "Low")],
                        db_index=True,
                        default="LOW",
                        max_length=16,
                    ),
                ),
                ("description", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[("ACTIVE", "Active"), ("RESOLVED", "Resolved")],
                        db_index=True,
                        default="ACTIVE",
                        max_length=16,
                    ),
                ),
                ("generated_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("resolved_at", models.DateTimeField(blank=True, null=True)),
                ("resolved_by_user_id", models.IntegerField(blank=True, null=True)),
                ("observations", models.TextField(blank=True, default="")),
                ("redistribution_id", models.UUIDField(blank=True, db_index=True, null=True)),
                ("meta", models.JSONField(blank=True, default=dict)),
                (
                    "medication",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="alerts",
                        to="catalog.medication",
                    ),
                ),
                (
                    "site",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="alerts",
                        to="sites.site",
                    ),
                ),
            ],
            options={
                "db_table": "alerts_alert",
                "indexes": [
                    models.Index(fields=["site", "status", "priority_tier"], name="alert_site_status_tier_idx"),
                    models.Index(fields=["medication", "site", "alert_type"], name="alert_med_site_type_idx"),
                ],
            },
        ),
    ]
