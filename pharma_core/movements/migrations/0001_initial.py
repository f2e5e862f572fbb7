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
            name="MovementRecord",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("actor_user_id", models.IntegerField(db_index=True)),
                (
                    "movement_type",
                    models.CharField(choices=[("ENTRY", "Entry"), ("EXIT", "Exit")], db_index=True, max_length=8),
                ),
                ("quantity", models.PositiveIntegerField()),
                ("lot_code", models.CharField(blank=True, default="", max_length=64)),
                ("occurred_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("notes", models.TextField(blank=True, default="")),
                ("patient_document", models.CharField(blank=True, default="", max_length=64)),
                ("redistribution_id", models.UUIDField(blank=True, db_index=True, null=True)),
                (
                    "medication",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="movements",
                        to="catalog.medication",
                    ),
                ),
                (
                    "site",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="movements",
                        to="sites.site",
                    ),
                ),
            ],
            options={
                "db_table": "movements_movement",
                "indexes": [
                    models.Index(fields=["site", "occurred_at"], name="mov_site_occurred_idx"),
                    models.Index(fields=["medication", "site", "occurred_at"], name="mov_med_site_occurred_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gt", 0)),
                        name="ck_movement_quantity_positive",
                    ),
                ],
            },
        ),
    ]
