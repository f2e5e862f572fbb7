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
            name="InventoryLot",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("lot_code", models.CharField(max_length=64)),
                ("quantity", models.PositiveIntegerField(default=0)),
                ("expiry_date", models.DateField(db_index=True)),
                ("received_on", models.DateField(default=django.utils.timezone.localdate)),
                ("supplier", models.CharField(blank=True, default="", max_length=255)),
                ("unit_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                (
                    "medication",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="lots",
                        to="catalog.medication",
                    ),
                ),
                (
                    "site",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="lots",
                        to="sites.site",
                    ),
                ),
            ],
            options={
                "db_table": "inventory_lot",
                "indexes": [
                    models.Index(fields=["medication", "site", "expiry_date"], name="inv_lot_med_site_expiry_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("medication", "site", "lot_code"),
                        name="uq_lot_medication_site_code",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 0)),
                        name="ck_lot_quantity_non_negative",
                    ),
                ],
            },
        ),
    ]
