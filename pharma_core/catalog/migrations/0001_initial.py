import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PathologyCategory",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=128, unique=True)),
                (
                    "priority_tier",
                    models.CharField(
                        choices=[("CRITICAL", "Critical"), ("HIGH", "High"), ("MEDIUM", "Medium"), ("LOW", "Low")],
                        db_index=True,
                        default="LOW",
                        max_length=16,
                    ),
                ),
                ("color", models.CharField(blank=True, default="", max_length=16)),
                ("description", models.TextField(blank=True, default="")),
            ],
            options={
                "db_table": "catalog_pathology_category",
                "verbose_name_plural": "pathology categories",
            },
        ),
        migrations.CreateModel(
            name="Medication",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("strength", models.CharField(blank=True, default="", max_length=64)),
                ("form", models.CharField(blank=True, default="", max_length=64)),
                ("active_ingredient", models.CharField(blank=True, default="", max_length=255)),
                ("unit_of_measure", models.CharField(blank=True, default="", max_length=32)),
                ("requires_refrigeration", models.BooleanField(default=False)),
                (
                    "category",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="medications",
                        to="catalog.pathologycategory",
                    ),
                ),
            ],
            options={
                "db_table": "catalog_medication",
                "indexes": [models.Index(fields=["name", "strength"], name="catalog_med_name_strength_idx")],
            },
        ),
    ]
