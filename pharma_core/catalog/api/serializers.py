from __future__ import annotations

from rest_framework import serializers

from pharma_core.catalog.models import Medication


class MedicationSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)

    class Meta:
        model = Medication
        fields = [
            "id",
            "name",
            "strength",
            "form",
            "active_ingredient",
            "unit_of_measure",
            "requires_refrigeration",
            "category_id",
            "category_name",
        ]
        read_only_fields = fields


class PrioritySerializer(serializers.Serializer):
    medication_id = serializers.UUIDField()
    source = serializers.CharField()
    tier = serializers.CharField()
