# pharma_core/redistributions/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from pharma_core.catalog.models import PriorityTier
from pharma_core.redistributions.models import RedistributionRequest


class RedistributionCreateSerializer(serializers.Serializer):
    medication_id = serializers.UUIDField()
    origin_site_id = serializers.UUIDField()
    destination_site_id = serializers.UUIDField()
    requested_quantity = serializers.IntegerField()
    medical_justification = serializers.CharField(allow_blank=True)
    affected_patients = serializers.IntegerField(required=False, allow_null=True)
    manual_priority = serializers.ChoiceField(
        choices=PriorityTier.choices,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
    priority_justification = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RedistributionCompleteSerializer(serializers.Serializer):
    approved_quantity = serializers.IntegerField()
    observations = serializers.CharField(required=False, allow_blank=True, default="")


class RedistributionSerializer(serializers.ModelSerializer):
    medication_name = serializers.CharField(source="medication.name", read_only=True)
    origin_site_name = serializers.CharField(source="origin_site.name", read_only=True)
    destination_site_name = serializers.CharField(source="destination_site.name", read_only=True)
    effective_priority = serializers.CharField(read_only=True)

    class Meta:
        model = RedistributionRequest
        fields = [
            "id",
            "medication_id",
            "medication_name",
            "origin_site_id",
            "origin_site_name",
            "destination_site_id",
            "destination_site_name",
            "requested_by_user_id",
            "requested_quantity",
            "lot_code",
            "automatic_priority",
            "manual_priority",
            "effective_priority",
            "priority_justification",
            "medical_justification",
            "affected_patients",
            "status",
            "requested_at",
            "completed_at",
            "approved_quantity",
            "completed_by_user_id",
            "observations",
        ]
        read_only_fields = fields


class RedistributionDetailSerializer(RedistributionSerializer):
    origin_stock = serializers.SerializerMethodField()

    class Meta(RedistributionSerializer.Meta):
        fields = RedistributionSerializer.Meta.fields + ["origin_stock"]
        read_only_fields = fields

    def get_origin_stock(self, obj) -> int:
        return self.context.get("origin_stock", 0)


class RedistributionStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    pending = serializers.IntegerField()
    completed = serializers.IntegerField()
    critical_pending = serializers.IntegerField()
