from rest_framework import serializers

from pharma_core.movements.models import MovementRecord


class MovementRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = MovementRecord
        fields = [
            "id",
            "movement_type",
            "medication_id",
            "site_id",
            "actor_user_id",
            "quantity",
            "lot_code",
            "occurred_at",
            "notes",
            "patient_document",
            "redistribution_id",
        ]
        read_only_fields = fields
