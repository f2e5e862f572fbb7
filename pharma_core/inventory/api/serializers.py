# pharma_core/inventory/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from pharma_core.alerts.api.serializers import AlertSerializer
from pharma_core.inventory.models import InventoryLot
from pharma_core.movements.api.serializers import MovementRecordSerializer


class InventoryLotSerializer(serializers.ModelSerializer):
    medication_name = serializers.CharField(source="medication.name", read_only=True)
    site_name = serializers.CharField(source="site.name", read_only=True)

    class Meta:
        model = InventoryLot
        fields = [
            "id",
            "medication_id",
            "medication_name",
            "site_id",
            "site_name",
            "lot_code",
            "quantity",
            "expiry_date",
            "received_on",
            "supplier",
            "unit_price",
            "updated_at",
        ]
        read_only_fields = fields


class StockSuggestionSerializer(serializers.Serializer):
    site_id = serializers.UUIDField()
    site_name = serializers.CharField()
    site_city = serializers.CharField()
    site_type = serializers.CharField()
    total_stock = serializers.IntegerField()
    lot_count = serializers.IntegerField()
    nearest_expiry = serializers.DateField(allow_null=True)


class StockEntryCreateSerializer(serializers.Serializer):
    medication_id = serializers.UUIDField()
    site_id = serializers.UUIDField(required=False)
    lot_code = serializers.CharField(max_length=64)
    quantity = serializers.IntegerField(min_value=1)
    expiry_date = serializers.DateField(required=False, allow_null=True)
    supplier = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class StockExitCreateSerializer(serializers.Serializer):
    medication_id = serializers.UUIDField()
    site_id = serializers.UUIDField(required=False)
    lot_code = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    quantity = serializers.IntegerField(min_value=1)
    patient_document = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class StockEntryResultSerializer(serializers.Serializer):
    lot = InventoryLotSerializer()
    lot_created = serializers.BooleanField()
    movement = MovementRecordSerializer()


class StockExitResultSerializer(serializers.Serializer):
    lot = InventoryLotSerializer()
    movement = MovementRecordSerializer()
    alerts = AlertSerializer(many=True)
