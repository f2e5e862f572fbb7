from rest_framework import serializers

from pharma_core.alerts.models import Alert


class AlertSerializer(serializers.ModelSerializer):
    medication_name = serializers.CharField(source="medication.name", read_only=True)
    site_name = serializers.CharField(source="site.name", read_only=True)
    resolution_hours = serializers.FloatField(read_only=True, allow_null=True)

    class Meta:
        model = Alert
        fields = [
            "id",
            "alert_type",
            "priority_tier",
            "status",
            "description",
            "medication_id",
            "medication_name",
            "site_id",
            "site_name",
            "generated_at",
            "resolved_at",
            "resolved_by_user_id",
            "resolution_hours",
            "observations",
            "redistribution_id",
            "meta",
        ]
        read_only_fields = fields


class AlertResolveSerializer(serializers.Serializer):
    observations = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class SiteAlertStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    critical = serializers.IntegerField()
    expiry = serializers.IntegerField()
    stockout = serializers.IntegerField()


class GlobalAlertStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    critical = serializers.IntegerField()
    high = serializers.IntegerField()
    medium = serializers.IntegerField()
    low = serializers.IntegerField()


class ResolvedAlertStatsSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    avg_resolution_hours = serializers.FloatField(allow_null=True)
