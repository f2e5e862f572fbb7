from __future__ import annotations

from rest_framework import serializers

from pharma_core.sites.models import Site


class SiteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Site
        fields = ["id", "name", "code", "city", "site_type", "is_active"]
        read_only_fields = fields
