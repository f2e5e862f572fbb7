from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, viewsets

from pharma_core.sites.api.serializers import SiteSerializer
from pharma_core.sites.selectors import sites_qs


class SiteViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Read-only site directory (active sites only).
    """
    serializer_class = SiteSerializer
    pagination_class = None
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    @extend_schema(tags=["Sites"])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def get_queryset(self):
        return sites_qs(active_only=True)
