from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from pharma_core.catalog.api.serializers import MedicationSerializer, PrioritySerializer
from pharma_core.common.api.params import require_uuid
from pharma_core.catalog.priority import automatic_priority
from pharma_core.catalog.selectors import medications_qs


class MedicationViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    serializer_class = MedicationSerializer
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    def get_queryset(self):
        return medications_qs()

    @extend_schema(tags=["Catalog"], responses={200: PrioritySerializer})
    @action(methods=["GET"], detail=True, url_path="priority")
    def priority(self, request, pk=None):
        medication_id = require_uuid(pk, "id")
        p = automatic_priority(medication_id=medication_id)
        data = {"medication_id": medication_id, "source": p.source, "tier": p.tier}
        return Response(PrioritySerializer(data).data, status=status.HTTP_200_OK)
