from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import viewsets

from pharma_core.common.api.pagination import paginate
from pharma_core.common.api.params import uuid_or_none
from pharma_core.movements.api.serializers import MovementRecordSerializer
from pharma_core.movements.models import MovementRecord
from pharma_core.movements.selectors import movements_qs


class MovementViewSet(viewsets.GenericViewSet):
    """
    Movement ledger (read-only). Rows are written by stock operations.
    """
    serializer_class = MovementRecordSerializer
    queryset = MovementRecord.objects.none()

    @extend_schema(
        tags=["Movements"],
        responses={200: MovementRecordSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="site", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="medication", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="type", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="redistribution", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = movements_qs(
            site_id=uuid_or_none(request.query_params.get("site"), "site"),
            medication_id=uuid_or_none(request.query_params.get("medication"), "medication"),
            movement_type=request.query_params.get("type"),
            redistribution_id=uuid_or_none(request.query_params.get("redistribution"), "redistribution"),
        )
        return paginate(request, qs, MovementRecordSerializer)
