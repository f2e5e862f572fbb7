# pharma_core/redistributions/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from pharma_core.alerts.api.serializers import AlertSerializer
from pharma_core.common.api.params import require_uuid
from pharma_core.iam.identity import current_actor
from pharma_core.redistributions.api.serializers import (
    RedistributionCompleteSerializer,
    RedistributionCreateSerializer,
    RedistributionDetailSerializer,
    RedistributionSerializer,
    RedistributionStatsSerializer,
)
from pharma_core.redistributions.filters import RedistributionFilter
from pharma_core.redistributions.selectors import redistribution_detail, redistribution_stats, redistributions_qs
from pharma_core.redistributions.services import RedistributionService


class RedistributionViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Thin API layer:
    - serializers validate shape
    - RedistributionService owns every rule and write
    - the actor always comes from the authenticated user
    """
    serializer_class = RedistributionSerializer
    filterset_class = RedistributionFilter
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    def get_queryset(self):
        return redistributions_qs()

    @extend_schema(
        tags=["Redistributions"],
        parameters=[
            OpenApiParameter(name="priority", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="origin", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="destination", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(tags=["Redistributions"], request=RedistributionCreateSerializer, responses={201: OpenApiTypes.OBJECT})
    def create(self, request):
        actor = current_actor(request)
        ser = RedistributionCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        req, priority = RedistributionService.create(
            medication_id=data["medication_id"],
            origin_site_id=data["origin_site_id"],
            destination_site_id=data["destination_site_id"],
            requested_quantity=data["requested_quantity"],
            requested_by_user_id=actor.user_id,
            medical_justification=data["medical_justification"],
            affected_patients=data.get("affected_patients"),
            manual_priority=data.get("manual_priority") or None,
            priority_justification=data.get("priority_justification"),
        )
        req = redistributions_qs().get(id=req.id)
        return Response(
            {
                "redistribution": RedistributionSerializer(req).data,
                "priority": {
                    "source": priority.source,
                    "tier": priority.tier,
                    "justification": priority.justification,
                },
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(tags=["Redistributions"], responses={200: RedistributionDetailSerializer})
    def retrieve(self, request, pk=None):
        detail = redistribution_detail(request_id=require_uuid(pk, "id"))
        data = RedistributionDetailSerializer(detail.request, context={"origin_stock": detail.origin_stock}).data
        return Response(data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Redistributions"],
        request=RedistributionCompleteSerializer,
        responses={200: OpenApiTypes.OBJECT},
    )
    @action(methods=["POST"], detail=True, url_path="complete")
    def complete(self, request, pk=None):
        actor = current_actor(request)
        ser = RedistributionCompleteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        result = RedistributionService.complete(
            request_id=require_uuid(pk, "id"),
            approved_quantity=ser.validated_data["approved_quantity"],
            actor_user_id=actor.user_id,
            observations=ser.validated_data.get("observations", ""),
        )
        req = redistributions_qs().get(id=result.request.id)
        return Response(
            {
                "redistribution": RedistributionSerializer(req).data,
                "lot_code": result.source_lot_code,
                "resolved_alerts": result.resolved_alerts,
                "origin_alerts": AlertSerializer(result.origin_alerts, many=True).data,
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(tags=["Redistributions"], responses={200: RedistributionStatsSerializer})
    @action(methods=["GET"], detail=False, url_path="stats")
    def stats(self, request):
        return Response(RedistributionStatsSerializer(redistribution_stats()).data, status=status.HTTP_200_OK)
