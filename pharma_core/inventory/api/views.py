# pharma_core/inventory/api/views.py
from __future__ import annotations

from django.conf import settings
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from pharma_core.common.api.pagination import paginate
from pharma_core.common.api.params import int_or_default, require_uuid, uuid_or_none
from pharma_core.iam.identity import Actor, current_actor
from pharma_core.inventory.api.serializers import (
    InventoryLotSerializer,
    StockEntryCreateSerializer,
    StockEntryResultSerializer,
    StockExitCreateSerializer,
    StockExitResultSerializer,
    StockSuggestionSerializer,
)
from pharma_core.inventory.models import InventoryLot
from pharma_core.inventory.selectors import expiring_lots, lots_qs, stock_suggestions
from pharma_core.inventory.services import StockService


def _site_for(actor: Actor, site_id):
    """Explicit site wins; otherwise the actor's assigned site."""
    site_id = site_id or actor.site_id
    if site_id is None:
        raise ValidationError({"site_id": "This field is required (no assigned site on your profile)."})
    return site_id


class InventoryLotViewSet(viewsets.GenericViewSet):
    serializer_class = InventoryLotSerializer
    queryset = InventoryLot.objects.none()

    @extend_schema(
        tags=["Inventory"],
        responses={200: InventoryLotSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="medication", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="site", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="include_empty", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = lots_qs(
            medication_id=uuid_or_none(request.query_params.get("medication"), "medication"),
            site_id=uuid_or_none(request.query_params.get("site"), "site"),
            include_empty=request.query_params.get("include_empty") in ("1", "true", "True"),
        )
        return paginate(request, qs, InventoryLotSerializer)

    @extend_schema(
        tags=["Inventory"],
        responses={200: InventoryLotSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="days", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="site", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    @action(methods=["GET"], detail=False, url_path="expiring")
    def expiring(self, request):
        default_days = settings.PHARMA_INVENTORY.get("EXPIRY_WARNING_DAYS", 30)
        days = int_or_default(request.query_params.get("days"), "days", default_days)
        if days < 0:
            raise ValidationError({"days": ["Must be >= 0."]})
        qs = expiring_lots(within_days=days, site_id=uuid_or_none(request.query_params.get("site"), "site"))
        return paginate(request, qs, InventoryLotSerializer)


class StockSuggestionViewSet(viewsets.ViewSet):
    """
    Sites holding stock of a medication, largest stock first.
    Used to pick an origin for a redistribution request.
    """

    @extend_schema(
        tags=["Inventory"],
        responses={200: StockSuggestionSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="medication", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=True),
            OpenApiParameter(name="exclude_site", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="limit", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        rows = stock_suggestions(
            medication_id=require_uuid(request.query_params.get("medication"), "medication"),
            exclude_site_id=uuid_or_none(request.query_params.get("exclude_site"), "exclude_site"),
            limit=int_or_default(request.query_params.get("limit"), "limit", 0) or None,
        )
        return Response(StockSuggestionSerializer(rows, many=True).data, status=status.HTTP_200_OK)


class StockEntryViewSet(viewsets.ViewSet):
    @extend_schema(tags=["Inventory"], request=StockEntryCreateSerializer, responses={201: StockEntryResultSerializer})
    def create(self, request):
        actor = current_actor(request)
        ser = StockEntryCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        result = StockService.record_entry(
            medication_id=data["medication_id"],
            site_id=_site_for(actor, data.get("site_id")),
            lot_code=data["lot_code"],
            quantity=data["quantity"],
            actor_user_id=actor.user_id,
            expiry_date=data.get("expiry_date"),
            supplier=data.get("supplier", ""),
            unit_price=data.get("unit_price"),
            notes=data.get("notes", ""),
        )
        return Response(StockEntryResultSerializer(result).data, status=status.HTTP_201_CREATED)


class StockExitViewSet(viewsets.ViewSet):
    @extend_schema(tags=["Inventory"], request=StockExitCreateSerializer, responses={201: StockExitResultSerializer})
    def create(self, request):
        actor = current_actor(request)
        ser = StockExitCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        result = StockService.record_exit(
            medication_id=data["medication_id"],
            site_id=_site_for(actor, data.get("site_id")),
            quantity=data["quantity"],
            actor_user_id=actor.user_id,
            lot_code=data.get("lot_code") or None,
            patient_document=data.get("patient_document", ""),
            notes=data.get("notes", ""),
        )
        return Response(StockExitResultSerializer(result).data, status=status.HTTP_201_CREATED)
