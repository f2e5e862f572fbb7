from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from pharma_core.alerts.api.serializers import (
    AlertResolveSerializer,
    AlertSerializer,
    GlobalAlertStatsSerializer,
    ResolvedAlertStatsSerializer,
    SiteAlertStatsSerializer,
)
from pharma_core.alerts.filters import AlertFilter
from pharma_core.alerts.selectors import (
    active_alerts,
    active_alerts_for_site,
    alerts_qs,
    global_alert_stats,
    resolved_alert_stats,
    resolved_alerts,
    site_alert_stats,
)
from pharma_core.alerts.services import AlertService
from pharma_core.common.api.params import require_uuid, uuid_or_none
from pharma_core.iam.identity import current_actor

SCOPES = ("site", "all", "resolved")

SCOPE_PARAMS = [
    OpenApiParameter(name="scope", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False, enum=SCOPES),
    OpenApiParameter(name="site", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
]


class AlertViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    scope=site (default): active alerts of one site, most urgent first.
    scope=all: active alerts across the network.
    scope=resolved: resolved alerts, latest resolution first.
    """
    serializer_class = AlertSerializer
    filterset_class = AlertFilter
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    def _scope(self) -> str:
        scope = self.request.query_params.get("scope") or "site"
        if scope not in SCOPES:
            raise ValidationError({"scope": f"Must be one of {', '.join(SCOPES)}."})
        return scope

    def _site_id(self):
        site_id = uuid_or_none(self.request.query_params.get("site"), "site")
        if site_id is None:
            site_id = current_actor(self.request).site_id
        if site_id is None:
            raise ValidationError({"site": "This field is required (no assigned site on your profile)."})
        return site_id

    def get_queryset(self):
        if self.action != "list":
            return alerts_qs()

        scope = self._scope()
        if scope == "all":
            return active_alerts()
        if scope == "resolved":
            return resolved_alerts(site_id=uuid_or_none(self.request.query_params.get("site"), "site"))
        return active_alerts_for_site(site_id=self._site_id())

    @extend_schema(tags=["Alerts"], parameters=SCOPE_PARAMS)
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(tags=["Alerts"], request=AlertResolveSerializer, responses={200: AlertSerializer})
    @action(methods=["POST"], detail=True, url_path="resolve")
    def resolve(self, request, pk=None):
        actor = current_actor(request)
        ser = AlertResolveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        alert = AlertService.resolve(
            alert_id=require_uuid(pk, "id"),
            resolver_user_id=actor.user_id,
            observations=ser.validated_data.get("observations"),
        )
        return Response(AlertSerializer(alert).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Alerts"],
        parameters=SCOPE_PARAMS,
        responses={200: OpenApiTypes.OBJECT},
    )
    @action(methods=["GET"], detail=False, url_path="stats")
    def stats(self, request):
        scope = self._scope()
        if scope == "all":
            data = GlobalAlertStatsSerializer(global_alert_stats()).data
        elif scope == "resolved":
            site_id = uuid_or_none(request.query_params.get("site"), "site")
            data = ResolvedAlertStatsSerializer(resolved_alert_stats(site_id=site_id)).data
        else:
            data = SiteAlertStatsSerializer(site_alert_stats(site_id=self._site_id())).data
        return Response(data, status=status.HTTP_200_OK)
