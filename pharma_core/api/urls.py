# pharma_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from pharma_core.alerts.api.views import AlertViewSet
from pharma_core.catalog.api.views import MedicationViewSet
from pharma_core.iam.api.me import MeView
from pharma_core.inventory.api.views import (
    InventoryLotViewSet,
    StockEntryViewSet,
    StockExitViewSet,
    StockSuggestionViewSet,
)
from pharma_core.movements.api.views import MovementViewSet
from pharma_core.redistributions.api.views import RedistributionViewSet
from pharma_core.sites.api.views import SiteViewSet

router = DefaultRouter()

router.register(r"redistributions", RedistributionViewSet, basename="redistributions")
router.register(r"alerts", AlertViewSet, basename="alerts")
router.register(r"inventory/lots", InventoryLotViewSet, basename="inventory-lots")
router.register(r"inventory/stock-suggestions", StockSuggestionViewSet, basename="inventory-stock-suggestions")
router.register(r"inventory/entries", StockEntryViewSet, basename="inventory-entries")
router.register(r"inventory/exits", StockExitViewSet, basename="inventory-exits")
router.register(r"movements", MovementViewSet, basename="movements")
router.register(r"medications", MedicationViewSet, basename="medications")
router.register(r"sites", SiteViewSet, basename="sites")

urlpatterns = [
    path("auth/token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("me/", MeView.as_view(), name="me"),
    *router.urls,
]
