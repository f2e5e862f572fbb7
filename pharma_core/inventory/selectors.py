# pharma_core/inventory/selectors.py
from __future__ import annotations

from datetime import date, timedelta
from uuid import UUID

from django.db.models import Count, Min, QuerySet, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from pharma_core.inventory.models import InventoryLot

FEFO_ORDERING = ("expiry_date", "lot_code")


def lots_qs(*, medication_id: UUID | None = None, site_id: UUID | None = None, include_empty: bool = False) -> QuerySet[InventoryLot]:
    qs = InventoryLot.objects.select_related("medication", "site")
    if medication_id:
        qs = qs.filter(medication_id=medication_id)
    if site_id:
        qs = qs.filter(site_id=site_id)
    if not include_empty:
        qs = qs.filter(quantity__gt=0)
    return qs.order_by(*FEFO_ORDERING)


def available_lots(*, medication_id: UUID, site_id: UUID) -> QuerySet[InventoryLot]:
    """
    Lots with stock, first-expired-first-out. Ties on expiry are broken by lot
    code so the order is total.
    """
    return (
        InventoryLot.objects.filter(medication_id=medication_id, site_id=site_id, quantity__gt=0)
        .order_by(*FEFO_ORDERING)
    )


def get_lot(*, medication_id: UUID, site_id: UUID, lot_code: str) -> InventoryLot | None:
    return InventoryLot.objects.filter(medication_id=medication_id, site_id=site_id, lot_code=lot_code).first()


def total_stock(*, medication_id: UUID, site_id: UUID) -> int:
    agg = InventoryLot.objects.filter(medication_id=medication_id, site_id=site_id).aggregate(
        total=Coalesce(Sum("quantity"), 0)
    )
    return int(agg["total"])


def expiring_lots(*, within_days: int, site_id: UUID | None = None, today: date | None = None) -> QuerySet[InventoryLot]:
    """
    Lots with stock whose expiry falls on or before today + within_days
    (already-expired lots included).
    """
    today = today or timezone.localdate()
    limit = today + timedelta(days=within_days)
    qs = InventoryLot.objects.select_related("medication", "site").filter(quantity__gt=0, expiry_date__lte=limit)
    if site_id:
        qs = qs.filter(site_id=site_id)
    return qs.order_by(*FEFO_ORDERING)


def stock_suggestions(*, medication_id: UUID, exclude_site_id: UUID | None = None, limit: int | None = None) -> list[dict]:
    """
    Active sites holding stock of a medication, largest stock first.
    Each row: site_id, site_name, site_city, site_type, total_stock, lot_count, nearest_expiry.
    """
    qs = InventoryLot.objects.filter(medication_id=medication_id, quantity__gt=0, site__is_active=True)
    if exclude_site_id:
        qs = qs.exclude(site_id=exclude_site_id)

    rows = (
        qs.values("site_id", "site__name", "site__city", "site__site_type")
        .annotate(total_stock=Sum("quantity"), lot_count=Count("id"), nearest_expiry=Min("expiry_date"))
        .order_by("-total_stock", "site__name")
    )
    if limit:
        rows = rows[:limit]

    return [
        {
            "site_id": r["site_id"],
            "site_name": r["site__name"],
            "site_city": r["site__city"],
            "site_type": r["site__site_type"],
            "total_stock": int(r["total_stock"]),
            "lot_count": r["lot_count"],
            "nearest_expiry": r["nearest_expiry"],
        }
        for r in rows
    ]
