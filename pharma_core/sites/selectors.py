# pharma_core/sites/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from pharma_core.common.exceptions import NotFoundError
from pharma_core.sites.models import Site


def sites_qs(*, active_only: bool = True) -> QuerySet[Site]:
    qs = Site.objects.all()
    if active_only:
        qs = qs.filter(is_active=True)
    return qs.order_by("name")


def site_by_id(*, site_id: UUID) -> Site:
    try:
        return Site.objects.get(id=site_id)
    except Site.DoesNotExist:
        raise NotFoundError(f"Site {site_id} not found.")
