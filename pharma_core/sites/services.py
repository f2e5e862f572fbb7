# pharma_core/sites/services.py
from __future__ import annotations

from django.db import transaction
from rest_framework.exceptions import ValidationError

from pharma_core.sites.models import Site, SiteType


class SiteService:
    @staticmethod
    @transaction.atomic
    def create(*, name: str, code: str, city: str = "", site_type: str = SiteType.CLINIC) -> Site:
        if site_type not in SiteType.values:
            raise ValidationError({"site_type": "Invalid site_type."})
        if not (name or "").strip():
            raise ValidationError({"name": "Name is required."})

        return Site.objects.create(
            name=name.strip(),
            code=code,
            city=city or "",
            site_type=site_type,
            is_active=True,
        )
