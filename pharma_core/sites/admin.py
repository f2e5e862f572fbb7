from __future__ import annotations

from django.contrib import admin

from pharma_core.sites.models import Site


@admin.register(Site)
class SiteAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "city", "site_type", "is_active", "updated_at")
    list_filter = ("is_active", "site_type", "city")
    search_fields = ("name", "code", "city")
    readonly_fields = ("id", "created_at", "updated_at")
    ordering = ("name",)
