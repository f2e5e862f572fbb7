from __future__ import annotations

from django.contrib import admin

from pharma_core.catalog.models import Medication, PathologyCategory


@admin.register(PathologyCategory)
class PathologyCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "priority_tier", "color", "updated_at")
    list_filter = ("priority_tier",)
    search_fields = ("name",)
    ordering = ("name",)


@admin.register(Medication)
class MedicationAdmin(admin.ModelAdmin):
    list_display = ("name", "strength", "form", "category", "requires_refrigeration")
    list_filter = ("category", "requires_refrigeration")
    search_fields = ("name", "active_ingredient")
    autocomplete_fields = ("category",)
    ordering = ("name",)
