from django.contrib import admin

from pharma_core.alerts.models import Alert


@admin.register(Alert)
class AlertAdmin(admin.ModelAdmin):
    list_display = ("alert_type", "priority_tier", "status", "medication", "site", "generated_at", "resolved_at")
    list_filter = ("alert_type", "priority_tier", "status", "site")
    search_fields = ("description", "observations", "medication__name", "site__name")
    ordering = ("-generated_at",)
