from django.contrib import admin

from pharma_core.redistributions.models import RedistributionRequest


@admin.register(RedistributionRequest)
class RedistributionRequestAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "medication",
        "origin_site",
        "destination_site",
        "requested_quantity",
        "automatic_priority",
        "manual_priority",
        "status",
        "requested_at",
        "completed_at",
    )
    list_filter = ("status", "automatic_priority", "manual_priority")
    search_fields = ("medication__name", "origin_site__name", "destination_site__name", "lot_code")
    ordering = ("-requested_at",)
    # Status changes go through the service, never the admin form.
    readonly_fields = ("status", "completed_at", "approved_quantity", "completed_by_user_id")
