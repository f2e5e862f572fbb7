from django.contrib import admin

from pharma_core.movements.models import MovementRecord


@admin.register(MovementRecord)
class MovementRecordAdmin(admin.ModelAdmin):
    list_display = (
        "movement_type",
        "medication",
        "site",
        "quantity",
        "lot_code",
        "actor_user_id",
        "occurred_at",
    )
    list_filter = ("movement_type", "site")
    search_fields = ("lot_code", "notes", "patient_document")
    readonly_fields = [f.name for f in MovementRecord._meta.fields]
    ordering = ("-occurred_at",)

    def has_delete_permission(self, request, obj=None):
        return False
