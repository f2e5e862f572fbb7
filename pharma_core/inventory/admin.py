from django.contrib import admin

from pharma_core.inventory.models import InventoryLot


@admin.register(InventoryLot)
class InventoryLotAdmin(admin.ModelAdmin):
    list_display = ("lot_code", "medication", "site", "quantity", "expiry_date", "received_on", "supplier")
    list_filter = ("site", "expiry_date")
    search_fields = ("lot_code", "medication__name", "site__name", "supplier")
    ordering = ("expiry_date", "lot_code")
