from __future__ import annotations

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from pharma_core.alerts.models import AlertType
from pharma_core.alerts.services import AlertService
from pharma_core.catalog.priority import tier_for_medication
from pharma_core.inventory.selectors import expiring_lots


class Command(BaseCommand):
    help = "Raise EXPIRY alerts for lots with stock expiring within the warning window."

    def add_arguments(self, parser):
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help="Warning window in days (defaults to PHARMA_INVENTORY['EXPIRY_WARNING_DAYS']).",
        )
        parser.add_argument("--site", type=str, default=None, help="Restrict to one site id.")

    def handle(self, *args, **options):
        days = options["days"]
        if days is None:
            days = settings.PHARMA_INVENTORY.get("EXPIRY_WARNING_DAYS", 30)

        today = timezone.localdate()
        count = 0
        for lot in expiring_lots(within_days=days, site_id=options["site"], today=today).select_related("medication__category"):
            remaining = (lot.expiry_date - today).days
            if remaining < 0:
                description = f"Lot {lot.lot_code} of {lot.medication} at {lot.site.name} expired on {lot.expiry_date}."
            else:
                description = (
                    f"Lot {lot.lot_code} of {lot.medication} at {lot.site.name} "
                    f"expires on {lot.expiry_date} ({remaining} days)."
                )
            AlertService.raise_alert(
                medication_id=lot.medication_id,
                site_id=lot.site_id,
                alert_type=AlertType.EXPIRY,
                priority_tier=tier_for_medication(lot.medication),
                description=description,
                meta={"lot_code": lot.lot_code, "expiry_date": lot.expiry_date.isoformat(), "quantity": lot.quantity},
            )
            count += 1

        self.stdout.write(self.style.SUCCESS(f"Raised {count} expiry alert(s) (window: {days} days)."))
