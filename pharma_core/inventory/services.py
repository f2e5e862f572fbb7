# pharma_core/inventory/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from pharma_core.alerts.models import Alert
from pharma_core.alerts.services import AlertService
from pharma_core.catalog.priority import automatic_priority
from pharma_core.catalog.selectors import medication_by_id
from pharma_core.common.exceptions import InsufficientStockError, NotFoundError
from pharma_core.inventory.models import InventoryLot
from pharma_core.inventory.selectors import FEFO_ORDERING, available_lots, get_lot, total_stock
from pharma_core.movements.models import MovementRecord, MovementType
from pharma_core.movements.services import MovementService
from pharma_core.sites.selectors import site_by_id

logger = logging.getLogger(__name__)


class LotService:
    """
    Lot-level stock primitives. Quantities only change through
    `decrement` (compare-and-set) and `increment`.
    """

    @staticmethod
    def suggest_lot(*, medication_id: UUID, site_id: UUID, requested_quantity: int) -> InventoryLot | None:
        """
        Advisory pick for a new request: the earliest-expiring lot that covers
        the quantity, else the earliest-expiring lot with any stock. Locks nothing.
        """
        lots = available_lots(medication_id=medication_id, site_id=site_id)
        covering = lots.filter(quantity__gte=requested_quantity).first()
        if covering is not None:
            return covering
        return lots.first()

    @staticmethod
    def allocate_lot(*, medication_id: UUID, site_id: UUID, quantity: int) -> InventoryLot | None:
        """
        Authoritative FEFO pick: the earliest-expiring lot holding at least
        `quantity`, row-locked. Must run inside a transaction.
        """
        return (
            InventoryLot.objects.select_for_update()
            .filter(medication_id=medication_id, site_id=site_id, quantity__gte=quantity)
            .order_by(*FEFO_ORDERING)
            .first()
        )

    @staticmethod
    @transaction.atomic
    def decrement(*, medication_id: UUID, site_id: UUID, lot_code: str, quantity: int) -> InventoryLot:
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": "Quantity must be > 0."})

        updated = InventoryLot.objects.filter(
            medication_id=medication_id,
            site_id=site_id,
            lot_code=lot_code,
            quantity__gte=quantity,
        ).update(quantity=F("quantity") - quantity, updated_at=timezone.now())

        lot = get_lot(medication_id=medication_id, site_id=site_id, lot_code=lot_code)
        if lot is None:
            raise NotFoundError(f"Lot '{lot_code}' not found at site {site_id}.")
        if updated == 0:
            logger.warning(
                "lot_decrement_rejected lot_code=%s site_id=%s available=%s requested=%s",
                lot_code,
                site_id,
                lot.quantity,
                quantity,
            )
            raise InsufficientStockError(
                f"Lot '{lot_code}' holds {lot.quantity} units; {quantity} requested.",
                reason=InsufficientStockError.LOT,
                available=lot.quantity,
                requested=quantity,
            )
        return lot

    @staticmethod
    @transaction.atomic
    def increment(
        *,
        medication_id: UUID,
        site_id: UUID,
        lot_code: str,
        quantity: int,
        source_lot: InventoryLot | None = None,
        expiry_date: date | None = None,
        supplier: str = "",
        unit_price: Decimal | None = None,
    ) -> tuple[InventoryLot, bool]:
        """
        Adds to the (medication, site, lot_code) lot, creating it when missing.
        A new lot takes expiry date, supplier and unit price from `source_lot`
        when given, otherwise from the explicit arguments.
        """
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": "Quantity must be > 0."})
        lot_code = (lot_code or "").strip()
        if not lot_code:
            raise ValidationError({"lot_code": "This field is required."})

        if InventoryLot.objects.filter(medication_id=medication_id, site_id=site_id, lot_code=lot_code).exists():
            LotService._add(medication_id=medication_id, site_id=site_id, lot_code=lot_code, quantity=quantity)
            return get_lot(medication_id=medication_id, site_id=site_id, lot_code=lot_code), False

        if source_lot is not None:
            expiry_date = source_lot.expiry_date
            supplier = source_lot.supplier
            unit_price = source_lot.unit_price
        if expiry_date is None:
            raise ValidationError({"expiry_date": "Required when receiving a new lot."})

        try:
            with transaction.atomic():
                lot = InventoryLot.objects.create(
                    medication_id=medication_id,
                    site_id=site_id,
                    lot_code=lot_code,
                    quantity=quantity,
                    expiry_date=expiry_date,
                    received_on=timezone.localdate(),
                    supplier=supplier or "",
                    unit_price=unit_price,
                )
            return lot, True
        except IntegrityError:
            # Created concurrently between the existence check and the insert.
            LotService._add(medication_id=medication_id, site_id=site_id, lot_code=lot_code, quantity=quantity)
            return get_lot(medication_id=medication_id, site_id=site_id, lot_code=lot_code), False

    @staticmethod
    def _add(*, medication_id: UUID, site_id: UUID, lot_code: str, quantity: int) -> None:
        InventoryLot.objects.filter(medication_id=medication_id, site_id=site_id, lot_code=lot_code).update(
            quantity=F("quantity") + quantity,
            updated_at=timezone.now(),
        )


@dataclass(frozen=True)
class EntryResult:
    lot: InventoryLot
    lot_created: bool
    movement: MovementRecord


@dataclass(frozen=True)
class ExitResult:
    lot: InventoryLot
    movement: MovementRecord
    alerts: list[Alert] = field(default_factory=list)


class StockService:
    """
    Direct receipts and dispensations at a site.
    """

    @staticmethod
    @transaction.atomic
    def record_entry(
        *,
        medication_id: UUID,
        site_id: UUID,
        lot_code: str,
        quantity: int,
        actor_user_id: int,
        expiry_date: date | None = None,
        supplier: str = "",
        unit_price: Decimal | None = None,
        notes: str = "",
    ) -> EntryResult:
        site_by_id(site_id=site_id)
        medication_by_id(medication_id=medication_id)

        lot, created = LotService.increment(
            medication_id=medication_id,
            site_id=site_id,
            lot_code=lot_code,
            quantity=quantity,
            expiry_date=expiry_date,
            supplier=supplier,
            unit_price=unit_price,
        )
        movement = MovementService.record(
            medication_id=medication_id,
            site_id=site_id,
            actor_user_id=actor_user_id,
            movement_type=MovementType.ENTRY,
            quantity=quantity,
            lot_code=lot.lot_code,
            notes=notes,
        )
        logger.info(
            "stock_entry_recorded site_id=%s medication_id=%s lot_code=%s quantity=%s",
            site_id,
            medication_id,
            lot.lot_code,
            quantity,
        )
        return EntryResult(lot=lot, lot_created=created, movement=movement)

    @staticmethod
    @transaction.atomic
    def record_exit(
        *,
        medication_id: UUID,
        site_id: UUID,
        quantity: int,
        actor_user_id: int,
        lot_code: str | None = None,
        patient_document: str = "",
        notes: str = "",
    ) -> ExitResult:
        """
        Dispenses from the given lot, or from the FEFO lot covering the quantity
        when no lot is named, then raises the alerts owed for the resulting stock.
        """
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": "Quantity must be > 0."})
        site_by_id(site_id=site_id)
        priority = automatic_priority(medication_id=medication_id)

        if not lot_code:
            lot = LotService.allocate_lot(medication_id=medication_id, site_id=site_id, quantity=quantity)
            if lot is None:
                available = total_stock(medication_id=medication_id, site_id=site_id)
                reason = (
                    InsufficientStockError.AGGREGATE if available < quantity else InsufficientStockError.NO_SINGLE_LOT
                )
                raise InsufficientStockError(reason=reason, available=available, requested=quantity)
            lot_code = lot.lot_code

        lot = LotService.decrement(medication_id=medication_id, site_id=site_id, lot_code=lot_code, quantity=quantity)
        movement = MovementService.record(
            medication_id=medication_id,
            site_id=site_id,
            actor_user_id=actor_user_id,
            movement_type=MovementType.EXIT,
            quantity=quantity,
            lot_code=lot_code,
            notes=notes,
            patient_document=patient_document,
        )
        alerts = AlertService.react_to_stock_change(
            medication_id=medication_id,
            site_id=site_id,
            tier=priority.tier,
            context="exit",
        )
        logger.info(
            "stock_exit_recorded site_id=%s medication_id=%s lot_code=%s quantity=%s alerts=%s",
            site_id,
            medication_id,
            lot_code,
            quantity,
            len(alerts),
        )
        return ExitResult(lot=lot, movement=movement, alerts=alerts)
