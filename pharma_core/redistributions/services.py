# pharma_core/redistributions/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import UUID

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import APIException, ValidationError

from pharma_core.alerts.models import STOCK_LEVEL_TYPES, Alert, AlertType
from pharma_core.alerts.services import AlertService
from pharma_core.catalog.models import PriorityTier
from pharma_core.catalog.priority import Priority, assess_priority
from pharma_core.catalog.selectors import medication_by_id
from pharma_core.common.events import publish_on_commit
from pharma_core.common.exceptions import InsufficientStockError, InvalidStateError, NotFoundError
from pharma_core.inventory.models import InventoryLot
from pharma_core.inventory.selectors import total_stock
from pharma_core.inventory.services import LotService
from pharma_core.movements.models import MovementRecord
from pharma_core.movements.services import MovementService, TransferLeg
from pharma_core.redistributions.models import RedistributionRequest, RedistributionStatus
from pharma_core.sites.selectors import site_by_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionResult:
    request: RedistributionRequest
    source_lot_code: str
    destination_lot: InventoryLot
    exit_movement: MovementRecord
    entry_movement: MovementRecord
    resolved_alerts: int
    origin_alerts: list[Alert] = field(default_factory=list)


class RedistributionService:
    """
    Redistribution lifecycle: create (REQUESTED) and complete (COMPLETED).
    """

    @staticmethod
    def _validate_create(
        *,
        origin_site_id: UUID,
        destination_site_id: UUID,
        requested_quantity: int,
        medical_justification: str,
        affected_patients: int | None,
    ) -> None:
        errors = {}
        if origin_site_id == destination_site_id:
            errors["destination_site_id"] = "Origin and destination must be different sites."
        if requested_quantity is None or requested_quantity <= 0:
            errors["requested_quantity"] = "Requested quantity must be > 0."
        if not (medical_justification or "").strip():
            errors["medical_justification"] = "This field is required."
        if affected_patients is not None and affected_patients < 0:
            errors["affected_patients"] = "Must be >= 0."
        if errors:
            raise ValidationError(errors)

    @staticmethod
    @transaction.atomic
    def create(
        *,
        medication_id: UUID,
        origin_site_id: UUID,
        destination_site_id: UUID,
        requested_quantity: int,
        requested_by_user_id: int,
        medical_justification: str,
        affected_patients: int | None = None,
        manual_priority: str | None = None,
        priority_justification: str | None = None,
    ) -> tuple[RedistributionRequest, Priority]:
        """
        Stores a REQUESTED redistribution and returns it with its effective priority.

        A CRITICAL effective priority raises a CRITICAL alert at the destination.
        Every validation runs before the first write.
        """
        RedistributionService._validate_create(
            origin_site_id=origin_site_id,
            destination_site_id=destination_site_id,
            requested_quantity=requested_quantity,
            medical_justification=medical_justification,
            affected_patients=affected_patients,
        )
        assessment = assess_priority(
            medication_id=medication_id,
            manual_tier=manual_priority,
            justification=priority_justification,
        )
        medication = medication_by_id(medication_id=medication_id)
        origin = site_by_id(site_id=origin_site_id)
        destination = site_by_id(site_id=destination_site_id)

        suggested = LotService.suggest_lot(
            medication_id=medication_id,
            site_id=origin_site_id,
            requested_quantity=requested_quantity,
        )

        req = RedistributionRequest.objects.create(
            medication_id=medication_id,
            origin_site_id=origin_site_id,
            destination_site_id=destination_site_id,
            requested_by_user_id=requested_by_user_id,
            requested_quantity=requested_quantity,
            lot_code=suggested.lot_code if suggested else None,
            automatic_priority=assessment.automatic.tier,
            manual_priority=assessment.manual.tier if assessment.manual else None,
            priority_justification=assessment.manual.justification if assessment.manual else "",
            medical_justification=medical_justification.strip(),
            affected_patients=affected_patients,
            status=RedistributionStatus.REQUESTED,
        )

        effective = assessment.effective
        if effective.tier == PriorityTier.CRITICAL:
            AlertService.raise_alert(
                medication_id=medication_id,
                site_id=destination_site_id,
                alert_type=AlertType.CRITICAL,
                priority_tier=PriorityTier.CRITICAL,
                description=(
                    f"Critical redistribution requested: {requested_quantity} units of {medication} "
                    f"from {origin.name} to {destination.name}."
                ),
                redistribution_id=req.id,
                meta={"requested_quantity": requested_quantity, "origin_site_id": str(origin_site_id)},
            )

        logger.info(
            "redistribution_created request_id=%s medication_id=%s origin=%s destination=%s quantity=%s "
            "priority=%s source=%s",
            req.id,
            medication_id,
            origin_site_id,
            destination_site_id,
            requested_quantity,
            effective.tier,
            effective.source,
        )
        publish_on_commit(
            "redistribution.created",
            {
                "request_id": str(req.id),
                "medication_id": str(medication_id),
                "origin_site_id": str(origin_site_id),
                "destination_site_id": str(destination_site_id),
                "priority": effective.tier,
            },
        )
        return req, effective

    @staticmethod
    def complete(
        *,
        request_id: UUID,
        approved_quantity: int,
        actor_user_id: int,
        observations: str = "",
    ) -> CompletionResult:
        """
        Moves `approved_quantity` from one origin lot to the destination and
        closes the request, all in one transaction.

        Rejections (missing request, wrong state, bad quantity, not enough
        stock) happen before any write. Any failure after that rolls back the
        whole completion.
        """
        observations = (observations or "").strip()
        with transaction.atomic():
            req = (
                RedistributionRequest.objects.select_for_update()
                .select_related("medication", "origin_site", "destination_site")
                .filter(id=request_id)
                .first()
            )
            if req is None:
                raise NotFoundError(f"Redistribution {request_id} not found.")
            if req.status != RedistributionStatus.REQUESTED:
                raise InvalidStateError(f"Redistribution {request_id} is already {req.status}.")
            if approved_quantity is None or not (1 <= approved_quantity <= req.requested_quantity):
                raise ValidationError(
                    {"approved_quantity": f"Must be between 1 and {req.requested_quantity}."}
                )

            available = total_stock(medication_id=req.medication_id, site_id=req.origin_site_id)
            if available < approved_quantity:
                logger.warning(
                    "redistribution_rejected request_id=%s reason=aggregate available=%s approved=%s",
                    req.id,
                    available,
                    approved_quantity,
                )
                raise InsufficientStockError(
                    f"Origin site holds {available} units; {approved_quantity} approved.",
                    reason=InsufficientStockError.AGGREGATE,
                    available=available,
                    requested=approved_quantity,
                )

            source_lot = LotService.allocate_lot(
                medication_id=req.medication_id,
                site_id=req.origin_site_id,
                quantity=approved_quantity,
            )
            if source_lot is None:
                logger.warning(
                    "redistribution_rejected request_id=%s reason=no_single_lot available=%s approved=%s",
                    req.id,
                    available,
                    approved_quantity,
                )
                raise InsufficientStockError(
                    f"No single lot at the origin site holds {approved_quantity} units.",
                    reason=InsufficientStockError.NO_SINGLE_LOT,
                    available=available,
                    requested=approved_quantity,
                )

            try:
                result = RedistributionService._transfer(
                    req=req,
                    source_lot=source_lot,
                    approved_quantity=approved_quantity,
                    actor_user_id=actor_user_id,
                    observations=observations,
                )
            except APIException:
                raise
            except Exception:
                logger.critical(
                    "redistribution_completion_failed request_id=%s lot_code=%s approved=%s",
                    req.id,
                    source_lot.lot_code,
                    approved_quantity,
                    exc_info=True,
                )
                raise

        logger.info(
            "redistribution_completed request_id=%s lot_code=%s quantity=%s resolved_alerts=%s origin_alerts=%s",
            req.id,
            result.source_lot_code,
            approved_quantity,
            result.resolved_alerts,
            len(result.origin_alerts),
        )
        return result

    @staticmethod
    def _transfer(
        *,
        req: RedistributionRequest,
        source_lot: InventoryLot,
        approved_quantity: int,
        actor_user_id: int,
        observations: str,
    ) -> CompletionResult:
        LotService.decrement(
            medication_id=req.medication_id,
            site_id=req.origin_site_id,
            lot_code=source_lot.lot_code,
            quantity=approved_quantity,
        )
        destination_lot, _created = LotService.increment(
            medication_id=req.medication_id,
            site_id=req.destination_site_id,
            lot_code=source_lot.lot_code,
            quantity=approved_quantity,
            source_lot=source_lot,
        )

        now = timezone.now()
        updated = RedistributionRequest.objects.filter(
            id=req.id,
            status=RedistributionStatus.REQUESTED,
        ).update(
            status=RedistributionStatus.COMPLETED,
            completed_at=now,
            approved_quantity=approved_quantity,
            completed_by_user_id=actor_user_id,
            lot_code=source_lot.lot_code,
            observations=observations,
            updated_at=now,
        )
        if updated == 0:
            raise InvalidStateError(f"Redistribution {req.id} was completed concurrently.")

        exit_movement, entry_movement = MovementService.record_transfer(
            redistribution_id=req.id,
            medication_id=req.medication_id,
            origin=TransferLeg(site_id=req.origin_site_id, site_name=req.origin_site.name),
            destination=TransferLeg(site_id=req.destination_site_id, site_name=req.destination_site.name),
            quantity=approved_quantity,
            lot_code=source_lot.lot_code,
            actor_user_id=actor_user_id,
            observations=observations,
        )

        resolved = AlertService.resolve_all_matching(
            medication_id=req.medication_id,
            site_id=req.destination_site_id,
            types=STOCK_LEVEL_TYPES,
            resolver_user_id=actor_user_id,
            observations=f"Resolved by redistribution #{req.id}.",
        )
        origin_alerts = AlertService.react_to_stock_change(
            medication_id=req.medication_id,
            site_id=req.origin_site_id,
            tier=req.priority.tier,
            redistribution_id=req.id,
            context="redistribution",
        )

        req.refresh_from_db()
        publish_on_commit(
            "redistribution.completed",
            {
                "request_id": str(req.id),
                "medication_id": str(req.medication_id),
                "origin_site_id": str(req.origin_site_id),
                "destination_site_id": str(req.destination_site_id),
                "lot_code": source_lot.lot_code,
                "quantity": approved_quantity,
            },
        )
        return CompletionResult(
            request=req,
            source_lot_code=source_lot.lot_code,
            destination_lot=destination_lot,
            exit_movement=exit_movement,
            entry_movement=entry_movement,
            resolved_alerts=resolved,
            origin_alerts=origin_alerts,
        )
