# pharma_core/movements/services.py
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from pharma_core.movements.models import MovementRecord, MovementType


@dataclass(frozen=True)
class TransferLeg:
    site_id: UUID
    site_name: str


class MovementService:
    """
    Append-only writer for the movement ledger.
    """

    @staticmethod
    def _validate(quantity: int) -> None:
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": "Quantity must be > 0."})

    @staticmethod
    @transaction.atomic
    def record(
        *,
        medication_id: UUID,
        site_id: UUID,
        actor_user_id: int,
        movement_type: str,
        quantity: int,
        lot_code: str = "",
        notes: str = "",
        patient_document: str = "",
        redistribution_id: UUID | None = None,
    ) -> MovementRecord:
        MovementService._validate(quantity)
        if movement_type not in MovementType.values:
            raise ValidationError({"movement_type": "Invalid movement_type."})

        return MovementRecord.objects.create(
            medication_id=medication_id,
            site_id=site_id,
            actor_user_id=actor_user_id,
            movement_type=movement_type,
            quantity=quantity,
            lot_code=lot_code or "",
            notes=notes or "",
            patient_document=patient_document or "",
            redistribution_id=redistribution_id,
        )

    @staticmethod
    def transfer_note(*, redistribution_id: UUID, direction: str, counterpart: str, observations: str = "") -> str:
        """
        direction is "to" for the origin leg and "from" for the destination leg.
        """
        note = f"Redistribution #{redistribution_id} {direction} {counterpart}"
        observations = (observations or "").strip()
        if observations:
            note = f"{note} - {observations}"
        return note

    @staticmethod
    @transaction.atomic
    def record_transfer(
        *,
        redistribution_id: UUID,
        medication_id: UUID,
        origin: TransferLeg,
        destination: TransferLeg,
        quantity: int,
        lot_code: str,
        actor_user_id: int,
        observations: str = "",
    ) -> tuple[MovementRecord, MovementRecord]:
        """
        Writes the paired EXIT (origin) / ENTRY (destination) records of a
        completed redistribution.
        """
        MovementService._validate(quantity)

        exit_record = MovementRecord(
            medication_id=medication_id,
            site_id=origin.site_id,
            actor_user_id=actor_user_id,
            movement_type=MovementType.EXIT,
            quantity=quantity,
            lot_code=lot_code,
            notes=MovementService.transfer_note(
                redistribution_id=redistribution_id,
                direction="to",
                counterpart=destination.site_name,
                observations=observations,
            ),
            redistribution_id=redistribution_id,
        )
        entry_record = MovementRecord(
            medication_id=medication_id,
            site_id=destination.site_id,
            actor_user_id=actor_user_id,
            movement_type=MovementType.ENTRY,
            quantity=quantity,
            lot_code=lot_code,
            notes=MovementService.transfer_note(
                redistribution_id=redistribution_id,
                direction="from",
                counterpart=origin.site_name,
                observations=observations,
            ),
            redistribution_id=redistribution_id,
        )
        MovementRecord.objects.bulk_create([exit_record, entry_record])
        return exit_record, entry_record
