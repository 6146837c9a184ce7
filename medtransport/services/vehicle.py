# medtransport/services/vehicle.py
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import NotFound, ensure_owner
from ..models.vehicle import Vehicle, Inspection, VerificationStatus, NEVER_INSPECTED
from ..result import CallContext, Suitability

logger = logging.getLogger(__name__)


def _vehicle_by_id(db: Session, vehicle_id: int) -> Vehicle:
    v = db.get(Vehicle, vehicle_id)
    if not v:
        raise NotFound("Автомобиль не найден")
    return v


def register_vehicle(
    db: Session,
    ctx: CallContext,
    *,
    registration_number: str,
    vehicle_type: str,
    capacity: int,
    wheelchair_accessible: bool,
    stretcher_capable: bool,
    oxygen_equipped: bool,
    medical_equipment: str,
) -> Vehicle:
    v = Vehicle(
        owner=ctx.actor,
        registration_number=registration_number,
        vehicle_type=vehicle_type,
        capacity=capacity,
        wheelchair_accessible=wheelchair_accessible,
        stretcher_capable=stretcher_capable,
        oxygen_equipped=oxygen_equipped,
        medical_equipment=medical_equipment,
        last_inspection_date=NEVER_INSPECTED,
        verification_status=VerificationStatus.PENDING.value,
        registration_date=ctx.clock,
    )
    db.add(v); db.commit(); db.refresh(v)
    logger.info("vehicle %s (%s) registered by %s", v.id, registration_number, ctx.actor)
    return v


def get_vehicle(db: Session, vehicle_id: int) -> Vehicle | None:
    return db.get(Vehicle, vehicle_id)


def update_vehicle(
    db: Session,
    ctx: CallContext,
    vehicle_id: int,
    *,
    registration_number: str,
    vehicle_type: str,
    capacity: int,
    wheelchair_accessible: bool,
    stretcher_capable: bool,
    oxygen_equipped: bool,
    medical_equipment: str,
) -> Vehicle:
    """
    Любая правка — verification_status=pending (снова на проверку авто).
    Дата последнего осмотра при этом сохраняется.
    """
    v = _vehicle_by_id(db, vehicle_id)
    ensure_owner(v, ctx.actor, "Автомобиль")

    v.registration_number = registration_number
    v.vehicle_type = vehicle_type
    v.capacity = capacity
    v.wheelchair_accessible = wheelchair_accessible
    v.stretcher_capable = stretcher_capable
    v.oxygen_equipped = oxygen_equipped
    v.medical_equipment = medical_equipment

    v.verification_status = VerificationStatus.PENDING.value
    db.commit(); db.refresh(v)
    logger.info("vehicle %s updated, verification reset to pending", v.id)
    return v


def record_inspection(
    db: Session,
    ctx: CallContext,
    vehicle_id: int,
    *,
    equipment_verified: str,
    safety_status: str,
    cleanliness_status: str,
    notes: str,
    inspector: str,
) -> Inspection:
    """
    Осмотр может провести любой инспектор. safety_status осмотра
    становится статусом верификации машины как есть.
    """
    v = _vehicle_by_id(db, vehicle_id)

    i = Inspection(
        vehicle_id=v.id,
        inspector=inspector,
        inspection_date=ctx.clock,
        equipment_verified=equipment_verified,
        safety_status=safety_status,
        cleanliness_status=cleanliness_status,
        notes=notes,
    )
    db.add(i)
    v.last_inspection_date = ctx.clock
    v.verification_status = safety_status
    db.commit(); db.refresh(i)
    logger.info("inspection %s of vehicle %s by %s: %s", i.id, v.id, inspector, safety_status)
    return i


def get_inspection(db: Session, inspection_id: int) -> Inspection | None:
    return db.get(Inspection, inspection_id)


def list_inspections(db: Session, vehicle_id: int) -> list[Inspection]:
    return list(db.execute(
        select(Inspection)
        .where(Inspection.vehicle_id == vehicle_id)
        .order_by(Inspection.id)
    ).scalars().all())


def check_vehicle_suitability(
    db: Session,
    vehicle_id: int,
    wheelchair_needed: bool,
    stretcher_needed: bool,
    oxygen_needed: bool,
) -> Suitability:
    # статус верификации только сообщаем, в пригодность он не входит
    v = _vehicle_by_id(db, vehicle_id)
    suitable = (
        (not wheelchair_needed or v.wheelchair_accessible)
        and (not stretcher_needed or v.stretcher_capable)
        and (not oxygen_needed or v.oxygen_equipped)
    )
    return Suitability(suitable=bool(suitable), verification_status=v.verification_status)
