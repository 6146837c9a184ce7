# medtransport/services/patient.py
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import NotFound, ensure_owner
from ..models.base import status_value
from ..models.patient import Patient, TransportRequest, RequestStatus
from ..result import CallContext

logger = logging.getLogger(__name__)

# утилиты

def _patient_by_id(db: Session, patient_id: int) -> Patient:
    p = db.get(Patient, patient_id)
    if not p:
        raise NotFound("Пациент не найден")
    return p

def _request_by_id(db: Session, request_id: int) -> TransportRequest:
    r = db.get(TransportRequest, request_id)
    if not r:
        raise NotFound("Заявка не найдена")
    return r


def register_patient(
    db: Session,
    ctx: CallContext,
    *,
    name: str,
    address: str,
    contact: str,
    medical_condition: str,
    mobility_status: str,
    equipment_needs: str,
    recurring_schedule: bool,
) -> Patient:
    p = Patient(
        owner=ctx.actor,
        name=name,
        address=address,
        contact=contact,
        medical_condition=medical_condition,
        mobility_status=mobility_status,
        equipment_needs=equipment_needs,
        recurring_schedule=recurring_schedule,
        registration_date=ctx.clock,
    )
    db.add(p); db.commit(); db.refresh(p)
    logger.info("patient %s registered by %s", p.id, ctx.actor)
    return p


def get_patient(db: Session, patient_id: int) -> Patient | None:
    return db.get(Patient, patient_id)


def update_patient(
    db: Session,
    ctx: CallContext,
    patient_id: int,
    *,
    address: str,
    contact: str,
    medical_condition: str,
    mobility_status: str,
    equipment_needs: str,
    recurring_schedule: bool,
) -> Patient:
    # имя не меняется, остальное перезаписываем целиком
    p = _patient_by_id(db, patient_id)
    ensure_owner(p, ctx.actor, "Пациент")

    p.address = address
    p.contact = contact
    p.medical_condition = medical_condition
    p.mobility_status = mobility_status
    p.equipment_needs = equipment_needs
    p.recurring_schedule = recurring_schedule
    db.commit(); db.refresh(p)
    logger.info("patient %s updated", p.id)
    return p


def create_transport_request(
    db: Session,
    ctx: CallContext,
    patient_id: int,
    *,
    pickup_location: str,
    destination: str,
    appointment_time: int,
    return_trip: bool,
    special_instructions: str,
) -> TransportRequest:
    p = _patient_by_id(db, patient_id)
    ensure_owner(p, ctx.actor, "Пациент")

    r = TransportRequest(
        patient_id=p.id,
        pickup_location=pickup_location,
        destination=destination,
        appointment_time=appointment_time,
        return_trip=return_trip,
        special_instructions=special_instructions,
        status=RequestStatus.PENDING.value,
        request_date=ctx.clock,
    )
    db.add(r); db.commit(); db.refresh(r)
    logger.info("transport request %s created for patient %s", r.id, p.id)
    return r


def get_transport_request(db: Session, request_id: int) -> TransportRequest | None:
    return db.get(TransportRequest, request_id)


def list_transport_requests(db: Session, patient_id: int) -> list[TransportRequest]:
    return list(db.execute(
        select(TransportRequest)
        .where(TransportRequest.patient_id == patient_id)
        .order_by(TransportRequest.id)
    ).scalars().all())


def update_request_status(db: Session, ctx: CallContext, request_id: int, status: str) -> TransportRequest:
    """
    Статус менять может только владелец пациента. Таблицы переходов нет:
    принимается любое значение, в том числе откат confirmed -> pending.
    """
    r = _request_by_id(db, request_id)
    p = _patient_by_id(db, r.patient_id)
    ensure_owner(p, ctx.actor, "Заявка")

    r.status = status_value(status)
    db.commit(); db.refresh(r)
    logger.info("transport request %s -> %s", r.id, r.status)
    return r
