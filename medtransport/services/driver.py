# medtransport/services/driver.py
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import NotFound, ensure_owner
from ..models.driver import Driver, Certification, CertificationStatus
from ..result import CallContext, Eligibility

logger = logging.getLogger(__name__)


def _driver_by_id(db: Session, driver_id: int) -> Driver:
    d = db.get(Driver, driver_id)
    if not d:
        raise NotFound("Водитель не найден")
    return d


def register_driver(
    db: Session,
    ctx: CallContext,
    *,
    name: str,
    license_number: str,
    license_expiry: int,
    medical_training: str,
    cpr_certified: bool,
    first_aid_certified: bool,
    special_training: str,
) -> Driver:
    d = Driver(
        owner=ctx.actor,
        name=name,
        license_number=license_number,
        license_expiry=license_expiry,
        medical_training=medical_training,
        cpr_certified=cpr_certified,
        first_aid_certified=first_aid_certified,
        special_training=special_training,
        certification_status=CertificationStatus.PENDING.value,
        registration_date=ctx.clock,
    )
    db.add(d); db.commit(); db.refresh(d)
    logger.info("driver %s registered by %s", d.id, ctx.actor)
    return d


def get_driver(db: Session, driver_id: int) -> Driver | None:
    return db.get(Driver, driver_id)


def update_driver(
    db: Session,
    ctx: CallContext,
    driver_id: int,
    *,
    license_number: str,
    license_expiry: int,
    medical_training: str,
    cpr_certified: bool,
    first_aid_certified: bool,
    special_training: str,
) -> Driver:
    """
    Полная замена изменяемых полей. Любая правка снимает сертификацию (снова pending).
    """
    d = _driver_by_id(db, driver_id)
    ensure_owner(d, ctx.actor, "Водитель")

    d.license_number = license_number
    d.license_expiry = license_expiry
    d.medical_training = medical_training
    d.cpr_certified = cpr_certified
    d.first_aid_certified = first_aid_certified
    d.special_training = special_training

    d.certification_status = CertificationStatus.PENDING.value
    db.commit(); db.refresh(d)
    logger.info("driver %s updated, certification reset to pending", d.id)
    return d


def add_certification(
    db: Session,
    ctx: CallContext,
    driver_id: int,
    *,
    certification_type: str,
    expiry_date: int,
    certification_details: str,
    certifier: str,
) -> Certification:
    """
    Сертифицировать может кто угодно, владелец не проверяется.
    Сертификат и статус водителя пишутся одним коммитом.
    """
    d = _driver_by_id(db, driver_id)

    c = Certification(
        driver_id=d.id,
        certifier=certifier,
        certification_type=certification_type,
        issue_date=ctx.clock,
        expiry_date=expiry_date,
        certification_details=certification_details,
    )
    db.add(c)
    d.certification_status = CertificationStatus.CERTIFIED.value
    db.commit(); db.refresh(c)
    logger.info("certification %s issued to driver %s by %s", c.id, d.id, certifier)
    return c


def get_certification(db: Session, certification_id: int) -> Certification | None:
    return db.get(Certification, certification_id)


def list_certifications(db: Session, driver_id: int) -> list[Certification]:
    return list(db.execute(
        select(Certification)
        .where(Certification.driver_id == driver_id)
        .order_by(Certification.id)
    ).scalars().all())


def check_driver_eligibility(
    db: Session,
    ctx: CallContext,
    driver_id: int,
    require_cpr: bool,
    require_first_aid: bool,
) -> Eligibility:
    """
    Требования для перевозки пациента:
      - статус certified
      - CPR / первая помощь, если их требуют
      - права не истекли на момент ctx.clock
    Только чтение.
    """
    d = _driver_by_id(db, driver_id)
    eligible = (
        d.certification_status == CertificationStatus.CERTIFIED.value
        and (not require_cpr or d.cpr_certified)
        and (not require_first_aid or d.first_aid_certified)
        and d.license_expiry > ctx.clock
    )
    return Eligibility(eligible=bool(eligible), certification_status=d.certification_status)
