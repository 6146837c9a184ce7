# medtransport/services/route.py
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import NotFound
from ..models.base import status_value
from ..models.route import Route, RouteStop, RouteAssignment, RouteStatus, UNASSIGNED
from ..result import CallContext

logger = logging.getLogger(__name__)

# Маршрут здесь только хранит остановки и назначения, ничего не оптимизирует.

def _route_by_id(db: Session, route_id: int) -> Route:
    r = db.get(Route, route_id)
    if not r:
        raise NotFound("Маршрут не найден")
    return r


def create_route(db: Session, ctx: CallContext, date: int) -> Route:
    r = Route(
        driver_id=UNASSIGNED,
        vehicle_id=UNASSIGNED,
        date=date,
        status=RouteStatus.PLANNING.value,
        created_at=ctx.clock,
    )
    db.add(r); db.commit(); db.refresh(r)
    logger.info("route %s created for date %s", r.id, date)
    return r


def get_route(db: Session, route_id: int) -> Route | None:
    return db.get(Route, route_id)


def add_route_stop(
    db: Session,
    route_id: int,
    *,
    request_id: int,
    stop_number: int,
    estimated_arrival: int,
) -> RouteStop:
    # request_id и stop_number не проверяем: порядок и заявки на совести планировщика
    r = _route_by_id(db, route_id)
    s = RouteStop(
        route_id=r.id,
        request_id=request_id,
        stop_number=stop_number,
        estimated_arrival=estimated_arrival,
        completed=False,
    )
    db.add(s); db.commit(); db.refresh(s)
    logger.info("stop %s (#%s) added to route %s", s.id, stop_number, r.id)
    return s


def get_route_stop(db: Session, stop_id: int) -> RouteStop | None:
    return db.get(RouteStop, stop_id)


def list_route_stops(db: Session, route_id: int) -> list[RouteStop]:
    return list(db.execute(
        select(RouteStop)
        .where(RouteStop.route_id == route_id)
        .order_by(RouteStop.stop_number, RouteStop.id)
    ).scalars().all())


def assign_route(db: Session, ctx: CallContext, route_id: int, driver_id: int, vehicle_id: int) -> RouteAssignment:
    """
    Назначает водителя и машину, пишет запись в журнал назначений.
    Пригодность водителя/машины проверяет вызывающий (реестры водителей и машин).
    """
    r = _route_by_id(db, route_id)

    r.driver_id = driver_id
    r.vehicle_id = vehicle_id
    r.status = RouteStatus.ASSIGNED.value

    a = RouteAssignment(
        route_id=r.id,
        driver_id=driver_id,
        vehicle_id=vehicle_id,
        assigned_by=ctx.actor,
        assigned_at=ctx.clock,
        status=RouteStatus.ASSIGNED.value,
    )
    db.add(a); db.commit(); db.refresh(a)
    logger.info("route %s assigned: driver=%s vehicle=%s by %s", r.id, driver_id, vehicle_id, ctx.actor)
    return a


def get_route_assignment(db: Session, assignment_id: int) -> RouteAssignment | None:
    return db.get(RouteAssignment, assignment_id)


def list_route_assignments(db: Session, route_id: int) -> list[RouteAssignment]:
    return list(db.execute(
        select(RouteAssignment)
        .where(RouteAssignment.route_id == route_id)
        .order_by(RouteAssignment.id)
    ).scalars().all())


def update_route_status(db: Session, route_id: int, status: str) -> Route:
    # без карты переходов, любое значение
    r = _route_by_id(db, route_id)
    r.status = status_value(status)
    db.commit(); db.refresh(r)
    logger.info("route %s -> %s", r.id, r.status)
    return r


def complete_route_stop(db: Session, stop_id: int) -> RouteStop:
    s = db.get(RouteStop, stop_id)
    if not s:
        raise NotFound("Остановка не найдена")
    # повторный вызов не ошибка
    s.completed = True
    db.commit(); db.refresh(s)
    logger.info("stop %s of route %s completed", s.id, s.route_id)
    return s
