# medtransport/registry.py
"""
Внешняя граница пакета: вызовы реестров возвращают Result вместо исключений.

Сервисы бросают NotFound / Forbidden, реестр превращает их в коды 404 / 403.
Остальные исключения пробрасываются дальше после отката сессии.
"""
from __future__ import annotations

import logging
from typing import Callable, TypeVar

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .config import Settings
from .db import init_db, make_engine, make_session_factory
from .errors import Forbidden, NotFound
from .models.driver import Certification, Driver
from .models.patient import Patient, TransportRequest
from .models.route import Route, RouteAssignment, RouteStop
from .models.vehicle import Inspection, Vehicle
from .result import CallContext, Eligibility, Result, Suitability
from .services import driver as driver_svc
from .services import patient as patient_svc
from .services import route as route_svc
from .services import vehicle as vehicle_svc

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Registry:
    def __init__(self, db: Session):
        self.db = db

    def _snapshot(self, obj):
        # наружу отдаём отвязанную от сессии копию: правки в ней не попадут в БД
        if obj is None:
            return None
        self.db.refresh(obj)
        self.db.expunge(obj)
        return obj

    def _call(self, op: str, fn: Callable[[], T]) -> Result[T]:
        try:
            return Result(value=fn())
        except (NotFound, Forbidden) as e:
            self.db.rollback()
            logger.warning("%s rejected (%s): %s", op, int(e.code), e)
            return Result(error=e.code)
        except Exception:
            self.db.rollback()
            raise


# ---------- Водители ----------

class DriverRegistry(_Registry):

    def register_driver(self, ctx: CallContext, name: str, license_number: str, license_expiry: int,
                        medical_training: str, cpr_certified: bool, first_aid_certified: bool,
                        special_training: str) -> Result[int]:
        return self._call("register_driver", lambda: driver_svc.register_driver(
            self.db, ctx,
            name=name,
            license_number=license_number,
            license_expiry=license_expiry,
            medical_training=medical_training,
            cpr_certified=cpr_certified,
            first_aid_certified=first_aid_certified,
            special_training=special_training,
        ).id)

    def get_driver(self, driver_id: int) -> Driver | None:
        return self._snapshot(driver_svc.get_driver(self.db, driver_id))

    def update_driver(self, ctx: CallContext, driver_id: int, license_number: str, license_expiry: int,
                      medical_training: str, cpr_certified: bool, first_aid_certified: bool,
                      special_training: str) -> Result[int]:
        return self._call("update_driver", lambda: driver_svc.update_driver(
            self.db, ctx, driver_id,
            license_number=license_number,
            license_expiry=license_expiry,
            medical_training=medical_training,
            cpr_certified=cpr_certified,
            first_aid_certified=first_aid_certified,
            special_training=special_training,
        ).id)

    def add_certification(self, ctx: CallContext, driver_id: int, certification_type: str, expiry_date: int,
                          certification_details: str, certifier: str | None = None) -> Result[int]:
        # сертификатор по умолчанию — тот, кто вызывает; пустая строка остаётся как есть
        if certifier is None:
            certifier = ctx.actor
        return self._call("add_certification", lambda: driver_svc.add_certification(
            self.db, ctx, driver_id,
            certification_type=certification_type,
            expiry_date=expiry_date,
            certification_details=certification_details,
            certifier=certifier,
        ).id)

    def get_certification(self, certification_id: int) -> Certification | None:
        return self._snapshot(driver_svc.get_certification(self.db, certification_id))

    def list_certifications(self, driver_id: int) -> list[Certification]:
        return [self._snapshot(o) for o in driver_svc.list_certifications(self.db, driver_id)]

    def check_driver_eligibility(self, ctx: CallContext, driver_id: int, require_cpr: bool,
                                 require_first_aid: bool) -> Result[Eligibility]:
        return self._call("check_driver_eligibility", lambda: driver_svc.check_driver_eligibility(
            self.db, ctx, driver_id, require_cpr, require_first_aid,
        ))


# ---------- Пациенты и заявки ----------

class PatientRegistry(_Registry):

    def register_patient(self, ctx: CallContext, name: str, address: str, contact: str, medical_condition: str,
                         mobility_status: str, equipment_needs: str, recurring_schedule: bool) -> Result[int]:
        return self._call("register_patient", lambda: patient_svc.register_patient(
            self.db, ctx,
            name=name,
            address=address,
            contact=contact,
            medical_condition=medical_condition,
            mobility_status=mobility_status,
            equipment_needs=equipment_needs,
            recurring_schedule=recurring_schedule,
        ).id)

    def get_patient(self, patient_id: int) -> Patient | None:
        return self._snapshot(patient_svc.get_patient(self.db, patient_id))

    def update_patient(self, ctx: CallContext, patient_id: int, address: str, contact: str,
                       medical_condition: str, mobility_status: str, equipment_needs: str,
                       recurring_schedule: bool) -> Result[int]:
        return self._call("update_patient", lambda: patient_svc.update_patient(
            self.db, ctx, patient_id,
            address=address,
            contact=contact,
            medical_condition=medical_condition,
            mobility_status=mobility_status,
            equipment_needs=equipment_needs,
            recurring_schedule=recurring_schedule,
        ).id)

    def create_transport_request(self, ctx: CallContext, patient_id: int, pickup_location: str,
                                 destination: str, appointment_time: int, return_trip: bool,
                                 special_instructions: str) -> Result[int]:
        return self._call("create_transport_request", lambda: patient_svc.create_transport_request(
            self.db, ctx, patient_id,
            pickup_location=pickup_location,
            destination=destination,
            appointment_time=appointment_time,
            return_trip=return_trip,
            special_instructions=special_instructions,
        ).id)

    def get_transport_request(self, request_id: int) -> TransportRequest | None:
        return self._snapshot(patient_svc.get_transport_request(self.db, request_id))

    def list_transport_requests(self, patient_id: int) -> list[TransportRequest]:
        return [self._snapshot(o) for o in patient_svc.list_transport_requests(self.db, patient_id)]

    def update_request_status(self, ctx: CallContext, request_id: int, status: str) -> Result[int]:
        return self._call("update_request_status", lambda: patient_svc.update_request_status(
            self.db, ctx, request_id, status,
        ).id)


# ---------- Маршруты ----------

class RoutePlanner(_Registry):

    def create_route(self, ctx: CallContext, date: int) -> Result[int]:
        return self._call("create_route", lambda: route_svc.create_route(self.db, ctx, date).id)

    def get_route(self, route_id: int) -> Route | None:
        return self._snapshot(route_svc.get_route(self.db, route_id))

    def add_route_stop(self, route_id: int, request_id: int, stop_number: int,
                       estimated_arrival: int) -> Result[int]:
        return self._call("add_route_stop", lambda: route_svc.add_route_stop(
            self.db, route_id,
            request_id=request_id,
            stop_number=stop_number,
            estimated_arrival=estimated_arrival,
        ).id)

    def get_route_stop(self, stop_id: int) -> RouteStop | None:
        return self._snapshot(route_svc.get_route_stop(self.db, stop_id))

    def list_route_stops(self, route_id: int) -> list[RouteStop]:
        return [self._snapshot(o) for o in route_svc.list_route_stops(self.db, route_id)]

    def assign_route(self, ctx: CallContext, route_id: int, driver_id: int, vehicle_id: int) -> Result[int]:
        return self._call("assign_route", lambda: route_svc.assign_route(
            self.db, ctx, route_id, driver_id, vehicle_id,
        ).id)

    def get_route_assignment(self, assignment_id: int) -> RouteAssignment | None:
        return self._snapshot(route_svc.get_route_assignment(self.db, assignment_id))

    def list_route_assignments(self, route_id: int) -> list[RouteAssignment]:
        return [self._snapshot(o) for o in route_svc.list_route_assignments(self.db, route_id)]

    def update_route_status(self, route_id: int, status: str) -> Result[int]:
        return self._call("update_route_status", lambda: route_svc.update_route_status(
            self.db, route_id, status,
        ).id)

    def complete_route_stop(self, stop_id: int) -> Result[int]:
        return self._call("complete_route_stop", lambda: route_svc.complete_route_stop(self.db, stop_id).id)


# ---------- Машины ----------

class VehicleRegistry(_Registry):

    def register_vehicle(self, ctx: CallContext, registration_number: str, vehicle_type: str, capacity: int,
                         wheelchair_accessible: bool, stretcher_capable: bool, oxygen_equipped: bool,
                         medical_equipment: str) -> Result[int]:
        return self._call("register_vehicle", lambda: vehicle_svc.register_vehicle(
            self.db, ctx,
            registration_number=registration_number,
            vehicle_type=vehicle_type,
            capacity=capacity,
            wheelchair_accessible=wheelchair_accessible,
            stretcher_capable=stretcher_capable,
            oxygen_equipped=oxygen_equipped,
            medical_equipment=medical_equipment,
        ).id)

    def get_vehicle(self, vehicle_id: int) -> Vehicle | None:
        return self._snapshot(vehicle_svc.get_vehicle(self.db, vehicle_id))

    def update_vehicle(self, ctx: CallContext, vehicle_id: int, registration_number: str, vehicle_type: str,
                       capacity: int, wheelchair_accessible: bool, stretcher_capable: bool,
                       oxygen_equipped: bool, medical_equipment: str) -> Result[int]:
        return self._call("update_vehicle", lambda: vehicle_svc.update_vehicle(
            self.db, ctx, vehicle_id,
            registration_number=registration_number,
            vehicle_type=vehicle_type,
            capacity=capacity,
            wheelchair_accessible=wheelchair_accessible,
            stretcher_capable=stretcher_capable,
            oxygen_equipped=oxygen_equipped,
            medical_equipment=medical_equipment,
        ).id)

    def record_inspection(self, ctx: CallContext, vehicle_id: int, equipment_verified: str, safety_status: str,
                          cleanliness_status: str, notes: str, inspector: str | None = None) -> Result[int]:
        if inspector is None:
            inspector = ctx.actor
        return self._call("record_inspection", lambda: vehicle_svc.record_inspection(
            self.db, ctx, vehicle_id,
            equipment_verified=equipment_verified,
            safety_status=safety_status,
            cleanliness_status=cleanliness_status,
            notes=notes,
            inspector=inspector,
        ).id)

    def get_inspection(self, inspection_id: int) -> Inspection | None:
        return self._snapshot(vehicle_svc.get_inspection(self.db, inspection_id))

    def list_inspections(self, vehicle_id: int) -> list[Inspection]:
        return [self._snapshot(o) for o in vehicle_svc.list_inspections(self.db, vehicle_id)]

    def check_vehicle_suitability(self, vehicle_id: int, wheelchair_needed: bool, stretcher_needed: bool,
                                  oxygen_needed: bool) -> Result[Suitability]:
        return self._call("check_vehicle_suitability", lambda: vehicle_svc.check_vehicle_suitability(
            self.db, vehicle_id, wheelchair_needed, stretcher_needed, oxygen_needed,
        ))


# ---------- Сборка ----------

class Registries:
    """
    Одно изолированное хранилище и четыре реестра поверх общей сессии.
    Каждый вызов create() даёт новое хранилище (по умолчанию in-memory SQLite).
    """

    def __init__(self, engine: Engine, db: Session):
        self.engine = engine
        self.db = db
        self.drivers = DriverRegistry(db)
        self.patients = PatientRegistry(db)
        self.routes = RoutePlanner(db)
        self.vehicles = VehicleRegistry(db)

    @classmethod
    def create(cls, cfg: Settings | None = None) -> "Registries":
        engine = make_engine(cfg)
        init_db(engine)
        return cls(engine, make_session_factory(engine)())

    def close(self) -> None:
        self.db.close()
        self.engine.dispose()

    def __enter__(self) -> "Registries":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
