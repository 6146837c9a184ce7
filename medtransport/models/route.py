# medtransport/models/route.py
from sqlalchemy import Column, Integer, BigInteger, Boolean, String, ForeignKey, Index
import enum
from .base import Base

UNASSIGNED = 0  # driver_id / vehicle_id маршрута, пока никто не назначен


class RouteStatus(str, enum.Enum):
    PLANNING    = "planning"
    ASSIGNED    = "assigned"
    IN_PROGRESS = "in-progress"
    COMPLETED   = "completed"
    CANCELLED   = "cancelled"


class Route(Base):
    __tablename__ = "routes"
    __table_args__ = (
        Index("ix_routes_status", "status"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    # ссылки непроверяемые: реестр водителей/машин тут не участвует
    driver_id  = Column(Integer, nullable=False, default=UNASSIGNED)
    vehicle_id = Column(Integer, nullable=False, default=UNASSIGNED)

    date = Column(BigInteger, nullable=False)
    status = Column(String(50), nullable=False, default=RouteStatus.PLANNING.value)
    created_at = Column(BigInteger, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "driver_id": self.driver_id,
            "vehicle_id": self.vehicle_id,
            "date": self.date,
            "status": self.status,
            "created_at": self.created_at,
        }


class RouteStop(Base):
    __tablename__ = "route_stops"
    __table_args__ = (
        Index("ix_route_stops_route", "route_id", "stop_number"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False)
    request_id = Column(Integer, nullable=False)   # заявка на перевозку, не проверяется

    # номер остановки не обязан быть уникальным или идти подряд
    stop_number = Column(Integer, nullable=False)
    estimated_arrival = Column(BigInteger, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "route_id": self.route_id,
            "request_id": self.request_id,
            "stop_number": self.stop_number,
            "estimated_arrival": self.estimated_arrival,
            "completed": self.completed,
        }


class RouteAssignment(Base):
    """Журнал назначений: запись создаётся один раз и больше не меняется."""
    __tablename__ = "route_assignments"
    __table_args__ = (
        Index("ix_route_assignments_route", "route_id"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False)
    driver_id = Column(Integer, nullable=False)
    vehicle_id = Column(Integer, nullable=False)

    assigned_by = Column(String(128), nullable=False)
    assigned_at = Column(BigInteger, nullable=False)
    status = Column(String(50), nullable=False, default=RouteStatus.ASSIGNED.value)

    def to_dict(self):
        return {
            "id": self.id,
            "route_id": self.route_id,
            "driver_id": self.driver_id,
            "vehicle_id": self.vehicle_id,
            "assigned_by": self.assigned_by,
            "assigned_at": self.assigned_at,
            "status": self.status,
        }
